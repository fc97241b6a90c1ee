"""Tests for the pandas site table."""

import math

import pandas as pd

from vcfstream import open_handle
from vcfstream.io import VcfReader
from vcfstream.metrics import SITE_COLUMNS, compute_site_table, filter_site_table


def test_site_table_columns_and_values(small_vcf):
    df = compute_site_table(VcfReader(small_vcf))

    assert list(df.columns) == SITE_COLUMNS
    assert len(df) == 3
    assert df["Pos"].tolist() == [100, 200, 300]
    assert df.loc[0, "QUAL"] == 50.0
    assert math.isnan(df.loc[1, "QUAL"])
    assert df["Filter"].tolist() == ["PASS", "q10;s50", "PASS"]
    assert df["ID"].tolist() == ["", "rs1;rs2", "rs3"]
    assert df["AlleleCount"].tolist() == [2, 3, 1]
    assert df.loc[1, "InfoKeys"] == "DP,AF,DB"


def test_site_table_from_handle_with_limit(batched_vcf):
    with open_handle(batched_vcf) as handle:
        df = compute_site_table(handle, limit=100)
        assert len(df) == 100
        # the handle keeps streaming from where the table stopped
        assert handle.next_record().position == 101


def test_site_table_zero_limit_is_empty(small_vcf):
    df = compute_site_table(VcfReader(small_vcf), limit=0)
    assert df.empty
    assert list(df.columns) == SITE_COLUMNS


def test_site_table_empty():
    df = compute_site_table([])
    assert df.empty
    assert list(df.columns) == SITE_COLUMNS


def test_filter_site_table(small_vcf):
    df = compute_site_table(VcfReader(small_vcf))

    passed = filter_site_table(df, pass_only=True)
    assert passed["Pos"].tolist() == [100, 300]

    qual = filter_site_table(df, min_qual=20)
    assert qual["Pos"].tolist() == [100]

    untouched = filter_site_table(df)
    pd.testing.assert_frame_equal(untouched, df)
