"""Site-level table assembly.

Converts streamed :class:`Record` objects into a pandas DataFrame (one row
per data line) and offers light filtering helpers.
"""
from __future__ import annotations

import itertools
import logging
from typing import Iterable, Optional, Union

import numpy as np
import pandas as pd

from ..core.models import Fail, Record
from ..config import PASS_FILTER
from ..io import Handle, VcfReader

logger = logging.getLogger(__name__)

__all__ = ["SITE_COLUMNS", "site_row", "compute_site_table", "filter_site_table"]

SITE_COLUMNS = ["Chrom", "Pos", "ID", "REF", "ALT", "QUAL", "Filter", "AlleleCount", "InfoKeys"]


def site_row(rec: Record) -> dict:
    """Flatten one record into a site-table row."""
    if isinstance(rec.filters, Fail):
        flt = ";".join(rec.filters.names)
    else:
        flt = PASS_FILTER
    return {
        "Chrom": rec.chromosome,
        "Pos": rec.position,
        "ID": ";".join(rec.ids),
        "REF": rec.reference_bases,
        "ALT": rec.alternate_bases,
        "QUAL": np.nan if rec.quality_score is None else rec.quality_score,
        "Filter": flt,
        # REF plus each listed ALT allele
        "AlleleCount": 1 + len(rec.alternate_alleles),
        "InfoKeys": ",".join(rec.info.keys()),
    }


def compute_site_table(
    source: Union[VcfReader, Handle, Iterable[Record]],
    limit: Optional[int] = None,
) -> pd.DataFrame:
    """Return DataFrame with columns: Chrom, Pos, ID, REF, ALT, QUAL, Filter, AlleleCount, InfoKeys.

    ``source`` may be a :class:`VcfReader`, an open :class:`Handle` (read
    from its current position) or any iterable of records.
    """
    records = source.parse() if isinstance(source, VcfReader) else source
    rows = []
    if limit is not None:
        records = itertools.islice(records, max(limit, 0))
    for rec in records:
        rows.append(site_row(rec))
    df = pd.DataFrame(rows, columns=SITE_COLUMNS)
    df["Pos"] = df["Pos"].astype("int64")
    df["QUAL"] = pd.to_numeric(df["QUAL"], errors="coerce").astype("float64")
    df["AlleleCount"] = df["AlleleCount"].astype("int64")
    return df


def filter_site_table(
    df: pd.DataFrame,
    *,
    min_qual: Optional[float] = None,
    pass_only: bool = False,
    verbose: bool = False,
) -> pd.DataFrame:
    """Apply simple thresholds; returns a filtered copy.

    Sites with an absent QUAL are dropped whenever ``min_qual`` is set.
    """
    out = df.copy()
    steps = []

    if min_qual is not None:
        before = len(out)
        out = out[out["QUAL"] >= min_qual]
        steps.append(f"QUAL >= {min_qual}: removed {before - len(out):,} sites, {len(out):,} remaining")

    if pass_only:
        before = len(out)
        out = out[out["Filter"] == PASS_FILTER]
        steps.append(f"FILTER == {PASS_FILTER}: removed {before - len(out):,} sites, {len(out):,} remaining")

    if verbose:
        logger.info("Site filtering: %s initial sites", f"{len(df):,}")
        for step in steps:
            logger.info("  %s", step)

    return out.reset_index(drop=True)
