"""Shared pytest fixtures for all test modules."""

from pathlib import Path

import pytest

HEADER_LINES = [
    "##fileformat=VCFv4.1",
    "##source=unit-test",
    '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">',
    '##INFO=<ID=AF,Number=A,Type=Float,Description="Allele Frequency, per ALT">',
    '##INFO=<ID=DB,Number=0,Type=Flag,Description="dbSNP membership">',
    '##FILTER=<ID=q10,Description="Quality below 10">',
    '##FILTER=<ID=s50,Description="Less than 50% of samples have data">',
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">',
    "##contig=<ID=chr1,length=248956422>",
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tS1\tS2",
]

DATA_LINES = [
    "chr1\t100\t.\tA\tT\t50\tPASS\tDP=10\tGT:DP\t0/1:10\t1/1:8",
    "chr1\t200\trs1,rs2\tG\tC,A\t.\tq10;s50\tDP=3;AF=0.5,0.1;DB\tGT\t0/0\t./.",
    "chr2\t300\trs3\tT\t.\t12.5\t.\t.\tGT:DP\t0|1:.\t1|1:4",
]


@pytest.fixture
def write_vcf(tmp_path: Path):
    """Return a helper that writes lines to a .vcf file under tmp_path."""
    counter = {"n": 0}

    def _write(lines, name=None, trailing_newline=True) -> Path:
        counter["n"] += 1
        path = tmp_path / (name or f"test_{counter['n']}.vcf")
        text = "\n".join(lines)
        if trailing_newline:
            text += "\n"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def small_vcf(write_vcf) -> Path:
    """Three data lines, two samples."""
    return write_vcf(HEADER_LINES + DATA_LINES, name="small.vcf")


@pytest.fixture
def batched_vcf(write_vcf) -> Path:
    """2588 sequentially numbered records, one sample."""
    lines = [
        "##fileformat=VCFv4.1",
        '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">',
        "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tNA00001",
    ]
    for i in range(1, 2589):
        qual = "." if i % 7 == 0 else str(i % 60)
        flt = "q10" if i % 11 == 0 else "PASS"
        lines.append(f"chr{1 + i % 3}\t{i}\trs{i}\tA\tG\t{qual}\t{flt}\tDP={i % 50}\tGT:DP\t0/1:{i % 50}")
    return write_vcf(lines, name="test_for_batched.vcf")
