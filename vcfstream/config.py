"""Package-wide defaults.

Values that a deployment may want to tune can be overridden through
environment variables (read once, at import time). Grammar constants are
fixed by the VCF format and are not configurable.
"""
from __future__ import annotations

import os
from typing import Tuple


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


DEFAULT_ENCODING: str = os.environ.get("VCFSTREAM_ENCODING", "utf-8")
DEFAULT_BATCH_SIZE: int = _env_int("VCFSTREAM_BATCH_SIZE", 1000)
DEFAULT_LOG_LEVEL: str = os.environ.get("VCFSTREAM_LOG_LEVEL", "INFO").upper()

# -- grammar -------------------------------------------------------------
MISSING_VALUE = "."
PASS_FILTER = "PASS"
META_PREFIX = "##"
COLUMN_HEADER_PREFIX = "#"

FIXED_COLUMNS: Tuple[str, ...] = (
    "CHROM",
    "POS",
    "ID",
    "REF",
    "ALT",
    "QUAL",
    "FILTER",
    "INFO",
)
FORMAT_COLUMN = "FORMAT"

__all__ = [
    "DEFAULT_ENCODING",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_LOG_LEVEL",
    "MISSING_VALUE",
    "PASS_FILTER",
    "META_PREFIX",
    "COLUMN_HEADER_PREFIX",
    "FIXED_COLUMNS",
    "FORMAT_COLUMN",
]
