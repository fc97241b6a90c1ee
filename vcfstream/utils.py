"""Small utility helpers used across the vcfstream package.

This module keeps a tiny surface area of pure-Python helpers that are easy
to unit-test: INFO / FORMAT token splitting and a logger factory.
"""
import logging
import sys
from typing import Dict, List, Optional, Sequence

from .config import DEFAULT_LOG_LEVEL, MISSING_VALUE


def parse_info_field(info: str) -> Dict[str, str]:
    """Parse a VCF INFO column (key[=value];... ) into a dict.

    Values are returned as raw strings; flag keys without value map to an
    empty string. A key repeated within one column keeps its last value.
    An INFO field of '.' returns an empty dict.
    """
    out: Dict[str, str] = {}
    if not info or info == MISSING_VALUE:
        return out
    for token in info.split(";"):
        if not token:
            continue
        if "=" in token:
            k, v = token.split("=", 1)
            out[k] = v
        else:
            out[token] = ""
    return out


def parse_format_sample(format_keys: Sequence[str], sample: str) -> Dict[str, Optional[str]]:
    """Pair FORMAT keys with the colon-separated values of one sample column.

    Example: format_keys=['GT','AD','DP'] sample='0/1:10,5:15'
    -> {'GT':'0/1','AD':'10,5','DP':'15'}
    Trailing keys dropped by the sample and '.' values map to None.
    """
    vals = sample.split(":") if sample else []
    out: Dict[str, Optional[str]] = {}
    for i, k in enumerate(format_keys):
        out[k] = vals[i] if i < len(vals) and vals[i] not in ("", MISSING_VALUE) else None
    return out


def split_list(value: str, sep: str) -> List[str]:
    """Split a list-valued column, mapping the missing sentinel to []."""
    if value == MISSING_VALUE:
        return []
    return value.split(sep)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with standard configuration.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR); defaults to
            ``VCFSTREAM_LOG_LEVEL``

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:  # Avoid duplicate handlers
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, (level or DEFAULT_LOG_LEVEL).upper()))
    return logger


__all__ = [
    "parse_info_field",
    "parse_format_sample",
    "split_list",
    "get_logger",
]
