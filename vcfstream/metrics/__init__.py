"""Tabular summaries of streamed records."""

from .site_metrics import SITE_COLUMNS, compute_site_table, filter_site_table, site_row  # noqa: F401

__all__ = ["SITE_COLUMNS", "compute_site_table", "filter_site_table", "site_row"]
