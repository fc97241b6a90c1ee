"""I/O subpackage.

Exposes the line source and the streaming handle API built on it.
"""

from .line_source import LineSource  # noqa: F401
from .vcf_reader import (  # noqa: F401
	Handle,
	StreamState,
	VcfReader,
	header_of,
	next_record,
	open_handle,
	take_records,
)

__all__ = [
	"LineSource",
	"Handle",
	"StreamState",
	"VcfReader",
	"open_handle",
	"header_of",
	"next_record",
	"take_records",
]
