"""Parsing core: value types, header grammar and data-line grammar."""

from .models import (  # noqa: F401
	Fail,
	FileFormat,
	FilterDef,
	Filters,
	Header,
	InfoDef,
	InfoType,
	Number,
	NumberKind,
	Pass,
	Record,
)
from .header import HeaderParser, parse_header  # noqa: F401
from .record import RecordParser, parse_record  # noqa: F401

__all__ = [
	"Fail",
	"FileFormat",
	"FilterDef",
	"Filters",
	"Header",
	"InfoDef",
	"InfoType",
	"Number",
	"NumberKind",
	"Pass",
	"Record",
	"HeaderParser",
	"parse_header",
	"RecordParser",
	"parse_record",
]
