"""vcfstream – streaming, sequential access to VCF files.

Subpackages:
	core      – value types plus the header and data-line grammars
	io        – line source and the handle / stream-reader API
	metrics   – pandas site tables built from streamed records

The public API is re-exported here so users can simply::

	from vcfstream import open_handle, next_record, take_records

	with open_handle("calls.vcf") as handle:
		batch = take_records(handle, 1000)
"""

from .core import (
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
from .errors import EndOfData, VcfFormatError, VcfIoError, VcfStreamError
from .io import Handle, LineSource, VcfReader, header_of, next_record, open_handle, take_records

__version__ = "0.1.0"
__all__ = [
	"open_handle",
	"header_of",
	"next_record",
	"take_records",
	"Handle",
	"LineSource",
	"VcfReader",
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
	"EndOfData",
	"VcfFormatError",
	"VcfIoError",
	"VcfStreamError",
	"__version__",
]
