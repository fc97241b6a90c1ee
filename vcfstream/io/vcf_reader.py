"""Streaming VCF reader.

A :class:`Handle` owns a parsed :class:`Header` and a line source positioned
at the first data line. ``next_record`` pulls one record at a time and
``take_records`` pulls bounded batches; both report the end of the data with
:class:`EndOfData` rather than an error.

A handle keeps mutable cursor state and is not safe for concurrent use.
Independent handles, even over the same file, share nothing.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Iterator, List, Optional, Union

from ..config import DEFAULT_BATCH_SIZE, DEFAULT_ENCODING
from ..core.header import HeaderParser
from ..core.models import Header, Record
from ..core.record import RecordParser
from ..errors import EndOfData, VcfStreamError
from .line_source import LineSource

logger = logging.getLogger(__name__)


class StreamState(str, Enum):
	OPEN = "open"  # lines may remain
	EXHAUSTED = "exhausted"  # end of input seen at least once


class Handle:
	"""Session state for one open VCF file.

	Attributes
	----------
	header : Header
		Parsed header; never mutated.
	stream : LineSource
		Cursor positioned after the last consumed line.
	state : StreamState
		``OPEN`` until the source first reports end of input.
	"""

	def __init__(self, header: Header, stream: LineSource):
		self.header = header
		self.stream = stream
		self.state = StreamState.OPEN
		self._parser = RecordParser(header.sample_names, header.has_format_column)

	@property
	def path(self) -> Optional[str]:
		return self.stream.path

	@property
	def closed(self) -> bool:
		return self.stream.closed

	def close(self) -> None:
		"""Release the underlying file."""
		self.stream.close()

	def next_record(self) -> Record:
		return next_record(self)

	def take_records(self, max_count: int) -> List[Record]:
		return take_records(self, max_count)

	def __iter__(self) -> Iterator[Record]:
		while True:
			try:
				yield next_record(self)
			except EndOfData:
				return

	def __enter__(self) -> "Handle":
		return self

	def __exit__(self, *exc_info) -> None:
		self.close()

	def __repr__(self) -> str:
		return f"Handle(path={self.path!r}, fileformat={self.header.fileformat}, state={self.state.value})"


def open_handle(path: Union[str, os.PathLike], encoding: str = DEFAULT_ENCODING) -> Handle:
	"""Open ``path`` and parse its header.

	Raises VcfIoError when the file cannot be opened, VcfFormatError when the
	header is malformed. The file is closed again on any failure.
	"""
	source = LineSource.open(path, encoding=encoding)
	try:
		header = HeaderParser().parse(source)
	except VcfStreamError:
		source.close()
		raise
	logger.debug("Header of %s parsed, first data line follows line %d", source.path, source.line_number)
	return Handle(header, source)


def header_of(handle: Handle) -> Header:
	return handle.header


def next_record(handle: Handle) -> Record:
	"""Read and decode the next data line.

	Raises EndOfData once no lines remain (and on every call after that).
	A VcfFormatError leaves the offending line consumed; the following call
	continues with the next line.
	"""
	if handle.closed:
		raise ValueError("I/O operation on closed handle")
	if handle.state is StreamState.EXHAUSTED:
		raise EndOfData("no more records")
	source = handle.stream
	while True:
		line = source.next_line()
		if line is None:
			handle.state = StreamState.EXHAUSTED
			logger.debug("Reached end of %s after %d lines", source.path, source.line_number)
			raise EndOfData("no more records")
		if line.strip():
			break
	return handle._parser.parse(line, source.line_number)


def take_records(handle: Handle, max_count: int) -> List[Record]:
	"""Read up to ``max_count`` records.

	Returns fewer (possibly none) when the data runs out. A VcfFormatError
	fails the whole call and the records read so far in this call are
	discarded. ``max_count == 0`` returns [] without touching the file.
	"""
	if max_count < 0:
		raise ValueError(f"max_count must be non-negative, got {max_count}")
	records: List[Record] = []
	while len(records) < max_count:
		try:
			records.append(next_record(handle))
		except EndOfData:
			break
	return records


class VcfReader:
	"""Convenience reader over a VCF path.

	Parameters
	----------
	path : str
		Path to an uncompressed VCF file.
	max_records : int | None
		Optional limit for testing / faster prototyping.

	Every call to :meth:`parse` or :meth:`batches` opens a fresh handle, so
	the file can be walked more than once.
	"""

	def __init__(self, path: Union[str, os.PathLike], max_records: Optional[int] = None):
		self.path = path
		self.max_records = max_records
		self.header: Optional[Header] = None

	@property
	def samples(self) -> List[str]:
		if self.header is None:
			with open_handle(self.path) as handle:
				self.header = handle.header
		return list(self.header.sample_names)

	def parse(self) -> Iterator[Record]:
		count = 0
		with open_handle(self.path) as handle:
			self.header = handle.header
			if self.max_records is not None and self.max_records <= 0:
				return
			for rec in handle:
				yield rec
				count += 1
				if self.max_records is not None and count >= self.max_records:
					break

	def batches(self, size: int = DEFAULT_BATCH_SIZE) -> Iterator[List[Record]]:
		"""Yield successive ``take_records`` batches until the data runs out."""
		if size <= 0:
			raise ValueError(f"batch size must be positive, got {size}")
		remaining = self.max_records
		with open_handle(self.path) as handle:
			self.header = handle.header
			while remaining is None or remaining > 0:
				want = size if remaining is None else min(size, remaining)
				batch = take_records(handle, want)
				if not batch:
					break
				yield batch
				if remaining is not None:
					remaining -= len(batch)


__all__ = [
	"Handle",
	"StreamState",
	"VcfReader",
	"open_handle",
	"header_of",
	"next_record",
	"take_records",
]
