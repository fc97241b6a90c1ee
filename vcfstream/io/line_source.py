"""Forward-only line cursor over a text file.

No parsing happens here: lines come back decoded, with their terminator
stripped, and ``None`` marks the end of input. There is no seek or rewind.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..config import DEFAULT_ENCODING
from ..errors import NOT_A_FILE, NOT_FOUND, PERMISSION_DENIED, UNKNOWN, VcfFormatError, VcfIoError

logger = logging.getLogger(__name__)


def _io_reason(exc: OSError) -> str:
	if isinstance(exc, FileNotFoundError):
		return NOT_FOUND
	if isinstance(exc, PermissionError):
		return PERMISSION_DENIED
	if isinstance(exc, IsADirectoryError) or exc.errno == errno.EISDIR:
		return NOT_A_FILE
	return UNKNOWN


class LineSource:
	"""Sequence of raw text lines with a monotonically advancing cursor.

	Lines are read as bytes and decoded one at a time, so an undecodable
	line fails on its own and the cursor moves on to the next line.

	Parameters
	----------
	fh : BinaryIO
		Open binary stream; the source takes ownership and closes it.
	path : str | None
		Where the stream came from, for diagnostics.
	encoding : str
		Text encoding of every line.
	"""

	def __init__(self, fh: BinaryIO, path: Optional[str] = None, encoding: str = DEFAULT_ENCODING):
		self._fh = fh
		self.path = path
		self.encoding = encoding
		self.line_number = 0
		self.exhausted = False

	@classmethod
	def open(cls, path: Union[str, os.PathLike], encoding: str = DEFAULT_ENCODING) -> "LineSource":
		"""Open ``path`` for reading; raises VcfIoError if that is not possible."""
		p = Path(path)
		if p.exists() and not p.is_file():
			raise VcfIoError("cannot open VCF: not a regular file", str(p), NOT_A_FILE)
		try:
			fh = open(p, "rb")
		except OSError as exc:
			raise VcfIoError(f"cannot open VCF: {exc.strerror or exc}", str(p), _io_reason(exc)) from exc
		logger.debug("Opened %s", p)
		return cls(fh, str(p), encoding)

	def next_line(self) -> Optional[str]:
		"""Return the next line without its terminator, or None at end of input.

		Raises VcfFormatError for a line that is not valid in ``encoding``;
		that line counts as consumed.
		"""
		if self.exhausted:
			return None
		try:
			raw = self._fh.readline()
		except OSError as exc:
			raise VcfIoError(f"cannot read VCF: {exc.strerror or exc}", self.path, _io_reason(exc)) from exc
		if not raw:
			self.exhausted = True
			return None
		self.line_number += 1
		if raw.endswith(b"\n"):
			raw = raw[:-1]
		if raw.endswith(b"\r"):
			raw = raw[:-1]
		try:
			return raw.decode(self.encoding)
		except UnicodeDecodeError as exc:
			raise VcfFormatError(
				f"line is not valid {self.encoding}: {exc.reason} at byte {exc.start}",
				raw.decode(self.encoding, errors="replace"),
				self.line_number,
			) from None

	@property
	def closed(self) -> bool:
		return self._fh.closed

	def close(self) -> None:
		if not self._fh.closed:
			self._fh.close()

	def __enter__(self) -> "LineSource":
		return self

	def __exit__(self, *exc_info) -> None:
		self.close()


__all__ = ["LineSource"]
