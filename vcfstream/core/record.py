"""Data-line decoding.

One tab-delimited line becomes one :class:`Record`. Sentinels (``.``,
``PASS``) are resolved here so downstream code never re-interprets them;
per-sample genotype strings are stored raw.
"""
from __future__ import annotations

import math
import re
from typing import Optional, Sequence

from ..config import MISSING_VALUE, PASS_FILTER
from ..errors import VcfFormatError
from ..utils import parse_info_field, split_list
from .models import Fail, Filters, Pass, Record

QUAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class RecordParser:
	"""Decode data lines for one header's column layout.

	Parameters
	----------
	sample_names : Sequence[str]
		Sample columns captured from the ``#CHROM`` line.
	has_format_column : bool
		Whether the ``#CHROM`` line declares FORMAT. Only relevant when
		there are no samples: a FORMAT column without samples may appear
		(9 columns) or be dropped (8 columns) on data lines.
	"""

	def __init__(self, sample_names: Sequence[str] = (), has_format_column: bool = False):
		self.sample_names = tuple(sample_names)
		self.has_format_column = has_format_column or bool(self.sample_names)

	def expected_columns(self) -> Sequence[int]:
		if self.sample_names:
			return (9 + len(self.sample_names),)
		if self.has_format_column:
			return (8, 9)
		return (8,)

	def parse(self, line: str, line_number: Optional[int] = None) -> Record:
		parts = line.split("\t")
		expected = self.expected_columns()
		if len(parts) not in expected:
			want = " or ".join(str(n) for n in expected)
			raise VcfFormatError(f"expected {want} columns, got {len(parts)}", line, line_number)

		chrom, pos, ids, ref, alt, qual, flt, info = parts[:8]

		def fail(message: str) -> VcfFormatError:
			return VcfFormatError(message, line, line_number)

		if not chrom:
			raise fail("empty CHROM")
		if not ref or not alt:
			raise fail("empty REF or ALT")

		if not pos.isdigit() or not pos.isascii():
			raise fail(f"invalid POS {pos!r}")
		position = int(pos)
		if position < 1:
			raise fail(f"POS must be positive, got {position}")

		id_list = split_list(ids, ",")
		if any(not i for i in id_list):
			raise fail(f"invalid ID {ids!r}")

		quality_score: Optional[float] = None
		if qual != MISSING_VALUE:
			if not QUAL_PATTERN.fullmatch(qual):
				raise fail(f"invalid QUAL {qual!r}")
			quality_score = float(qual)
			if math.isinf(quality_score):
				raise fail(f"invalid QUAL {qual!r}")

		filters = self._parse_filters(flt, fail)

		if not info:
			raise fail("empty INFO")
		info_map = parse_info_field(info)
		if any(not k for k in info_map):
			raise fail(f"invalid INFO {info!r}")

		format_keys: Sequence[str] = ()
		genotypes = {}
		if len(parts) > 8:
			fmt = parts[8]
			if not fmt:
				raise fail("empty FORMAT")
			format_keys = split_list(fmt, ":")
			# Raw per-sample strings, positionally aligned with the header's names.
			genotypes = dict(zip(self.sample_names, parts[9:]))

		return Record(
			chromosome=chrom,
			position=position,
			ids=id_list,
			reference_bases=ref,
			alternate_bases=alt,
			quality_score=quality_score,
			filters=filters,
			info=info_map,
			format=format_keys,
			genotypes=genotypes,
		)

	@staticmethod
	def _parse_filters(flt: str, fail) -> Filters:
		if flt in (MISSING_VALUE, PASS_FILTER):
			return Pass()
		names = flt.split(";")
		if any(not name for name in names):
			raise fail(f"invalid FILTER {flt!r}")
		return Fail(tuple(names))


def parse_record(line: str, sample_names: Sequence[str] = ()) -> Record:
	"""Decode a single line without a header; FORMAT is assumed present iff samples are."""
	return RecordParser(sample_names).parse(line)


__all__ = ["RecordParser", "parse_record"]
