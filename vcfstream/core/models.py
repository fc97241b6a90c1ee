"""Value types produced by the header and record parsers.

All types are frozen dataclasses; mappings are exposed through read-only
proxies so a parsed ``Header`` or ``Record`` cannot be mutated after the
parser hands it out.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from ..utils import parse_format_sample, split_list


def _frozen_mapping(value: Mapping) -> Mapping:
	return MappingProxyType(dict(value))


@dataclass(frozen=True)
class FileFormat:
	"""VCF version declared by ``##fileformat=VCFvMAJOR.MINOR``."""

	major: int
	minor: int

	def __str__(self) -> str:
		return f"VCFv{self.major}.{self.minor}"


class NumberKind(str, Enum):
	"""How many values an INFO key carries."""

	COUNT = "count"  # fixed integer count
	A = "A"  # one per alternate allele
	R = "R"  # one per allele, reference included
	G = "G"  # one per possible genotype
	UNKNOWN = "."  # varies / unbounded


@dataclass(frozen=True)
class Number:
	"""Cardinality of an INFO definition (the ``Number=`` attribute)."""

	kind: NumberKind
	count: Optional[int] = None

	@classmethod
	def parse(cls, text: str) -> "Number":
		"""Parse a ``Number`` token; raises ValueError on anything unrecognised."""
		if text.isdigit():
			return cls(NumberKind.COUNT, int(text))
		for kind in (NumberKind.A, NumberKind.R, NumberKind.G, NumberKind.UNKNOWN):
			if text == kind.value:
				return cls(kind)
		raise ValueError(f"invalid Number {text!r}")

	def __str__(self) -> str:
		if self.kind is NumberKind.COUNT:
			return str(self.count)
		return self.kind.value


class InfoType(str, Enum):
	"""Value type of an INFO key (the ``Type=`` attribute)."""

	INTEGER = "Integer"
	FLOAT = "Float"
	FLAG = "Flag"
	CHARACTER = "Character"
	STRING = "String"


@dataclass(frozen=True)
class InfoDef:
	"""One ``##INFO=<...>`` declaration."""

	id: str
	number: Number
	type: InfoType
	description: str


@dataclass(frozen=True)
class FilterDef:
	"""One ``##FILTER=<...>`` declaration."""

	id: str
	description: str


@dataclass(frozen=True)
class Header:
	"""Parsed VCF header.

	Attributes
	----------
	fileformat : FileFormat
		Declared format version.
	infos : Mapping[str, InfoDef]
		INFO definitions keyed by ID, in declaration order.
	filters : Mapping[str, FilterDef]
		FILTER definitions keyed by ID, in declaration order.
	sample_names : Tuple[str, ...]
		Sample columns of the ``#CHROM`` line, in column order.
	has_format_column : bool
		Whether the ``#CHROM`` line declares a FORMAT column.
	other : Tuple[Tuple[str, str], ...]
		Every other metadata line as ``(key, raw value)``.
	"""

	fileformat: FileFormat
	infos: Mapping[str, InfoDef] = field(default_factory=dict, hash=False)
	filters: Mapping[str, FilterDef] = field(default_factory=dict, hash=False)
	sample_names: Tuple[str, ...] = ()
	has_format_column: bool = False
	other: Tuple[Tuple[str, str], ...] = ()

	def __post_init__(self) -> None:
		object.__setattr__(self, "infos", _frozen_mapping(self.infos))
		object.__setattr__(self, "filters", _frozen_mapping(self.filters))
		object.__setattr__(self, "sample_names", tuple(self.sample_names))
		object.__setattr__(self, "other", tuple(self.other))


@dataclass(frozen=True)
class Pass:
	"""Record passed all filters (``PASS`` or ``.`` in the FILTER column)."""

	def __repr__(self) -> str:
		return "Pass()"


@dataclass(frozen=True)
class Fail:
	"""Record rejected by the named filters, in column order."""

	names: Tuple[str, ...]

	def __post_init__(self) -> None:
		object.__setattr__(self, "names", tuple(self.names))
		if not self.names:
			raise ValueError("Fail requires at least one filter name")


Filters = Union[Pass, Fail]


@dataclass(frozen=True)
class Record:
	"""A single decoded data line.

	``genotypes`` holds each sample's raw colon-delimited string; pairing
	those values with ``format`` keys is left to the caller (see
	``sample_fields`` / ``sample_value`` for on-demand decoding).

	Records are hashable; the ``info`` and ``genotypes`` mappings take part
	in equality but not in the hash.
	"""

	chromosome: str
	position: int
	ids: Tuple[str, ...]
	reference_bases: str
	alternate_bases: str
	quality_score: Optional[float]
	filters: Filters
	info: Mapping[str, str] = field(hash=False)
	format: Tuple[str, ...] = ()
	genotypes: Mapping[str, str] = field(default_factory=dict, hash=False)

	def __post_init__(self) -> None:
		object.__setattr__(self, "ids", tuple(self.ids))
		object.__setattr__(self, "format", tuple(self.format))
		object.__setattr__(self, "info", _frozen_mapping(self.info))
		object.__setattr__(self, "genotypes", _frozen_mapping(self.genotypes))

	@property
	def is_pass(self) -> bool:
		return isinstance(self.filters, Pass)

	@property
	def alternate_alleles(self) -> List[str]:
		"""ALT split on commas; empty when ALT is '.'."""
		return split_list(self.alternate_bases, ",")

	def sample_fields(self, sample: str) -> Dict[str, Optional[str]]:
		"""Decode one sample's raw string against ``format``.

		Raises KeyError for an unknown sample name.
		"""
		return parse_format_sample(self.format, self.genotypes[sample])

	def sample_value(self, sample: str, key: str) -> Optional[str]:
		"""Extract a value (e.g., DP, GQ, GT) for a given sample.

		Returns None if key not in FORMAT or value is '.'
		"""
		if key not in self.format:
			return None
		return self.sample_fields(sample).get(key)


__all__ = [
	"FileFormat",
	"NumberKind",
	"Number",
	"InfoType",
	"InfoDef",
	"FilterDef",
	"Header",
	"Pass",
	"Fail",
	"Filters",
	"Record",
]
