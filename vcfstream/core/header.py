"""Header parsing.

Consumes the ``##`` metadata lines and the ``#CHROM`` column-header line
from a line source and builds an immutable :class:`Header`. Parsing stops
right after the column-header line, leaving the source at the first data
line.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from ..config import COLUMN_HEADER_PREFIX, FIXED_COLUMNS, FORMAT_COLUMN, META_PREFIX
from ..errors import VcfFormatError
from .models import FileFormat, FilterDef, Header, InfoDef, InfoType, Number

logger = logging.getLogger(__name__)

FILEFORMAT_PATTERN = re.compile(r"^##fileformat=VCFv(\d+)\.(\d+)\s*$")

INFO_REQUIRED_KEYS = ("ID", "Number", "Type", "Description")
FILTER_REQUIRED_KEYS = ("ID", "Description")


def parse_structured_value(value: str) -> Dict[str, str]:
    """Parse a ``<KEY=VALUE,KEY="quoted, value",...>`` metadata value.

    Quoted values have their quotes stripped and ``\\"`` / ``\\\\`` escapes
    resolved; commas inside quotes do not split. Raises ValueError on
    unbalanced brackets or quotes, or on a field without ``=``.
    """
    if not (value.startswith("<") and value.endswith(">")):
        raise ValueError("structured value must be enclosed in <...>")
    body = value[1:-1]
    fields: Dict[str, str] = {}
    i, n = 0, len(body)
    while i < n:
        eq = body.find("=", i)
        if eq == -1:
            raise ValueError(f"field without '=' in {value!r}")
        key = body[i:eq].strip()
        if not key or "," in key:
            raise ValueError(f"invalid key in {value!r}")
        i = eq + 1
        if i < n and body[i] == '"':
            chars: List[str] = []
            i += 1
            while True:
                if i >= n:
                    raise ValueError(f"unterminated quoted string in {value!r}")
                c = body[i]
                if c == "\\" and i + 1 < n:
                    chars.append(body[i + 1])
                    i += 2
                    continue
                if c == '"':
                    i += 1
                    break
                chars.append(c)
                i += 1
            if i < n and body[i] != ",":
                raise ValueError(f"unexpected text after quoted value in {value!r}")
            val = "".join(chars)
        else:
            comma = body.find(",", i)
            end = n if comma == -1 else comma
            val = body[i:end]
            i = end
        fields[key] = val
        i += 1  # skip ','
    return fields


class HeaderParser:
    """Builds a :class:`Header` from the leading lines of a VCF source.

    The parser keeps the 1-based number of the last line it consumed so
    errors can point at the offending line.
    """

    def __init__(self) -> None:
        self.line_number = 0

    def parse(self, source) -> Header:
        """Parse the header from ``source`` (anything with ``next_line()``)."""
        self.line_number = 0
        first = self._next(source)
        match = FILEFORMAT_PATTERN.match(first) if first is not None else None
        if match is None:
            raise VcfFormatError("missing or invalid fileformat declaration", first, self.line_number)
        fileformat = FileFormat(int(match.group(1)), int(match.group(2)))

        infos: Dict[str, InfoDef] = {}
        filters: Dict[str, FilterDef] = {}
        other: List[Tuple[str, str]] = []

        line = self._next(source)
        while line is not None and line.startswith(META_PREFIX):
            key, value = self._split_meta(line)
            if key == "INFO":
                info = self._parse_info(value, line)
                if info.id in infos:
                    raise VcfFormatError(f"duplicate INFO id {info.id!r}", line, self.line_number)
                infos[info.id] = info
            elif key == "FILTER":
                flt = self._parse_filter(value, line)
                if flt.id in filters:
                    raise VcfFormatError(f"duplicate FILTER id {flt.id!r}", line, self.line_number)
                filters[flt.id] = flt
            elif key == "fileformat":
                raise VcfFormatError("fileformat declared more than once", line, self.line_number)
            else:
                other.append((key, value))
            line = self._next(source)

        if line is None or not line.startswith(COLUMN_HEADER_PREFIX):
            raise VcfFormatError("missing column header line", line, self.line_number)
        sample_names, has_format = self._parse_column_header(line)

        header = Header(
            fileformat=fileformat,
            infos=infos,
            filters=filters,
            sample_names=sample_names,
            has_format_column=has_format,
            other=other,
        )
        logger.debug(
            "Parsed %s header: %d INFO, %d FILTER, %d samples",
            fileformat, len(infos), len(filters), len(sample_names),
        )
        return header

    # -- internal helpers -------------------------------------------------
    def _next(self, source) -> Optional[str]:
        line = source.next_line()
        if line is not None:
            self.line_number += 1
        return line

    def _split_meta(self, line: str) -> Tuple[str, str]:
        body = line[len(META_PREFIX):]
        if "=" not in body:
            raise VcfFormatError("metadata line without '='", line, self.line_number)
        key, value = body.split("=", 1)
        if not key:
            raise VcfFormatError("metadata line without key", line, self.line_number)
        return key, value

    def _structured(self, value: str, line: str, required: Tuple[str, ...], kind: str) -> Dict[str, str]:
        try:
            fields = parse_structured_value(value)
        except ValueError as exc:
            raise VcfFormatError(f"malformed {kind} declaration: {exc}", line, self.line_number) from None
        missing = [k for k in required if k not in fields]
        if missing:
            raise VcfFormatError(
                f"{kind} declaration missing required key(s): {', '.join(missing)}", line, self.line_number
            )
        if not fields["ID"]:
            raise VcfFormatError(f"{kind} declaration has an empty ID", line, self.line_number)
        return fields

    def _parse_info(self, value: str, line: str) -> InfoDef:
        fields = self._structured(value, line, INFO_REQUIRED_KEYS, "INFO")
        try:
            number = Number.parse(fields["Number"])
            type_ = InfoType(fields["Type"])
        except ValueError as exc:
            raise VcfFormatError(f"malformed INFO declaration: {exc}", line, self.line_number) from None
        return InfoDef(id=fields["ID"], number=number, type=type_, description=fields["Description"])

    def _parse_filter(self, value: str, line: str) -> FilterDef:
        fields = self._structured(value, line, FILTER_REQUIRED_KEYS, "FILTER")
        return FilterDef(id=fields["ID"], description=fields["Description"])

    def _parse_column_header(self, line: str) -> Tuple[Tuple[str, ...], bool]:
        cols = line[len(COLUMN_HEADER_PREFIX):].split("\t")
        n_fixed = len(FIXED_COLUMNS)
        if tuple(cols[:n_fixed]) != FIXED_COLUMNS:
            raise VcfFormatError("missing column header line", line, self.line_number)
        if len(cols) == n_fixed:
            return (), False
        if cols[n_fixed] != FORMAT_COLUMN:
            raise VcfFormatError(
                f"expected {FORMAT_COLUMN} column after INFO, got {cols[n_fixed]!r}", line, self.line_number
            )
        samples = tuple(cols[n_fixed + 1:])
        if len(set(samples)) != len(samples):
            raise VcfFormatError("duplicate sample name in column header", line, self.line_number)
        return samples, True


def parse_header(source) -> Header:
    """Convenience wrapper around :meth:`HeaderParser.parse`."""
    return HeaderParser().parse(source)


__all__ = ["HeaderParser", "parse_header", "parse_structured_value", "FILEFORMAT_PATTERN"]
