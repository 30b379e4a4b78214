"""Schema definition and the line decoder shared by every log type."""

import dataclasses
import ipaddress
import logging
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, Iterable, Iterator

from brolog.errors import FieldError
from brolog.fields import MULTI, OPTIONAL, REQUIRED, BoolEncoding, Column
from brolog.header import Header, as_text
from brolog.log import trace

logger = logging.getLogger(__name__)


@dataclass
class DecodeStats:
    """Per-stream counters, owned by whoever drives one decode."""

    decoded: int = 0
    dropped: int = 0


# (column, position in the split line or None when the file lacks it, converter)
_Step = tuple[Column, int | None, Callable[[str], Any]]


class Schema:
    """The fixed attribute set of one log type and how to decode it."""

    def __init__(self, name: str, record_cls: type, columns: Iterable[Column]):
        self.name = name
        self.record_cls = record_cls
        self.columns = tuple(columns)
        self.field_names = tuple(c.attr for c in self.columns)
        self.accessors = {c.attr: attrgetter(c.attr) for c in self.columns}

        record_fields = tuple(f.name for f in dataclasses.fields(record_cls))
        if record_fields != self.field_names:
            raise TypeError(
                f"{record_cls.__name__} fields {record_fields} do not match "
                f"the {name} columns {self.field_names}"
            )

    def __repr__(self) -> str:
        return f"Schema({self.name!r}, {len(self.columns)} columns)"

    def has_field(self, name: str) -> bool:
        return name in self.accessors

    def value(self, record, name: str):
        return self.accessors[name](record)

    def _plan(self, header: Header, source: str, encoding: BoolEncoding) -> list[_Step]:
        """Decide where each column comes from in this file's lines.

        Columns are looked up by name when ``#fields`` lists every required
        column, otherwise the fixed column order is used.
        """
        index = {name: i for i, name in enumerate(header.field_names)}
        by_name = bool(index) and all(
            c.name in index for c in self.columns if c.kind == REQUIRED
        )
        if index and not by_name:
            logger.warning(
                "%s: #fields does not match the %s schema, decoding by position",
                source, self.name,
            )

        plan = []
        for position, column in enumerate(self.columns):
            where = index.get(column.name) if by_name else position
            plan.append((column, where, column.converter(encoding)))
        return plan

    def _build(self, values: list[str], plan: list[_Step], header: Header):
        kwargs = {}
        for column, where, convert in plan:
            if where is None:
                kwargs[column.attr] = [] if column.kind == MULTI else None
                continue
            if where >= len(values):
                raise FieldError(
                    column.name, "",
                    f"line has {len(values)} fields, column is at position {where + 1}",
                )

            raw = values[where]
            try:
                if column.kind == REQUIRED:
                    kwargs[column.attr] = convert(raw)
                elif column.kind == OPTIONAL:
                    kwargs[column.attr] = None if raw == header.unset_field else convert(raw)
                elif raw in column.absent_markers(header):
                    kwargs[column.attr] = []
                else:
                    kwargs[column.attr] = [convert(item) for item in raw.split(header.set_separator)]
            except ValueError as e:
                raise FieldError(column.name, raw, str(e)) from None

        return self.record_cls(**kwargs)

    def decode(
        self,
        header: Header,
        lines: Iterable,
        *,
        source: str = "<stream>",
        bool_encoding: BoolEncoding = BoolEncoding.LETTER,
        stats: DecodeStats | None = None,
    ) -> Iterator:
        """Yield one record per data line of *lines*, lazily.

        Blank and ``#`` lines are skipped. A line with a field that does not
        convert is logged with its file-relative line number and dropped;
        decoding continues with the next line.
        """
        stats = stats if stats is not None else DecodeStats()
        plan = self._plan(header, source, bool_encoding)
        line_no = header.line_count

        for raw_line in lines:
            line_no += 1
            line = as_text(raw_line).rstrip("\r\n")
            if not line.strip():
                continue
            if line.startswith("#"):
                trace(logger, "%s:%d: skipping comment %r", source, line_no, line)
                continue

            try:
                record = self._build(line.split(header.field_separator), plan, header)
            except FieldError as e:
                stats.dropped += 1
                logger.error("%s:%d: dropped %s record, %s", source, line_no, self.name, e)
                continue

            stats.decoded += 1
            yield record


def _jsonable(value):
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return str(value)
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def record_to_dict(record) -> dict[str, Any]:
    """Convert a record to a JSON-ready dict; absent optionals stay None."""
    return {f.name: _jsonable(getattr(record, f.name)) for f in dataclasses.fields(record)}
