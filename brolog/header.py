"""Header block parsing for Bro/Zeek ASCII logs.

A log starts with ``#``-prefixed directives describing its own layout:

    #separator \\x09
    #set_separator	,
    #empty_field	(empty)
    #unset_field	-
    #path	conn
    #open	2018-07-15-16-39-34
    #fields	ts	uid	id.orig_h	...
    #types	time	string	addr	...

``read_header`` consumes exactly that block and hands back an iterator that
starts at the first data line, so decoding never needs to rewind the stream.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from itertools import chain
from typing import Iterable, Iterator

from brolog.errors import HeaderError
from brolog.log import trace

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "\t"
DEFAULT_SET_SEPARATOR = ","
DEFAULT_EMPTY_FIELD = "(empty)"
DEFAULT_UNSET_FIELD = "-"

# #types is accepted but not used; #close is the producer's footer.
DIRECTIVES = (
    "separator", "set_separator", "empty_field", "unset_field",
    "path", "open", "fields", "types", "close",
)

_HEX_ESCAPE_RE = re.compile(r"\\x([0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class Header:
    field_separator: str = DEFAULT_SEPARATOR
    set_separator: str = DEFAULT_SET_SEPARATOR
    empty_field: str = DEFAULT_EMPTY_FIELD
    unset_field: str = DEFAULT_UNSET_FIELD
    type_name: str = ""
    opened_at: datetime | None = None
    field_names: list[str] = field(default_factory=list)
    line_count: int = 0

    @property
    def path(self) -> str:
        return self.type_name

    @property
    def empty_field_marker(self) -> str:
        return self.empty_field

    @property
    def unset_field_marker(self) -> str:
        return self.unset_field


def as_text(line) -> str:
    """Lines may arrive as bytes from binary streams."""
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="replace")
    return line


def decode_separator(value: str) -> str:
    """Decode ``\\xHH`` escapes: ``\\x09`` -> tab, ``\\x20`` -> space.

    Text that is not an escape is kept literally.
    """
    return _HEX_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), value)


def parse_open_time(value: str) -> datetime:
    """Parse ``YYYY-MM-DD-HH-MM-SS`` into a datetime."""
    parts = value.strip().split("-")
    if len(parts) != 6:
        raise HeaderError(f"#open expects six dash-separated integers, got {value!r}")
    try:
        year, month, day, hour, minute, second = (int(p) for p in parts)
        return datetime(year, month, day, hour, minute, second)
    except ValueError as e:
        raise HeaderError(f"Malformed #open timestamp {value!r}: {e}") from None


def _split_directive(line: str, separator: str) -> tuple[str, str | None]:
    """Split ``#key<sep>value`` into (key, value).

    ``#separator`` itself is written with a space before the separator is
    known, so whitespace is the fallback when *separator* is absent.
    """
    body = line[1:]
    if separator and separator in body:
        key, value = body.split(separator, 1)
        return key.strip(), value
    parts = body.split(None, 1)
    if not parts:
        return "", None
    return parts[0], parts[1] if len(parts) > 1 else None


def read_header(lines: Iterable) -> tuple[Header, Iterator]:
    """Consume the leading ``#`` block of *lines*.

    Returns the Header and an iterator positioned at the first data line.
    Raises HeaderError on an unknown directive, a directive without a value,
    or a malformed ``#open`` time.
    """
    it = iter(lines)
    values: dict = {}
    separator = DEFAULT_SEPARATOR
    consumed = 0

    for raw in it:
        line = as_text(raw).rstrip("\r\n")
        if line and not line.startswith("#"):
            values["line_count"] = consumed
            return Header(**values), chain([raw], it)

        consumed += 1
        if not line.strip():
            continue

        key, value = _split_directive(line, separator)
        if key not in DIRECTIVES:
            raise HeaderError(f"Unrecognized header directive on line {consumed}: {line!r}")
        if key in ("types", "close"):
            trace(logger, "Ignoring #%s on header line %d", key, consumed)
            continue
        if value is None or value == "":
            raise HeaderError(f"Header directive #{key} on line {consumed} has no value")

        if key == "separator":
            separator = decode_separator(value.strip() or value)
            values["field_separator"] = separator
        elif key == "set_separator":
            values["set_separator"] = value
        elif key == "empty_field":
            values["empty_field"] = value
        elif key == "unset_field":
            values["unset_field"] = value
        elif key == "path":
            values["type_name"] = value.strip()
        elif key == "open":
            values["opened_at"] = parse_open_time(value)
        elif key == "fields":
            values["field_names"] = value.split(separator)

    values["line_count"] = consumed
    return Header(**values), iter(())
