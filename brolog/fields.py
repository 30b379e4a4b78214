"""Typed field converters and column specifications.

Type names follow the producer's ``#types`` vocabulary so a column spec reads
like the log it describes. Every converter takes the raw text of one field
(or one set element) and raises ValueError when it does not fit the type.
"""

import ipaddress
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Callable

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

# Column kinds
REQUIRED = "required"
OPTIONAL = "optional"
MULTI = "multi"

# Markers that mean "absent" for a multi-valued column
UNSET = "unset"
EMPTY = "empty"


class BoolEncoding(Enum):
    """Which token the producer writes for false. Anything else present is true.

    Current producer releases write ``T``/``F``; some older ones wrote
    ``1``/``0`` for the same columns.
    """

    LETTER = "letter"
    NUMERIC = "numeric"

    @property
    def false_token(self) -> str:
        return "F" if self is BoolEncoding.LETTER else "0"

    @classmethod
    def parse(cls, name: str) -> "BoolEncoding":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(e.value for e in cls)
            raise ValueError(f"unknown boolean encoding {name!r} (expected one of: {choices})") from None


def to_float(raw: str) -> float:
    return float(raw)


def to_int(raw: str) -> int:
    return int(raw)


def to_count(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise ValueError(f"count must not be negative: {value}")
    return value


def to_port(raw: str) -> int:
    value = int(raw)
    if not 0 <= value <= 65535:
        raise ValueError(f"port out of range: {value}")
    return value


def to_addr(raw: str) -> IPAddress:
    return ipaddress.ip_address(raw)


def to_string(raw: str) -> str:
    return raw


def to_bool(raw: str, encoding: BoolEncoding = BoolEncoding.LETTER) -> bool:
    return raw != encoding.false_token


CONVERTERS: dict[str, Callable[[str], Any]] = {
    "time": to_float,
    "interval": to_float,
    "double": to_float,
    "count": to_count,
    "int": to_int,
    "port": to_port,
    "addr": to_addr,
    "string": to_string,
    "enum": to_string,
}

TYPES = tuple(CONVERTERS) + ("bool",)


@dataclass(frozen=True)
class Column:
    """One column of a schema.

    ``name`` is the producer's column name (``id.orig_h``), ``attr`` the
    record attribute it populates (``orig_h``).
    """

    name: str
    attr: str
    type: str
    kind: str = REQUIRED
    absent: tuple[str, ...] = (UNSET,)

    def __post_init__(self):
        if self.type not in TYPES:
            raise ValueError(f"column {self.name}: unknown type {self.type!r}")
        if self.kind not in (REQUIRED, OPTIONAL, MULTI):
            raise ValueError(f"column {self.name}: unknown kind {self.kind!r}")

    def converter(self, encoding: BoolEncoding = BoolEncoding.LETTER) -> Callable[[str], Any]:
        if self.type == "bool":
            return partial(to_bool, encoding=encoding)
        return CONVERTERS[self.type]

    def absent_markers(self, header) -> frozenset[str]:
        markers = set()
        if UNSET in self.absent:
            markers.add(header.unset_field)
        if EMPTY in self.absent:
            markers.add(header.empty_field)
        return frozenset(markers)


def _attr(name: str, attr: str | None) -> str:
    return attr or name.replace(".", "_")


def required(name: str, type_: str, attr: str | None = None) -> Column:
    return Column(name, _attr(name, attr), type_, REQUIRED)


def optional(name: str, type_: str, attr: str | None = None) -> Column:
    return Column(name, _attr(name, attr), type_, OPTIONAL)


def multi(name: str, type_: str, attr: str | None = None, absent: tuple[str, ...] = (UNSET,)) -> Column:
    return Column(name, _attr(name, attr), type_, MULTI, absent)
