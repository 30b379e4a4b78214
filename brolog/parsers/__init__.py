"""Record decoders, one per supported log type.

    from brolog.header import read_header
    from brolog import parsers

    header, body = read_header(f)
    for record in parsers.decode(header, body):
        ...
"""

from brolog.errors import ConfigError
from brolog.fields import BoolEncoding
from brolog.parsers import conn, dns, files, http, ssl, x509
from brolog.parsers.base import DecodeStats, Schema, record_to_dict

SCHEMAS: dict[str, Schema] = {
    m.SCHEMA.name: m.SCHEMA for m in (conn, dns, http, ssl, x509, files)
}

__all__ = [
    "SCHEMAS",
    "DecodeStats",
    "Schema",
    "decode",
    "get_schema",
    "record_to_dict",
    "resolve_bool_encodings",
]


def get_schema(name: str) -> Schema:
    """Return the schema registered as *name*; KeyError if there is none."""
    try:
        return SCHEMAS[name]
    except KeyError:
        raise KeyError(f"unsupported log type {name!r}") from None


def decode(header, lines, **kwargs):
    """Decode *lines* with the schema named by ``header.type_name``."""
    return get_schema(header.type_name).decode(header, lines, **kwargs)


def resolve_bool_encodings(mapping: dict[str, str] | None) -> dict[str, BoolEncoding]:
    """Turn the ``bool_encoding`` config section into a per-schema policy map.

    Schemas not named keep ``BoolEncoding.LETTER``.
    """
    resolved = {name: BoolEncoding.LETTER for name in SCHEMAS}
    problems = []
    for name, value in (mapping or {}).items():
        if name not in SCHEMAS:
            problems.append(f"bool_encoding.{name}: unknown log type")
            continue
        try:
            resolved[name] = BoolEncoding.parse(value)
        except ValueError as e:
            problems.append(f"bool_encoding.{name}: {e}")

    if problems:
        raise ConfigError("; ".join(problems))
    return resolved
