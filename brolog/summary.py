"""Grouping rules and the count tables they drive.

A rule names up to two record fields for the rows and up to two for the
columns of a table:

    conn: "proto:conn_state"           rows = (proto,)  columns = (conn_state,)
    dns:  "qtype_name,rcode_name"      rows only
    http: "method,host:status_code"

Every rule is checked against its schema before any log is opened.
"""

import logging
import threading
from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from brolog.errors import ConfigError
from brolog.parsers import SCHEMAS, Schema

logger = logging.getLogger(__name__)

MAX_GROUP_FIELDS = 2

Key = tuple


@dataclass(frozen=True)
class GroupRule:
    schema: str
    rows: tuple[str, ...]
    columns: tuple[str, ...] = ()

    def __str__(self) -> str:
        text = ",".join(self.rows)
        if self.columns:
            text += ":" + ",".join(self.columns)
        return text


def _split_names(schema: Schema, side: str, text: str) -> tuple[str, ...]:
    names = tuple(n.strip() for n in text.split(","))
    if any(not n for n in names):
        raise ConfigError(f"summarize_by.{schema.name}: empty field name in {side} {text!r}")
    if len(names) > MAX_GROUP_FIELDS:
        raise ConfigError(
            f"summarize_by.{schema.name}: at most {MAX_GROUP_FIELDS} {side} fields, got {len(names)}"
        )
    unknown = [n for n in names if not schema.has_field(n)]
    if unknown:
        raise ConfigError(
            f"summarize_by.{schema.name}: unknown field(s) {', '.join(unknown)} "
            f"(known: {', '.join(schema.field_names)})"
        )
    return names


def parse_rule(schema_name: str, text: str) -> GroupRule:
    """Parse and check one ``rows[:columns]`` rule for *schema_name*."""
    schema = SCHEMAS.get(schema_name)
    if schema is None:
        raise ConfigError(
            f"summarize_by.{schema_name}: unknown log type (known: {', '.join(SCHEMAS)})"
        )
    if not isinstance(text, str) or not text.strip():
        raise ConfigError(f"summarize_by.{schema_name}: rule must be a non-empty string")

    parts = text.split(":")
    if len(parts) > 2:
        raise ConfigError(f"summarize_by.{schema_name}: at most one ':' allowed, got {text!r}")

    rows = _split_names(schema, "row", parts[0])
    columns = _split_names(schema, "column", parts[1]) if len(parts) == 2 else ()
    return GroupRule(schema_name, rows, columns)


def validate_rules(mapping: dict[str, str] | None) -> dict[str, GroupRule]:
    """Check every configured rule, reporting all problems at once."""
    rules: dict[str, GroupRule] = {}
    problems: list[str] = []

    for schema_name, text in (mapping or {}).items():
        try:
            rules[schema_name] = parse_rule(schema_name, text)
        except ConfigError as e:
            logger.critical("Invalid grouping rule: %s", e)
            problems.append(str(e))

    if problems:
        raise ConfigError(f"{len(problems)} invalid grouping rule(s): " + "; ".join(problems))
    return rules


def _key_part(value):
    # List values are unhashable
    return tuple(value) if isinstance(value, list) else value


class SummaryTable:
    """Record counts keyed by (row values, column values), safe to share across threads."""

    def __init__(self, rule: GroupRule):
        self.rule = rule
        self.schema = SCHEMAS[rule.schema]
        self._counts: Counter = Counter()
        self._lock = threading.Lock()

    def key(self, record) -> tuple[Key, Key]:
        row = tuple(_key_part(self.schema.value(record, f)) for f in self.rule.rows)
        column = tuple(_key_part(self.schema.value(record, f)) for f in self.rule.columns)
        return row, column

    def add(self, record):
        key = self.key(record)
        with self._lock:
            self._counts[key] += 1

    def add_many(self, records: Iterable) -> int:
        """Fold *records* locally, then merge into the table under one lock."""
        local: Counter = Counter()
        n = 0
        for record in records:
            local[self.key(record)] += 1
            n += 1
        with self._lock:
            self._counts.update(local)
        return n

    @property
    def counts(self) -> dict[tuple[Key, Key], int]:
        return self.snapshot()

    @property
    def total(self) -> int:
        with self._lock:
            return sum(self._counts.values())

    def snapshot(self) -> dict[tuple[Key, Key], int]:
        with self._lock:
            return dict(self._counts)

    def row_keys(self) -> list[Key]:
        return _unique(row for row, _ in self.snapshot())

    def column_keys(self) -> list[Key]:
        return _unique(column for _, column in self.snapshot())


def _unique(keys) -> list:
    seen = {}
    for key in keys:
        seen.setdefault(key, None)
    return list(seen)


class Summarizer:
    """Owns one SummaryTable per configured rule."""

    def __init__(self, rules: dict[str, GroupRule] | None = None):
        self.rules = dict(rules or {})
        self.tables = {name: SummaryTable(rule) for name, rule in self.rules.items()}

    @classmethod
    def from_config(cls, mapping: dict[str, str] | None) -> "Summarizer":
        return cls(validate_rules(mapping))

    def table(self, schema_name: str) -> SummaryTable | None:
        return self.tables.get(schema_name)

    def consume(self, schema_name: str, records: Iterable) -> int:
        """Drain *records* into the schema's table and return how many were seen.

        Schemas without a rule are still drained so their records are counted.
        """
        table = self.tables.get(schema_name)
        if table is not None:
            return table.add_many(records)
        return sum(1 for _ in records)
