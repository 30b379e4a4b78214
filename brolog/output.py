"""Render finished summary tables: CSV per schema, one JSON document, text pivots."""

import csv
import io
import json
import os
import tempfile
from datetime import datetime, timezone

from brolog import __version__
from brolog.stats import RunStats
from brolog.summary import Summarizer, SummaryTable

JSON_NAME = "summary.json"


def format_value(value) -> str:
    """Render one key value the way the producer writes it."""
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "T" if value else "F"
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(v) for v in value) if value else "(empty)"
    return str(value)


def _sort_key(key: tuple) -> tuple:
    # Values of one column may mix None with numbers, so sort on the text.
    return tuple(format_value(v) for v in key)


def sorted_entries(table: SummaryTable) -> list[tuple[tuple, tuple, int]]:
    counts = table.snapshot()
    return [
        (row, column, counts[(row, column)])
        for row, column in sorted(counts, key=lambda k: (_sort_key(k[0]), _sort_key(k[1])))
    ]


def _atomic_write(path: str, text: str):
    directory = os.path.dirname(path) or "."
    tmp_fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def table_to_csv(table: SummaryTable) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(list(table.rule.rows) + list(table.rule.columns) + ["count"])
    for row, column, count in sorted_entries(table):
        writer.writerow([format_value(v) for v in row + column] + [count])
    return buf.getvalue()


def summary_document(summarizer: Summarizer, stats: RunStats | None = None) -> dict:
    tables = {}
    for name, table in sorted(summarizer.tables.items()):
        tables[name] = {
            "rule": str(table.rule),
            "rows": list(table.rule.rows),
            "columns": list(table.rule.columns),
            "total": table.total,
            "entries": [
                {
                    "row": [format_value(v) for v in row],
                    "column": [format_value(v) for v in column],
                    "count": count,
                }
                for row, column, count in sorted_entries(table)
            ],
        }
    return {
        "generator": f"brolog {__version__}",
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "tables": tables,
        "stats": stats.to_dict() if stats is not None else None,
    }


def write_summary(out_dir: str, summarizer: Summarizer, stats: RunStats | None = None) -> list[str]:
    """Write ``<schema>_summary.csv`` per table and ``summary.json``; return the paths."""
    os.makedirs(out_dir, exist_ok=True)
    written = []
    for name, table in sorted(summarizer.tables.items()):
        path = os.path.join(out_dir, f"{name}_summary.csv")
        _atomic_write(path, table_to_csv(table))
        written.append(path)

    path = os.path.join(out_dir, JSON_NAME)
    _atomic_write(path, json.dumps(summary_document(summarizer, stats), indent=2) + "\n")
    written.append(path)
    return written


def format_table_text(table: SummaryTable) -> str:
    """Plain-text pivot: one line per row key, one count column per column key."""
    rule = table.rule
    entries = sorted_entries(table)
    rows = sorted({row for row, _, _ in entries}, key=_sort_key)
    columns = sorted({column for _, column, _ in entries}, key=_sort_key)
    counts = {(row, column): count for row, column, count in entries}

    row_label = ",".join(rule.rows)
    column_labels = [" ".join(format_value(v) for v in c) if c else "count" for c in columns]
    rendered = [[" ".join(format_value(v) for v in row)] + [str(counts.get((row, c), 0)) for c in columns]
                for row in rows]

    widths = [max([len(row_label)] + [len(r[0]) for r in rendered])]
    for i, label in enumerate(column_labels, start=1):
        widths.append(max([len(label)] + [len(r[i]) for r in rendered]))

    lines = [f"{rule.schema}: {rule} ({table.total} records)"]
    header = [row_label] + column_labels
    lines.append("  ".join(h.ljust(w) for h, w in zip(header, widths)).rstrip())
    lines.append("  ".join("-" * w for w in widths))
    for r in rendered:
        lines.append("  ".join([r[0].ljust(widths[0])] + [v.rjust(w) for v, w in zip(r[1:], widths[1:])]))
    return "\n".join(lines)
