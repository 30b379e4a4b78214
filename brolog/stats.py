"""Per-file outcomes and run-level statistics."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

PARSED = "parsed"
SKIPPED = "skipped"
FAILED = "failed"
CANCELLED = "cancelled"


@dataclass
class FileResult:
    path: str
    type_name: str = ""
    status: str = PARSED
    records: int = 0
    dropped: int = 0
    error: str | None = None


@dataclass
class RunStats:
    files_seen: int = 0
    files_parsed: int = 0
    files_skipped: int = 0
    files_failed: int = 0
    files_cancelled: int = 0
    records: int = 0
    dropped_lines: int = 0
    records_by_type: dict[str, int] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_results(cls, results: Iterable[FileResult]) -> "RunStats":
        stats = cls()
        by_type = Counter()
        for r in results:
            stats.files_seen += 1
            if r.status == PARSED:
                stats.files_parsed += 1
            elif r.status == SKIPPED:
                stats.files_skipped += 1
            elif r.status == FAILED:
                stats.files_failed += 1
                stats.failures[r.path] = r.error or "unknown error"
            elif r.status == CANCELLED:
                stats.files_cancelled += 1

            stats.records += r.records
            stats.dropped_lines += r.dropped
            if r.records and r.type_name:
                by_type[r.type_name] += r.records

        stats.records_by_type = dict(sorted(by_type.items()))
        return stats

    @property
    def ok(self) -> bool:
        return self.files_failed == 0

    def to_dict(self) -> dict:
        return {
            "files_seen": self.files_seen,
            "files_parsed": self.files_parsed,
            "files_skipped": self.files_skipped,
            "files_failed": self.files_failed,
            "files_cancelled": self.files_cancelled,
            "records": self.records,
            "dropped_lines": self.dropped_lines,
            "records_by_type": self.records_by_type,
            "failures": self.failures,
        }
