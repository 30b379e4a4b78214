"""Walk a log directory, decode each file with its schema, feed the summarizer."""

import gzip
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator

from brolog.errors import ConfigError, HeaderError
from brolog.fields import BoolEncoding
from brolog.header import read_header
from brolog.parsers import SCHEMAS, DecodeStats
from brolog.stats import CANCELLED, FAILED, PARSED, SKIPPED, FileResult, RunStats
from brolog.summary import Summarizer

logger = logging.getLogger(__name__)


def open_log(path: str):
    """Open *path* for line reading; ``.gz`` archives are decompressed on the fly."""
    if path.endswith(".gz"):
        return gzip.open(path, "rt", encoding="utf-8", errors="replace")
    return open(path, "r", encoding="utf-8", errors="replace")


def list_logs(directory: str) -> list[str]:
    """Sorted regular, non-hidden files directly under *directory*."""
    if not os.path.isdir(directory):
        raise ConfigError(f"Log directory not found or not a directory: {directory}")
    return [
        os.path.join(directory, name)
        for name in sorted(os.listdir(directory))
        if not name.startswith(".") and os.path.isfile(os.path.join(directory, name))
    ]


class LogDispatcher:
    def __init__(
        self,
        summarizer: Summarizer,
        *,
        workers: int = 1,
        bool_encodings: dict[str, BoolEncoding] | None = None,
    ):
        self.summarizer = summarizer
        self.workers = max(1, workers)
        self.bool_encodings = bool_encodings or {}
        self._cancelled = threading.Event()

    def cancel(self):
        """Stop issuing reads. Counts already merged are kept."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def _until_cancelled(self, records: Iterable) -> Iterator:
        for record in records:
            if self._cancelled.is_set():
                return
            yield record

    def process_file(self, path: str) -> FileResult:
        """Decode one file into the summarizer. Never raises."""
        result = FileResult(path)
        if self._cancelled.is_set():
            result.status = CANCELLED
            return result

        try:
            with open_log(path) as f:
                header, body = read_header(f)
                result.type_name = header.type_name
                schema = SCHEMAS.get(header.type_name)
                if schema is None:
                    logger.warning(
                        "%s: unsupported log type %r, skipping", path, header.type_name
                    )
                    result.status = SKIPPED
                    return result

                decode_stats = DecodeStats()
                records = schema.decode(
                    header,
                    body,
                    source=path,
                    bool_encoding=self.bool_encodings.get(schema.name, BoolEncoding.LETTER),
                    stats=decode_stats,
                )
                result.records = self.summarizer.consume(schema.name, self._until_cancelled(records))
                result.dropped = decode_stats.dropped
        except HeaderError as e:
            logger.error("%s: bad header: %s", path, e)
            result.status = FAILED
            result.error = str(e)
            return result
        except Exception as e:
            logger.error("%s: failed: %s", path, e)
            result.status = FAILED
            result.error = str(e)
            return result

        if self._cancelled.is_set():
            result.status = CANCELLED
            logger.info("%s: cancelled after %d records", path, result.records)
        else:
            logger.info(
                "%s: %d %s records, %d dropped",
                path, result.records, result.type_name, result.dropped,
            )
        return result

    def run(self, directory: str) -> RunStats:
        """Process every log under *directory* and return the run statistics.

        Raises ConfigError when *directory* is missing; per-file problems are
        logged and recorded in the stats instead.
        """
        paths = list_logs(directory)
        logger.info("Processing %d file(s) from %s with %d worker(s)", len(paths), directory, self.workers)

        if self.workers == 1:
            results = [self.process_file(p) for p in paths]
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                results = list(pool.map(self.process_file, paths))

        stats = RunStats.from_results(results)
        logger.info(
            "Done: %d parsed, %d skipped, %d failed, %d cancelled, %d records, %d dropped lines",
            stats.files_parsed, stats.files_skipped, stats.files_failed,
            stats.files_cancelled, stats.records, stats.dropped_lines,
        )
        return stats
