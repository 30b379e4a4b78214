"""Shared fixtures: producer-format sample logs under tests/logs/."""

import logging
import os
import shutil

import pytest

from brolog.header import read_header
from brolog.parsers import get_schema

LOGS_DIR = os.path.join(os.path.dirname(__file__), "logs")
HEADERS_DIR = os.path.join(LOGS_DIR, "headers")


def log_path(name: str) -> str:
    return os.path.join(LOGS_DIR, name)


def decode_file(path: str, **kwargs) -> list:
    """Read *path* and decode every record with the schema its header names."""
    with open(path, "r", encoding="utf-8") as f:
        header, body = read_header(f)
        return list(get_schema(header.type_name).decode(header, body, source=path, **kwargs))


def write_log(path, type_name: str, fields: list[str], rows: list[list[str]], separator: str = "\t") -> str:
    """Write a minimal producer-style log with the given columns and rows."""
    lines = [
        "#separator \\x09" if separator == "\t" else f"#separator {separator}",
        f"#set_separator{separator},",
        f"#empty_field{separator}(empty)",
        f"#unset_field{separator}-",
        f"#path{separator}{type_name}",
        f"#open{separator}2018-07-15-16-39-34",
        "#fields" + separator + separator.join(fields),
    ]
    lines.extend(separator.join(row) for row in rows)
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    return str(path)


@pytest.fixture
def conn_records():
    return decode_file(log_path("conn.log"))


@pytest.fixture
def log_dir(tmp_path):
    """A directory holding the conn (6 records) and dns (4 records) samples."""
    directory = tmp_path / "bro"
    directory.mkdir()
    for name in ("conn.log", "dns.log"):
        shutil.copy(log_path(name), directory / name)
    return str(directory)


@pytest.fixture
def full_log_dir(tmp_path):
    """Every sample log, including one of an unsupported type."""
    directory = tmp_path / "bro_all"
    directory.mkdir()
    for name in sorted(os.listdir(LOGS_DIR)):
        if name.endswith(".log"):
            shutil.copy(log_path(name), directory / name)
    return str(directory)


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging(), which replaces the root handlers."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
