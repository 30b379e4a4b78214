"""File-analysis log (``files``): one record per file seen in a transfer."""

from dataclasses import dataclass

from brolog.fields import EMPTY, IPAddress, multi, optional, required
from brolog.parsers.base import Schema


@dataclass(frozen=True)
class FilesRecord:
    ts: float
    fuid: str
    tx_hosts: list[IPAddress]
    rx_hosts: list[IPAddress]
    conn_uids: list[str]
    source: str
    depth: int
    analyzers: list[str]
    mime_type: str
    filename: str | None
    duration: float
    local_orig: bool | None
    is_orig: bool | None
    seen_bytes: int
    total_bytes: int | None
    missing_bytes: int
    overflow_bytes: int
    timedout: bool | None
    parent_fuid: str | None
    md5: str | None
    sha1: str | None
    sha256: str | None
    extracted: str | None
    extracted_cutoff: bool | None
    extracted_size: int | None


COLUMNS = (
    required("ts", "time"),
    required("fuid", "string"),
    multi("tx_hosts", "addr"),
    multi("rx_hosts", "addr"),
    multi("conn_uids", "string"),
    required("source", "string"),
    required("depth", "count"),
    multi("analyzers", "string", absent=(EMPTY,)),
    required("mime_type", "string"),
    optional("filename", "string"),
    required("duration", "interval"),
    optional("local_orig", "bool"),
    optional("is_orig", "bool"),
    required("seen_bytes", "count"),
    optional("total_bytes", "count"),
    required("missing_bytes", "count"),
    required("overflow_bytes", "count"),
    optional("timedout", "bool"),
    optional("parent_fuid", "string"),
    optional("md5", "string"),
    optional("sha1", "string"),
    optional("sha256", "string"),
    optional("extracted", "string"),
    optional("extracted_cutoff", "bool"),
    optional("extracted_size", "count"),
)

SCHEMA = Schema("files", FilesRecord, COLUMNS)
