"""Connection log (``conn``): one record per transport-layer conversation."""

from dataclasses import dataclass

from brolog.fields import EMPTY, IPAddress, multi, optional, required
from brolog.parsers.base import Schema


@dataclass(frozen=True)
class ConnRecord:
    ts: float
    uid: str
    orig_h: IPAddress
    orig_p: int
    resp_h: IPAddress
    resp_p: int
    proto: str
    service: str | None
    duration: float | None
    orig_bytes: int | None
    resp_bytes: int | None
    conn_state: str
    local_orig: bool | None
    local_resp: bool | None
    missed_bytes: int
    history: str | None
    orig_pkts: int
    orig_ip_bytes: int
    resp_pkts: int
    resp_ip_bytes: int
    tunnel_parents: list[str]


COLUMNS = (
    required("ts", "time"),
    required("uid", "string"),
    required("id.orig_h", "addr", attr="orig_h"),
    required("id.orig_p", "port", attr="orig_p"),
    required("id.resp_h", "addr", attr="resp_h"),
    required("id.resp_p", "port", attr="resp_p"),
    required("proto", "enum"),
    optional("service", "string"),
    optional("duration", "interval"),
    optional("orig_bytes", "count"),
    optional("resp_bytes", "count"),
    required("conn_state", "string"),
    optional("local_orig", "bool"),
    optional("local_resp", "bool"),
    required("missed_bytes", "count"),
    optional("history", "string"),
    required("orig_pkts", "count"),
    required("orig_ip_bytes", "count"),
    required("resp_pkts", "count"),
    required("resp_ip_bytes", "count"),
    multi("tunnel_parents", "string", absent=(EMPTY,)),
)

SCHEMA = Schema("conn", ConnRecord, COLUMNS)
