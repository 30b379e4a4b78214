"""DNS log (``dns``): one record per query/response transaction."""

from dataclasses import dataclass

from brolog.fields import IPAddress, multi, optional, required
from brolog.parsers.base import Schema


@dataclass(frozen=True)
class DnsRecord:
    ts: float
    uid: str
    orig_h: IPAddress
    orig_p: int
    resp_h: IPAddress
    resp_p: int
    proto: str
    trans_id: int
    rtt: float | None
    query: str
    qclass: int | None
    qclass_name: str | None
    qtype: int | None
    qtype_name: str | None
    rcode: int | None
    rcode_name: str | None
    AA: bool | None
    TC: bool | None
    RD: bool | None
    RA: bool | None
    Z: int
    answers: list[str]
    TTLs: list[float]
    rejected: bool | None


COLUMNS = (
    required("ts", "time"),
    required("uid", "string"),
    required("id.orig_h", "addr", attr="orig_h"),
    required("id.orig_p", "port", attr="orig_p"),
    required("id.resp_h", "addr", attr="resp_h"),
    required("id.resp_p", "port", attr="resp_p"),
    required("proto", "enum"),
    required("trans_id", "count"),
    optional("rtt", "interval"),
    required("query", "string"),
    optional("qclass", "count"),
    optional("qclass_name", "string"),
    optional("qtype", "count"),
    optional("qtype_name", "string"),
    optional("rcode", "count"),
    optional("rcode_name", "string"),
    optional("AA", "bool"),
    optional("TC", "bool"),
    optional("RD", "bool"),
    optional("RA", "bool"),
    required("Z", "count"),
    multi("answers", "string"),
    multi("TTLs", "interval"),
    optional("rejected", "bool"),
)

SCHEMA = Schema("dns", DnsRecord, COLUMNS)
