"""HTTP log (``http``): one record per request/response pair."""

from dataclasses import dataclass

from brolog.fields import EMPTY, IPAddress, multi, optional, required
from brolog.parsers.base import Schema


@dataclass(frozen=True)
class HttpRecord:
    ts: float
    uid: str
    orig_h: IPAddress
    orig_p: int
    resp_h: IPAddress
    resp_p: int
    trans_depth: int
    method: str
    host: str
    uri: str
    referrer: str | None
    http_version: str
    user_agent: str
    request_body_len: int
    response_body_len: int
    status_code: int | None
    status_msg: str
    info_code: int | None
    info_msg: str | None
    tags: list[str]
    username: str | None
    password: str | None
    proxied: list[str]
    orig_fuids: list[str]
    orig_filenames: list[str]
    orig_mime_types: list[str]
    resp_fuids: list[str]
    resp_filenames: list[str]
    resp_mime_types: list[str]


COLUMNS = (
    required("ts", "time"),
    required("uid", "string"),
    required("id.orig_h", "addr", attr="orig_h"),
    required("id.orig_p", "port", attr="orig_p"),
    required("id.resp_h", "addr", attr="resp_h"),
    required("id.resp_p", "port", attr="resp_p"),
    required("trans_depth", "count"),
    required("method", "string"),
    required("host", "string"),
    required("uri", "string"),
    optional("referrer", "string"),
    required("version", "string", attr="http_version"),
    required("user_agent", "string"),
    required("request_body_len", "count"),
    required("response_body_len", "count"),
    optional("status_code", "count"),
    required("status_msg", "string"),
    optional("info_code", "count"),
    optional("info_msg", "string"),
    multi("tags", "enum", absent=(EMPTY,)),
    optional("username", "string"),
    optional("password", "string"),
    multi("proxied", "string"),
    multi("orig_fuids", "string"),
    multi("orig_filenames", "string"),
    multi("orig_mime_types", "string"),
    multi("resp_fuids", "string"),
    multi("resp_filenames", "string"),
    multi("resp_mime_types", "string"),
)

SCHEMA = Schema("http", HttpRecord, COLUMNS)
