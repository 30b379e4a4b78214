"""TLS log (``ssl``): one record per TLS/SSL handshake."""

from dataclasses import dataclass

from brolog.fields import EMPTY, UNSET, IPAddress, multi, optional, required
from brolog.parsers.base import Schema


@dataclass(frozen=True)
class SslRecord:
    ts: float
    uid: str
    orig_h: IPAddress
    orig_p: int
    resp_h: IPAddress
    resp_p: int
    ssl_version: str | None
    cipher: str | None
    curve: str | None
    server_name: str
    resumed: bool | None
    last_alert: str | None
    next_protocol: str | None
    established: bool | None
    cert_chain_fuids: list[str]
    client_cert_chain_fuids: list[str]
    subject: str | None
    issuer: str | None
    client_subject: str | None
    client_issuer: str | None


COLUMNS = (
    required("ts", "time"),
    required("uid", "string"),
    required("id.orig_h", "addr", attr="orig_h"),
    required("id.orig_p", "port", attr="orig_p"),
    required("id.resp_h", "addr", attr="resp_h"),
    required("id.resp_p", "port", attr="resp_p"),
    optional("version", "string", attr="ssl_version"),
    optional("cipher", "string"),
    optional("curve", "string"),
    required("server_name", "string"),
    optional("resumed", "bool"),
    optional("last_alert", "string"),
    optional("next_protocol", "string"),
    optional("established", "bool"),
    multi("cert_chain_fuids", "string", absent=(EMPTY, UNSET)),
    multi("client_cert_chain_fuids", "string", absent=(EMPTY, UNSET)),
    optional("subject", "string"),
    optional("issuer", "string"),
    optional("client_subject", "string"),
    optional("client_issuer", "string"),
)

SCHEMA = Schema("ssl", SslRecord, COLUMNS)
