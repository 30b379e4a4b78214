"""Certificate log (``x509``): one record per certificate seen on the wire."""

from dataclasses import dataclass

from brolog.fields import IPAddress, multi, optional, required
from brolog.parsers.base import Schema


@dataclass(frozen=True)
class X509Record:
    ts: float
    id: str
    certificate_version: int
    certificate_serial: str
    certificate_subject: str
    certificate_issuer: str
    certificate_not_valid_before: float
    certificate_not_valid_after: float
    certificate_key_alg: str
    certificate_sig_alg: str
    certificate_key_type: str
    certificate_key_length: int | None
    certificate_exponent: int | None
    certificate_curve: str | None
    san_dns: list[str]
    san_uri: list[str]
    san_email: list[str]
    san_ip: list[IPAddress]
    basic_constraints_ca: bool | None
    basic_constraints_path_len: int | None


COLUMNS = (
    required("ts", "time"),
    required("id", "string"),
    required("certificate.version", "count"),
    required("certificate.serial", "string"),
    required("certificate.subject", "string"),
    required("certificate.issuer", "string"),
    required("certificate.not_valid_before", "time"),
    required("certificate.not_valid_after", "time"),
    required("certificate.key_alg", "string"),
    required("certificate.sig_alg", "string"),
    required("certificate.key_type", "string"),
    optional("certificate.key_length", "count"),
    optional("certificate.exponent", "count"),
    optional("certificate.curve", "string"),
    multi("san.dns", "string"),
    multi("san.uri", "string"),
    multi("san.email", "string"),
    multi("san.ip", "addr"),
    optional("basic_constraints.ca", "bool"),
    optional("basic_constraints.path_len", "count"),
)

SCHEMA = Schema("x509", X509Record, COLUMNS)
