"""Tests for the conn decoder against the sample conn.log."""

import ipaddress

import pytest

from brolog.parsers.conn import ConnRecord

from conftest import log_path, decode_file


class TestConnDecode:
    def test_record_count(self, conn_records):
        assert len(conn_records) == 6
        assert all(isinstance(r, ConnRecord) for r in conn_records)

    def test_order_is_preserved(self, conn_records):
        assert [r.uid for r in conn_records] == [
            "CI3wQF1KHxU6G7VmTj",
            "CseN5l3TT2T9wz29gd",
            "CF9cy31JmjzAbGWlXb",
            "CuVIzg2991yFw6ZZl",
            "CTs6Ib3G1SsnrfuJak",
            "Cjo73l2bKMuyYcFUH",
        ]

    def test_first_record(self, conn_records):
        r = conn_records[0]
        assert r.ts == pytest.approx(1531687176.789848)
        assert r.orig_h == ipaddress.ip_address("10.0.0.2")
        assert r.orig_p == 60716
        assert str(r.resp_h) == "192.168.1.4"
        assert r.resp_p == 443
        assert r.proto == "tcp"
        assert r.service is None
        assert r.duration == pytest.approx(0.170522)
        assert r.orig_bytes == 1859
        assert r.resp_bytes == 524
        assert r.conn_state == "RSTRH"
        assert r.local_orig is None
        assert r.local_resp is None
        assert r.missed_bytes == 0
        assert r.history == "^dADar"
        assert (r.orig_pkts, r.orig_ip_bytes, r.resp_pkts, r.resp_ip_bytes) == (4, 2498, 3, 668)
        assert r.tunnel_parents == []

    def test_service_present(self, conn_records):
        assert conn_records[1].service == "ssl"
        assert conn_records[3].service == "http"

    def test_ipv6_endpoints(self, conn_records):
        r = conn_records[2]
        assert str(r.orig_h) == "fe80:541:4303:db20:9db7:490b:983b:62ca"
        assert str(r.resp_h) == "fe80:f8b0:4004:805::200e"
        assert r.resp_bytes == 728861

    def test_icmp_without_history(self, conn_records):
        r = conn_records[4]
        assert r.proto == "icmp"
        assert str(r.orig_h) == "fe80::250:f1ff:fe80:0"
        assert str(r.resp_h) == "fe80::1"
        assert r.history is None
        assert r.resp_bytes == 0

    def test_decode_is_deterministic(self):
        first = decode_file(log_path("conn.log"))
        second = decode_file(log_path("conn.log"))
        assert first == second

    def test_records_are_frozen(self, conn_records):
        with pytest.raises(AttributeError):
            conn_records[0].uid = "other"
