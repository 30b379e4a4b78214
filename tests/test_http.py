"""Tests for the http decoder."""

import pytest

from conftest import decode_file, log_path

USER_AGENT = "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:61.0) Gecko/20100101 Firefox/61.0"


@pytest.fixture
def http_by_uid():
    return {r.uid: r for r in decode_file(log_path("http.log"))}


class TestHttpDecode:
    def test_record_count(self, http_by_uid):
        assert len(http_by_uid) == 3

    def test_request_with_referrer(self, http_by_uid):
        r = http_by_uid["CuVIzg2991yFw6ZZl"]
        assert r.ts == pytest.approx(1531687185.306279)
        assert str(r.orig_h) == "10.0.0.3"
        assert r.orig_p == 45548
        assert str(r.resp_h) == "127.0.0.2"
        assert r.resp_p == 80
        assert r.trans_depth == 1
        assert r.method == "POST"
        assert r.host == "test.domain"
        assert r.uri == "/GTSGIAG3"
        assert r.referrer == "example.com"
        assert r.http_version == "1.1"
        assert r.user_agent == USER_AGENT
        assert (r.request_body_len, r.response_body_len) == (75, 463)
        assert r.status_code == 200
        assert r.status_msg == "OK"

    def test_absent_optionals(self, http_by_uid):
        r = http_by_uid["CuVIzg2991yFw6ZZl"]
        assert r.info_code is None
        assert r.info_msg is None
        assert r.username is None
        assert r.password is None

    def test_multi_valued_fields(self, http_by_uid):
        r = http_by_uid["CBlWr94sL2KePoCqz7"]
        assert r.referrer is None
        assert r.tags == []
        assert r.proxied == []
        assert r.orig_fuids == ["F4MT931ov6qLvRD8Ne"]
        assert r.orig_filenames == []
        assert r.orig_mime_types == ["application/ocsp-request"]
        assert r.resp_fuids == ["F5F5oA1q4IXwFANwk8"]
        assert r.resp_filenames == []
        assert r.resp_mime_types == ["application/ocsp-response"]

    def test_third_request(self, http_by_uid):
        r = http_by_uid["Czi9O3kaUI8DpgVCd"]
        assert r.host == "testdomain.com"
        assert r.uri == "/"
        assert (r.request_body_len, r.response_body_len) == (83, 471)
        assert r.resp_fuids == ["F6sICI3IY4vu5U4ys1"]
