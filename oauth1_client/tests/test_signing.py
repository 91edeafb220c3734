"""Tests for RFC 5849 signing helpers."""
import base64
import hashlib
import hmac
import re

import pytest

from oauth1_client.signing import (
    authorization_header,
    generate_nonce,
    normalize_url,
    percent_encode,
    sign_hmac_sha1,
    signature_base_string,
    signed_oauth_params,
)


def test_nonce_is_urlsafe_and_unique():
    nonces = {generate_nonce() for _ in range(50)}
    assert len(nonces) == 50
    assert all(re.match(r"^[A-Za-z0-9_-]+$", n) for n in nonces)


@pytest.mark.parametrize(
    "raw, encoded",
    [
        ("Ladies + Gentlemen", "Ladies%20%2B%20Gentlemen"),
        ("An encoded string!", "An%20encoded%20string%21"),
        ("Dogs, Cats & Mice", "Dogs%2C%20Cats%20%26%20Mice"),
        ("a-b.c_d~e", "a-b.c_d~e"),
        ("http://x/y", "http%3A%2F%2Fx%2Fy"),
        ("☃", "%E2%98%83"),
    ],
)
def test_percent_encode(raw, encoded):
    assert percent_encode(raw) == encoded


def test_normalize_url_drops_default_port_and_lowercases_host():
    base, query = normalize_url("HTTP://Example.COM:80/r%20v/X?id=123&a=")
    assert base == "http://example.com/r%20v/X"
    assert query == [("id", "123"), ("a", "")]


def test_normalize_url_keeps_custom_port():
    base, query = normalize_url("https://example.com:8443")
    assert base == "https://example.com:8443/"
    assert query == []


def test_signature_base_string_merges_query():
    base = signature_base_string("post", "https://Api.Example.com/req?b=2", {"a": "1 2"})
    assert base == "POST&https%3A%2F%2Fapi.example.com%2Freq&a%3D1%25202%26b%3D2"


def test_sign_hmac_sha1_uses_both_secrets():
    expected = base64.b64encode(hmac.new(b"cs&ts", b"base", hashlib.sha1).digest()).decode()
    assert sign_hmac_sha1("base", "cs", "ts") == expected
    assert sign_hmac_sha1("base", "cs") != expected


def test_authorization_header_format():
    header = authorization_header({"oauth_token": "a b", "oauth_consumer_key": "ck"})
    assert header == 'OAuth oauth_consumer_key="ck", oauth_token="a%20b"'


def test_signed_oauth_params_signature_verifies():
    url = "https://provider.example/oauth/access_token"
    params = signed_oauth_params(
        "POST", url, consumer_key="ck", consumer_secret="cs", token="rtok", token_secret="rsec",
        extra={"oauth_verifier": "ver"},
    )
    assert params["oauth_signature_method"] == "HMAC-SHA1"
    assert params["oauth_version"] == "1.0"
    assert params["oauth_token"] == "rtok"
    signature = params.pop("oauth_signature")
    assert signature == sign_hmac_sha1(signature_base_string("POST", url, params), "cs", "rsec")


def test_signed_oauth_params_without_token():
    params = signed_oauth_params("POST", "https://p/x", consumer_key="ck", consumer_secret="cs")
    assert "oauth_token" not in params


def test_normalize_url_keeps_ipv6_brackets():
    base, _ = normalize_url("http://[::1]:9000/oauth/request_token")
    assert base == "http://[::1]:9000/oauth/request_token"
    base, _ = normalize_url("https://[2001:DB8::1]/x")
    assert base == "https://[2001:db8::1]/x"
