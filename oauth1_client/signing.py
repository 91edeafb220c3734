"""
OAuth 1.0 request signing (RFC 5849), HMAC-SHA1 only.
Nonce/timestamp generation, base string construction and the Authorization header.
"""
import base64
import hashlib
import hmac
import secrets
import time
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def generate_nonce() -> str:
    """Random value unique per request; the provider uses it to reject replays."""
    return secrets.token_urlsafe(32)


def generate_timestamp() -> str:
    return str(int(time.time()))


def percent_encode(value: str) -> str:
    """RFC 3986 encoding: everything except A-Z a-z 0-9 - . _ ~ is escaped."""
    return quote(str(value), safe="~")


def normalize_url(url: str) -> tuple[str, list[tuple[str, str]]]:
    """
    Split url into the base string URI (RFC 5849 3.4.1.2) and its query parameters.
    Scheme and host are lower-cased, default ports and fragments dropped.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        # IPv6 literal; hostname drops the brackets
        host = f"[{host}]"
    netloc = host
    if parts.port is not None and parts.port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{parts.port}"
    path = parts.path or "/"
    query = parse_qsl(parts.query, keep_blank_values=True)
    return urlunsplit((scheme, netloc, path, "", "")), query


def signature_base_string(method: str, url: str, params: dict[str, str]) -> str:
    """
    METHOD&URI&PARAMS with every part percent-encoded.
    Query parameters already present on url are signed alongside params.
    """
    base_uri, query = normalize_url(url)
    pairs = [(percent_encode(k), percent_encode(v)) for k, v in list(params.items()) + query]
    pairs.sort()
    normalized = "&".join(f"{k}={v}" for k, v in pairs)
    return "&".join([method.upper(), percent_encode(base_uri), percent_encode(normalized)])


def sign_hmac_sha1(base_string: str, consumer_secret: str, token_secret: str = "") -> str:
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(params: dict[str, str]) -> str:
    """Format oauth_* params as `OAuth k="v", ...` (sorted for stable output)."""
    items = ", ".join(f'{percent_encode(k)}="{percent_encode(v)}"' for k, v in sorted(params.items()))
    return f"OAuth {items}"


def signed_oauth_params(
    method: str,
    url: str,
    *,
    consumer_key: str,
    consumer_secret: str,
    token: str | None = None,
    token_secret: str = "",
    extra: dict[str, str] | None = None,
) -> dict[str, str]:
    """Build the protocol parameters for one request, including oauth_signature."""
    params = {
        "oauth_consumer_key": consumer_key,
        "oauth_nonce": generate_nonce(),
        "oauth_signature_method": SIGNATURE_METHOD,
        "oauth_timestamp": generate_timestamp(),
        "oauth_version": OAUTH_VERSION,
    }
    if token:
        params["oauth_token"] = token
    if extra:
        params.update(extra)
    base = signature_base_string(method, url, params)
    params["oauth_signature"] = sign_hmac_sha1(base, consumer_secret, token_secret)
    return params
