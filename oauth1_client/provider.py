"""
OAuth1 provider calls: temporary credentials, authorization URL, token exchange.
The orchestrator only depends on OAuth1ProviderProtocol; OAuth1Provider talks HTTP via httpx.
"""
import logging
from typing import Protocol
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from oauth1_client.config import (
    ACCESS_TOKEN_URL,
    AUTHORIZE_URL,
    CALLBACK_URL,
    CONSUMER_KEY,
    CONSUMER_SECRET,
    HTTP_TIMEOUT,
    REQUEST_TOKEN_URL,
)
from oauth1_client.errors import ProviderError
from oauth1_client.signing import authorization_header, signed_oauth_params

logger = logging.getLogger(__name__)


class OAuth1ProviderProtocol(Protocol):
    """What the orchestrator needs from the provider. Every call raises ProviderError on failure."""

    def obtain_request_credential(self) -> tuple[str, str]:
        ...

    def build_authorization_url(self, token: str) -> str:
        ...

    def exchange_for_access_credential(self, token: str, secret: str, verifier: str) -> tuple[str, str]:
        ...


class OAuth1Provider:
    """HMAC-SHA1 signed client for a three-legged OAuth 1.0 provider."""

    def __init__(
        self,
        *,
        consumer_key: str = CONSUMER_KEY,
        consumer_secret: str = CONSUMER_SECRET,
        request_token_url: str = REQUEST_TOKEN_URL,
        authorize_url: str = AUTHORIZE_URL,
        access_token_url: str = ACCESS_TOKEN_URL,
        callback_url: str = CALLBACK_URL,
        timeout: float = HTTP_TIMEOUT,
    ):
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.request_token_url = request_token_url
        self.authorize_url = authorize_url
        self.access_token_url = access_token_url
        self.callback_url = callback_url
        self.timeout = timeout

    def obtain_request_credential(self) -> tuple[str, str]:
        """POST to the request-token endpoint. Returns (oauth_token, oauth_token_secret)."""
        data = self._post(self.request_token_url, "request token", extra={"oauth_callback": self.callback_url})
        if data.get("oauth_callback_confirmed", "true").lower() != "true":
            logger.warning("Provider did not confirm oauth_callback for %s", self.request_token_url)
            raise ProviderError("Provider did not confirm the callback URL")
        return data["oauth_token"], data["oauth_token_secret"]

    def build_authorization_url(self, token: str) -> str:
        """Authorize endpoint with oauth_token appended to any query it already has."""
        if not token:
            raise ProviderError("Cannot build authorization URL without a request token")
        parts = urlsplit(self.authorize_url)
        if not parts.scheme or not parts.netloc:
            raise ProviderError(f"Invalid authorization endpoint: {self.authorize_url!r}")
        query = parse_qsl(parts.query, keep_blank_values=True)
        query.append(("oauth_token", token))
        return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), ""))

    def exchange_for_access_credential(self, token: str, secret: str, verifier: str) -> tuple[str, str]:
        """Trade request token + verifier for (access token, access secret)."""
        data = self._post(
            self.access_token_url,
            "access token",
            token=token,
            token_secret=secret,
            extra={"oauth_verifier": verifier},
        )
        return data["oauth_token"], data["oauth_token_secret"]

    def _post(
        self,
        url: str,
        what: str,
        *,
        token: str | None = None,
        token_secret: str = "",
        extra: dict[str, str] | None = None,
    ) -> dict[str, str]:
        """Signed POST; returns the form-encoded response body as a dict."""
        try:
            oauth_params = signed_oauth_params(
                "POST",
                url,
                consumer_key=self.consumer_key,
                consumer_secret=self.consumer_secret,
                token=token,
                token_secret=token_secret,
                extra=extra,
            )
        except ValueError as e:
            # urlsplit rejects malformed ports
            logger.error("Invalid %s endpoint %r: %s", what, url, e)
            raise ProviderError(f"Invalid {what} endpoint: {url!r}") from e

        try:
            r = httpx.post(
                url,
                headers={
                    "Authorization": authorization_header(oauth_params),
                    "Content-Type": "application/x-www-form-urlencoded",
                },
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("Failed to obtain %s from %s: %s", what, url, e)
            raise ProviderError(f"Failed to obtain {what}: {e}") from e

        if r.status_code < 200 or r.status_code >= 300:
            logger.error("Provider returned %s for %s at %s: %s", r.status_code, what, url, r.text[:200])
            raise ProviderError(f"Failed to obtain {what}: HTTP {r.status_code}")

        data = dict(parse_qsl(r.text, keep_blank_values=True))
        if not data.get("oauth_token") or not data.get("oauth_token_secret"):
            logger.error("Invalid %s response from %s", what, url)
            raise ProviderError(f"Invalid {what} response from provider")
        return data
