"""
OAuth1 flow orchestrator: one in-flight request credential, the last access credential,
and the waiters to wake when the next callback succeeds.

Flow state and the subscriber list each sit behind their own lock. Provider calls run
outside both locks so a slow provider never blocks the accessor or new subscriptions.
"""
import logging
import threading
from datetime import datetime, timezone

from oauth1_client.credentials import AccessCredential, RequestCredential
from oauth1_client.errors import CallbackValidationError
from oauth1_client.provider import OAuth1ProviderProtocol

logger = logging.getLogger(__name__)


class CompletionHandle:
    """
    One-shot waiter for the next successful callback.
    There is no way to unregister: a handle whose flow never completes stays registered
    until some later callback succeeds, so callers should always wait with a timeout.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self.credential: AccessCredential | None = None

    def wait(self, timeout: float | None = None) -> bool:
        """Block until notified (True) or until timeout seconds pass (False)."""
        return self._event.wait(timeout)

    def done(self) -> bool:
        return self._event.is_set()

    def _notify(self, credential: AccessCredential) -> None:
        if self._event.is_set():
            return
        self.credential = credential
        self._event.set()


class FlowOrchestrator:
    """Drives login -> callback against a provider and broadcasts completion."""

    def __init__(self, provider: OAuth1ProviderProtocol):
        self.provider = provider
        self._state_lock = threading.Lock()
        self._request: RequestCredential | None = None
        self._credential: AccessCredential | None = None
        self._obtained_at: datetime | None = None

        self._subscribers_lock = threading.Lock()
        self._subscribers: list[CompletionHandle] = []

    def start_login(self) -> str:
        """
        Get a fresh request credential and return the provider URL to redirect the user to.
        ProviderError propagates and leaves the current state untouched. A pending
        request credential from an earlier login is replaced.
        """
        token, secret = self.provider.obtain_request_credential()
        url = self.provider.build_authorization_url(token)
        with self._state_lock:
            self._request = RequestCredential(token=token, secret=secret)
        logger.info("Issued login redirect for request token %s", token)
        return url

    def complete(self, oauth_token: str | None, oauth_verifier: str | None) -> AccessCredential:
        """
        Exchange the verifier for an access credential, store it and wake all subscribers.
        oauth_token falls back to the token cached by the last login when absent or empty.
        """
        with self._state_lock:
            request = self._request
        token = oauth_token or (request.token if request else "")
        if not token or not oauth_verifier:
            raise CallbackValidationError("Missing oauth_token or oauth_verifier")
        secret = request.secret if request else ""

        # Provider decides whether token/secret/verifier belong together
        access_token, access_secret = self.provider.exchange_for_access_credential(token, secret, oauth_verifier)
        credential = AccessCredential(token=access_token, secret=access_secret)
        with self._state_lock:
            self._credential = credential
            self._obtained_at = datetime.now(timezone.utc)
        logger.info("Obtained access token for request token %s", token)

        notified = self._broadcast(credential)
        logger.debug("Notified %d waiting subscriber(s)", notified)
        return credential

    def token(self) -> AccessCredential | None:
        """Last access credential obtained, or None if no flow has completed yet."""
        with self._state_lock:
            return self._credential

    @property
    def obtained_at(self) -> datetime | None:
        with self._state_lock:
            return self._obtained_at

    @property
    def pending(self) -> bool:
        """True once a login has cached a request credential."""
        with self._state_lock:
            return self._request is not None

    def callback(self) -> CompletionHandle:
        """Register and return a handle that fires on the next successful callback."""
        handle = CompletionHandle()
        with self._subscribers_lock:
            self._subscribers.append(handle)
        return handle

    def _broadcast(self, credential: AccessCredential) -> int:
        with self._subscribers_lock:
            subscribers, self._subscribers = self._subscribers, []
            for handle in subscribers:
                handle._notify(credential)
        return len(subscribers)
