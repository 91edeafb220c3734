"""
Pytest configuration for oauth1_client. Provides a scripted provider so tests never hit the network.
"""
import pytest

from oauth1_client.errors import ProviderError
from oauth1_client.orchestrator import FlowOrchestrator


class FakeProvider:
    """Returns queued request/access pairs; set fail_* to make a call raise ProviderError."""

    def __init__(self):
        self.request_credentials = [("rtok1", "rsec1")]
        self.access_credentials = [("atok1", "asec1")]
        self.exchanges = []
        self.fail_request = False
        self.fail_url = False
        self.fail_exchange = False

    def obtain_request_credential(self):
        if self.fail_request:
            raise ProviderError("request token endpoint down")
        return self.request_credentials.pop(0)

    def build_authorization_url(self, token):
        if self.fail_url:
            raise ProviderError("bad authorize endpoint")
        return f"https://provider/auth?oauth_token={token}"

    def exchange_for_access_credential(self, token, secret, verifier):
        self.exchanges.append((token, secret, verifier))
        if self.fail_exchange:
            raise ProviderError("verifier rejected")
        return self.access_credentials.pop(0)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def orchestrator(provider):
    return FlowOrchestrator(provider)
