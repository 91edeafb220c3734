"""Errors raised by the OAuth1 flow. Routes map them to HTTP status codes."""


class OAuth1FlowError(Exception):
    """Base class for flow failures."""


class CallbackValidationError(OAuth1FlowError):
    """Callback is missing the request token or the verifier (400)."""


class ProviderError(OAuth1FlowError):
    """The provider could not issue or exchange a credential (500)."""
