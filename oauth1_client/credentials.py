"""
Credential pairs handled during the OAuth1 dance.
Secrets are kept out of repr so they never end up in logs.
"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RequestCredential:
    """Temporary credential identifying a pending authorization attempt."""

    token: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class AccessCredential:
    """Token credential usable for signed calls on the user's behalf."""

    token: str
    secret: str = field(repr=False)
