from __future__ import annotations

from typing import Any


class TokenError(Exception):
    """Base class for token issuance failures."""


class InvalidArgumentError(TokenError, ValueError):
    """A caller-supplied token parameter is out of range."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class TokenSigningError(TokenError):
    """The JWT signer could not produce a token."""


class CredentialsNotConfiguredError(TokenError, RuntimeError):
    """No usable credential pair is configured for the service."""
