from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class LegacyCredential:
    """Project API key and secret used for T1 tokens and HS256 JWTs."""

    api_key: int
    api_secret: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class ApplicationCredential:
    """Application id and PEM private key used for RS256 JWTs."""

    application_id: str
    private_key: str = field(repr=False)


Credential = Union[LegacyCredential, ApplicationCredential]
