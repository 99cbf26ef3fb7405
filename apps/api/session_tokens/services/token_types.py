"""Per-call token parameters and the claims handed to the JWT signer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from ..models.schemas import Role


@dataclass(frozen=True, slots=True)
class TokenRequest:
    """Options for a single token.

    Attributes:
        role: Permission level, publisher unless stated otherwise.
        expire_time: Expiry in seconds since the UNIX epoch. ``0`` keeps the
            default lifetime (24 hours for T1 tokens, the signer's TTL for JWTs).
        data: Connection metadata visible to other participants, at most 1000
            characters.
        initial_layout_class_list: Layout classes applied to the client's
            streams. ``None`` omits the field; an empty list emits it empty.
    """

    role: Role = Role.PUBLISHER
    expire_time: float = 0
    data: str | None = None
    initial_layout_class_list: Sequence[str] | None = None


@dataclass(frozen=True, slots=True)
class TokenData:
    api_key: str
    api_secret: str = field(repr=False)
    role: Role
    data: str | None
    session_id: str
    expire_time: float = 0
    initial_layout_classes: tuple[str, ...] = ()
