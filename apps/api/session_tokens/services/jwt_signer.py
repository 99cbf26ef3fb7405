from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from ..models.schemas import Role
from .crypto import Clock, NonceSource, current_unix_timestamp, random_nonce
from .errors import TokenSigningError
from .token_types import TokenData
from .validation import validate_connection_data, validate_expire_time

logger = logging.getLogger(__name__)

LEGACY_JWT_ALGORITHM = "HS256"
APPLICATION_JWT_ALGORITHM = "RS256"
SESSION_CONNECT_SCOPE = "session.connect"


@dataclass(slots=True)
class JwtTokenSigner:
    """Signs session JWTs for both credential schemes.

    Legacy credentials produce HS256 tokens keyed by the API secret. Application
    credentials produce RS256 tokens with moderator rights on the session.
    """

    clock: Clock = current_unix_timestamp
    nonce_source: NonceSource = random_nonce
    default_ttl_seconds: int = 900

    def sign_legacy_claims(self, token_data: TokenData) -> str:
        issued_at = int(self.clock())
        validate_expire_time(token_data.expire_time, issued_at, issued_at)
        include_data = validate_connection_data(token_data.data)

        expires_at = int(token_data.expire_time) or issued_at + self.default_ttl_seconds
        claims: dict[str, Any] = {
            "iss": token_data.api_key,
            "ist": "project",
            "iat": issued_at,
            "exp": expires_at,
            "nonce": self.nonce_source(),
            "role": token_data.role.value,
            "scope": SESSION_CONNECT_SCOPE,
            "session_id": token_data.session_id,
            "initial_layout_class_list": list(token_data.initial_layout_classes),
        }
        if include_data:
            claims["connection_data"] = token_data.data
        if not token_data.api_secret:
            raise TokenSigningError("API secret is empty")
        return self._encode(claims, token_data.api_secret, LEGACY_JWT_ALGORITHM)

    def sign_application_token(self, application_id: str, private_key: str, session_id: str) -> str:
        issued_at = int(self.clock())
        claims: dict[str, Any] = {
            "application_id": application_id,
            "iat": issued_at,
            "exp": issued_at + self.default_ttl_seconds,
            "jti": str(uuid4()),
            "scope": SESSION_CONNECT_SCOPE,
            "session_id": session_id,
            "role": Role.MODERATOR.value,
            "sub": "video",
            "acl": {"paths": {"/session/**": {}}},
        }
        return self._encode(claims, _load_private_key(private_key), APPLICATION_JWT_ALGORITHM)

    def _encode(self, claims: dict[str, Any], key: Any, algorithm: str) -> str:
        try:
            return jwt.encode(claims, key, algorithm=algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            logger.error("JWT signing failed for session %s: %s", claims.get("session_id"), type(exc).__name__)
            raise TokenSigningError(f"Unable to sign {algorithm} token: {exc}") from exc


def _load_private_key(private_key: str) -> RSAPrivateKey:
    if not private_key:
        raise TokenSigningError("Private key is empty")
    try:
        key = serialization.load_pem_private_key(private_key.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise TokenSigningError("Private key is not a valid unencrypted PEM key") from exc
    if not isinstance(key, RSAPrivateKey):
        raise TokenSigningError(f"RS256 signing requires an RSA key, got {type(key).__name__}")
    return key
