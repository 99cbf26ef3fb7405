from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config import Settings, get_settings
from ..models.schemas import ArchiveMode, MediaMode, TokenFormat
from .credentials import ApplicationCredential, Credential, LegacyCredential
from .errors import CredentialsNotConfiguredError, InvalidArgumentError
from .jwt_signer import JwtTokenSigner
from .session import Session
from .token_types import TokenRequest

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SessionTokenService:
    """Builds sessions from the configured credential and issues tokens for them."""

    settings: Settings = field(default_factory=get_settings)
    signer: JwtTokenSigner | None = None
    credential: Credential | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.signer is None:
            self.signer = JwtTokenSigner(default_ttl_seconds=self.settings.jwt_default_ttl_seconds)

    def ensure_credentials(self) -> Credential:
        if self.credential is None:
            self.credential = self._load_credential()
        return self.credential

    def _load_credential(self) -> Credential:
        settings = self.settings
        private_key = settings.private_key
        if not private_key and settings.private_key_path:
            private_key = Path(settings.private_key_path).read_text(encoding="utf-8")
        has_application = bool(settings.application_id and private_key)
        has_legacy = bool(settings.api_key is not None and settings.api_secret)
        if has_application and has_legacy:
            raise CredentialsNotConfiguredError("Configure either an API key/secret or an application id/private key, not both")
        if has_application:
            return ApplicationCredential(application_id=settings.application_id, private_key=private_key)
        if has_legacy:
            return LegacyCredential(api_key=settings.api_key, api_secret=settings.api_secret)
        raise CredentialsNotConfiguredError("Session token credentials are not configured")

    def session_for(self, session_id: str) -> Session:
        return Session(
            id=session_id,
            credential=self.ensure_credentials(),
            location=self.settings.session_location,
            media_mode=MediaMode(self.settings.media_mode.upper()),
            archive_mode=ArchiveMode(self.settings.archive_mode.upper()),
            signer=self.signer,
        )

    def issue_token(self, session_id: str, request: TokenRequest, *, token_format: TokenFormat = TokenFormat.JWT) -> str:
        session = self.session_for(session_id)
        if token_format is TokenFormat.T1:
            if not isinstance(session.credential, LegacyCredential):
                raise InvalidArgumentError("T1 tokens require an API key and secret", value=token_format.value)
            token = session.generate_t1_token(request)
        else:
            token = session.generate_token(request)
        logger.info("Issued %s token for session %s (role=%s)", token_format.value, session_id, request.role.value)
        return token
