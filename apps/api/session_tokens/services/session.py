from __future__ import annotations

from dataclasses import dataclass, field

from ..models.schemas import ArchiveMode, MediaMode
from .credentials import ApplicationCredential, Credential, LegacyCredential
from .crypto import Clock, NonceSource, current_unix_timestamp, random_nonce
from .jwt_signer import JwtTokenSigner
from .legacy_token import LegacyTokenBuilder
from .token_types import TokenData, TokenRequest


@dataclass(frozen=True, slots=True)
class Session:
    """A remote video session bound to exactly one credential.

    Build instances with :meth:`from_legacy` or :meth:`from_application`. The
    instance is immutable, so tokens may be generated from several threads at
    once as long as the injected clock and nonce source are thread-safe.
    """

    id: str
    credential: Credential
    location: str | None = None
    media_mode: MediaMode = MediaMode.ROUTED
    archive_mode: ArchiveMode = ArchiveMode.MANUAL
    signer: JwtTokenSigner = field(default_factory=JwtTokenSigner, repr=False, compare=False)
    clock: Clock = field(default=current_unix_timestamp, repr=False, compare=False)
    nonce_source: NonceSource = field(default=random_nonce, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.credential, (LegacyCredential, ApplicationCredential)):
            raise TypeError(f"Unsupported credential type {type(self.credential).__name__}")

    @classmethod
    def from_legacy(
        cls,
        session_id: str,
        api_key: int,
        api_secret: str,
        *,
        location: str | None = None,
        media_mode: MediaMode = MediaMode.ROUTED,
        archive_mode: ArchiveMode = ArchiveMode.MANUAL,
        signer: JwtTokenSigner | None = None,
        clock: Clock = current_unix_timestamp,
        nonce_source: NonceSource = random_nonce,
    ) -> "Session":
        return cls(
            id=session_id,
            credential=LegacyCredential(api_key=api_key, api_secret=api_secret),
            location=location,
            media_mode=media_mode,
            archive_mode=archive_mode,
            signer=signer or JwtTokenSigner(),
            clock=clock,
            nonce_source=nonce_source,
        )

    @classmethod
    def from_application(
        cls,
        session_id: str,
        application_id: str,
        private_key: str,
        *,
        location: str | None = None,
        media_mode: MediaMode = MediaMode.ROUTED,
        archive_mode: ArchiveMode = ArchiveMode.MANUAL,
        signer: JwtTokenSigner | None = None,
        clock: Clock = current_unix_timestamp,
        nonce_source: NonceSource = random_nonce,
    ) -> "Session":
        return cls(
            id=session_id,
            credential=ApplicationCredential(application_id=application_id, private_key=private_key),
            location=location,
            media_mode=media_mode,
            archive_mode=archive_mode,
            signer=signer or JwtTokenSigner(),
            clock=clock,
            nonce_source=nonce_source,
        )

    def generate_t1_token(self, request: TokenRequest | None = None) -> str:
        """Create a legacy ``T1==`` token.

        Raises:
            TypeError: The session holds an application credential.
            InvalidArgumentError: ``expire_time`` or ``data`` is out of range.
        """
        builder = LegacyTokenBuilder(
            credential=self.credential,
            session_id=self.id,
            clock=self.clock,
            nonce_source=self.nonce_source,
        )
        return builder.generate(request or TokenRequest())

    def generate_token(self, request: TokenRequest | None = None) -> str:
        """Create a JWT for this session.

        Application credentials yield a moderator token and ignore ``request``.
        Legacy credentials carry the requested role, metadata, expiry and layout
        classes; an ``expire_time`` of 0 leaves the lifetime to the signer.

        Raises:
            InvalidArgumentError: ``expire_time`` or ``data`` is out of range.
            TokenSigningError: The signer rejected the credential.
        """
        request = request or TokenRequest()
        credential = self.credential
        if isinstance(credential, ApplicationCredential):
            return self.signer.sign_application_token(credential.application_id, credential.private_key, self.id)
        if isinstance(credential, LegacyCredential):
            token_data = TokenData(
                api_key=str(credential.api_key),
                api_secret=credential.api_secret,
                role=request.role,
                data=request.data,
                session_id=self.id,
                expire_time=request.expire_time,
                initial_layout_classes=tuple(request.initial_layout_class_list or ()),
            )
            return self.signer.sign_legacy_claims(token_data)
        raise TypeError(f"Unsupported credential type {type(credential).__name__}")
