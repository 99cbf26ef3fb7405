"""Builder for the legacy ``T1==`` signed-string token format.

Wire format::

    T1==base64("partner_id=<api_key>&sig=<hex hmac>:<data string>")

The data string is ``&``-joined in a fixed order: ``session_id``,
``create_time``, ``nonce``, ``role`` and then the optional
``initial_layout_class_list``, ``expire_time`` and ``connection_data``.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass

from .credentials import LegacyCredential
from .crypto import Clock, NonceSource, current_unix_timestamp, hmac_sha1_hex, random_nonce, url_encode
from .token_types import TokenRequest
from .validation import validate_connection_data, validate_expire_time

T1_PREFIX = "T1=="


@dataclass(frozen=True, slots=True)
class LegacyTokenBuilder:
    credential: LegacyCredential
    session_id: str
    clock: Clock = current_unix_timestamp
    nonce_source: NonceSource = random_nonce

    def __post_init__(self) -> None:
        if not isinstance(self.credential, LegacyCredential):
            raise TypeError("T1 tokens require an API key and secret credential")

    def generate(self, request: TokenRequest) -> str:
        create_time = self.clock()
        nonce = self.nonce_source()
        data_string = self.build_data_string(request, create_time=create_time, nonce=nonce, now=self.clock())
        return self.build_token_string(data_string)

    def build_data_string(self, request: TokenRequest, *, create_time: float, nonce: int, now: float) -> str:
        include_expire = validate_expire_time(request.expire_time, create_time, now)
        include_data = validate_connection_data(request.data)

        parts = [
            f"session_id={self.session_id}",
            f"create_time={int(create_time)}",
            f"nonce={nonce}",
            f"role={request.role.value}",
        ]
        if request.initial_layout_class_list is not None:
            parts.append(f"initial_layout_class_list={' '.join(request.initial_layout_class_list)}")
        if include_expire:
            parts.append(f"expire_time={int(request.expire_time)}")
        if include_data:
            parts.append(f"connection_data={url_encode(request.data)}")
        return "&".join(parts)

    def build_token_string(self, data_string: str) -> str:
        signature = hmac_sha1_hex(self.credential.api_secret, data_string)
        inner = f"partner_id={self.credential.api_key}&sig={signature}:{data_string}"
        return T1_PREFIX + base64.b64encode(inner.encode("utf-8")).decode("ascii")
