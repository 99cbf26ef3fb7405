"""Clock, nonce and signing primitives shared by the token builders.

The builders take the clock and nonce source as plain callables so tests can
pin them to constants.
"""

from __future__ import annotations

import hmac
import re
import secrets
import time
from hashlib import sha1
from typing import Callable
from urllib.parse import quote_plus

Clock = Callable[[], float]
NonceSource = Callable[[], int]

MAX_NONCE = 999999

_ESCAPE = re.compile(r"%[0-9A-F]{2}")


def current_unix_timestamp() -> float:
    return time.time()


def random_nonce() -> int:
    return secrets.randbelow(MAX_NONCE + 1)


def hmac_sha1_hex(secret: str, message: str) -> str:
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), sha1).hexdigest()


def url_encode(value: str) -> str:
    """Form-encode ``value`` the way the T1 verification service signs it.

    Escapes are lowercase hex, ``!*()`` stay literal and ``~`` is escaped.
    """
    encoded = quote_plus(value, safe="!*()").replace("~", "%7e")
    return _ESCAPE.sub(lambda match: match.group(0).lower(), encoded)
