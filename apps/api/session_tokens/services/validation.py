from __future__ import annotations

import logging

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

MAX_CONNECTION_DATA_LENGTH = 1000
MAX_EXPIRE_WINDOW_SECONDS = 2592000  # 30 days
# T1 tokens without an expire_time are honoured for 24 hours by the platform.
DEFAULT_T1_LIFETIME_SECONDS = 86400


def validate_expire_time(expire_time: float, create_time: float, now: float) -> bool:
    """Return whether ``expire_time`` should be emitted.

    ``0`` means the platform default applies and nothing is emitted. Any other
    value must fall after ``create_time`` and no later than 30 days from ``now``.
    """
    if expire_time == 0:
        return False
    if create_time < expire_time <= now + MAX_EXPIRE_WINDOW_SECONDS:
        return True
    logger.warning("Rejected token expire_time %s (create_time=%s)", expire_time, int(create_time))
    raise InvalidArgumentError(
        f"Invalid expiration time for token {expire_time}. "
        "Expiration time has to be after the creation time and less than 30 days away",
        value=expire_time,
    )


def connection_data_length(data: str) -> int:
    """Length in UTF-16 code units, so characters outside the BMP count twice."""
    return len(data.encode("utf-16-le")) // 2


def validate_connection_data(data: str | None) -> bool:
    """Return whether connection data should be emitted; reject oversized data."""
    if not data:
        return False
    length = connection_data_length(data)
    if length <= MAX_CONNECTION_DATA_LENGTH:
        return True
    logger.warning("Rejected connection data of length %s", length)
    raise InvalidArgumentError(
        f"Invalid connection data, it cannot be longer than {MAX_CONNECTION_DATA_LENGTH} characters",
        value=data,
    )
