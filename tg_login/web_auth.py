"""Telegram Login Widget HMAC-SHA256 validation.

Validates the fields the login widget passes back on redirect to ensure
the assertion is authentic and not replayed. Pure functions, no I/O.

The secret key is SHA256(bot_token), raw bytes. The hash is
HMAC-SHA256(secret_key, data_check_string) in lowercase hex.

Reference: https://core.telegram.org/widgets/login#checking-authorization
"""

import hashlib
import hmac
import logging
import time

from .assertion import AuthData, canonicalize, signed_fields


logger = logging.getLogger(__name__)

MAX_AGE_SECONDS = 86400
MAX_FUTURE_SECONDS = 60


def derive_secret_key(bot_token: str | bytes) -> bytes:
    """Return SHA256(bot_token) as raw bytes."""
    if isinstance(bot_token, str):
        bot_token = bot_token.encode()
    return hashlib.sha256(bot_token).digest()


def compute_hash(bot_token: str | bytes, data_check_string: str) -> str:
    """Compute the hex HMAC-SHA256 Telegram would send for this data."""
    return hmac.new(
        derive_secret_key(bot_token), data_check_string.encode(), hashlib.sha256,
    ).hexdigest()


def check_signature(
    data_check_string: str,
    received_hash: str,
    bot_token: str | bytes,
    auth_date: int,
    now: int,
    max_age_seconds: int = MAX_AGE_SECONDS,
    max_future_seconds: int = MAX_FUTURE_SECONDS,
) -> tuple[bool, str]:
    """Validate a data-check-string and return (ok, reason).

    Returns (True, "") on success, or (False, reason) on failure. The
    reason is for logs only and must not reach the end caller.
    """
    if not bot_token:
        logger.warning("Telegram bot token is not configured, rejecting login")
        return False, "missing bot token"
    if not received_hash:
        return False, "missing hash"

    expected_hash = compute_hash(bot_token, data_check_string)

    # compare_digest rejects non-ASCII str, so compare bytes
    if not hmac.compare_digest(
        expected_hash.encode(), received_hash.encode("utf-8", "replace"),
    ):
        return False, "invalid signature"

    if now - auth_date > max_age_seconds:
        return False, "expired"
    if auth_date - now > max_future_seconds:
        return False, "auth_date in the future"

    return True, ""


def verify(
    data_check_string: str,
    received_hash: str,
    bot_token: str | bytes,
    auth_date: int,
    now: int,
    max_age_seconds: int = MAX_AGE_SECONDS,
    max_future_seconds: int = MAX_FUTURE_SECONDS,
) -> bool:
    """Return True only if the signature matches and the data is fresh."""
    ok, _ = check_signature(
        data_check_string, received_hash, bot_token, auth_date, now,
        max_age_seconds, max_future_seconds,
    )
    return ok


def verify_auth_data(
    data: AuthData,
    bot_token: str | bytes,
    now: int | None = None,
    max_age_seconds: int = MAX_AGE_SECONDS,
    max_future_seconds: int = MAX_FUTURE_SECONDS,
) -> tuple[bool, str]:
    """Canonicalize an AuthData and validate it against its own hash."""
    if now is None:
        now = int(time.time())
    data_check_string = canonicalize(signed_fields(data))
    return check_signature(
        data_check_string, data.hash, bot_token, data.auth_date, now,
        max_age_seconds, max_future_seconds,
    )
