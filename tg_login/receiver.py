"""Turn the login widget's redirect parameters into a verified user record."""

import logging
from collections.abc import Mapping

from .assertion import AuthData
from .config import Config
from .userinfo import ExternalLoginUserInfo, to_user_info
from .web_auth import verify_auth_data


logger = logging.getLogger(__name__)


def _parse_int(raw: str | None) -> int | None:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def parse_auth_query(params: Mapping[str, str]) -> tuple[AuthData | None, str]:
    """Build AuthData from query parameters and return (data, error).

    Returns (data, "") on success, or (None, error_message) when id or
    auth_date is missing or not an integer.
    """
    user_id = _parse_int(params.get("id"))
    if user_id is None:
        return None, "malformed id"

    auth_date = _parse_int(params.get("auth_date"))
    if auth_date is None:
        return None, "malformed auth_date"

    return AuthData(
        id=user_id,
        first_name=params.get("first_name", ""),
        last_name=params.get("last_name", ""),
        username=params.get("username", ""),
        photo_url=params.get("photo_url", ""),
        auth_date=auth_date,
        hash=params.get("hash", ""),
    ), ""


def receive(
    params: Mapping[str, str], config: Config, now: int | None = None,
) -> tuple[ExternalLoginUserInfo | None, str]:
    """Verify a login widget redirect and return (user_info, error)."""
    data, error = parse_auth_query(params)
    if data is None:
        logger.info("Rejected Telegram login: %s", error)
        return None, error

    ok, error = verify_auth_data(
        data, config.bot_token,
        now=now,
        max_age_seconds=config.max_age_seconds,
        max_future_seconds=config.max_future_seconds,
    )
    if not ok:
        logger.info("Rejected Telegram login for id %d: %s", data.id, error)
        return None, error

    return to_user_info(data), ""
