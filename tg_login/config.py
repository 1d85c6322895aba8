import logging
import os
from dataclasses import dataclass

from .web_auth import MAX_AGE_SECONDS, MAX_FUTURE_SECONDS


logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "TELEGRAM_BOT_TOKEN"


@dataclass(frozen=True)
class Config:
    bot_token: str
    max_age_seconds: int = MAX_AGE_SECONDS
    max_future_seconds: int = MAX_FUTURE_SECONDS
    api_host: str = "0.0.0.0"
    api_port: int = 8080


def _get_int(section, key: str, default: int) -> int:
    """Read an int option, treating a blank value as the default."""
    raw = section.get(key, "").strip() if section is not None else ""
    return int(raw) if raw else default


def load_config(config, environ=None) -> Config:
    """Build a Config from a parsed configparser object.

    TELEGRAM_BOT_TOKEN in the environment takes precedence over the
    bot_token option. A missing token is not fatal here: every login is
    rejected until one is configured.
    """
    if environ is None:
        environ = os.environ

    telegram = config["TELEGRAM"] if config.has_section("TELEGRAM") else None
    api = config["API"] if config.has_section("API") else None

    bot_token = environ.get(TOKEN_ENV_VAR, "").strip()
    if not bot_token and telegram is not None:
        bot_token = telegram.get("bot_token", "").strip()
    if not bot_token:
        logger.warning("No Telegram bot token configured, all logins will be rejected")

    api_host = api.get("host", "").strip() if api is not None else ""

    return Config(
        bot_token=bot_token,
        max_age_seconds=_get_int(telegram, "max_age_seconds", MAX_AGE_SECONDS),
        max_future_seconds=_get_int(telegram, "max_future_seconds", MAX_FUTURE_SECONDS),
        api_host=api_host or "0.0.0.0",
        api_port=_get_int(api, "port", 8080),
    )
