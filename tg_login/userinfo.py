import json
from dataclasses import asdict, dataclass

from .assertion import AuthData


# Omitted from meta_info when empty
_OPTIONAL_META_FIELDS = ("last_name", "username", "photo_url")


@dataclass(frozen=True)
class ExternalLoginUserInfo:
    external_id: str
    display_name: str
    username: str
    avatar: str = ""
    meta_info: str = ""
    # Telegram never shares an email address
    email: str = ""


def _meta_info(data: AuthData) -> str:
    """Serialize the assertion as compact JSON for audit storage."""
    meta = {
        k: v for k, v in asdict(data).items()
        if not (k in _OPTIONAL_META_FIELDS and v == "")
    }
    return json.dumps(meta, ensure_ascii=False, separators=(",", ":"))


def to_user_info(data: AuthData) -> ExternalLoginUserInfo:
    """Map a verified assertion to the account-linking record."""
    external_id = str(data.id)
    return ExternalLoginUserInfo(
        external_id=external_id,
        display_name=f"{data.first_name} {data.last_name}".strip(),
        username=data.username or external_id,
        avatar=data.photo_url,
        meta_info=_meta_info(data),
    )


def to_dict(info: ExternalLoginUserInfo) -> dict:
    """Serialize an ExternalLoginUserInfo to a JSON-friendly dict."""
    return asdict(info)
