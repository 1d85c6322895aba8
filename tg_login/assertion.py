"""Telegram Login Widget assertion and its data-check-string.

The widget redirects back with the user's fields plus a ``hash``. Telegram
signs the sorted ``key=value`` lines of every non-empty field except the
hash, so the verifier has to rebuild that string byte for byte.

Reference: https://core.telegram.org/widgets/login#checking-authorization
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass


SIGNED_FIELDS = ("id", "first_name", "last_name", "username", "photo_url", "auth_date")
REQUIRED_FIELDS = ("id", "auth_date")


@dataclass(frozen=True)
class AuthData:
    id: int
    first_name: str
    last_name: str = ""
    username: str = ""
    photo_url: str = ""
    auth_date: int = 0
    hash: str = ""


def signed_fields(data: AuthData) -> list[tuple[str, str | int | None]]:
    """Return the (name, value) pairs covered by the signature.

    Empty optional strings become None so canonicalize() drops them.
    """
    pairs: list[tuple[str, str | int | None]] = []
    for name in SIGNED_FIELDS:
        value = getattr(data, name)
        if name not in REQUIRED_FIELDS and value == "":
            value = None
        pairs.append((name, value))
    return pairs


def _render(value: str | int) -> str:
    if isinstance(value, bool):
        raise ValueError("boolean field values are not supported")
    if isinstance(value, int):
        return str(value)
    return value


def canonicalize(
    fields: Mapping[str, str | int | None] | Iterable[tuple[str, str | int | None]],
) -> str:
    """Build the newline-separated data-check-string, sorted by field name."""
    items = fields.items() if isinstance(fields, Mapping) else fields

    rendered: dict[str, str] = {}
    for name, value in items:
        if name == "hash":
            raise ValueError("the hash field is not part of the signed data")
        if name in rendered:
            raise ValueError(f"duplicate field: {name!r}")
        if name in REQUIRED_FIELDS:
            if value is None:
                raise ValueError(f"required field {name!r} is absent")
        elif value is None or value == "":
            continue
        rendered[name] = _render(value)

    for name in REQUIRED_FIELDS:
        if name not in rendered:
            raise ValueError(f"required field {name!r} is absent")

    names = sorted(rendered, key=lambda n: n.encode())
    return "\n".join(f"{name}={rendered[name]}" for name in names)
