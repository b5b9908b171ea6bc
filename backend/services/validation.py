from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from backend.core.errors import InvalidInput


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(payload: Mapping[str, Any], fields: tuple[str, ...], message: str) -> None:
    if any(is_blank(payload.get(field)) for field in fields):
        raise InvalidInput(message)


def describe_fields(fields: tuple[str, ...]) -> str:
    if len(fields) < 3:
        return ' and '.join(fields)
    return f"{', '.join(fields[:-1])}, and {fields[-1]}"
