"""
Record parsing helpers shared by the domain models' from_json() constructors.

Persisted records are plain JSON objects written by the editing forms. These
helpers apply the minimal shape checks; anything that fails raises
MalformedRecordError so the aggregator can skip the record.
"""

from typing import Any

from traceboard.errors import MalformedRecordError
from traceboard.utils.statistics import is_finite_number


def require_mapping(data: Any, kind: str) -> dict[str, Any]:
    """Ensure a record is a JSON object."""
    if not isinstance(data, dict):
        raise MalformedRecordError(f"{kind} record must be an object, got {type(data).__name__}")
    return data


def require_id(data: dict[str, Any], kind: str) -> str:
    """
    Read the record id as a non-empty string, stripped like parent references.

    Numeric ids (older records used Date.now()) are accepted and stringified.
    """
    raw = data.get("id")
    if isinstance(raw, bool) or raw is None:
        raise MalformedRecordError(f"{kind} record has no id")
    if isinstance(raw, (int, float)):
        raw = str(int(raw)) if float(raw).is_integer() else str(raw)
    if not isinstance(raw, str) or not raw.strip():
        raise MalformedRecordError(f"{kind} record has an empty or invalid id")
    return raw.strip()


def optional_text(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    if value is None:
        return default
    return str(value)


def optional_link(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return None


def reference_id(data: dict[str, Any], key: str) -> str:
    """Read a parent reference; missing or empty references become ""."""
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(int(value)) if float(value).is_integer() else str(value)
    return str(value).strip()


def id_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    """Read an ordered list of ids, dropping blanks and duplicates."""
    value = data.get(key) or []
    if not isinstance(value, list):
        raise MalformedRecordError(f"{key} must be a list of ids")
    seen: dict[str, None] = {}
    for item in value:
        if item is None or isinstance(item, bool):
            continue
        text = str(item).strip()
        if text:
            seen.setdefault(text, None)
    return tuple(seen)


def object_list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise MalformedRecordError(f"{key} must be a list")
    return value


def number(
    data: dict[str, Any],
    key: str,
    *,
    default: float | None = None,
    minimum: float | None = None,
    maximum: float | None = None,
    exclusive_minimum: bool = False,
) -> float:
    """
    Read a finite number with optional bounds.

    Args:
        data: Record
        key: Field name
        default: Value used when the field is absent (None means required)
        minimum: Lower bound (inclusive unless exclusive_minimum)
        maximum: Inclusive upper bound

    Raises:
        MalformedRecordError: Missing required value, non-numeric value or out of bounds
    """
    value = data.get(key)
    if value is None:
        if default is None:
            raise MalformedRecordError(f"{key} is required")
        return default

    if not is_finite_number(value):
        raise MalformedRecordError(f"{key} must be a finite number, got {value!r}")

    if minimum is not None:
        if exclusive_minimum and value <= minimum:
            raise MalformedRecordError(f"{key} must be greater than {minimum}, got {value}")
        if not exclusive_minimum and value < minimum:
            raise MalformedRecordError(f"{key} must be at least {minimum}, got {value}")

    if maximum is not None and value > maximum:
        raise MalformedRecordError(f"{key} must be at most {maximum}, got {value}")

    return value


def optional_id(data: dict[str, Any], kind: str) -> str:
    """
    Read the record id when present.

    Only the requirement hierarchy joins on ids; the other domains are counted,
    so a record without an id is still usable there.
    """
    if data.get("id") is None:
        return ""
    return require_id(data, kind)
