from __future__ import annotations

from typing import Any, Iterable, Mapping


def clean_text(value: Any) -> Any:
    """Strip strings; blank strings become None."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def pick(payload: Mapping[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """Keep only known fields that are present in the payload, cleaned."""
    return {f: clean_text(payload[f]) for f in fields if f in payload}
