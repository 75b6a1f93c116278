from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.constants import UNKNOWN_LABEL


def pick(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Read a camelCase key, falling back to its PascalCase spelling.

    The upstream API returns PascalCase property names, the front end
    converts them to camelCase; both shapes are accepted.
    """
    if key in data:
        return data[key]
    pascal = key[:1].upper() + key[1:]
    return data.get(pascal, default)


def label_or_unknown(value: Optional[str], unknown: str = UNKNOWN_LABEL) -> str:
    if value is None:
        return unknown
    text = str(value).strip()
    return text or unknown
