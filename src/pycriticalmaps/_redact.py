"""Mask device and message identifiers in request bodies before logging."""

from __future__ import annotations

import json
from typing import Any

_IDENTIFIER_KEYS = frozenset({"device", "identifier"})
_MASK = "<masked>"


def _mask(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _MASK if key in _IDENTIFIER_KEYS else _mask(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_mask(item) for item in value]
    return value


def describe_body(body: bytes) -> str:
    """Render an encoded position report or message batch for debug logs.

    ``device`` and message ``identifier`` values are masked; bodies that
    are not JSON are summarised by size only.
    """
    try:
        payload = json.loads(body)
    except ValueError:
        return f"<{len(body)} bytes>"
    return json.dumps(_mask(payload), separators=(",", ":"))
