"""Utilities."""

from __future__ import annotations

from typing import Dict, Optional, Sequence


def attributes_to_dict(attributes: Optional[Sequence[object]] = None) -> Dict[str, str]:
    """Convert a flat ``[key, value, key, value, ...]`` list into a dict.

    A trailing key without a value maps to ``""``. ``None`` keys are skipped and
    non-string entries are stringified, so this never fails.
    """
    out: Dict[str, str] = {}
    if not attributes:
        return out
    items = list(attributes)
    for i in range(0, len(items), 2):
        key = items[i]
        if key is None:
            continue
        value = items[i + 1] if i + 1 < len(items) else None
        out[str(key)] = "" if value is None else str(value)
    return out
