from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict


_EXTRA_MODES = ("allow", "forbid", "ignore")


def _env_extra_mode(default: str = "ignore") -> str:
    """Unknown top-level document keys policy from ``MOBILEDOC_EXTRA``.

    Unset or unrecognized values fall back to ``default``.
    """
    mode = os.getenv("MOBILEDOC_EXTRA", "").strip().lower()
    return mode if mode in _EXTRA_MODES else default


_EXTRA = _env_extra_mode()


def is_integer(value: object) -> bool:
    # bool is an int subclass but never a valid index
    return isinstance(value, int) and not isinstance(value, bool)


class MobiledocModel(BaseModel):
    """
    Project-wide base model.

    Entities are immutable once validated. Wire tuples are decoded by the
    explicit ``from_wire`` helpers, so every failure surfaces as a
    MobiledocValidationError rather than a pydantic error.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")


# Public API of this module
__all__ = ["MobiledocModel", "_env_extra_mode", "is_integer"]
