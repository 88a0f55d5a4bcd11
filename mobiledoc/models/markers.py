"""
Inline markers (text runs and atom references) of the Mobiledoc wire format.

Wire shapes:
  [0, openMarkupIndexes, closeCount, "text"]   text marker
  [1, openMarkupIndexes, closeCount, atomIndex]  atom marker

Markup and atom indexes are only checked for being integers here; bounds are
resolved lazily by the renderer through ``Document.get_markup/get_atom``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Any, List, Literal, Tuple, Union

from pydantic import Field

from ..exceptions import MobiledocValidationError
from ._base import MobiledocModel, is_integer


class MarkerType(IntEnum):
    TEXT = 0
    ATOM = 1


def _at(seq: Any, index: int) -> Any:
    return seq[index] if index < len(seq) else None


class _MarkerBase(MobiledocModel):
    open_markup_indexes: Tuple[int, ...] = ()
    close_count: int = 0

    def to_wire(self) -> List[Any]:
        kind = getattr(self, "kind")
        value = getattr(self, "value")
        return [int(kind), list(self.open_markup_indexes), self.close_count, value]


class TextMarker(_MarkerBase):
    kind: Literal[MarkerType.TEXT] = MarkerType.TEXT
    value: str


class AtomMarker(_MarkerBase):
    kind: Literal[MarkerType.ATOM] = MarkerType.ATOM
    value: int


Marker = Annotated[Union[TextMarker, AtomMarker], Field(discriminator="kind")]


def parse_marker(raw: Any, position: int = 0) -> Union[TextMarker, AtomMarker]:
    """Validate a single wire marker at ``position`` within its parent list."""
    if isinstance(raw, (TextMarker, AtomMarker)):
        return raw
    if not isinstance(raw, (list, tuple)):
        raise MobiledocValidationError(
            f"Expected marker at index {position} to be an array but received: {raw!r}"
        )

    kind = _at(raw, 0)
    open_indexes = _at(raw, 1)
    close_count = _at(raw, 2)
    value = _at(raw, 3)

    if not isinstance(open_indexes, (list, tuple)) or not all(
        is_integer(ix) for ix in open_indexes
    ):
        raise MobiledocValidationError(
            f"Expected array of open markup indexes but received: {open_indexes!r}"
        )

    if not is_integer(close_count):
        raise MobiledocValidationError(
            f"Expected number of closed markups but received: {close_count!r}"
        )

    if is_integer(kind) and kind == MarkerType.TEXT:
        if not isinstance(value, str):
            raise MobiledocValidationError(
                f"Expected to receive string value for text marker index {position} "
                f"but received: {value!r}"
            )
        return TextMarker(
            open_markup_indexes=tuple(open_indexes),
            close_count=close_count,
            value=value,
        )

    if is_integer(kind) and kind == MarkerType.ATOM:
        if not is_integer(value):
            raise MobiledocValidationError(
                f"Expected to receive integer value for atom marker index {position} "
                f"but received: {value!r}"
            )
        return AtomMarker(
            open_markup_indexes=tuple(open_indexes),
            close_count=close_count,
            value=value,
        )

    raise MobiledocValidationError(
        f"Unrecognized marker type identifier: {kind!r} (marker index {position})"
    )


def parse_markers(raw: Any) -> Tuple[Union[TextMarker, AtomMarker], ...]:
    """Validate a list of wire markers; ``None`` is an empty list."""
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise MobiledocValidationError(
            f"Expected an array of markers but received: {raw!r}"
        )
    return tuple(parse_marker(marker, ix) for ix, marker in enumerate(raw))


__all__ = [
    "AtomMarker",
    "Marker",
    "MarkerType",
    "TextMarker",
    "parse_marker",
    "parse_markers",
]
