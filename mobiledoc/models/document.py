"""
Validated, normalized in-memory form of a Mobiledoc payload.

Construction is the single normalization pass: markups, atoms and cards are
collected first, then sections (so card references can be bounds-checked).
The first violation aborts construction with a MobiledocValidationError; no
partial document is ever returned.

Atoms and cards are shape-checked rather than stored as raw tuples: the name
must be a string and an atom must carry a string text value, so ``["mention"]``
is rejected. Payloads stay opaque.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypeVar, Union

from pydantic import ConfigDict, Field, model_validator

from ..exceptions import MobiledocValidationError
from ._base import _EXTRA, MobiledocModel, is_integer
from .sections import Section, parse_section

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_KNOWN_KEYS = frozenset({"version", "markups", "atoms", "cards", "sections"})


def _at(seq: Any, index: int) -> Any:
    return seq[index] if index < len(seq) else None


def _lookup(items: Sequence[T], index: Any) -> Optional[T]:
    if not is_integer(index) or index < 0 or index >= len(items):
        return None
    return items[index]


class Markup(MobiledocModel):
    """Inline tag definition referenced by index from text markers."""

    tag_name: str
    attributes: Tuple[str, ...] = ()

    @classmethod
    def from_wire(cls, raw: Any) -> "Markup":
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, (list, tuple)):
            raise MobiledocValidationError(
                f"Expected markup to be an array but received: {raw!r}"
            )
        tag_name = _at(raw, 0)
        attributes = _at(raw, 1)
        if not isinstance(tag_name, str):
            raise MobiledocValidationError(
                f"Expected markup tag name to be a string but received: {tag_name!r}"
            )
        if attributes is None:
            attributes = []
        if not isinstance(attributes, (list, tuple)) or not all(
            isinstance(a, str) for a in attributes
        ):
            raise MobiledocValidationError(
                f"Invalid markup attributes found: {attributes!r}"
            )
        return cls(tag_name=tag_name, attributes=tuple(attributes))

    def to_wire(self) -> List[Any]:
        return [self.tag_name, list(self.attributes)]


class Atom(MobiledocModel):
    """Named inline extension point; the payload is opaque."""

    name: str
    value: str
    payload: Any = Field(default_factory=dict)

    @classmethod
    def from_wire(cls, raw: Any) -> "Atom":
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, (list, tuple)):
            raise MobiledocValidationError(
                f"Expected atom to be an array but received: {raw!r}"
            )
        name = _at(raw, 0)
        value = _at(raw, 1)
        payload = _at(raw, 2)
        if not isinstance(name, str):
            raise MobiledocValidationError(
                f"Expected atom name to be a string but received: {name!r}"
            )
        if not isinstance(value, str):
            raise MobiledocValidationError(
                f"Expected atom text value to be a string but received: {value!r}"
            )
        return cls(name=name, value=value, payload={} if payload is None else payload)

    def to_wire(self) -> List[Any]:
        return [self.name, self.value, self.payload]


class Card(MobiledocModel):
    """Named block-level extension point; the payload is opaque."""

    name: str
    payload: Any = Field(default_factory=dict)

    @classmethod
    def from_wire(cls, raw: Any) -> "Card":
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, (list, tuple)):
            raise MobiledocValidationError(
                f"Expected card to be an array but received: {raw!r}"
            )
        name = _at(raw, 0)
        payload = _at(raw, 1)
        if not isinstance(name, str):
            raise MobiledocValidationError(
                f"Expected card name to be a string but received: {name!r}"
            )
        return cls(name=name, payload={} if payload is None else payload)

    def to_wire(self) -> List[Any]:
        return [self.name, self.payload]


def _collection(data: Mapping, key: str) -> Sequence[Any]:
    raw = data.get(key)
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        raise MobiledocValidationError(f"Expected {key} to be an array but received: {raw!r}")
    return raw


class Document(MobiledocModel):
    """
    Mobiledoc document.

    Build from the wire mapping with ``Document(**raw)``,
    ``Document.model_validate(raw)`` or ``Document.from_json(text)``.
    """

    version: Optional[str] = None
    markups: Tuple[Markup, ...] = ()
    atoms: Tuple[Atom, ...] = ()
    cards: Tuple[Card, ...] = ()
    sections: Tuple[Section, ...] = ()

    model_config = MobiledocModel.model_config | ConfigDict(extra=_EXTRA)

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Any:
        if isinstance(data, Document):
            return data
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise MobiledocValidationError(
                f"Expected document to be a mapping but received: {data!r}"
            )

        extras = {k: v for k, v in data.items() if k not in _KNOWN_KEYS}
        if extras and _EXTRA == "forbid":
            raise MobiledocValidationError(
                f"Unrecognized document keys: {', '.join(sorted(map(str, extras)))}"
            )

        version = data.get("version")
        if version is not None and not isinstance(version, str):
            raise MobiledocValidationError(
                f"Expected version to be a string but received: {version!r}"
            )

        markups = tuple(Markup.from_wire(m) for m in _collection(data, "markups"))
        atoms = tuple(Atom.from_wire(a) for a in _collection(data, "atoms"))
        cards = tuple(Card.from_wire(c) for c in _collection(data, "cards"))
        sections = tuple(
            parse_section(s, card_count=len(cards)) for s in _collection(data, "sections")
        )

        LOGGER.debug(
            "mobiledoc.document.parsed version=%s markups=%d atoms=%d cards=%d sections=%d",
            version,
            len(markups),
            len(atoms),
            len(cards),
            len(sections),
        )

        out: Dict[str, Any] = {
            "version": version,
            "markups": markups,
            "atoms": atoms,
            "cards": cards,
            "sections": sections,
        }
        if _EXTRA == "allow":
            out.update(extras)
        return out

    # ------------------------------------------------------------------ lookups

    def get_atom(self, index: Any) -> Optional[Atom]:
        return _lookup(self.atoms, index)

    def get_card(self, index: Any) -> Optional[Card]:
        return _lookup(self.cards, index)

    def get_markup(self, index: Any) -> Optional[Markup]:
        return _lookup(self.markups, index)

    # ---------------------------------------------------------------- wire I/O

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Document":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MobiledocValidationError(f"Invalid Mobiledoc JSON: {e}") from e
        return cls.model_validate(data)

    def to_wire(self) -> Dict[str, Any]:
        """Re-encode the positional wire format."""
        out: Dict[str, Any] = {}
        if self.version is not None:
            out["version"] = self.version
        out["markups"] = [m.to_wire() for m in self.markups]
        out["atoms"] = [a.to_wire() for a in self.atoms]
        out["cards"] = [c.to_wire() for c in self.cards]
        out["sections"] = [s.to_wire() for s in self.sections]
        if self.model_extra:
            out.update(self.model_extra)
        return out

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_wire(), **kwargs)


__all__ = ["Atom", "Card", "Document", "Markup"]
