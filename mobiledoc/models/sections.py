"""
Top-level sections of the Mobiledoc wire format.

Wire shapes:
  [1, tagName, markers, attributes?]   markup (text) section
  [2, src]                             image section
  [3, "ul"|"ol", [markers, ...], attributes?]  list section
  [10, cardIndex]                      card section

Card indexes are bounds-checked eagerly against the document's cards, which
are always collected before sections.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import Field

from ..exceptions import MobiledocValidationError
from ._base import MobiledocModel, is_integer
from .markers import Marker, parse_markers

LIST_TAGS: Tuple[str, ...] = ("ol", "ul")


class SectionType(IntEnum):
    MARKUP = 1
    IMAGE = 2
    LIST = 3
    CARD = 10


def _at(seq: Any, index: int) -> Any:
    return seq[index] if index < len(seq) else None


def _optional_attributes(raw: Any) -> Optional[Tuple[Any, ...]]:
    # Omitted stays None, an explicit empty array stays an empty tuple.
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)):
        raise MobiledocValidationError(
            f"Expected section attributes to be an array but received: {raw!r}"
        )
    return tuple(raw)


class MarkupSection(MobiledocModel):
    kind: Literal[SectionType.MARKUP] = SectionType.MARKUP
    tag_name: str
    markers: Tuple[Marker, ...] = ()
    attributes: Optional[Tuple[Any, ...]] = None

    @classmethod
    def from_wire(cls, raw: Any) -> "MarkupSection":
        tag_name = _at(raw, 1)
        if not isinstance(tag_name, str):
            raise MobiledocValidationError(
                f"Expected markup section tag name to be a string but received: {tag_name!r}"
            )
        return cls(
            tag_name=tag_name,
            markers=parse_markers(_at(raw, 2)),
            attributes=_optional_attributes(_at(raw, 3)),
        )

    def to_wire(self) -> List[Any]:
        out: List[Any] = [
            int(self.kind),
            self.tag_name,
            [m.to_wire() for m in self.markers],
        ]
        if self.attributes is not None:
            out.append(list(self.attributes))
        return out


class ImageSection(MobiledocModel):
    kind: Literal[SectionType.IMAGE] = SectionType.IMAGE
    src: str

    @classmethod
    def from_wire(cls, raw: Any) -> "ImageSection":
        src = _at(raw, 1)
        if not isinstance(src, str):
            raise MobiledocValidationError(
                f"Found image section and expected src but found: {src!r}"
            )
        return cls(src=src)

    def to_wire(self) -> List[Any]:
        return [int(self.kind), self.src]


class ListSection(MobiledocModel):
    kind: Literal[SectionType.LIST] = SectionType.LIST
    tag_name: Literal["ul", "ol"]
    items: Tuple[Tuple[Marker, ...], ...] = ()
    attributes: Optional[Tuple[Any, ...]] = None

    @classmethod
    def from_wire(cls, raw: Any) -> "ListSection":
        tag_name = _at(raw, 1)
        if not isinstance(tag_name, str) or tag_name not in LIST_TAGS:
            raise MobiledocValidationError(
                f"Expected list section tag name to be one of [{','.join(LIST_TAGS)}] "
                f"but received: {tag_name!r}"
            )
        items = _at(raw, 2)
        if not isinstance(items, (list, tuple)):
            raise MobiledocValidationError(
                f"Expected array of markers for list section but received: {items!r}"
            )
        return cls(
            tag_name=tag_name,
            items=tuple(parse_markers(item) for item in items),
            attributes=_optional_attributes(_at(raw, 3)),
        )

    def to_wire(self) -> List[Any]:
        out: List[Any] = [
            int(self.kind),
            self.tag_name,
            [[m.to_wire() for m in item] for item in self.items],
        ]
        if self.attributes is not None:
            out.append(list(self.attributes))
        return out


class CardSection(MobiledocModel):
    kind: Literal[SectionType.CARD] = SectionType.CARD
    card_index: int

    @classmethod
    def from_wire(cls, raw: Any, card_count: int = 0) -> "CardSection":
        card_index = _at(raw, 1)
        if not is_integer(card_index) or not 0 <= card_index < card_count:
            raise MobiledocValidationError(f"Unrecognized card index: {card_index!r}")
        return cls(card_index=card_index)

    def to_wire(self) -> List[Any]:
        return [int(self.kind), self.card_index]


Section = Annotated[
    Union[MarkupSection, ImageSection, ListSection, CardSection],
    Field(discriminator="kind"),
]

_SECTION_TYPES: Dict[int, Any] = {
    SectionType.MARKUP: MarkupSection,
    SectionType.IMAGE: ImageSection,
    SectionType.LIST: ListSection,
}

_SECTION_CLASSES = (MarkupSection, ImageSection, ListSection, CardSection)


def parse_section(
    raw: Any, card_count: int = 0
) -> Union[MarkupSection, ImageSection, ListSection, CardSection]:
    """Validate one wire section, dispatching on its leading identifier."""
    if isinstance(raw, CardSection):
        # re-check bounds: a typed card section may come from another document
        return CardSection.from_wire(raw.to_wire(), card_count)
    if isinstance(raw, _SECTION_CLASSES):
        return raw
    if not isinstance(raw, (list, tuple)):
        raise MobiledocValidationError(
            f"Expected section to be an array but received: {raw!r}"
        )

    kind = _at(raw, 0)
    if is_integer(kind):
        if kind == SectionType.CARD:
            return CardSection.from_wire(raw, card_count)
        section_cls = _SECTION_TYPES.get(kind)
        if section_cls is not None:
            return section_cls.from_wire(raw)

    raise MobiledocValidationError(f"Unrecognized section type identifier: {kind!r}")


__all__ = [
    "CardSection",
    "ImageSection",
    "LIST_TAGS",
    "ListSection",
    "MarkupSection",
    "Section",
    "SectionType",
    "parse_section",
]
