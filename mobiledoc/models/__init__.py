"""Public exports for the Mobiledoc document model."""

from __future__ import annotations

from .document import Atom, Card, Document, Markup
from .markers import AtomMarker, Marker, MarkerType, TextMarker
from .sections import (
    CardSection,
    ImageSection,
    ListSection,
    MarkupSection,
    Section,
    SectionType,
)

__all__ = [
    "Atom",
    "AtomMarker",
    "Card",
    "CardSection",
    "Document",
    "ImageSection",
    "ListSection",
    "Marker",
    "MarkerType",
    "Markup",
    "MarkupSection",
    "Section",
    "SectionType",
    "TextMarker",
]
