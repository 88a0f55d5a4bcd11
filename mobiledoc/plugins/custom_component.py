"""Override tags of markups and markup sections by tag name."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models import Document, MarkupSection
from ..rendering.nodes import Tag
from .base import BasePlugin, MarkupPayload


class CustomComponentPlugin(BasePlugin):
    """Map tag names to replacement tags or components, e.g.
    ``CustomComponentPlugin(markups={"b": "strong"}, sections={"p": Paragraph})``.

    Only markup (text) sections are considered for section overrides.
    """

    def __init__(
        self,
        *,
        markups: Optional[Mapping[str, Tag]] = None,
        sections: Optional[Mapping[str, Tag]] = None,
    ) -> None:
        self._markups = dict(markups or {})
        self._sections = dict(sections or {})

    def on_render_markup(
        self, payload: MarkupPayload, *, document: Document
    ) -> Optional[Tag]:
        return self._markups.get(payload.tag_name)

    def on_render_section(self, section: Any, *, document: Document) -> Optional[Tag]:
        if not isinstance(section, MarkupSection):
            return None
        return self._sections.get(section.tag_name)
