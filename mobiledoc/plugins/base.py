"""
Renderer plugin protocol.

A plugin implements any subset of two optional capabilities:

  - ``on_render_section(section, *, document)``: consulted before the built-in
    renderer for markup, list and card sections. Returning an output node
    replaces the section entirely; returning a tag name or component overrides
    only the tag; returning ``None`` falls through.
  - ``on_render_markup(payload, *, document)``: consulted for every applied
    inline markup. Only tag overrides (tag name or component) are honored.

Plugins are tried in registration order and the first usable result wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol

if TYPE_CHECKING:  # pragma: no cover - import for type checking only
    from ..models import Document

ON_RENDER_SECTION = "on_render_section"
ON_RENDER_MARKUP = "on_render_markup"

PLUGIN_METHODS = (ON_RENDER_SECTION, ON_RENDER_MARKUP)


@dataclass(frozen=True)
class MarkupPayload:
    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    value: str = ""


class SectionPlugin(Protocol):
    def on_render_section(self, section: Any, *, document: "Document") -> Optional[Any]: ...


class MarkupPlugin(Protocol):
    def on_render_markup(
        self, payload: MarkupPayload, *, document: "Document"
    ) -> Optional[Any]: ...


class BasePlugin:
    """Plugin with no capabilities; subclass and add either hook."""

    @property
    def name(self) -> str:
        return type(self).__name__


__all__ = [
    "BasePlugin",
    "MarkupPayload",
    "MarkupPlugin",
    "ON_RENDER_MARKUP",
    "ON_RENDER_SECTION",
    "PLUGIN_METHODS",
    "SectionPlugin",
]
