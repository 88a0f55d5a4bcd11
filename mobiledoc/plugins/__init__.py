"""Renderer plugins: the capability protocol plus bundled implementations."""

from .base import (
    ON_RENDER_MARKUP,
    ON_RENDER_SECTION,
    PLUGIN_METHODS,
    BasePlugin,
    MarkupPayload,
    MarkupPlugin,
    SectionPlugin,
)
from .custom_component import CustomComponentPlugin

__all__ = [
    "BasePlugin",
    "CustomComponentPlugin",
    "MarkupPayload",
    "MarkupPlugin",
    "ON_RENDER_MARKUP",
    "ON_RENDER_SECTION",
    "PLUGIN_METHODS",
    "SectionPlugin",
]
