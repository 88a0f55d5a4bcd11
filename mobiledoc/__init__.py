"""Validate Mobiledoc payloads and render them into output node trees.

Quick start::

    from mobiledoc import Renderer, to_html

    result = Renderer().render(
        {"version": "0.3.2", "sections": [[1, "p", [[0, [], 0, "Hello world"]]]]}
    ).result
    to_html(result)  # '<p>Hello world</p>'
"""

from .exceptions import (
    MobiledocError,
    MobiledocValidationError,
    PluginError,
    RendererError,
)
from .models import (
    Atom,
    AtomMarker,
    Card,
    CardSection,
    Document,
    ImageSection,
    ListSection,
    MarkerType,
    Markup,
    MarkupSection,
    SectionType,
    TextMarker,
)
from .plugins import BasePlugin, CustomComponentPlugin, MarkupPayload
from .rendering.exporter import render_html, render_page, to_html
from .rendering.nodes import Element, Fragment
from .rendering.options import HtmlConfig, RendererOptions
from .rendering.renderer import Renderer, RenderResult
from .rendering.renderer_iface import AtomEnv, CardEnv
from .utils import attributes_to_dict

__version__ = "0.1.0"

__all__ = [
    "Atom",
    "AtomEnv",
    "AtomMarker",
    "BasePlugin",
    "Card",
    "CardEnv",
    "CardSection",
    "CustomComponentPlugin",
    "Document",
    "Element",
    "Fragment",
    "HtmlConfig",
    "ImageSection",
    "ListSection",
    "MarkerType",
    "Markup",
    "MarkupPayload",
    "MarkupSection",
    "MobiledocError",
    "MobiledocValidationError",
    "PluginError",
    "RenderResult",
    "Renderer",
    "RendererError",
    "RendererOptions",
    "SectionType",
    "TextMarker",
    "attributes_to_dict",
    "render_html",
    "render_page",
    "to_html",
]
