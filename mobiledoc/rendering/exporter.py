"""
Exporter helpers for Mobiledoc → HTML.

Thin, testable wrappers that materialize the renderer's output nodes with
tinyhtml, wrap fragments in a standalone page, and write files. They hold no
global state and are shared by the CLI and higher-level APIs.
"""

from __future__ import annotations

import html
import logging
import os
import re
from typing import Any, Dict, Optional

from tinyhtml import frag, h, raw

from ..exceptions import RendererError
from .nodes import Element, Fragment
from .options import HtmlConfig
from .renderer import Renderer

LOGGER = logging.getLogger(__name__)

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

# Names tinyhtml's h() accepts verbatim; it rejects or rewrites anything else
# ("pull-quote" tags, "data_x" and "klass" attributes).
_H_TAG_RE = re.compile(r"^[A-Za-z0-9]+$")
_H_ATTR_RE = re.compile(r"^[A-Za-z0-9-]+$")
# renamed by h() ("klass") or clashing with its own parameters
_H_RESERVED = frozenset({"klass", "name", "attrs"})

# Names that can still be written safely as raw markup
_TAG_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_.:-]*$")
_ATTR_RE = re.compile(r"^[^\s\"'<>/=\x00-\x1f\x7f]+$")


def _is_h_safe(tag: str, attributes: Dict[str, str]) -> bool:
    return bool(_H_TAG_RE.match(tag)) and all(
        _H_ATTR_RE.match(name) and name not in _H_RESERVED for name in attributes
    )


def _element_frag(node: Element) -> Any:
    tag = node.tag
    void = tag.lower() in VOID_ELEMENTS
    if void and node.children:
        LOGGER.debug(
            "mobiledoc.exporter.void_children tag=%s dropped=%d",
            tag,
            len(node.children),
        )

    if _is_h_safe(tag, node.attributes):
        element = h(tag, **node.attributes)
        if void:
            return element
        return element(*(to_frag(child) for child in node.children))

    if not _TAG_RE.match(tag):
        raise RendererError(f"Invalid HTML tag name: {tag!r}")
    for name in node.attributes:
        if not _ATTR_RE.match(name):
            raise RendererError(f"Invalid HTML attribute name: {name!r}")

    attr_html = "".join(
        f' {k}="{html.escape(v)}"' for k, v in node.attributes.items()
    )
    if void:
        return raw(f"<{tag}{attr_html}>")
    inner = "".join(to_html(child) for child in node.children)
    return raw(f"<{tag}{attr_html}>{inner}</{tag}>")


def to_frag(node: Any) -> Any:
    """Convert an output node tree into a tinyhtml fragment."""
    if node is None:
        return frag()
    if isinstance(node, str):
        return frag(node)
    if isinstance(node, Fragment):
        return frag(*(to_frag(child) for child in node.children))
    if isinstance(node, Element):
        if isinstance(node.tag, str):
            return _element_frag(node)
        # Host component: called with the raw child nodes, result materialized
        return to_frag(node.tag(*node.children, **node.attributes))
    if callable(getattr(node, "render", None)):
        # Foreign node (e.g. a tinyhtml fragment returned by a handler)
        return node
    LOGGER.debug("mobiledoc.exporter.coerce type=%s", type(node).__name__)
    return frag(str(node))


def to_html(node: Any) -> str:
    return to_frag(node).render()


def render_html(document: Any, renderer: Optional[Renderer] = None) -> str:
    """Render a Document or raw mapping straight to an HTML fragment string."""
    renderer = renderer or Renderer()
    return to_html(renderer.render(document).result)


def render_page(html_fragment: str, config: Optional[HtmlConfig] = None) -> str:
    config = config or HtmlConfig()
    return (
        f'<!doctype html><html lang="{html.escape(config.lang)}">'
        '<meta charset="utf-8">'
        '<meta name="color-scheme" content="light dark">'
        f"<title>{html.escape(config.title)}</title>"
        "<style>"
        "body{font-family:-apple-system,BlinkMacSystemFont,Segoe UI,Roboto,Helvetica,Arial,sans-serif;line-height:1.4}"
        "img{max-width:100%;height:auto}"
        f".{config.placeholder_class}{{color:#888;border:1px dashed #ccc;padding:0 .25em}}"
        f"{config.extra_css}</style>"
        f'<div class="mobiledoc-content">{html_fragment}</div></html>'
    )


def placeholder_atom(config: Optional[HtmlConfig] = None):
    """Atom handler that renders the atom's text in a marked span."""
    config = config or HtmlConfig()

    def handler(*, env, options, payload, value):
        return Element(
            "span",
            {"class": config.placeholder_class, "data-atom": env.name},
            (value,),
        )

    return handler


def placeholder_card(config: Optional[HtmlConfig] = None):
    """Card handler that renders a marked block naming the card."""
    config = config or HtmlConfig()

    def handler(*, env, options, payload):
        return Element(
            "div",
            {"class": config.placeholder_class, "data-card": env.name},
            (env.name,),
        )

    return handler


def write_html(
    html_fragment: str,
    path: str,
    *,
    full_page: bool = False,
    config: Optional[HtmlConfig] = None,
) -> str:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    page = render_page(html_fragment, config) if full_page else html_fragment
    with open(path, "w", encoding="utf-8") as f:
        f.write(page)
    LOGGER.info("Wrote %d bytes of HTML to %s", len(page), path)
    return path
