"""
Pure renderer for Mobiledoc documents.

Walks a validated Document and produces a tree of framework-agnostic output
nodes (``Element``/``Fragment``), consulting plugins and dispatching atoms and
cards to host-supplied handlers. No I/O.

Every renderer-level problem goes through a single error policy: raise a
RendererError (default) or, with ``suppress_errors``, report the message to
``error_handler`` and drop the offending node while siblings keep rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import PluginError, RendererError
from ..models import (
    AtomMarker,
    CardSection,
    Document,
    ImageSection,
    ListSection,
    Markup,
    MarkupSection,
    TextMarker,
)
from ..plugins.base import ON_RENDER_MARKUP, ON_RENDER_SECTION, MarkupPayload
from ..utils import attributes_to_dict
from .nodes import Element, Fragment, is_component
from .options import RendererOptions
from .renderer_iface import AtomEnv, AtomHandler, CardEnv, CardHandler

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    result: Fragment
    _report: Callable[[str], None] = field(repr=False, compare=False)

    def teardown(self) -> None:
        """Unsupported for static output; reported through the error policy."""
        self._report("Teardown is not supported")


class Renderer:
    """Render Documents (or raw Mobiledoc mappings) into output nodes."""

    def __init__(
        self,
        *,
        atoms: Optional[Mapping[str, AtomHandler]] = None,
        atom_options: Optional[Mapping[str, Any]] = None,
        cards: Optional[Mapping[str, CardHandler]] = None,
        card_options: Optional[Mapping[str, Any]] = None,
        unknown_atom_handler: Optional[AtomHandler] = None,
        unknown_card_handler: Optional[CardHandler] = None,
        plugins: Optional[Sequence[Any]] = None,
        options: Optional[RendererOptions] = None,
    ):
        self.atoms: Dict[str, AtomHandler] = dict(atoms or {})
        self.atom_options: Dict[str, Any] = dict(atom_options or {})
        self.cards: Dict[str, CardHandler] = dict(cards or {})
        self.card_options: Dict[str, Any] = dict(card_options or {})
        self.unknown_atom_handler = unknown_atom_handler
        self.unknown_card_handler = unknown_card_handler
        self.plugins: List[Any] = list(plugins or [])
        self.options = options or RendererOptions()

    def get_atom(self, name: str) -> Optional[AtomHandler]:
        return self.atoms.get(name)

    def get_card(self, name: str) -> Optional[CardHandler]:
        return self.cards.get(name)

    # -------------------------------------------------------------- error policy

    def _error(
        self, message: str, exc_type: Callable[[str], Exception] = RendererError
    ) -> None:
        if self.options.suppress_errors:
            LOGGER.warning("mobiledoc.renderer.suppressed %s", message)
            handler = self.options.error_handler
            if callable(handler):
                handler(message)
            return None
        raise exc_type(message)

    # ------------------------------------------------------------------- plugins

    def _run_plugins(self, method: str, payload: Any, document: Document) -> Any:
        for plugin in self.plugins:
            hook = getattr(plugin, method, None)
            if hook is None:
                continue
            if not callable(hook):
                self._error(
                    f"Plugin provided non-function method for: {method}",
                    exc_type=lambda msg: PluginError(method, msg),
                )
                continue

            result = hook(payload, document=document)
            if result is None:
                continue
            if method == ON_RENDER_MARKUP and not is_component(result):
                # Markup plugins may only override the tag
                LOGGER.debug(
                    "mobiledoc.renderer.plugin_ignored plugin=%s method=%s",
                    type(plugin).__name__,
                    method,
                )
                continue
            LOGGER.debug(
                "mobiledoc.renderer.plugin_hit plugin=%s method=%s",
                type(plugin).__name__,
                method,
            )
            return result
        return None

    # -------------------------------------------------------------------- render

    def render(self, document: Any) -> RenderResult:
        """Render a Document or raw Mobiledoc mapping.

        Raw input is validated first, surfacing MobiledocValidationError.
        """
        doc = document if isinstance(document, Document) else Document.model_validate(document)
        LOGGER.debug(
            "mobiledoc.renderer.render sections=%d plugins=%d",
            len(doc.sections),
            len(self.plugins),
        )
        rendered = [self._render_section(section, doc) for section in doc.sections]
        result = Fragment(tuple(node for node in rendered if node is not None))
        return RenderResult(result=result, _report=self._error)

    def _render_section(self, section: Any, document: Document) -> Any:
        if isinstance(section, ImageSection):
            return Element("img", {"src": section.src})

        override = self._run_plugins(ON_RENDER_SECTION, section, document)
        custom_tag = None
        if override is not None:
            if not is_component(override):
                return override
            custom_tag = override

        if isinstance(section, MarkupSection):
            return Element(
                section.tag_name if custom_tag is None else custom_tag,
                attributes_to_dict(section.attributes),
                self._render_markers(section.markers, document),
            )

        if isinstance(section, ListSection):
            items = tuple(
                Element("li", {}, self._render_markers(item, document))
                for item in section.items
            )
            return Element(
                section.tag_name if custom_tag is None else custom_tag,
                attributes_to_dict(section.attributes),
                items,
            )

        if isinstance(section, CardSection):
            return self._render_card(section, document)

        kind = getattr(section, "kind", None)
        if kind is None and isinstance(section, (list, tuple)) and section:
            kind = section[0]
        return self._error(f"Could not parse unrecognized section type: {kind}")

    def _render_card(self, section: CardSection, document: Document) -> Any:
        card = document.get_card(section.card_index)
        if card is None:
            return self._error(f"Could not locate card with index: {section.card_index}")

        handler = self.get_card(card.name)
        if handler is None:
            handler = self.unknown_card_handler
        if handler is None:
            return self._error(f"No card handler specified for: {card.name}")

        return handler(
            env=CardEnv(name=card.name),
            options=self.card_options,
            payload=card.payload,
        )

    # ------------------------------------------------------------------- markers

    def _render_markers(self, markers: Sequence[Any], document: Document) -> Tuple[Any, ...]:
        rendered = (self._render_marker(marker, document) for marker in markers)
        return tuple(node for node in rendered if node is not None)

    def _render_marker(self, marker: Any, document: Document) -> Any:
        if isinstance(marker, TextMarker):
            if marker.open_markup_indexes:
                # Only the first open markup is applied
                index = marker.open_markup_indexes[0]
                markup = document.get_markup(index)
                if markup is None:
                    return self._error(f"Invalid markup reference: {index}")
                return self._render_markup(markup, marker.value, document)
            return Fragment((marker.value,))

        if isinstance(marker, AtomMarker):
            atom = document.get_atom(marker.value)
            if atom is None:
                return self._error(f"Could not locate atom with index: {marker.value}")

            handler = self.get_atom(atom.name)
            if handler is None:
                handler = self.unknown_atom_handler
            if handler is None:
                return self._error(f"No atom handler specified for: {atom.name}")

            return self._invoke_atom(handler, atom.name, atom.value, atom.payload)

        kind = getattr(marker, "kind", None)
        return self._error(f"Could not parse unrecognized marker type: {kind}")

    def _invoke_atom(self, handler: AtomHandler, name: str, value: str, payload: Any) -> Any:
        def save(new_value: str = value, new_payload: Any = payload) -> Any:
            return self._invoke_atom(handler, name, new_value, new_payload)

        return handler(
            env=AtomEnv(name=name, save=save),
            options=self.atom_options,
            payload=payload,
            value=value,
        )

    def _render_markup(self, markup: Markup, value: str, document: Document) -> Element:
        attributes = attributes_to_dict(markup.attributes)
        payload = MarkupPayload(
            tag_name=markup.tag_name, attributes=dict(attributes), value=value
        )
        custom_tag = self._run_plugins(ON_RENDER_MARKUP, payload, document)
        return Element(
            markup.tag_name if custom_tag is None else custom_tag,
            attributes,
            (value,),
        )
