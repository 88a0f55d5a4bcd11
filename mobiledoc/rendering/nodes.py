"""
Framework-agnostic output nodes produced by the renderer.

An ``Element`` carries either an HTML tag name or a host component callable as
its tag; text is represented by plain ``str`` children. Materializing these
nodes (e.g. to HTML) happens outside the render walk, see ``exporter``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Tuple, Union

Component = Callable[..., Any]
Tag = Union[str, Component]


@dataclass(frozen=True)
class Element:
    tag: Tag
    attributes: Dict[str, str] = field(default_factory=dict)
    children: Tuple[Any, ...] = ()

    @property
    def tag_name(self) -> str:
        if isinstance(self.tag, str):
            return self.tag
        return getattr(self.tag, "__name__", repr(self.tag))

    def text_content(self) -> str:
        return text_content(self)


@dataclass(frozen=True)
class Fragment:
    children: Tuple[Any, ...] = ()

    def text_content(self) -> str:
        return text_content(self)


def text_content(node: Any) -> str:
    """Concatenate the text of a node tree; foreign nodes contribute nothing."""
    if node is None:
        return ""
    if isinstance(node, str):
        return node
    if isinstance(node, (Element, Fragment)):
        return "".join(text_content(child) for child in node.children)
    return ""


def is_component(value: Any) -> bool:
    """True when a plugin result overrides a tag rather than replacing a node."""
    if isinstance(value, str):
        return True
    if isinstance(value, (Element, Fragment)):
        return False
    if isinstance(value, type):
        return True
    # Foreign nodes (e.g. tinyhtml fragments) are callable builders with render()
    if callable(getattr(value, "render", None)):
        return False
    return callable(value)


__all__ = ["Component", "Element", "Fragment", "Tag", "is_component", "text_content"]
