"""
Host-facing contracts of the renderer.

Atom and card handlers are plain callables supplied by the host application.
The renderer calls them with keyword arguments only and uses their return
value verbatim as the output node:

  - atom handler: ``handler(env=AtomEnv, options=..., payload=..., value=text)``
  - card handler: ``handler(env=CardEnv, options=..., payload=...)``

The renderer never inspects payloads; they are opaque to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Protocol


class AtomHandler(Protocol):
    def __call__(
        self,
        *,
        env: "AtomEnv",
        options: Mapping[str, Any],
        payload: Any,
        value: str,
    ) -> Any: ...


class CardHandler(Protocol):
    def __call__(
        self, *, env: "CardEnv", options: Mapping[str, Any], payload: Any
    ) -> Any: ...


@dataclass(frozen=True)
class AtomEnv:
    """Environment passed to atom handlers.

    ``save(value, payload)`` re-invokes the same handler with new data and
    returns its node; omitted arguments keep their current values.
    """

    name: str
    save: Callable[..., Any] = field(repr=False, compare=False)


@dataclass(frozen=True)
class CardEnv:
    name: str
    is_in_editor: bool = False
