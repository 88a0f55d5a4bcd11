"""
Render/export configuration for Mobiledoc output.

Centralizes behavior flags so callers can tune defaults without touching
core logic. ``from_env`` applies environment fallbacks for unattended runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RendererOptions:
    # Called with the message of every suppressed renderer error
    error_handler: Optional[Callable[[str], None]] = None

    # When False (default) renderer errors raise RendererError immediately
    suppress_errors: bool = False

    @classmethod
    def from_env(
        cls, error_handler: Optional[Callable[[str], None]] = None
    ) -> "RendererOptions":
        return cls(
            error_handler=error_handler,
            suppress_errors=_env_flag("MOBILEDOC_SUPPRESS_ERRORS"),
        )


@dataclass(frozen=True)
class HtmlConfig:
    # Standalone page wrapper
    title: str = "Mobiledoc"
    lang: str = "en"
    extra_css: str = ""

    # Class applied to placeholders for atoms/cards without a handler
    placeholder_class: str = "mobiledoc-placeholder"
