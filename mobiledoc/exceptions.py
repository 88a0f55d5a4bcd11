"""Library exceptions."""

from __future__ import annotations


class MobiledocError(Exception):
    """Base Mobiledoc error."""


class MobiledocValidationError(MobiledocError):
    """Raised while constructing a Document from untrusted input.

    Must not subclass ``ValueError``: pydantic wraps ``ValueError`` raised in
    validators, anything else propagates unchanged.
    """


class RendererError(MobiledocError):
    """Raised during the render walk when errors are not suppressed."""


class PluginError(RendererError):
    def __init__(self, method: str, message: str) -> None:
        self.method = method
        super().__init__(message)
