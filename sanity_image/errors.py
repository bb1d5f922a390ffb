"""Exceptions raised by the URL and geometry builders."""

from __future__ import annotations


class SanityImageError(ValueError):
    """Base class for deterministic input failures. Never retried."""


class MissingRequiredInput(SanityImageError):
    pass


class InvalidIdentifierFormat(SanityImageError):
    pass


class InvalidGeometry(SanityImageError):
    pass
