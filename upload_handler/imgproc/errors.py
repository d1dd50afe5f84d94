"""Errors raised while normalising image orientation."""

from __future__ import annotations


class NormalizeError(Exception):
    """Base class for orientation normalisation failures."""


class MetadataUnreadable(NormalizeError):
    """EXIF metadata could not be read from the file."""


class EditorUnavailable(NormalizeError):
    """The file could not be opened for editing."""


class TransformApplyFailed(NormalizeError):
    """A rotate or flip operation failed on an open image."""


class PersistFailed(NormalizeError):
    """Writing the transformed image back to disk failed."""
