"""Image orientation helpers."""

from .editor import ImageEditor, ImageHandle, PillowImageEditor
from .errors import (
    EditorUnavailable,
    MetadataUnreadable,
    NormalizeError,
    PersistFailed,
    TransformApplyFailed,
)
from .exif import ExifMetadataReader
from .normalize import JPEG_MIME_TYPES, ImageNormalizer, NormalizeOutcome
from .orientation import ORIENTATION_TRANSFORMS, Flip, Rotate, Transform, transform_for

__all__ = [
    "EditorUnavailable",
    "ExifMetadataReader",
    "Flip",
    "ImageEditor",
    "ImageHandle",
    "ImageNormalizer",
    "JPEG_MIME_TYPES",
    "MetadataUnreadable",
    "NormalizeError",
    "NormalizeOutcome",
    "ORIENTATION_TRANSFORMS",
    "PersistFailed",
    "PillowImageEditor",
    "Rotate",
    "Transform",
    "TransformApplyFailed",
    "transform_for",
]
