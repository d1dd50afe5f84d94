"""Quick content-based image checks."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

# Phone cameras write multi-picture JPEGs; the primary frame is a plain JPEG.
_FORMAT_ALIASES = {"MPO": "JPEG"}


def canonical_format(image_format: str | None) -> str | None:
    """Return the format a decoded image should be written back as."""

    return _FORMAT_ALIASES.get(image_format or "", image_format)


def detect_mime_type(file_path: str | Path) -> str | None:
    """Return the mime type Pillow derives from the file content, if any."""

    try:
        with Image.open(file_path) as img:
            return Image.MIME.get(canonical_format(img.format) or "")
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        return None


def is_image(file_path: str | Path) -> bool:
    """Very quick "do-we-have-an-image" test."""

    try:
        with Image.open(file_path) as img:
            img.verify()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        return False
    return True
