"""EXIF metadata access."""

from __future__ import annotations

from pathlib import Path

from PIL import ExifTags, Image

from upload_handler.imgproc.errors import MetadataUnreadable


class ExifMetadataReader:
    """Reads the orientation tag from an image's EXIF block."""

    def read_orientation(self, file_path: str | Path) -> int | None:
        """Return the orientation tag, or None when the file carries none."""

        try:
            with Image.open(file_path) as img:
                value = img.getexif().get(ExifTags.Base.Orientation)
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise MetadataUnreadable(f"Cannot read EXIF from {file_path}: {exc}") from exc

        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
