"""Local filesystem storage for uploaded media."""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(file_name: str) -> str:
    """Strip directories and unsafe characters from a client-supplied name."""

    name = _UNSAFE_CHARS.sub("-", Path(file_name).name).strip(".-")
    return name or "upload"


class LocalStorage:
    """Stores files under ``root/YYYY/MM`` with collision-free names."""

    def __init__(self, root: str | Path, base_url: str = "/media/") -> None:
        self.root = Path(root)
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"

    def save(self, file_name: str, data: bytes, *, now: datetime | None = None) -> Path:
        """Write ``data`` and return the absolute path of the stored file."""

        now = now or datetime.now(timezone.utc)
        directory = self.root / f"{now:%Y}" / f"{now:%m}"
        directory.mkdir(parents=True, exist_ok=True)

        name = Path(safe_filename(file_name))
        target = directory / f"{name.stem}-{uuid.uuid4().hex[:8]}{name.suffix.lower()}"
        target.write_bytes(data)
        return target.resolve()

    def url_for(self, path: str | Path) -> str:
        relative = Path(path).resolve().relative_to(self.root.resolve())
        return f"{self.base_url}{relative.as_posix()}"
