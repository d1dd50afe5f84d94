"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"
    internal_token: str = ""

    media_root: str = "data/media"
    media_url: str = "/media/"

    pngcrush_path: str = "/usr/bin/pngcrush"
    jpegoptim_path: str = "/usr/bin/jpegoptim"
    jpeg_quality: int = 80

    dependency_check_enabled: bool = True
    intermediate_sizes: tuple[int, ...] = (150, 300, 1024)


def _parse_int(raw: str, default: int) -> int:
    # 0 is out of the 1-100 range, so the optimizer falls back to its default.
    try:
        return int(raw.strip())
    except ValueError:
        return 0 if raw.strip() else default


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _parse_sizes(raw: str) -> tuple[int, ...]:
    sizes: list[int] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if chunk.isdigit() and int(chunk) > 0:
            sizes.append(int(chunk))
    return tuple(sorted(set(sizes)))


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        internal_token=os.getenv("INTERNAL_TOKEN", ""),
        media_root=os.getenv("MEDIA_ROOT", "data/media"),
        media_url=os.getenv("MEDIA_URL", "/media/"),
        pngcrush_path=os.getenv("PNGCRUSH_PATH", "/usr/bin/pngcrush"),
        jpegoptim_path=os.getenv("JPEGOPTIM_PATH", "/usr/bin/jpegoptim"),
        jpeg_quality=_parse_int(os.getenv("JPEG_QUALITY", "80"), 80),
        dependency_check_enabled=_parse_bool(os.getenv("DEPENDENCY_CHECK", "true")),
        intermediate_sizes=_parse_sizes(os.getenv("INTERMEDIATE_SIZES", "150,300,1024")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
