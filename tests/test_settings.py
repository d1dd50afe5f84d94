"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from upload_handler.config.settings import get_settings


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("JPEG_QUALITY", "DEPENDENCY_CHECK", "INTERMEDIATE_SIZES", "PNGCRUSH_PATH", "MEDIA_ROOT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults() -> None:
    settings = get_settings()

    assert settings.pngcrush_path == "/usr/bin/pngcrush"
    assert settings.jpegoptim_path == "/usr/bin/jpegoptim"
    assert settings.jpeg_quality == 80
    assert settings.dependency_check_enabled is True
    assert settings.intermediate_sizes == (150, 300, 1024)


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JPEG_QUALITY", "65")
    monkeypatch.setenv("DEPENDENCY_CHECK", "off")
    monkeypatch.setenv("INTERMEDIATE_SIZES", "800, 200,abc,0,200")
    monkeypatch.setenv("PNGCRUSH_PATH", "/opt/bin/pngcrush")

    settings = get_settings()

    assert settings.jpeg_quality == 65
    assert settings.dependency_check_enabled is False
    assert settings.intermediate_sizes == (200, 800)
    assert settings.pngcrush_path == "/opt/bin/pngcrush"


def test_unparsable_quality_is_out_of_range(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JPEG_QUALITY", "high")

    assert get_settings().jpeg_quality == 0


def test_env_file_is_loaded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("# local\nMEDIA_ROOT=/srv/media\n", encoding="utf-8")
    # Registers MEDIA_ROOT with monkeypatch so the value the loader sets is undone.
    monkeypatch.setenv("MEDIA_ROOT", "placeholder")
    monkeypatch.delenv("MEDIA_ROOT")

    assert get_settings().media_root == "/srv/media"
