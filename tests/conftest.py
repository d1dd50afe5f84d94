"""Shared fixtures: synthetic images written to ``tmp_path``."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Callable

import pytest
from PIL import ExifTags, Image, ImageDraw

QUADRANT_COLOURS = ((255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0))


def _quadrants(size: tuple[int, int]) -> Image.Image:
    width, height = size
    img = Image.new("RGB", size)
    draw = ImageDraw.Draw(img)
    half_w, half_h = width // 2, height // 2
    boxes = (
        (0, 0, half_w - 1, half_h - 1),
        (half_w, 0, width - 1, half_h - 1),
        (0, half_h, half_w - 1, height - 1),
        (half_w, half_h, width - 1, height - 1),
    )
    for box, colour in zip(boxes, QUADRANT_COLOURS):
        draw.rectangle(box, fill=colour)
    return img


@pytest.fixture
def make_jpeg(tmp_path: Path) -> Callable[..., Path]:
    """Write a four-colour JPEG, optionally tagged with an EXIF orientation."""

    def _make(
        name: str = "photo.jpg",
        orientation: int | None = None,
        size: tuple[int, int] = (64, 32),
    ) -> Path:
        path = tmp_path / name
        img = _quadrants(size)
        if orientation is None:
            img.save(path, "JPEG", quality=95)
        else:
            exif = Image.Exif()
            exif[ExifTags.Base.Orientation] = orientation
            img.save(path, "JPEG", quality=95, exif=exif.tobytes())
        return path

    return _make


@pytest.fixture
def make_png(tmp_path: Path) -> Callable[..., Path]:
    def _make(name: str = "graphic.png", size: tuple[int, int] = (64, 32)) -> Path:
        path = tmp_path / name
        _quadrants(size).save(path, "PNG")
        return path

    return _make


@pytest.fixture
def fake_binary(tmp_path: Path) -> Callable[[str], Path]:
    """Create an executable placeholder standing in for an optimizer binary."""

    def _make(name: str) -> Path:
        path = tmp_path / "bin" / name
        path.parent.mkdir(exist_ok=True)
        path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        path.chmod(0o755)
        return path

    return _make


@pytest.fixture
def make_mpo(tmp_path: Path) -> Callable[..., Path]:
    """Write a two-frame multi-picture JPEG like the ones phone cameras produce."""

    def _make(
        name: str = "camera.jpg",
        orientation: int = 6,
        size: tuple[int, int] = (64, 32),
    ) -> Path:
        path = tmp_path / name
        primary = _quadrants(size)
        preview = primary.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
        exif = Image.Exif()
        exif[ExifTags.Base.Orientation] = orientation
        primary.save(
            path,
            "MPO",
            save_all=True,
            append_images=[preview],
            exif=exif.tobytes(),
            quality=95,
        )
        return path

    return _make


@pytest.fixture
def make_sun_raster(tmp_path: Path) -> Callable[..., Path]:
    """Write an 8-bit Sun raster, a format Pillow reads but cannot write."""

    def _make(name: str = "scan.ras", size: int = 40) -> Path:
        path = tmp_path / name
        pixels = bytes(range(size)) * size
        header = struct.pack(">8I", 0x59A66A95, size, size, 8, len(pixels), 1, 0, 0)
        path.write_bytes(header + pixels)
        return path

    return _make
