"""Tests for the FastAPI routes."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_mock
from fastapi.testclient import TestClient
from PIL import Image

from upload_handler.api.main import app, create_app
from upload_handler.config.settings import Settings
from upload_handler.imgproc.errors import PersistFailed
from upload_handler.services.uploads import UploadHandler


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        media_root=str(tmp_path / "media"),
        pngcrush_path=str(tmp_path / "missing-pngcrush"),
        jpegoptim_path=str(tmp_path / "missing-jpegoptim"),
        internal_token="secret",
        intermediate_sizes=(16,),
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


def test_health_returns_ok() -> None:
    client = TestClient(app)
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_upload_is_rotated_and_resized(client: TestClient, make_jpeg) -> None:
    source = make_jpeg(orientation=6, size=(64, 32))

    response = client.post(
        "/uploads",
        files={"file": ("holiday.jpg", source.read_bytes(), "image/jpeg")},
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["type"] == "image/jpeg"
    assert payload["url"].startswith("/media/")
    assert payload["url"].endswith(".jpg")
    with Image.open(payload["file"]) as img:
        assert img.size == (32, 64)
    assert len(payload["renditions"]) == 1
    assert payload["renditions"][0].endswith("-8x16.jpg")


def test_png_upload_is_stored_untouched(client: TestClient, make_png) -> None:
    data = make_png(size=(8, 8)).read_bytes()

    response = client.post("/uploads", files={"file": ("icon.png", data, "image/png")})

    assert response.status_code == 201
    assert Path(response.json()["file"]).read_bytes() == data
    assert response.json()["renditions"] == []


def test_empty_upload_is_rejected(client: TestClient) -> None:
    response = client.post("/uploads", files={"file": ("empty.jpg", b"", "image/jpeg")})

    assert response.status_code == 400


def test_persist_failure_returns_server_error(
    client: TestClient,
    make_jpeg,
    mocker: pytest_mock.MockerFixture,
) -> None:
    mocker.patch.object(UploadHandler, "handle_upload", side_effect=PersistFailed("disk full"))

    response = client.post(
        "/uploads",
        files={"file": ("a.jpg", make_jpeg(orientation=3).read_bytes(), "image/jpeg")},
    )

    assert response.status_code == 500


def test_dependencies_require_token(client: TestClient) -> None:
    assert client.get("/health/dependencies").status_code == 401
    assert client.get("/health/dependencies", headers={"X-Internal-Token": "nope"}).status_code == 401


def test_dependencies_report(client: TestClient) -> None:
    response = client.get("/health/dependencies", headers={"X-Internal-Token": "secret"})

    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["pngcrush", "jpegoptim"]
    assert not any(item["success"] for item in response.json())


def test_dependencies_unavailable_without_token(settings: Settings) -> None:
    client = TestClient(create_app(Settings(media_root=settings.media_root)))

    assert client.get("/health/dependencies").status_code == 503


def test_unwritable_format_upload_is_accepted(client: TestClient, make_sun_raster) -> None:
    data = make_sun_raster(size=40).read_bytes()

    response = client.post("/uploads", files={"file": ("scan.ras", data, "image/x-sun-raster")})

    assert response.status_code == 201
    assert response.json()["renditions"] == []
    assert Path(response.json()["file"]).read_bytes() == data
