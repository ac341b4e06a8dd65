"""Pytest fixtures: isolated config, generated images, a fake camera device."""

import io

import pytest
from PIL import Image

from floral_admin.core.config import reset_config
from tests.fakes import FakeVideoCapture


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Every test starts from default settings: no API key, no config file picked up from cwd."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    monkeypatch.setenv("FLORAL_ADMIN_CONFIG", str(tmp_path / "missing.yml"))
    reset_config()
    yield
    reset_config()


@pytest.fixture
def make_image_bytes():
    """Return a function (width, height, fmt="PNG", mode="RGB") -> encoded image bytes."""

    def _make(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
        color = (200, 30, 60, 128) if mode == "RGBA" else "red"
        img = Image.new(mode, (width, height), color=color)
        buffered = io.BytesIO()
        img.save(buffered, format=fmt)
        return buffered.getvalue()

    return _make


@pytest.fixture
def fake_camera():
    """Return a device-factory builder; keyword args configure the FakeVideoCapture it creates."""
    FakeVideoCapture.instances = []

    def _factory(**kwargs):
        def _build(index: int) -> FakeVideoCapture:
            return FakeVideoCapture(index, **kwargs)

        return _build

    return _factory
