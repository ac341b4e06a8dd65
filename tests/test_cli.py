"""CLI tests (Typer CliRunner) with the mock AI client and a patched camera."""

import io
from unittest.mock import patch

import pytest
from PIL import Image
from typer.testing import CliRunner

from floral_admin.capture.camera import CaptureSession
from floral_admin.cli import app
from tests.fakes import FakeVideoCapture

pytestmark = [pytest.mark.fast]

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The CLI callback reconfigures root logging; put the previous handlers back."""
    import logging

    root = logging.getLogger()
    saved = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
    for h in saved[0]:
        root.addHandler(h)
    root.setLevel(saved[1])


@pytest.fixture
def photo(tmp_path, make_image_bytes):
    path = tmp_path / "ramo.png"
    path.write_bytes(make_image_bytes(2400, 1800))
    return path


def test_normalize_writes_bounded_jpeg(tmp_path, photo):
    out = tmp_path / "out.jpg"
    result = runner.invoke(app, ["normalize", str(photo), "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert "1200x900" in result.output
    with Image.open(out) as img:
        assert img.format == "JPEG"
        assert img.size == (1200, 900)


def test_normalize_prints_data_uri(photo):
    result = runner.invoke(app, ["normalize", str(photo)])
    assert result.exit_code == 0
    assert "data:image/jpeg;base64," in result.output


def test_normalize_bad_file_exits_1(tmp_path):
    bad = tmp_path / "bad.jpg"
    bad.write_bytes(b"nope")
    result = runner.invoke(app, ["normalize", str(bad)])
    assert result.exit_code == 1
    assert "cannot decode" in result.output


def test_analyze_with_mock_client(photo):
    result = runner.invoke(app, ["analyze", str(photo), "--client", "mock"])
    assert result.exit_code == 0
    assert "red roses" in result.output


def test_analyze_without_key_exits_1_with_fallback(photo):
    result = runner.invoke(app, ["analyze", str(photo), "--client", "gemini"])
    assert result.exit_code == 1
    assert "Error al conectar con el Arquitecto Floral." in result.output
    assert "credential_missing" in result.output


def test_refine_with_mock_client(photo):
    result = runner.invoke(
        app,
        ["refine", str(photo), "--instruction", "add ribbon", "--previous", "white lilies", "--client", "mock"],
    )
    assert result.exit_code == 0
    assert "white lilies, add ribbon" in result.output


def test_sentiment_with_mock_client():
    result = runner.invoke(app, ["sentiment", "Ana", "cumpleaños", "--client", "mock"])
    assert result.exit_code == 0
    assert "Para Ana, con mucho cariño en tu cumpleaños." in result.output


def test_inspire_reports_no_result():
    result = runner.invoke(app, ["inspire", "sunflowers", "--client", "mock"])
    assert result.exit_code == 0
    assert "(no result)" in result.output


def test_capture_writes_frame(tmp_path):
    out = tmp_path / "still.jpg"

    def _session(camera_index=None):
        return CaptureSession(camera_index, device_factory=lambda i: FakeVideoCapture(i, frame_size=(800, 600)))

    with patch("floral_admin.cli.CaptureSession", side_effect=_session):
        result = runner.invoke(app, ["capture", "--out", str(out)])
    assert result.exit_code == 0, result.output
    with Image.open(io.BytesIO(out.read_bytes())) as img:
        assert img.size == (800, 600)


def test_capture_unavailable_exits_1():
    def _session(camera_index=None):
        return CaptureSession(camera_index, device_factory=lambda i: FakeVideoCapture(i, opened=False))

    with patch("floral_admin.cli.CaptureSession", side_effect=_session):
        result = runner.invoke(app, ["capture", "--camera-index", "1"])
    assert result.exit_code == 1
    assert "No se pudo acceder a la cámara" in result.output


def test_config_masks_api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "AIzaSySECRET9876")
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "AIzaSySECRET9876" not in result.output
    assert "9876" in result.output
    assert "gemini-1.5-flash" in result.output


def test_config_option_loads_file(tmp_path):
    cfg = tmp_path / "floral_admin.yml"
    cfg.write_text("ai_client: mock\nmax_image_edge: 640\n")
    result = runner.invoke(app, ["--config", str(cfg), "config"])
    assert result.exit_code == 0
    assert "640" in result.output


def test_unknown_client_exits_1():
    result = runner.invoke(app, ["sentiment", "Ana", "boda", "--client", "openai"])
    assert result.exit_code == 1
    assert "Unknown AI client: openai" in result.output
    assert not isinstance(result.exception, ValueError)
