"""Tests for config (YAML + environment overrides) and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from floral_admin.core.config import ConfigLoader, get_config, reset_config
from floral_admin.core.logging import setup_logging

pytestmark = [pytest.mark.fast]


def test_defaults_without_config_file():
    """With no YAML and no env, defaults apply and the API key is missing."""
    cfg = get_config()
    assert cfg.gemini_api_key is None
    assert cfg.gemini_model == "gemini-1.5-flash"
    assert cfg.gemini_base_url == "https://generativelanguage.googleapis.com/v1beta"
    assert cfg.max_image_edge == 1200
    assert cfg.jpeg_quality == 85
    assert cfg.request_timeout_seconds is None


def test_settings_loads_from_yaml(tmp_path):
    """Settings loads correctly from a sample YAML."""
    yaml_path = tmp_path / "floral_admin.yml"
    yaml_path.write_text(
        """
gemini_api_key: from-file
gemini_model: gemini-2.0-flash
max_image_edge: 800
camera_index: 2
ai_client: mock
log_level: DEBUG
"""
    )
    cfg = get_config(config_path=yaml_path)
    assert cfg.gemini_api_key == "from-file"
    assert cfg.gemini_model == "gemini-2.0-flash"
    assert cfg.max_image_edge == 800
    assert cfg.camera_index == 2
    assert cfg.ai_client == "mock"
    assert cfg.log_level == "DEBUG"


def test_env_api_key_overrides_yaml(tmp_path):
    """GEMINI_API_KEY in the environment wins over the file value."""
    yaml_path = tmp_path / "floral_admin.yml"
    yaml_path.write_text("gemini_api_key: from-file\n")
    loader = ConfigLoader(env={"GEMINI_API_KEY": "from-env", "GEMINI_MODEL": "gemini-pro-vision"})
    cfg = loader.load_from_yaml(yaml_path)
    assert cfg.gemini_api_key == "from-env"
    assert cfg.gemini_model == "gemini-pro-vision"


def test_load_default_uses_config_env_var(tmp_path):
    """FLORAL_ADMIN_CONFIG points load_default at a specific file."""
    yaml_path = tmp_path / "custom.yml"
    yaml_path.write_text("jpeg_quality: 70\n")
    cfg = ConfigLoader(env={"FLORAL_ADMIN_CONFIG": str(yaml_path)}).load_default()
    assert cfg.jpeg_quality == 70


def test_blank_api_key_is_missing():
    cfg = ConfigLoader(env={"GEMINI_API_KEY": "   "}).load_default()
    assert cfg.gemini_api_key is None


def test_empty_yaml_gives_defaults(tmp_path):
    yaml_path = tmp_path / "floral_admin.yml"
    yaml_path.write_text("")
    cfg = ConfigLoader(env={}).load_from_yaml(yaml_path)
    assert cfg.max_image_edge == 1200


def test_missing_explicit_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        get_config(config_path=tmp_path / "nope.yml")


@pytest.mark.parametrize("field,value", [("jpeg_quality", 0), ("jpeg_quality", 101), ("max_image_edge", 0)])
def test_invalid_values_rejected(tmp_path, field, value):
    yaml_path = tmp_path / "floral_admin.yml"
    yaml_path.write_text(f"{field}: {value}\n")
    with pytest.raises(ValidationError):
        ConfigLoader(env={}).load_from_yaml(yaml_path)


def test_get_config_is_cached(monkeypatch):
    first = get_config()
    monkeypatch.setenv("GEMINI_API_KEY", "later")
    assert get_config() is first
    reset_config()
    assert get_config().gemini_api_key == "later"


def test_setup_logging_installs_single_handler():
    """Calling setup_logging twice leaves exactly one root handler at the requested level."""
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        setup_logging("DEBUG")
        setup_logging("WARNING")
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        setup_logging("not-a-level")
        assert root.level == logging.INFO
        setup_logging("DEBUG")
        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("requests").level == logging.WARNING
    finally:
        for h in root.handlers[:]:
            root.removeHandler(h)
        for h in saved[0]:
            root.addHandler(h)
        root.setLevel(saved[1])
        for name in ("urllib3", "requests"):
            logging.getLogger(name).setLevel(logging.NOTSET)
