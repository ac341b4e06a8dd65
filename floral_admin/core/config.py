"""Application configuration (Pydantic v2). Load from floral_admin.yml with env overrides."""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, field_validator


DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_MAX_IMAGE_EDGE = 1200
DEFAULT_JPEG_QUALITY = 85
DEFAULT_CONFIG_ENV_VAR = "FLORAL_ADMIN_CONFIG"
DEFAULT_CONFIG_FILENAME = "floral_admin.yml"
API_KEY_ENV = "GEMINI_API_KEY"
MODEL_ENV = "GEMINI_MODEL"


class Settings(BaseModel):
    """
    Admin panel config loaded from YAML.

    GEMINI_API_KEY and GEMINI_MODEL in the environment win over values from the file,
    so the credential can stay out of the YAML entirely.
    """

    model_config = {"extra": "ignore"}

    gemini_api_key: str | None = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    request_timeout_seconds: float | None = None
    max_image_edge: int = DEFAULT_MAX_IMAGE_EDGE
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    camera_index: int = 0
    ai_client: str = "gemini"
    log_level: str = "INFO"

    @field_validator("gemini_api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v: Any) -> str | None:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("max_image_edge")
    @classmethod
    def positive_edge(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_image_edge must be >= 1")
        return v

    @field_validator("jpeg_quality")
    @classmethod
    def quality_range(cls, v: int) -> int:
        if not 1 <= v <= 100:
            raise ValueError("jpeg_quality must be between 1 and 100")
        return v


_config: Settings | None = None


class ConfigLoader:
    """
    Helper responsible for loading Settings from YAML and environment.

    - load_from_yaml(path): read a YAML file and apply env overrides.
    - load_default(): resolve the config path from FLORAL_ADMIN_CONFIG / floral_admin.yml;
      fall back to defaults plus env overrides when no file exists.
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def _apply_env(self, data: dict) -> dict:
        if self._env.get(API_KEY_ENV):
            data["gemini_api_key"] = self._env[API_KEY_ENV]
        if self._env.get(MODEL_ENV):
            data["gemini_model"] = self._env[MODEL_ENV].strip()
        return data

    def load_from_yaml(self, path: Path) -> Settings:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = yaml.safe_load(f)
        if not data:
            data = {}
        return Settings.model_validate(self._apply_env(data))

    def load_default(self) -> Settings:
        path = Path(self._env.get(DEFAULT_CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILENAME)
        if path.exists():
            return self.load_from_yaml(path)
        return Settings.model_validate(self._apply_env({}))


def get_config(config_path: str | Path | None = None) -> Settings:
    """
    Return singleton config.

    - If config_path is given, load from it and update the cache.
    - Otherwise, return the cached config if available, or load via ConfigLoader.load_default().
    """
    global _config
    if config_path is not None:
        _config = ConfigLoader().load_from_yaml(Path(config_path))
        return _config
    if _config is not None:
        return _config
    _config = ConfigLoader().load_default()
    return _config


def reset_config() -> None:
    """Clear cached config (for tests)."""
    global _config
    _config = None
