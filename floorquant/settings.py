"""ConfigManager — environment profiles and engine settings."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

from floorquant.config import (
    CELL_DEBOUNCE_SECONDS,
    DEFAULT_PUMP_CAR_COUNT,
    FORM_AUTOSAVE_SECONDS,
)

logger = logging.getLogger(__name__)


class EngineSettings(BaseModel):
    """Typed view of the flat configuration."""

    env: str = "development"
    log_level: str = "INFO"
    cell_debounce_seconds: float = Field(default=CELL_DEBOUNCE_SECONDS, ge=0)
    form_autosave_seconds: float = Field(default=FORM_AUTOSAVE_SECONDS, ge=0)
    pump_car_max: int = Field(default=DEFAULT_PUMP_CAR_COUNT, ge=1)
    store_url: str = ""
    store_token: str = ""
    store_timeout: float = 10

    @classmethod
    def from_config(cls, config: dict[str, str]) -> EngineSettings:
        """Build settings from ``FLOORQUANT_*`` keys; unknown keys are ignored."""
        values = {field: config[key] for key, (field, _) in _CONFIG_KEYS.items() if key in config}
        return cls(**values)

    @classmethod
    def load(cls, project_path: str | Path = ".") -> EngineSettings:
        return cls.from_config(ConfigManager().load_config(project_path))


# Environment key -> (EngineSettings field, description)
_CONFIG_KEYS: dict[str, tuple[str, str]] = {
    "FLOORQUANT_ENV": ("env", "Environment profile (development, production, testing)"),
    "FLOORQUANT_LOG_LEVEL": ("log_level", "Level of the floorquant logger"),
    "FLOORQUANT_CELL_DEBOUNCE": ("cell_debounce_seconds", "Seconds a height or quantity edit waits before it is written"),
    "FLOORQUANT_FORM_AUTOSAVE": ("form_autosave_seconds", "Seconds the basic-info form waits before it is saved"),
    "FLOORQUANT_PUMP_CAR_MAX": ("pump_car_max", "Pump cars per pour when the building sets none"),
    "FLOORQUANT_STORE_URL": ("store_url", "Record store base URL; empty keeps records in memory"),
    "FLOORQUANT_STORE_TOKEN": ("store_token", "Record store bearer token (secret)"),
    "FLOORQUANT_STORE_TIMEOUT": ("store_timeout", "Record store request timeout in seconds"),
}

_PROFILES: dict[str, dict[str, str]] = {
    "development": {
        "FLOORQUANT_LOG_LEVEL": "DEBUG",
    },
    "production": {
        "FLOORQUANT_LOG_LEVEL": "WARNING",
        "FLOORQUANT_STORE_TIMEOUT": "30",
    },
    "testing": {
        "FLOORQUANT_LOG_LEVEL": "DEBUG",
        "FLOORQUANT_CELL_DEBOUNCE": "0.01",
        "FLOORQUANT_FORM_AUTOSAVE": "0.01",
        "FLOORQUANT_STORE_URL": "",
    },
}


def _defaults() -> dict[str, str]:
    fields = EngineSettings().model_dump()
    return {key: str(fields[field]) for key, (field, _) in _CONFIG_KEYS.items()}


def _read_config_json(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        logger.debug("Could not read %s", path, exc_info=True)
        return {}
    return {str(k): str(v) for k, v in data.items()}


def _read_env_file(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    values: dict[str, str] = {}
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.debug("Could not read %s", path, exc_info=True)
        return {}
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()
    return values


class ConfigManager:
    """Merge floorquant configuration from defaults, profiles, files and the environment."""

    def generate_env_template(self, project_path: str | Path) -> Path:
        """Write ``.env.example`` listing every key with its default."""
        env_path = Path(project_path) / ".env.example"
        defaults = _defaults()
        lines = ["# floorquant configuration", "# Copy to .env and adjust", ""]
        for key, (_, description) in _CONFIG_KEYS.items():
            lines.extend([f"# {description}", f"{key}={defaults[key]}", ""])
        env_path.write_text("\n".join(lines), encoding="utf-8")
        return env_path

    def load_config(self, project_path: str | Path) -> dict[str, str]:
        """Flat configuration, each layer overriding the one before.

        Layers: settings defaults, the ``FLOORQUANT_ENV`` profile,
        ``.floorquant/config.json``, ``.env``, then the process environment.
        """
        root = Path(project_path)
        config = _defaults()
        profile = os.environ.get("FLOORQUANT_ENV", config["FLOORQUANT_ENV"])
        config["FLOORQUANT_ENV"] = profile
        config.update(_PROFILES.get(profile, {}))
        config.update(_read_config_json(root / ".floorquant" / "config.json"))
        config.update(_read_env_file(root / ".env"))
        config.update({key: os.environ[key] for key in _CONFIG_KEYS if key in os.environ})
        return config


def configure_logging(settings: EngineSettings) -> None:
    """Apply the configured level to the package logger."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        logger.warning("Unknown log level %r; keeping INFO", settings.log_level)
        level = logging.INFO
    logging.getLogger("floorquant").setLevel(level)
