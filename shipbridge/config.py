"""YAML configuration loader with env var resolution and Pydantic validation.

Loads config from (priority order):
1. An explicit path passed to :func:`load_config`
2. ./shipbridge.yaml (working directory)
3. ~/.shipbridge/config.yaml (user home)

Environment variables override YAML: SHIPBRIDGE_<SECTION>_<KEY>, or
SHIPBRIDGE_<KEY> for top-level settings such as ``debug``.
${VAR} references in YAML values resolve from environment at load time.

Builders and parsers never read configuration; only service facades and
callers do.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel

from shipbridge.services.ship_engine.codes import BASE_URL as SHIP_ENGINE_BASE_URL

logger = logging.getLogger(__name__)

ENV_PREFIX = "SHIPBRIDGE_"
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def resolve_env_vars(value: str) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Missing env vars resolve to empty string.
    """
    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    return data


class LoggingConfig(BaseModel):
    """Settings for :func:`shipbridge.logging_config.configure_logging`."""

    level: str = "info"
    format: Literal["text", "json"] = "text"


class ShipEngineConfig(BaseModel):
    """ShipEngine API credentials and endpoint."""

    api_key: str = ""
    base_url: str = SHIP_ENGINE_BASE_URL
    timeout: float = 30.0


class UPSConfig(BaseModel):
    """UPS account used for rate and freight requests."""

    shipper_number: str = ""
    access_license_number: str = ""
    user_id: str = ""
    password: str = ""


class USPSConfig(BaseModel):
    """USPS Web Tools account."""

    user_id: str = ""


class ShipBridgeConfig(BaseModel):
    """Top-level shipbridge configuration."""

    debug: bool = False
    logging: LoggingConfig = LoggingConfig()
    ship_engine: ShipEngineConfig = ShipEngineConfig()
    ups: UPSConfig = UPSConfig()
    usps: USPSConfig = USPSConfig()


_SECTIONS = tuple(
    name for name, field in ShipBridgeConfig.model_fields.items()
    if isinstance(field.default, BaseModel)
)


def _find_config_file() -> Path | None:
    """Search for a config file in the standard locations."""
    candidates = [
        Path.cwd() / "shipbridge.yaml",
        Path.cwd() / "shipbridge.yml",
        Path.home() / ".shipbridge" / "config.yaml",
        Path.home() / ".shipbridge" / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply SHIPBRIDGE_<SECTION>_<KEY> env var overrides to config data.

    Sections match by longest prefix, so ``SHIPBRIDGE_SHIP_ENGINE_API_KEY``
    maps to section ``ship_engine``, field ``api_key``. Values stay strings;
    pydantic coerces them to the field type.
    """
    known_sections = sorted(_SECTIONS, key=len, reverse=True)
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        suffix = key[len(ENV_PREFIX):].lower()
        if suffix in ShipBridgeConfig.model_fields and suffix not in _SECTIONS:
            data[suffix] = value
            continue
        for section in known_sections:
            section_prefix = section + "_"
            if suffix.startswith(section_prefix) and len(suffix) > len(section_prefix):
                section_data = data.setdefault(section, {})
                if isinstance(section_data, dict):
                    section_data[suffix[len(section_prefix):]] = value
                break
    return data


def load_config(config_path: str | None = None) -> ShipBridgeConfig:
    """Load configuration from YAML with env var resolution.

    Args:
        config_path: Explicit path to a config file. If None, searches
            the standard locations; without a file, defaults plus env
            overrides are returned.

    Returns:
        Validated ShipBridgeConfig.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        pydantic.ValidationError: If a value has the wrong type.
    """
    if config_path:
        path: Path | None = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = _find_config_file()

    raw_data: dict[str, Any] = {}
    if path is not None:
        logger.info("Loading config from %s", path)
        with open(path) as f:
            raw_data = yaml.safe_load(f) or {}

    data = _resolve_env_vars_recursive(raw_data)
    data = _apply_env_overrides(data)
    return ShipBridgeConfig(**data)
