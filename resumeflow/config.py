"""
Runtime configuration.

Settings are resolved in three layers, later layers winning:

1. Built-in defaults.
2. An optional YAML file (``--config`` on the CLI or the
   ``RESUMEFLOW_CONFIG`` environment variable) whose top-level keys
   match the :class:`Settings` field names.
3. Environment variables (a ``.env`` file in the working directory is
   loaded first via python-dotenv).

The Google Cloud project id is needed to address Vertex AI.  When it is
missing a warning is logged; the SDK may still resolve it from
application default credentials.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Dict, Optional

import yaml  # type: ignore
from dotenv import load_dotenv

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_FLASH_MODEL = "gemini-3-flash-preview"
DEFAULT_PRO_MODEL = "gemini-3-pro-preview"

# Settings field -> environment variable
ENV_VARS: Dict[str, str] = {
    "project_id": "GOOGLE_CLOUD_PROJECT_ID",
    "location": "GOOGLE_CLOUD_LOCATION",
    "flash_model": "GEMINI_FLASH_MODEL",
    "pro_model": "GEMINI_PRO_MODEL",
    "tts_language_code": "TTS_LANGUAGE_CODE",
    "tts_voice_name": "TTS_VOICE_NAME",
    "log_level": "LOG_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for the generative and speech clients."""

    project_id: str = ""
    location: str = "global"
    flash_model: str = DEFAULT_FLASH_MODEL
    pro_model: str = DEFAULT_PRO_MODEL
    tts_language_code: str = "en-IN"
    tts_voice_name: str = "en-IN-Wavenet-D"
    log_level: str = "INFO"


def _load_yaml(config_path: str) -> Dict[str, object]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config file {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Build :class:`Settings` from defaults, YAML and the environment.

    Args:
        config_path: Optional path to a YAML file.  Falls back to the
            ``RESUMEFLOW_CONFIG`` environment variable.

    Returns:
        The resolved settings.

    Raises:
        ConfigError: If the YAML file cannot be read or is not a mapping.
    """
    load_dotenv()
    known = {f.name for f in fields(Settings)}
    values: Dict[str, str] = {}

    path = config_path or os.getenv("RESUMEFLOW_CONFIG")
    if path:
        for key, value in _load_yaml(path).items():
            if key not in known:
                logger.warning("Ignoring unknown config key '%s' in %s", key, path)
                continue
            if value is not None:
                values[key] = str(value)

    for name, env_name in ENV_VARS.items():
        env_value = (os.getenv(env_name) or "").strip()
        if env_value:
            values[name] = env_value

    settings = replace(Settings(), **values)
    if not settings.project_id:
        logger.warning("GOOGLE_CLOUD_PROJECT_ID is not set.")
    return settings
