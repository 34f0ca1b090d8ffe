"""Static configuration for the autouploader.

All user-editable settings (Twitch, OBS, OpenAI, YouTube, Discord, logging)
live in a single JSON file. Validation is strict and happens once, at
startup, so a misconfigured deployment never starts.
"""

from __future__ import annotations

import json
import math
import os
from typing import Any

from dotenv import load_dotenv

from core.config import (
    AppConfig,
    DiscordConfig,
    LoggingConfig,
    ObsConfig,
    OpenAiConfig,
    TwitchConfig,
    YoutubeConfig,
)
from core.errors import ConfigurationError

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Default location, relative to the installation root. Only meaningful for a
# source checkout or editable install; a regular install lives in site-packages.
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "config.json")

# Used when CONFIG_PATH does not exist (e.g. a non-editable install).
WORKING_DIR_CONFIG = os.path.join("config", "config.json")

# Environment variable (or .env entry) that points at another config file.
CONFIG_PATH_ENV = "AUTOUPLOADER_CONFIG"


def resolve_config_path() -> str:
    """Return the config path.

    Order: AUTOUPLOADER_CONFIG (environment or .env), the installation-root
    config, then config/config.json under the current working directory.
    """

    load_dotenv()
    override = os.getenv(CONFIG_PATH_ENV)
    if override:
        return override
    if os.path.exists(CONFIG_PATH):
        return CONFIG_PATH
    return os.path.abspath(WORKING_DIR_CONFIG)


def _read_json(path: str) -> Any:
    if not os.path.exists(path):
        raise ConfigurationError(f"Configuration file not found at {path}")

    try:
        with open(path, "r", encoding="utf-8") as handle:
            return json.load(handle)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Configuration file is not valid JSON: {exc}") from exc


def _require_section(root: dict, label: str) -> dict:
    value = root.get(label)
    if not isinstance(value, dict):
        raise ConfigurationError(f'Configuration section "{label}" is missing or invalid.')
    return value


def _require_string(section: dict, key: str, label: str) -> str:
    value = section.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f'Configuration value "{label}.{key}" must be a non-empty string.')
    return value


def _require_number(section: dict, key: str, label: str) -> float:
    value = section.get(key)
    # bool is an int subclass, but JSON true/false is not a number.
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigurationError(f'Configuration value "{label}.{key}" must be a finite number.')
    if value <= 0:
        raise ConfigurationError(f'Configuration value "{label}.{key}" must be greater than 0.')
    return value


def _optional(section: dict, key: str, kind: type, default: Any, label: str) -> Any:
    if key not in section:
        return default
    value = section[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigurationError(
            f'Configuration value "{label}.{key}" must be of type {kind.__name__}.'
        )
    return value


def _load_logging(root: dict) -> LoggingConfig:
    """Parse the optional logging section; absent means defaults."""

    raw = root.get("logging")
    if raw is None:
        return LoggingConfig()
    if not isinstance(raw, dict):
        raise ConfigurationError('Configuration section "logging" is missing or invalid.')

    defaults = LoggingConfig()
    file_cfg = raw.get("file", {})
    if not isinstance(file_cfg, dict):
        raise ConfigurationError('Configuration section "logging.file" is missing or invalid.')

    return LoggingConfig(
        enabled=_optional(raw, "enabled", bool, defaults.enabled, "logging"),
        level=_optional(raw, "level", str, defaults.level, "logging").upper(),
        console=_optional(raw, "console", bool, defaults.console, "logging"),
        file_enabled=_optional(file_cfg, "enabled", bool, defaults.file_enabled, "logging.file"),
        file_path=_optional(file_cfg, "path", str, defaults.file_path, "logging.file"),
        max_bytes=_optional(file_cfg, "max_bytes", int, defaults.max_bytes, "logging.file"),
        backup_count=_optional(file_cfg, "backup_count", int, defaults.backup_count, "logging.file"),
        redact=_optional(raw, "redact", bool, defaults.redact, "logging"),
    )


def load_config(path: str = CONFIG_PATH) -> AppConfig:
    """Load and validate the configuration file.

    Raises ConfigurationError naming the offending section or key on the
    first violation. Nothing is defaulted for required values.
    """

    root = _read_json(path)
    if not isinstance(root, dict):
        raise ConfigurationError('Configuration section "config" is missing or invalid.')

    twitch = _require_section(root, "twitch")
    obs = _require_section(root, "obs")
    openai = _require_section(root, "openai")
    youtube = _require_section(root, "youtube")
    discord = _require_section(root, "discord")

    return AppConfig(
        twitch=TwitchConfig(
            client_id=_require_string(twitch, "clientId", "twitch"),
            client_secret=_require_string(twitch, "clientSecret", "twitch"),
            broadcaster_id=_require_string(twitch, "broadcasterId", "twitch"),
            poll_interval_seconds=_require_number(twitch, "pollIntervalSeconds", "twitch"),
        ),
        obs=ObsConfig(
            recordings_path=_require_string(obs, "recordingsPath", "obs"),
        ),
        openai=OpenAiConfig(
            api_key=_require_string(openai, "apiKey", "openai"),
            model=_require_string(openai, "model", "openai"),
            prompt_version=_require_string(openai, "promptVersion", "openai"),
        ),
        youtube=YoutubeConfig(
            client_id=_require_string(youtube, "clientId", "youtube"),
            client_secret=_require_string(youtube, "clientSecret", "youtube"),
            redirect_uri=_require_string(youtube, "redirectUri", "youtube"),
            refresh_token=_require_string(youtube, "refreshToken", "youtube"),
        ),
        discord=DiscordConfig(
            webhook_url=_require_string(discord, "webhookUrl", "discord"),
        ),
        logging=_load_logging(root),
    )
