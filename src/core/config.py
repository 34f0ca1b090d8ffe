"""Validated configuration for the uploader and its notifications.

One frozen dataclass per section of config.json (Twitch, OBS, OpenAI, YouTube,
Discord, optional logging). settings.load_config is the only producer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TwitchConfig:
    """Credentials and polling cadence for the Twitch API."""

    client_id: str
    client_secret: str
    broadcaster_id: str
    poll_interval_seconds: float


@dataclass(frozen=True)
class ObsConfig:
    """Where OBS writes finished recordings."""

    recordings_path: str


@dataclass(frozen=True)
class OpenAiConfig:
    api_key: str
    model: str
    prompt_version: str


@dataclass(frozen=True)
class YoutubeConfig:
    """OAuth client settings used for YouTube uploads."""

    client_id: str
    client_secret: str
    redirect_uri: str
    refresh_token: str


@dataclass(frozen=True)
class DiscordConfig:
    """Notification webhook settings consumed by the dispatcher."""

    webhook_url: str


@dataclass(frozen=True)
class LoggingConfig:
    """Optional local logging settings (all fields have safe defaults)."""

    enabled: bool = False
    level: str = "INFO"
    console: bool = True
    file_enabled: bool = False
    file_path: str = "logs/autouploader.log"
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 5
    redact: bool = True


@dataclass(frozen=True)
class AppConfig:
    """Fully validated application configuration."""

    twitch: TwitchConfig
    obs: ObsConfig
    openai: OpenAiConfig
    youtube: YoutubeConfig
    discord: DiscordConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def secrets(self) -> list[str]:
        """Return values that must never appear in local logs."""

        values: list[Optional[str]] = [
            self.discord.webhook_url,
            self.twitch.client_secret,
            self.openai.api_key,
            self.youtube.client_secret,
            self.youtube.refresh_token,
        ]
        # Longest first so a secret containing another is masked whole.
        return sorted({value for value in values if value}, key=len, reverse=True)
