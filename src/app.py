"""Application entry point for the autouploader."""

from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint

import settings
from adapters.notification_formatting import NotificationFormatter
from adapters.webhook_transport import send_webhook
from core.config import AppConfig, LoggingConfig
from core.dispatcher import NotificationDispatcher
from core.errors import ConfigurationError
from core.ports import TransportFunction

APP_NAME = "StreamerTools AutoUploader"
NAME = "AUTOUPLOADER"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class RedactingFormatter(logging.Formatter):
    """Masks configured secrets (webhook URL, API keys, tokens) in every line."""

    def __init__(
        self,
        secrets: list[str],
        fmt: str,
        datefmt: Optional[str] = None,
        mask: str = "***",
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        # Longest first so a secret that contains another is masked whole.
        ordered = sorted({secret for secret in secrets if secret}, key=len, reverse=True)
        self._pattern = re.compile("|".join(re.escape(secret) for secret in ordered)) if ordered else None
        self._mask = mask

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if self._pattern is None:
            return message
        return self._pattern.sub(self._mask, message)


def configure_logging(config: LoggingConfig, secrets: list[str]) -> list[logging.Handler]:
    """Attach console/file handlers described by the logging section."""

    if not config.enabled:
        return []

    level = getattr(logging, config.level, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = RedactingFormatter(secrets if config.redact else [], fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if config.file_enabled:
        path = config.file_path
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        file_handler = RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if handlers:
        logging.basicConfig(level=level, handlers=handlers)
    return handlers


def build_dispatcher(
    config: AppConfig,
    transport: TransportFunction = send_webhook,
) -> NotificationDispatcher:
    """Wire the dispatcher to the configured webhook and the real transport."""

    return NotificationDispatcher(
        webhook_url=config.discord.webhook_url,
        formatter=NotificationFormatter(),
        transport=transport,
    )


def start(config_path: Optional[str] = None) -> tuple[AppConfig, NotificationDispatcher]:
    """Load configuration (fail-fast), set up logging and the dispatcher.

    Exits the process with status 1 when the configuration is invalid.
    """

    path = config_path or settings.resolve_config_path()
    try:
        config = settings.load_config(path)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    handlers = configure_logging(config.logging, config.secrets())
    dispatcher = build_dispatcher(config)
    started = f"{APP_NAME} started (config loaded for broadcaster {config.twitch.broadcaster_id})"
    if handlers:
        logging.getLogger(__name__).info(started)
    else:
        print(started)
    return config, dispatcher


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="autouploader")
    parser.add_argument("--config", help="Path to config.json (overrides AUTOUPLOADER_CONFIG)")
    args = parser.parse_args(argv)

    _print_banner()
    start(args.config)


if __name__ == "__main__":
    main()
