from __future__ import annotations

import asyncio
import copy
import json
import logging
from pathlib import Path

import pytest

import app
from adapters.webhook_transport import send_webhook
from test_settings import VALID_CONFIG


def test_redacting_formatter_masks_secrets() -> None:
    formatter = app.RedactingFormatter(["https://discord.com/api/webhooks/1/token"], fmt="%(message)s")
    record = logging.LogRecord(
        "core.dispatcher",
        logging.ERROR,
        __file__,
        1,
        "POST %s failed",
        ("https://discord.com/api/webhooks/1/token",),
        None,
    )

    assert formatter.format(record) == "POST *** failed"


def test_start_returns_wired_dispatcher(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(VALID_CONFIG), encoding="utf-8")

    config, dispatcher = app.start(str(path))

    assert config.twitch.broadcaster_id == "123456"
    assert dispatcher.transport is send_webhook
    assert not dispatcher.is_overridden


def test_start_exits_on_invalid_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"twitch": {}}), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        app.start(str(path))

    assert excinfo.value.code == 1
    assert "Configuration error:" in capsys.readouterr().err


def test_configure_logging_disabled_adds_no_handlers() -> None:
    assert app.configure_logging(app.LoggingConfig(), []) == []


def test_configure_logging_writes_redacted_file(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "autouploader.log"
    config = app.LoggingConfig(
        enabled=True,
        console=False,
        file_enabled=True,
        file_path=str(log_path),
    )

    handlers = app.configure_logging(config, ["sk-test"])
    try:
        (handler,) = handlers
        record = logging.LogRecord("app", logging.INFO, __file__, 1, "key=%s", ("sk-test",), None)
        handler.emit(record)
        handler.flush()
    finally:
        for handler in handlers:
            logging.getLogger().removeHandler(handler)
            handler.close()

    assert "key=***" in log_path.read_text(encoding="utf-8")


def test_start_prints_started_line_when_logging_is_disabled(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(VALID_CONFIG), encoding="utf-8")

    app.start(str(path))

    assert "StreamerTools AutoUploader started (config loaded for broadcaster 123456)" in capsys.readouterr().out


def test_bad_webhook_url_does_not_leak_token_with_default_logging(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    data = copy.deepcopy(VALID_CONFIG)
    data["discord"]["webhookUrl"] = "discord.com/api/webhooks/1/SECRET-TOKEN"
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    _, dispatcher = app.start(str(path))
    with caplog.at_level(logging.ERROR, logger="core.dispatcher"):
        asyncio.run(dispatcher.log_info("upload finished"))

    assert "invalid_url" in caplog.text
    assert "SECRET-TOKEN" not in caplog.text


def test_redacting_formatter_masks_longest_secret_whole() -> None:
    formatter = app.RedactingFormatter(["token", "https://hooks.example/token"], fmt="%(message)s")
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "url=https://hooks.example/token", None, None)

    assert formatter.format(record) == "url=***"
