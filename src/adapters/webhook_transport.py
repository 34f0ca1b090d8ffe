"""Discord webhook transport adapter.

Posts a JSON payload to a webhook URL and turns every failure into a
TransportError so the dispatcher has a single thing to catch.
"""

from __future__ import annotations

import asyncio
import http.client
import json
import re
import ssl
import urllib.error
import urllib.request
from typing import Optional
from urllib.parse import urlsplit

from core.errors import TransportError, TransportErrorKind
from core.models import NotificationPayload

NO_RESPONSE_BODY = "No response body"

_DISALLOWED_URL_CHARS = re.compile(r"[\x00-\x20\x7f]")


def _invalid_url(reason: str, cause: Optional[BaseException] = None) -> TransportError:
    # The URL itself carries the webhook token, so it never goes into the message.
    return TransportError(
        TransportErrorKind.INVALID_URL,
        f"Discord webhook URL is invalid: {reason}",
        cause=cause,
    )


def _validate_url(url: str) -> None:
    if _DISALLOWED_URL_CHARS.search(url):
        raise _invalid_url("contains whitespace or control characters")
    try:
        parts = urlsplit(url)
        # Accessing .port raises ValueError for non-numeric or out-of-range ports.
        parts.port
    except ValueError as exc:
        raise _invalid_url(str(exc), exc) from exc
    if parts.scheme not in ("http", "https"):
        raise _invalid_url("scheme must be http or https")
    if not parts.hostname:
        raise _invalid_url("missing host")
    try:
        parts.hostname.encode("idna")
    except UnicodeError as exc:
        raise _invalid_url(f"bad host name ({exc})", exc) from exc


def _ssl_context(url: str) -> Optional[ssl.SSLContext]:
    if urlsplit(url).scheme == "https":
        return ssl.create_default_context()
    return None


def _bad_status(status: int, raw_body: bytes) -> TransportError:
    body = raw_body.decode("utf-8", errors="replace") or NO_RESPONSE_BODY
    return TransportError(
        TransportErrorKind.BAD_STATUS,
        f"Discord webhook responded with status {status}: {body}",
        status=status,
        body=body,
    )


def _post_json(url: str, payload: NotificationPayload) -> None:
    """Blocking POST; runs in a worker thread."""

    data = json.dumps(payload.to_dict(), ensure_ascii=False).encode("utf-8")
    request = urllib.request.Request(url, data=data, method="POST")
    request.add_header("Content-Type", "application/json")
    # Byte length, not character length, so multi-byte content is counted right.
    request.add_header("Content-Length", str(len(data)))
    try:
        with urllib.request.urlopen(request, context=_ssl_context(url)) as response:
            status = int(response.status or 0)
            # Drain the body before deciding so the connection is released.
            raw_body = response.read()
    except urllib.error.HTTPError as exc:
        try:
            raw_body = exc.read()
        finally:
            exc.close()
        raise _bad_status(exc.code, raw_body) from exc
    except (urllib.error.URLError, http.client.HTTPException, OSError, UnicodeError) as exc:
        # UnicodeError: IDNA encoding of the host during name resolution.
        raise TransportError(
            TransportErrorKind.NETWORK_ERROR,
            f"Discord webhook request failed: {exc}",
            cause=exc,
        ) from exc

    if status < 200 or status >= 300:
        raise _bad_status(status, raw_body)


async def send_webhook(url: str, payload: NotificationPayload) -> None:
    """Send one payload to the webhook.

    The URL is checked before any network activity. No retries and no explicit
    timeout; the platform default applies.
    """

    _validate_url(url)
    await asyncio.to_thread(_post_json, url, payload)
