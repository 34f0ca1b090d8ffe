"""Best-effort notification dispatcher.

This module is integration-agnostic. It only relies on ports for formatting
and delivery; delivery failures are logged locally and never reach the caller.
"""

from __future__ import annotations

import logging

from core.errors import TransportError
from core.models import NO_DETAILS, ErrorDetails, NotificationPayload
from core.ports import FormatterPort, TransportFunction

LOGGER = logging.getLogger(__name__)


class NotificationDispatcher:
    """Formats messages and hands them to the active transport."""

    def __init__(
        self,
        webhook_url: str,
        formatter: FormatterPort,
        transport: TransportFunction,
    ) -> None:
        self._webhook_url = webhook_url
        self._formatter = formatter
        self._default_transport = transport
        self._transport = transport

    @property
    def transport(self) -> TransportFunction:
        return self._transport

    @property
    def is_overridden(self) -> bool:
        return self._transport is not self._default_transport

    def set_transport(self, transport: TransportFunction) -> None:
        """Replace the active transport, e.g. with an in-memory capture."""

        self._transport = transport

    def reset_transport(self) -> None:
        """Restore the transport given at construction."""

        self._transport = self._default_transport

    async def log_info(self, message: str) -> None:
        await self.dispatch(NotificationPayload(self._formatter.format_info(message)))

    async def log_error(self, message: str, details: ErrorDetails = NO_DETAILS) -> None:
        await self.dispatch(NotificationPayload(self._formatter.format_error(message, details)))

    async def dispatch(self, payload: NotificationPayload) -> None:
        """Deliver one payload; failures are logged, never raised."""

        try:
            await self._transport(self._webhook_url, payload)
        except TransportError as exc:
            LOGGER.error("Discord webhook failed (%s): %s", exc.kind.value, exc)
            return
        except Exception:
            # Custom transports may raise anything; none of it reaches the caller.
            LOGGER.exception("Discord webhook failed with an unexpected error")
            return
        LOGGER.debug("Discord notification delivered (%s chars)", len(payload.content))
