"""Ports (interfaces) used by the notification dispatcher.

Ports define the minimal contracts for formatting and delivery so that the
dispatcher can be reused with different channels or test doubles.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Protocol

from core.models import ErrorDetails, NotificationPayload

# Completes on delivery, raises TransportError on failure.
TransportFunction = Callable[[str, NotificationPayload], Awaitable[None]]


class FormatterPort(Protocol):
    """Formatting operations required by the dispatcher."""

    def format_info(self, message: str) -> str:
        ...

    def format_error(self, message: str, details: ErrorDetails = ...) -> str:
        ...
