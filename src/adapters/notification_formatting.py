"""Discord notification formatting helpers.

Keeping formatting here prevents drift between info and error messages and
keeps the dispatcher unaware of Discord markdown.
"""

from __future__ import annotations

import json

from core.models import NO_DETAILS, ErrorDetails, MessageDetails, NoDetails, StructuredDetails

INFO_MARKER = "✅"
ERROR_MARKER = "❌"
ERROR_PHRASE = "Ha ocurrido un error:"
NO_DETAILS_TEXT = "Sin detalles."


def format_details(details: ErrorDetails) -> str:
    """Return the text placed inside the diagnostic code block."""

    if isinstance(details, MessageDetails):
        return details.text
    if isinstance(details, NoDetails):
        return NO_DETAILS_TEXT
    if isinstance(details, StructuredDetails):
        try:
            return json.dumps(details.value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            # Circular references and unserializable objects.
            return str(details.value)
    raise TypeError(f"Unsupported error details: {details!r}")


class NotificationFormatter:
    """Turns messages into the text posted to the webhook.

    Markers are opaque strings so the message copy can change without code
    changes.
    """

    def __init__(
        self,
        info_marker: str = INFO_MARKER,
        error_marker: str = ERROR_MARKER,
        error_phrase: str = ERROR_PHRASE,
    ) -> None:
        self._info_marker = info_marker
        self._error_marker = error_marker
        self._error_phrase = error_phrase

    def format_info(self, message: str) -> str:
        return f"{self._info_marker} {message}"

    def format_error(self, message: str, details: ErrorDetails = NO_DETAILS) -> str:
        """Error line followed by a fenced block with the diagnostic detail."""

        headline = f"{self._error_marker} {self._error_phrase} {message}"
        return f"{headline}\n```{format_details(details)}```"
