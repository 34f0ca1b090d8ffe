"""Notification payload and error-detail values.

Callers pick one of NoDetails, MessageDetails or StructuredDetails before
asking for an error notification; the formatter never inspects raw causes.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class NotificationPayload:
    """JSON body posted to the webhook. No size cap is enforced here."""

    content: str

    def to_dict(self) -> dict[str, str]:
        return {"content": self.content}


@dataclass(frozen=True)
class NoDetails:
    """No diagnostic detail is available for an error notification."""


@dataclass(frozen=True)
class MessageDetails:
    """Plain-text diagnostic detail, used verbatim."""

    text: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "MessageDetails":
        """Use the traceback when the exception was raised, else its message."""

        if exc.__traceback__ is not None:
            return cls("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip())
        return cls(str(exc) or type(exc).__name__)


@dataclass(frozen=True)
class StructuredDetails:
    """Arbitrary structured value, rendered as pretty-printed JSON."""

    value: Any


ErrorDetails = Union[NoDetails, MessageDetails, StructuredDetails]

NO_DETAILS = NoDetails()
