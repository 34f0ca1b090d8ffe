"""Error types for configuration loading and webhook delivery."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class AutoUploaderError(Exception):
    """Base error for autouploader failures."""


class ConfigurationError(AutoUploaderError):
    """Raised when the configuration file is missing or invalid.

    Always fatal: startup reports the message and exits.
    """


class TransportErrorKind(str, Enum):
    INVALID_URL = "invalid_url"
    BAD_STATUS = "bad_status"
    NETWORK_ERROR = "network_error"


class TransportError(AutoUploaderError):
    """Raised when a webhook request cannot be delivered.

    ``status`` and ``body`` are only set for ``BAD_STATUS``. The underlying
    exception of a ``NETWORK_ERROR`` is kept on ``cause`` and chained.
    """

    def __init__(
        self,
        kind: TransportErrorKind,
        message: str,
        *,
        status: Optional[int] = None,
        body: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status = status
        self.body = body
        self.cause = cause
