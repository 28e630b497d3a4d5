"""Error types returned by the Statuspal notifier."""

from typing import Optional


class NotifyError(Exception):
    """Base class for every error the notifier returns or raises."""


class ConfigError(NotifyError):
    """Notifier configuration is invalid."""


class MissingGroupKeyError(NotifyError):
    """The notification context carries no group key."""

    def __init__(self, message: str = "group key missing"):
        super().__init__(message)


class TemplateRenderError(NotifyError):
    """A configured template failed to parse or render."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"failed to render {field}: {reason}")


class TransportError(NotifyError):
    """
    The request could not be completed.

    The message is already redacted and the originating exception is never
    attached as ``__cause__`` or ``__context__``.
    """

    def __init__(self, message: str, exc_type: Optional[str] = None):
        self.exc_type = exc_type
        super().__init__(message)


class UnexpectedStatusError(NotifyError):
    """The remote API answered with a non-2xx status code."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"unexpected status code {status_code}")
