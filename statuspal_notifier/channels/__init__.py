"""Base types for the notification channel adapter."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from statuspal_notifier.errors import MissingGroupKeyError


@dataclass
class ChannelPayload:
    """Represents the HTTP request payload for a notification channel."""
    method: str
    url: str
    headers: dict[str, str]
    body: str  # JSON string


@dataclass(frozen=True)
class NotifyContext:
    """Per-notification information supplied by the alert grouping layer."""
    group_key: Optional[str] = None
    receiver: str = ""
    group_labels: dict[str, str] = field(default_factory=dict)
    external_url: str = ""
    logger: Optional[logging.Logger] = None

    def require_group_key(self) -> str:
        if not self.group_key:
            raise MissingGroupKeyError()
        return self.group_key

    def get_logger(self, default: logging.Logger) -> logging.Logger:
        return self.logger or default
