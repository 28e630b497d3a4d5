"""Deliver alert batches to Statuspal as incident updates."""

__version__ = "0.1.0"

from statuspal_notifier.base import DispatchOutcome, Notifier
from statuspal_notifier.channels import NotifyContext
from statuspal_notifier.errors import (
    ConfigError,
    MissingGroupKeyError,
    NotifyError,
    TemplateRenderError,
    TransportError,
    UnexpectedStatusError,
)
from statuspal_notifier.notifier import StatuspalNotifier
from statuspal_notifier.retry import Retrier, classify
from statuspal_notifier.schemas import Alert, AlertStatus, HTTPClientConfig, NotifierConfig

__all__ = [
    "Alert",
    "AlertStatus",
    "ConfigError",
    "DispatchOutcome",
    "HTTPClientConfig",
    "MissingGroupKeyError",
    "Notifier",
    "NotifierConfig",
    "NotifyContext",
    "NotifyError",
    "Retrier",
    "StatuspalNotifier",
    "TemplateRenderError",
    "TransportError",
    "UnexpectedStatusError",
    "classify",
]
