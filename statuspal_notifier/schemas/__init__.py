"""Pydantic schemas for alerts and notifier configuration."""

from statuspal_notifier.schemas.alert import Alert, AlertStatus, alerts_status
from statuspal_notifier.schemas.config import HTTPClientConfig, NotifierConfig, TLSConfig

__all__ = [
    "Alert",
    "AlertStatus",
    "HTTPClientConfig",
    "NotifierConfig",
    "TLSConfig",
    "alerts_status",
]
