import hashlib
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, Field, field_validator


class AlertStatus(str, Enum):
    FIRING = "firing"
    RESOLVED = "resolved"


def as_utc(value: datetime) -> datetime:
    """Return *value* in UTC, treating naive datetimes as already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Alert(BaseModel):
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    starts_at: datetime
    ends_at: Optional[datetime] = Field(None, description="Unset while the alert is still firing")
    generator_url: str = ""

    model_config = {"frozen": True}

    @field_validator("starts_at", "ends_at")
    @classmethod
    def _normalize_tz(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None

    def resolved(self, now: Optional[datetime] = None) -> bool:
        if self.ends_at is None:
            return False
        return self.ends_at <= (now or datetime.now(timezone.utc))

    @property
    def status(self) -> AlertStatus:
        return AlertStatus.RESOLVED if self.resolved() else AlertStatus.FIRING

    @property
    def fingerprint(self) -> str:
        """Stable identifier derived from the sorted label set."""
        digest = hashlib.sha256()
        for name in sorted(self.labels):
            digest.update(name.encode("utf-8"))
            digest.update(b"\xff")
            digest.update(self.labels[name].encode("utf-8"))
            digest.update(b"\xff")
        return digest.hexdigest()[:16]


def alerts_status(alerts: Sequence[Alert]) -> Optional[AlertStatus]:
    """
    Reduce a batch to a single status.

    Any firing alert makes the batch firing; a batch where every alert is
    resolved is resolved. An empty batch has no status and returns ``None``.
    """
    if not alerts:
        return None
    for alert in alerts:
        if alert.status == AlertStatus.FIRING:
            return AlertStatus.FIRING
    return AlertStatus.RESOLVED
