"""
Template rendering for notifier fields.

Every user-configurable string (API key, title, message, incident type) is a
Jinja2 template rendered against a TemplateData snapshot of the alert batch.
Rendering runs in a sandbox with StrictUndefined, so a reference to a missing
field is an error rather than an empty string.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import ImmutableSandboxedEnvironment, SandboxedEnvironment

from statuspal_notifier.errors import TemplateRenderError
from statuspal_notifier.schemas.alert import Alert, AlertStatus, alerts_status
from statuspal_notifier.security import redact_text


class AlertList(list):
    """List of alert dicts with ``firing`` / ``resolved`` views."""

    @property
    def firing(self) -> list:
        return [a for a in self if a["status"] == AlertStatus.FIRING.value]

    @property
    def resolved(self) -> list:
        return [a for a in self if a["status"] == AlertStatus.RESOLVED.value]


@dataclass(frozen=True)
class TemplateData:
    receiver: str
    status: str
    alerts: AlertList
    group_labels: dict[str, str] = field(default_factory=dict)
    common_labels: dict[str, str] = field(default_factory=dict)
    common_annotations: dict[str, str] = field(default_factory=dict)
    external_url: str = ""

    def as_context(self) -> dict[str, Any]:
        return {
            "receiver": self.receiver,
            "status": self.status,
            "alerts": self.alerts,
            "group_labels": self.group_labels,
            "common_labels": self.common_labels,
            "common_annotations": self.common_annotations,
            "external_url": self.external_url,
        }


def _common(maps: Sequence[dict[str, str]]) -> dict[str, str]:
    if not maps:
        return {}
    common = dict(maps[0])
    for m in maps[1:]:
        common = {k: v for k, v in common.items() if m.get(k) == v}
    return common


def _alert_dict(alert: Alert) -> dict[str, Any]:
    return {
        "status": alert.status.value,
        "labels": dict(alert.labels),
        "annotations": dict(alert.annotations),
        "starts_at": alert.starts_at,
        "ends_at": alert.ends_at,
        "generator_url": alert.generator_url,
        "fingerprint": alert.fingerprint,
    }


def get_template_data(
    alerts: Sequence[Alert],
    receiver: str = "",
    group_labels: Optional[dict[str, str]] = None,
    external_url: str = "",
) -> TemplateData:
    """Snapshot an alert batch into the values templates can reference."""
    status = alerts_status(alerts) or AlertStatus.FIRING
    return TemplateData(
        receiver=receiver,
        status=status.value,
        alerts=AlertList(_alert_dict(a) for a in alerts),
        group_labels=dict(group_labels or {}),
        common_labels=_common([a.labels for a in alerts]),
        common_annotations=_common([a.annotations for a in alerts]),
        external_url=external_url,
    )


def _format_time(value: datetime, fmt: str = "%Y-%m-%dT%H:%M:%SZ") -> str:
    return value.strftime(fmt)


class TemplateRenderer:
    """Renders template strings; safe to share between concurrent calls."""

    def __init__(self, env: Optional[SandboxedEnvironment] = None):
        self.env = env or ImmutableSandboxedEnvironment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=False,
        )
        self.env.filters.setdefault("time", _format_time)

    def render(
        self,
        template: str,
        data: TemplateData,
        name: str = "template",
        secret: bool = False,
    ) -> str:
        """
        Render *template*; raises TemplateRenderError on any failure.

        With ``secret=True`` the template source is scrubbed from the error
        message, for fields such as the API key.
        """
        if not template:
            return ""
        try:
            return self.env.from_string(template).render(data.as_context())
        except TemplateError as exc:
            reason = exc.message or exc.__class__.__name__
        except (TypeError, ValueError, ArithmeticError, LookupError) as exc:
            reason = f"{exc.__class__.__name__}: {exc}"
        if secret:
            reason = redact_text(reason, [template])
        raise TemplateRenderError(name, reason)
