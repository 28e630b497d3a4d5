"""Statuspal incident channel adapter."""

import json
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence
from urllib.parse import urlsplit, urlunsplit

from statuspal_notifier.channels import ChannelPayload, NotifyContext
from statuspal_notifier.channels.truncate import truncate_bytes
from statuspal_notifier.schemas.alert import Alert, AlertStatus, alerts_status, as_utc
from statuspal_notifier.schemas.config import NotifierConfig
from statuspal_notifier.templating import TemplateData, TemplateRenderer, get_template_data

logger = logging.getLogger(__name__)

ACTIVITY_TYPE_TRIGGER = 1
ACTIVITY_TYPE_RESOLVE = 4

MAX_TITLE_BYTES = 20480
MAX_DESCRIPTION_BYTES = 20480


def incidents_url(config: NotifierConfig) -> str:
    """
    Append ``status_page/{domain}/incidents`` to the path of ``api_url``.

    Query parameters on the base URL are kept; the fragment is dropped.
    """
    parts = urlsplit(config.api_url)
    path = parts.path if parts.path.endswith("/") else parts.path + "/"
    path += f"status_page/{config.statuspage_domain}/incidents"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def activity_type(alerts: Sequence[Alert]) -> int:
    # only an all-resolved batch resolves; empty or mixed batches trigger
    if alerts_status(alerts) == AlertStatus.RESOLVED:
        return ACTIVITY_TYPE_RESOLVE
    return ACTIVITY_TYPE_TRIGGER


def starts_at(alerts: Sequence[Alert]) -> datetime:
    if alerts:
        return as_utc(alerts[0].starts_at)
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """RFC3339 in UTC with a ``Z`` suffix."""
    return as_utc(value).isoformat().replace("+00:00", "Z")


def build_payload(
    ctx: NotifyContext,
    config: NotifierConfig,
    alerts: Sequence[Alert],
    renderer: Optional[TemplateRenderer] = None,
    data: Optional[TemplateData] = None,
) -> dict:
    """
    Render the incident document for a batch of alerts.

    Raises MissingGroupKeyError when ``ctx`` has no group key and
    TemplateRenderError when any field template fails; nothing is returned in
    either case. Over-long title and description are truncated and the
    truncation is logged at DEBUG on the context logger.
    """
    key = ctx.require_group_key()
    log = ctx.get_logger(logger)
    renderer = renderer or TemplateRenderer()
    if data is None:
        data = get_template_data(alerts, ctx.receiver, ctx.group_labels, ctx.external_url)

    incident_type = renderer.render(config.incident_type, data, "incident_type")
    title = renderer.render(config.title_message, data, "title_message")
    description = renderer.render(config.incident_message, data, "incident_message")

    title, truncated = truncate_bytes(title, MAX_TITLE_BYTES)
    if truncated:
        log.debug("truncated title_message: %s (incident=%s)", title, key)

    description, truncated = truncate_bytes(description, MAX_DESCRIPTION_BYTES)
    if truncated:
        log.debug("truncated incident_message: %s (incident=%s)", description, key)

    return {
        "title": title,
        "service_ids": list(config.service_ids),
        "type": incident_type,
        "starts_at": format_timestamp(starts_at(alerts)),
        "incident_activities": [
            {
                "activity_type_id": activity_type(alerts),
                "description": description,
                "email_notify": config.notify_email,
                "slack_notify": config.notify_slack,
                "tweet": config.notify_tweet,
            }
        ],
    }


def format_statuspal(
    config: NotifierConfig,
    ctx: NotifyContext,
    alerts: Sequence[Alert],
    renderer: Optional[TemplateRenderer] = None,
    data: Optional[TemplateData] = None,
) -> ChannelPayload:
    """
    Format a notification for the Statuspal incidents endpoint.

    The Authorization header is not part of the payload; the notifier adds it
    at send time.
    """
    body = build_payload(ctx, config, alerts, renderer=renderer, data=data)
    return ChannelPayload(
        method="POST",
        url=incidents_url(config),
        headers={"Content-Type": "application/json"},
        body=json.dumps(body, ensure_ascii=False),
    )
