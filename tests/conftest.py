from datetime import datetime, timedelta, timezone

import httpx
import pytest

from statuspal_notifier.channels import NotifyContext
from statuspal_notifier.schemas.alert import Alert
from statuspal_notifier.schemas.config import NotifierConfig

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_alert(name: str = "HighLatency", resolved: bool = False, starts_at: datetime = T0, **labels) -> Alert:
    return Alert(
        labels={"alertname": name, **labels},
        annotations={"summary": f"{name} summary"},
        starts_at=starts_at,
        ends_at=starts_at + timedelta(minutes=5) if resolved else None,
    )


class RecordingHandler:
    """MockTransport handler that answers with a fixed status and keeps every request."""

    def __init__(self, status_code: int = 200, body: bytes = b"{}"):
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)


@pytest.fixture
def config() -> NotifierConfig:
    return NotifierConfig(
        api_url="https://x.example/",
        api_key="secret",
        statuspage_domain="acme",
        service_ids=["svc-1", "svc-2"],
        notify_email=True,
        notify_slack=False,
        notify_tweet=True,
    )


@pytest.fixture
def ctx() -> NotifyContext:
    return NotifyContext(group_key='{}:{alertname="HighLatency"}', receiver="statuspal")


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
