"""Statuspal notifier (https://www.statuspal.io)."""

import logging
from typing import Optional, Sequence

import httpx

from statuspal_notifier.base import DispatchOutcome, Notifier
from statuspal_notifier.channels import NotifyContext
from statuspal_notifier.channels.statuspal import format_statuspal
from statuspal_notifier.errors import NotifyError, TemplateRenderError
from statuspal_notifier.http_client import drain, new_http_client
from statuspal_notifier.retry import Retrier
from statuspal_notifier.schemas.alert import Alert
from statuspal_notifier.schemas.config import NotifierConfig
from statuspal_notifier.security import Secret, is_header_safe, redact_error, reveal
from statuspal_notifier.templating import TemplateRenderer, get_template_data

logger = logging.getLogger(__name__)


class StatuspalNotifier(Notifier):
    """Create or resolve Statuspal incidents from alert batches."""

    @property
    def notifier_type(self) -> str:
        return "statuspal"

    def __init__(
        self,
        config: NotifierConfig,
        renderer: Optional[TemplateRenderer] = None,
        client: Optional[httpx.AsyncClient] = None,
        retrier: Optional[Retrier] = None,
    ):
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.retrier = retrier or Retrier(retry_codes=config.retry_codes)
        self._owns_client = client is None
        self.client = client or new_http_client(config.http_config)

    @classmethod
    def from_config(cls, config: dict, **kwargs) -> "StatuspalNotifier":
        """
        Config shape: { "api_key": str, "statuspage_domain": str, ... }
        See NotifierConfig for the full field list.
        """
        return cls(NotifierConfig.from_config(config), **kwargs)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "StatuspalNotifier":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def notify(self, ctx: NotifyContext, alerts: Sequence[Alert]) -> DispatchOutcome:
        """
        Send one incident update for *alerts*.

        Payload and template failures come back as retryable. Transport
        failures are retryable and carry a redacted error. Otherwise the
        response status decides via the Retrier. Task cancellation is not
        caught.
        """
        data = get_template_data(alerts, ctx.receiver, ctx.group_labels, ctx.external_url)
        try:
            api_key = Secret(
                self.renderer.render(reveal(self.config.api_key), data, "api_key", secret=True)
            )
            payload = format_statuspal(self.config, ctx, alerts, renderer=self.renderer, data=data)
        except NotifyError as exc:
            logger.warning("Could not build Statuspal payload for %s: %s", ctx.group_key, exc)
            return DispatchOutcome(retryable=True, error=exc)

        if not is_header_safe(reveal(api_key)):
            error = TemplateRenderError("api_key", "rendered value is not a valid header value")
            logger.warning("Could not build Statuspal request for %s: %s", ctx.group_key, error)
            return DispatchOutcome(retryable=True, error=error)

        headers = dict(payload.headers)
        headers["Authorization"] = reveal(api_key)

        try:
            async with self.client.stream(
                payload.method,
                payload.url,
                headers=headers,
                content=payload.body.encode("utf-8"),
            ) as response:
                await drain(response)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            error = redact_error(exc, payload.url, [api_key, self.config.api_key])
            logger.warning("Statuspal request failed for %s: %s", ctx.group_key, error)
            return DispatchOutcome(retryable=True, error=error)

        retryable, error = self.retrier.check(response.status_code)
        if error is not None:
            logger.warning(
                "Statuspal returned status %d for %s (retryable=%s)",
                response.status_code,
                ctx.group_key,
                retryable,
            )
        else:
            logger.debug("Statuspal incident updated for %s", ctx.group_key)
        return DispatchOutcome(retryable=retryable, error=error)
