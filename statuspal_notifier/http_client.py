"""HTTP client construction and response handling for the notifier."""

import logging
import ssl
from typing import Optional, Union

import httpx

from statuspal_notifier import __version__
from statuspal_notifier.schemas.config import HTTPClientConfig, TLSConfig

logger = logging.getLogger(__name__)

USER_AGENT = f"statuspal-notifier/{__version__}"
DRAIN_LIMIT = 4096


def _ssl_context(tls: TLSConfig) -> Union[ssl.SSLContext, bool]:
    if tls.insecure_skip_verify and not tls.cert_file:
        return False
    ctx = ssl.create_default_context(cafile=tls.ca_file)
    if tls.cert_file:
        ctx.load_cert_chain(certfile=tls.cert_file, keyfile=tls.key_file)
    if tls.insecure_skip_verify:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


def new_http_client(
    config: Optional[HTTPClientConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **kwargs,
) -> httpx.AsyncClient:
    """
    Build an AsyncClient from generic HTTP settings.

    The returned client owns a connection pool and is safe to share between
    concurrent requests. ``transport`` replaces the network layer (tests pass
    an ``httpx.MockTransport``).
    """
    config = config or HTTPClientConfig()
    if transport is None:
        transport = httpx.AsyncHTTPTransport(
            verify=_ssl_context(config.tls_config),
            proxy=config.proxy_url,
        )
    return httpx.AsyncClient(
        timeout=config.timeout,
        follow_redirects=config.follow_redirects,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
        **kwargs,
    )


async def drain(response: httpx.Response, limit: int = DRAIN_LIMIT) -> None:
    """
    Read at most *limit* bytes of the body, discard them and close.

    A body that was already read (in-memory content, or a response hook
    calling ``aread()``) is only closed. Errors while draining are logged
    and never propagate.
    """
    try:
        if not response.is_stream_consumed:
            read = 0
            async for chunk in response.aiter_raw():
                read += len(chunk)
                if read >= limit:
                    break
    except (httpx.HTTPError, httpx.StreamError) as exc:
        logger.debug("Failed to drain response body: %s", exc.__class__.__name__)
    finally:
        await response.aclose()
