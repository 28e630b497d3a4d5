"""Secret handling and error redaction for outbound requests."""

from typing import Iterable, Optional, Union
from urllib.parse import urlsplit, urlunsplit

import httpx
from pydantic import SecretStr

from statuspal_notifier.errors import TransportError

REDACTED = "<redacted>"

Secret = SecretStr


def reveal(value: Union[Secret, str]) -> str:
    """Return the raw value of a secret, for the one place it goes on the wire."""
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return value


def strip_url(url: Union[str, httpx.URL]) -> str:
    """Drop userinfo, query and fragment from a URL."""
    parts = urlsplit(str(url))
    netloc = parts.hostname or ""
    if ":" in netloc:
        netloc = f"[{netloc}]"
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


def redact_text(text: str, secrets: Iterable[str]) -> str:
    # longest first so a secret containing another is fully replaced
    for secret in sorted({s for s in secrets if s}, key=len, reverse=True):
        text = text.replace(secret, REDACTED)
    return text


def redact_error(
    exc: Exception,
    url: Union[str, httpx.URL],
    secrets: Iterable[Optional[Union[Secret, str]]] = (),
) -> TransportError:
    """
    Build a TransportError describing *exc* without leaking credentials.

    The full request URL, its query string and every given secret value are
    replaced by ``<redacted>``. The path-only form of the URL is kept so the
    error still says where the request went.
    """
    url = str(url)
    parts = urlsplit(url)
    sensitive = [reveal(s) for s in secrets if s is not None]
    if parts.query:
        sensitive.append(parts.query)
    if parts.password:
        sensitive.append(parts.password)

    name = exc.__class__.__name__
    detail = redact_text(str(exc) or name, [url, *sensitive])
    message = f"{name} on POST {strip_url(url)}: {detail}"
    return TransportError(redact_text(message, sensitive), exc_type=name)


def is_header_safe(value: str) -> bool:
    """True if *value* can be sent verbatim as an HTTP header value."""
    return value.isascii() and "\r" not in value and "\n" not in value
