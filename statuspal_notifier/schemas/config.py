"""Pydantic schemas for the Statuspal notifier configuration."""

from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, SecretStr, ValidationError, field_validator, model_validator

from statuspal_notifier.errors import ConfigError

DEFAULT_API_URL = "https://statuspal.io/api/v2/"

DEFAULT_INCIDENT_TYPE = "major"
DEFAULT_TITLE_MESSAGE = (
    '[{{ status | upper }}{% if status == "firing" %}:{{ alerts.firing | length }}{% endif %}] '
    '{{ group_labels.values() | join(" ") }}'
)
DEFAULT_INCIDENT_MESSAGE = (
    "{% for alert in alerts %}"
    '{{ alert.annotations.get("summary") or alert.labels.get("alertname", "") }}\n'
    "{% endfor %}"
)


def _validate_url(value: str, field_name: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"{field_name} must use http or https protocol")
    if not parsed.netloc:
        raise ValueError(f"{field_name} is not a valid URL")
    return value


class TLSConfig(BaseModel):
    ca_file: Optional[str] = Field(None, description="CA bundle used to verify the server")
    cert_file: Optional[str] = Field(None, description="Client certificate for mutual TLS")
    key_file: Optional[str] = Field(None, description="Private key for cert_file")
    insecure_skip_verify: bool = False

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def _check_client_cert(self) -> "TLSConfig":
        if bool(self.cert_file) != bool(self.key_file):
            raise ValueError("cert_file and key_file must be configured together")
        return self


class HTTPClientConfig(BaseModel):
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    proxy_url: Optional[str] = None
    follow_redirects: bool = True
    tls_config: TLSConfig = Field(default_factory=TLSConfig)

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("proxy_url")
    @classmethod
    def _check_proxy(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _validate_url(value, "proxy_url")


class NotifierConfig(BaseModel):
    api_url: str = Field(DEFAULT_API_URL, description="Statuspal API base URL")
    api_key: SecretStr = Field(..., description="API key; may contain template syntax")
    statuspage_domain: str = Field(..., description="Subdomain of the status page to update")
    service_ids: list[str] = Field(default_factory=list)
    incident_type: str = DEFAULT_INCIDENT_TYPE
    title_message: str = DEFAULT_TITLE_MESSAGE
    incident_message: str = DEFAULT_INCIDENT_MESSAGE
    notify_email: bool = False
    notify_slack: bool = False
    notify_tweet: bool = False
    retry_codes: frozenset[int] = Field(
        default_factory=frozenset,
        description="Non-5xx status codes that should also be retried",
    )
    http_config: HTTPClientConfig = Field(default_factory=HTTPClientConfig)

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("api_url")
    @classmethod
    def _check_api_url(cls, value: str) -> str:
        return _validate_url(value, "api_url")

    @field_validator("api_key")
    @classmethod
    def _check_api_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("api_key must not be empty")
        return value

    @field_validator("statuspage_domain")
    @classmethod
    def _check_domain(cls, value: str) -> str:
        value = value.strip().strip("/")
        if not value:
            raise ValueError("statuspage_domain must not be empty")
        if "/" in value:
            raise ValueError("statuspage_domain must be a single path segment")
        return value

    @classmethod
    def from_config(cls, config: dict) -> "NotifierConfig":
        """
        Validate a plain mapping (e.g. parsed YAML or JSON) into a config.

        Raises ConfigError instead of pydantic's ValidationError so callers
        only deal with the notifier's own error hierarchy.
        """
        try:
            return cls.model_validate(config)
        except ValidationError as exc:
            raise ConfigError(_summarize(exc)) from None


def _summarize(exc: ValidationError) -> str:
    # input values are left out: they may hold the API key
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "config"
        parts.append(f"{loc}: {err['msg']}")
    return "invalid notifier config: " + "; ".join(parts)
