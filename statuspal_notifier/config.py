from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings

from statuspal_notifier.schemas.config import (
    DEFAULT_API_URL,
    DEFAULT_INCIDENT_MESSAGE,
    DEFAULT_INCIDENT_TYPE,
    DEFAULT_TITLE_MESSAGE,
    NotifierConfig,
)


class Settings(BaseSettings):
    api_url: str = DEFAULT_API_URL
    api_key: SecretStr = SecretStr("")
    statuspage_domain: str = ""

    # Comma-separated Statuspal service IDs
    service_ids: str = ""

    incident_type: str = DEFAULT_INCIDENT_TYPE
    title_message: str = DEFAULT_TITLE_MESSAGE
    incident_message: str = DEFAULT_INCIDENT_MESSAGE

    notify_email: bool = False
    notify_slack: bool = False
    notify_tweet: bool = False

    # Comma-separated extra status codes to retry besides 5xx (e.g. "429")
    retry_codes: str = ""

    # HTTP client
    http_timeout: float = 30.0
    http_proxy_url: Optional[str] = None
    http_follow_redirects: bool = True
    tls_ca_file: Optional[str] = None
    tls_cert_file: Optional[str] = None
    tls_key_file: Optional[str] = None
    tls_insecure_skip_verify: bool = False

    model_config = {"env_prefix": "STATUSPAL_", "env_file": ".env", "extra": "ignore"}

    def to_notifier_config(self) -> NotifierConfig:
        """Validate these settings into a NotifierConfig; raises ConfigError."""
        return NotifierConfig.from_config(
            {
                "api_url": self.api_url,
                "api_key": self.api_key,
                "statuspage_domain": self.statuspage_domain,
                "service_ids": _split(self.service_ids),
                "incident_type": self.incident_type,
                "title_message": self.title_message,
                "incident_message": self.incident_message,
                "notify_email": self.notify_email,
                "notify_slack": self.notify_slack,
                "notify_tweet": self.notify_tweet,
                "retry_codes": _split(self.retry_codes),
                "http_config": {
                    "timeout": self.http_timeout,
                    "proxy_url": self.http_proxy_url,
                    "follow_redirects": self.http_follow_redirects,
                    "tls_config": {
                        "ca_file": self.tls_ca_file,
                        "cert_file": self.tls_cert_file,
                        "key_file": self.tls_key_file,
                        "insecure_skip_verify": self.tls_insecure_skip_verify,
                    },
                },
            }
        )


def _split(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]

