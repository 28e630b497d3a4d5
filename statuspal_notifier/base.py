"""Base notifier interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from statuspal_notifier.channels import NotifyContext
from statuspal_notifier.errors import NotifyError
from statuspal_notifier.schemas.alert import Alert


@dataclass(frozen=True)
class DispatchOutcome:
    """
    Result of one delivery attempt.

    ``retryable`` tells the caller whether sending the same batch again later
    makes sense. Unpacks as ``retryable, error = outcome``.
    """
    retryable: bool
    error: Optional[NotifyError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self):
        return iter((self.retryable, self.error))


class Notifier(ABC):
    """
    Common interface for alert notifiers.
    A notifier sends one request per call and never retries on its own.
    """

    @property
    @abstractmethod
    def notifier_type(self) -> str:
        ...

    @abstractmethod
    async def notify(self, ctx: NotifyContext, alerts: Sequence[Alert]) -> DispatchOutcome:
        """Deliver a batch of alerts."""
        ...
