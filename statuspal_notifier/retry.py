"""Response-code retry policy."""

from dataclasses import dataclass, field
from typing import Optional

from statuspal_notifier.errors import UnexpectedStatusError


@dataclass(frozen=True)
class Retrier:
    """
    Decide whether a failed delivery is worth repeating.

    Statuspal does not document rate-limit or timeout codes, so only 5xx is
    retried by default. ``retry_codes`` adds codes outside 5xx (e.g. 429).
    """
    retry_codes: frozenset[int] = field(default_factory=frozenset)

    def check(self, status_code: int) -> tuple[bool, Optional[UnexpectedStatusError]]:
        if status_code // 100 == 2:
            return False, None
        retry = status_code // 100 == 5 or status_code in self.retry_codes
        return retry, UnexpectedStatusError(status_code)


def classify(status_code: int) -> tuple[bool, Optional[UnexpectedStatusError]]:
    """Classify with the default policy."""
    return _DEFAULT.check(status_code)


_DEFAULT = Retrier()
