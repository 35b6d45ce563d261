"""
Calculator outcomes.

Every cost calculator returns a number to the orchestrator, but wraps it
in a `CostOutcome` so the reason behind a zero or default value can be
logged for the request.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

OK = "ok"
FALLBACK = "fallback"
ABSENT = "absent"


@dataclass(frozen=True)
class CostOutcome:
    """
    Result of a single cost lookup.

    Attributes:
        value: The number handed to the orchestrator
        status: "ok" for a live value, "fallback" when a failure was
            replaced by a default, "absent" when the source had no price
        reason: Why the value is not live (None for "ok")
    """

    value: float
    status: str = OK
    reason: Optional[str] = None

    @classmethod
    def ok(cls, value: float) -> "CostOutcome":
        return cls(value=value, status=OK)

    @classmethod
    def fallback(cls, value: float, reason: str) -> "CostOutcome":
        return cls(value=value, status=FALLBACK, reason=reason)

    @classmethod
    def absent(cls, reason: str) -> "CostOutcome":
        return cls(value=0, status=ABSENT, reason=reason)

    @property
    def is_live(self) -> bool:
        return self.status == OK

    def describe(self, source: str, **context: Any) -> Dict[str, Any]:
        """Log-friendly record of a non-live outcome."""
        return {
            "source": source,
            "status": self.status,
            "value": self.value,
            "reason": self.reason,
            **context,
        }
