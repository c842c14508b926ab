"""Domain models for baggage verdicts."""

from dataclasses import dataclass
from enum import StrEnum


class VerdictStatus(StrEnum):
    """Whether an item may travel in a given baggage type."""

    ALLOWED = "allowed"
    CONDITIONAL = "conditional"
    NOT_ALLOWED = "not_allowed"

    @property
    def severity(self) -> int:
        """Rank used to combine hand and checked baggage statuses."""
        return _SEVERITY[self]


_SEVERITY = {
    VerdictStatus.ALLOWED: 0,
    VerdictStatus.CONDITIONAL: 1,
    VerdictStatus.NOT_ALLOWED: 2,
}


@dataclass(frozen=True)
class BaggageVerdict:
    """Verdict for a single baggage type."""

    status: VerdictStatus
    text: str
    tip: str | None = None


@dataclass(frozen=True)
class Verdict:
    """Hand and checked baggage verdicts for one item."""

    hand_baggage: BaggageVerdict
    checked_baggage: BaggageVerdict

    @property
    def overall_status(self) -> VerdictStatus:
        """Return the most severe of the two baggage statuses."""
        return overall_status(self.hand_baggage.status, self.checked_baggage.status)


def overall_status(*statuses: VerdictStatus) -> VerdictStatus:
    """Return the most severe status among the given ones."""
    return max(statuses, key=lambda status: status.severity)
