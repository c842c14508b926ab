"""Domain models for persisted scan results."""

from dataclasses import dataclass, field

from baggage_check.domain.verdicts import BaggageVerdict, Verdict, VerdictStatus


@dataclass(frozen=True)
class ScanRecord:
    """Snapshot of a completed classification."""

    id: str
    category_id: str
    category_name: str
    hand_baggage_status: VerdictStatus
    checked_baggage_status: VerdictStatus
    hand_baggage_text: str
    checked_baggage_text: str
    timestamp: int
    answers: dict[str, str] = field(default_factory=dict)
    hand_baggage_tip: str | None = None
    checked_baggage_tip: str | None = None
    photo_ref: str | None = None

    @property
    def verdict(self) -> Verdict:
        """Rebuild the verdict captured by this record."""
        return Verdict(
            hand_baggage=BaggageVerdict(
                status=self.hand_baggage_status,
                text=self.hand_baggage_text,
                tip=self.hand_baggage_tip,
            ),
            checked_baggage=BaggageVerdict(
                status=self.checked_baggage_status,
                text=self.checked_baggage_text,
                tip=self.checked_baggage_tip,
            ),
        )
