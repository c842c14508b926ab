"""Tests for verdict models."""

from baggage_check.domain.verdicts import (
    BaggageVerdict,
    Verdict,
    VerdictStatus,
    overall_status,
)


def test_overall_status_is_most_severe() -> None:
    assert (
        overall_status(VerdictStatus.ALLOWED, VerdictStatus.ALLOWED)
        == VerdictStatus.ALLOWED
    )
    assert (
        overall_status(VerdictStatus.ALLOWED, VerdictStatus.CONDITIONAL)
        == VerdictStatus.CONDITIONAL
    )
    assert (
        overall_status(VerdictStatus.NOT_ALLOWED, VerdictStatus.ALLOWED)
        == VerdictStatus.NOT_ALLOWED
    )
    assert (
        overall_status(VerdictStatus.CONDITIONAL, VerdictStatus.NOT_ALLOWED)
        == VerdictStatus.NOT_ALLOWED
    )


def test_verdict_overall_status() -> None:
    verdict = Verdict(
        hand_baggage=BaggageVerdict(VerdictStatus.CONDITIONAL, "Pole abkleben."),
        checked_baggage=BaggageVerdict(VerdictStatus.ALLOWED, "Erlaubt."),
    )

    assert verdict.overall_status == VerdictStatus.CONDITIONAL


def test_status_values_match_wire_format() -> None:
    assert [status.value for status in VerdictStatus] == [
        "allowed",
        "conditional",
        "not_allowed",
    ]
