"""Tests for the category rule evaluator."""

import pytest

from baggage_check.domain.catalog import CategoryId, list_categories
from baggage_check.domain.errors import CategoryNotFound
from baggage_check.domain.verdicts import VerdictStatus
from baggage_check.services import rules
from baggage_check.services.rules import evaluate

ALLOWED = VerdictStatus.ALLOWED
CONDITIONAL = VerdictStatus.CONDITIONAL
NOT_ALLOWED = VerdictStatus.NOT_ALLOWED


def _statuses(category_id: str, answers: dict[str, str] | None = None):
    verdict = evaluate(category_id, answers or {})
    return verdict.hand_baggage.status, verdict.checked_baggage.status


def test_every_category_has_an_evaluator() -> None:
    assert set(rules._EVALUATORS) == set(CategoryId)


@pytest.mark.parametrize("category", list_categories(), ids=lambda c: c.id.value)
def test_every_category_evaluates_with_empty_answers(category) -> None:
    verdict = evaluate(category.id, {})

    assert verdict.hand_baggage.text
    assert verdict.checked_baggage.text


def test_direct_categories_ignore_answers() -> None:
    for category in list_categories():
        if not category.is_direct:
            continue
        assert evaluate(category.id, {}) == evaluate(
            category.id, {"blade_size": "long", "size": "xlarge"}
        )


def test_unknown_category_raises() -> None:
    with pytest.raises(CategoryNotFound) as exc_info:
        evaluate("laser_sword", {})

    assert exc_info.value.category_id == "laser_sword"


def test_knife_length_threshold() -> None:
    assert _statuses("knife", {"blade_size": "long"}) == (NOT_ALLOWED, ALLOWED)
    assert _statuses("knife", {"blade_size": "short"}) == (ALLOWED, ALLOWED)
    assert _statuses("knife") == (ALLOWED, ALLOWED)


def test_long_knife_suggests_checked_baggage() -> None:
    verdict = evaluate("knife", {"blade_size": "long"}, "en")

    assert verdict.hand_baggage.tip == "Pack in checked baggage."
    assert verdict.checked_baggage.tip is None


def test_tools_use_their_own_question() -> None:
    assert _statuses("tools", {"tool_size": "long"}) == (NOT_ALLOWED, ALLOWED)
    assert _statuses("tools", {"blade_size": "long"}) == (ALLOWED, ALLOWED)


def test_scissors_length_threshold() -> None:
    assert _statuses("scissors", {"blade_size": "long"}) == (NOT_ALLOWED, ALLOWED)
    assert _statuses("scissors", {"blade_size": "short"}) == (ALLOWED, ALLOWED)


def test_lighter_prohibited_in_both() -> None:
    verdict = evaluate("lighter", {})

    assert verdict.hand_baggage.status == NOT_ALLOWED
    assert verdict.checked_baggage.status == NOT_ALLOWED
    assert verdict.hand_baggage.tip
    assert verdict.overall_status == NOT_ALLOWED


def test_spare_battery_tiers() -> None:
    assert _statuses("battery_spare", {"size": "small"}) == (CONDITIONAL, NOT_ALLOWED)
    assert _statuses("battery_spare", {"size": "large"}) == (CONDITIONAL, NOT_ALLOWED)
    assert _statuses("battery_spare", {"size": "xlarge"}) == (NOT_ALLOWED, NOT_ALLOWED)
    assert _statuses("battery_spare") == (CONDITIONAL, NOT_ALLOWED)


def test_installed_battery_tiers() -> None:
    assert _statuses("battery_installed", {"device_type": "small"}) == (
        ALLOWED,
        ALLOWED,
    )
    assert _statuses("battery_installed", {"device_type": "medium"}) == (
        ALLOWED,
        ALLOWED,
    )
    assert _statuses("battery_installed", {"device_type": "large"}) == (
        NOT_ALLOWED,
        NOT_ALLOWED,
    )


def test_liquids_rules() -> None:
    assert _statuses(
        "liquids_general", {"container_size": "small", "liquid_type": "regular"}
    ) == (CONDITIONAL, ALLOWED)
    assert _statuses(
        "liquids_general", {"container_size": "large", "liquid_type": "regular"}
    ) == (NOT_ALLOWED, ALLOWED)
    assert _statuses(
        "liquids_general", {"container_size": "large", "liquid_type": "medication"}
    ) == (ALLOWED, ALLOWED)
    assert _statuses(
        "liquids_general", {"container_size": "large", "liquid_type": "baby_food"}
    ) == (ALLOWED, ALLOWED)
    assert _statuses(
        "liquids_general", {"container_size": "large", "liquid_type": "duty_free"}
    ) == (CONDITIONAL, ALLOWED)
    assert _statuses(
        "liquids_general", {"container_size": "small", "liquid_type": "duty_free"}
    ) == (CONDITIONAL, ALLOWED)


def test_fixed_categories() -> None:
    assert _statuses("e_cigarette") == (ALLOWED, NOT_ALLOWED)
    assert _statuses("smart_luggage_removable") == (ALLOWED, CONDITIONAL)
    assert _statuses("smart_luggage_fixed") == (NOT_ALLOWED, NOT_ALLOWED)
    assert _statuses("luggage_tracker") == (ALLOWED, ALLOWED)
    assert _statuses("blunt_objects") == (NOT_ALLOWED, ALLOWED)
    assert _statuses("sports_equipment") == (NOT_ALLOWED, ALLOWED)


@pytest.mark.parametrize(
    "category_id",
    ["fireworks", "fuel_paste", "toxic_corrosive", "gas_cartridges", "paints"],
)
def test_dangerous_goods_prohibited_everywhere(category_id: str) -> None:
    assert _statuses(category_id) == (NOT_ALLOWED, NOT_ALLOWED)


def test_texts_follow_language() -> None:
    german = evaluate("lighter", {}, "de")
    english = evaluate("lighter", {}, "en")

    assert german.hand_baggage.text == "Feuerzeuge sind im Handgepäck verboten."
    assert english.hand_baggage.text == "Lighters are prohibited in hand baggage."
    assert german.hand_baggage.status == english.hand_baggage.status


def test_evaluation_is_deterministic() -> None:
    answers = {"container_size": "large", "liquid_type": "regular"}

    assert evaluate("liquids_general", answers) == evaluate("liquids_general", answers)
