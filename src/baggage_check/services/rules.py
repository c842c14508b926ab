"""Rule evaluator mapping category answers to baggage verdicts.

Every category id is dispatched to exactly one pure evaluator defined in this
module. Evaluators read only their own question keys and fall back to the
most permissive option when a key is missing, so evaluation never fails for
partial answers.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from baggage_check.domain.catalog import (
    DEFAULT_LANGUAGE,
    CategoryId,
    LocalizedText,
)
from baggage_check.domain.errors import CategoryNotFound
from baggage_check.domain.verdicts import BaggageVerdict, Verdict, VerdictStatus

ALLOWED = VerdictStatus.ALLOWED
CONDITIONAL = VerdictStatus.CONDITIONAL
NOT_ALLOWED = VerdictStatus.NOT_ALLOWED


@dataclass(frozen=True)
class RuleSide:
    """Language-independent verdict for one baggage type."""

    status: VerdictStatus
    text: LocalizedText
    tip: LocalizedText | None = None

    def render(self, lang: str) -> BaggageVerdict:
        return BaggageVerdict(
            status=self.status,
            text=self.text.get(lang),
            tip=self.tip.get(lang) if self.tip else None,
        )


@dataclass(frozen=True)
class RuleVerdict:
    """Language-independent verdict produced by an evaluator."""

    hand_baggage: RuleSide
    checked_baggage: RuleSide

    def render(self, lang: str) -> Verdict:
        return Verdict(
            hand_baggage=self.hand_baggage.render(lang),
            checked_baggage=self.checked_baggage.render(lang),
        )


Evaluator = Callable[[Mapping[str, str]], RuleVerdict]


def _side(
    status: VerdictStatus, text: tuple[str, str], tip: tuple[str, str] | None = None
) -> RuleSide:
    return RuleSide(
        status=status,
        text=LocalizedText(*text),
        tip=LocalizedText(*tip) if tip else None,
    )


_CHECKED_ALLOWED = ("Im aufgegebenen Gepäck erlaubt.", "Allowed in checked baggage.")
_PACK_IN_CHECKED = ("Im aufgegebenen Gepäck verpacken.", "Pack in checked baggage.")
_PROHIBITED_ALL = ("In allen Gepäckarten verboten.", "Prohibited in all baggage.")
_SPARE_NEVER_CHECKED = _side(
    NOT_ALLOWED,
    (
        "Ersatzbatterien sind im aufgegebenen Gepäck nie erlaubt.",
        "Spare batteries are never allowed in checked baggage.",
    ),
    ("Muss im Handgepäck mitgeführt werden.", "Must be carried in hand baggage."),
)


def _battery_spare(answers: Mapping[str, str]) -> RuleVerdict:
    size = answers.get("size") or "small"
    if size == "xlarge":
        return RuleVerdict(
            hand_baggage=_side(
                NOT_ALLOWED,
                (
                    "Sehr grosse Batterien (über 160 Wh) sind in allen Gepäckarten "
                    "verboten.",
                    "Very large batteries (over 160 Wh) are prohibited in all baggage.",
                ),
                ("Lassen Sie diesen Gegenstand zu Hause.", "Leave this item at home."),
            ),
            checked_baggage=_side(
                NOT_ALLOWED,
                (
                    "Sehr grosse Batterien sind in allen Gepäckarten verboten.",
                    "Very large batteries are prohibited in all baggage.",
                ),
            ),
        )
    if size == "large":
        return RuleVerdict(
            hand_baggage=_side(
                CONDITIONAL,
                (
                    "Grosse Powerbanks (100–160 Wh) sind im Handgepäck erlaubt. "
                    "Max. 2 Stück. Genehmigung der Fluggesellschaft erforderlich. "
                    "Pole müssen abgeklebt sein.",
                    "Large power banks (100–160 Wh) are allowed in hand baggage. "
                    "Max 2 units. Airline approval required. Terminals must be taped.",
                ),
                (
                    "Kontaktieren Sie Ihre Fluggesellschaft vor der Reise.",
                    "Contact your airline before travelling.",
                ),
            ),
            checked_baggage=_SPARE_NEVER_CHECKED,
        )
    return RuleVerdict(
        hand_baggage=_side(
            CONDITIONAL,
            (
                "Standard-Powerbanks (unter 100 Wh) sind im Handgepäck erlaubt. "
                "Pole müssen abgeklebt oder einzeln geschützt sein.",
                "Standard power banks (under 100 Wh) are allowed in hand baggage. "
                "Terminals must be taped or individually protected.",
            ),
        ),
        checked_baggage=_SPARE_NEVER_CHECKED,
    )


def _battery_installed(answers: Mapping[str, str]) -> RuleVerdict:
    device_type = answers.get("device_type") or "small"
    if device_type == "large":
        return RuleVerdict(
            hand_baggage=_side(
                NOT_ALLOWED,
                (
                    "Geräte mit sehr grossen Batterien (über 160 Wh) sind verboten.",
                    "Devices with very large batteries (over 160 Wh) are prohibited.",
                ),
            ),
            checked_baggage=_side(
                NOT_ALLOWED,
                (
                    "Geräte mit sehr grossen Batterien sind verboten.",
                    "Devices with very large batteries are prohibited.",
                ),
            ),
        )
    if device_type == "medium":
        return RuleVerdict(
            hand_baggage=_side(
                ALLOWED,
                (
                    "Laptops sind im Handgepäck erlaubt. Muss bei der "
                    "Sicherheitskontrolle separat in eine Schale gelegt werden.",
                    "Laptops are allowed in hand baggage. Must be placed separately "
                    "in a tray at security.",
                ),
            ),
            checked_baggage=_side(
                ALLOWED,
                (
                    "Im aufgegebenen Gepäck erlaubt. Gerät muss vollständig "
                    "ausgeschaltet sein.",
                    "Allowed in checked baggage. Device must be completely "
                    "switched off.",
                ),
            ),
        )
    return RuleVerdict(
        hand_baggage=_side(
            ALLOWED,
            (
                "Handys, Tablets und Kameras sind im Handgepäck erlaubt.",
                "Phones, tablets and cameras are allowed in hand baggage.",
            ),
        ),
        checked_baggage=_side(
            ALLOWED,
            (
                "Im aufgegebenen Gepäck erlaubt. Gerät muss ausgeschaltet sein.",
                "Allowed in checked baggage. Device must be switched off.",
            ),
        ),
    )


def _liquids_general(answers: Mapping[str, str]) -> RuleVerdict:
    size = answers.get("container_size") or "small"
    liquid_type = answers.get("liquid_type") or "regular"
    if liquid_type in {"medication", "baby_food"}:
        return RuleVerdict(
            hand_baggage=_side(
                ALLOWED,
                (
                    "Medikamente und Babynahrung dürfen 100 ml überschreiten. "
                    "Nachweis mitführen (Rezept, etc.).",
                    "Medication and baby food may exceed 100 ml. "
                    "Carry proof (prescription, etc.).",
                ),
            ),
            checked_baggage=_side(ALLOWED, _CHECKED_ALLOWED),
        )
    if liquid_type == "duty_free" and size == "large":
        return RuleVerdict(
            hand_baggage=_side(
                CONDITIONAL,
                (
                    "Duty-Free-Flüssigkeiten über 100 ml sind nur mit Kaufbeleg in "
                    "einem versiegelten Sicherheitsbeutel erlaubt.",
                    "Duty-free liquids over 100 ml are only allowed with receipt in "
                    "a sealed security bag.",
                ),
                (
                    "Beleg und Beutel bis zum Zielort aufbewahren.",
                    "Keep receipt and sealed bag until destination.",
                ),
            ),
            checked_baggage=_side(ALLOWED, _CHECKED_ALLOWED),
        )
    if size == "large":
        return RuleVerdict(
            hand_baggage=_side(
                NOT_ALLOWED,
                (
                    "Behälter über 100 ml sind im Handgepäck nicht erlaubt.",
                    "Containers over 100 ml are not allowed in hand baggage.",
                ),
                (
                    "In einen kleineren Behälter umfüllen oder im aufgegebenen "
                    "Gepäck verpacken.",
                    "Transfer to a smaller container or pack in checked baggage.",
                ),
            ),
            checked_baggage=_side(
                ALLOWED,
                (
                    "Im aufgegebenen Gepäck ohne Grössenbeschränkung erlaubt.",
                    "Allowed in checked baggage without size restriction.",
                ),
            ),
        )
    return RuleVerdict(
        hand_baggage=_side(
            CONDITIONAL,
            (
                "Im Handgepäck erlaubt. Muss in einem transparenten, "
                "wiederverschliessbaren Plastikbeutel (max. 1 Liter) verpackt sein.",
                "Allowed in hand baggage. Must be packed in a transparent, "
                "resealable plastic bag (max 1 litre).",
            ),
        ),
        checked_baggage=_side(ALLOWED, _CHECKED_ALLOWED),
    )


def _six_centimetre_rule(
    answer_key: str, long_text: tuple[str, str], short_text: tuple[str, str]
) -> Evaluator:
    """Build an evaluator for items restricted from 6 cm upwards."""

    def evaluate_length(answers: Mapping[str, str]) -> RuleVerdict:
        if answers.get(answer_key) == "long":
            return RuleVerdict(
                hand_baggage=_side(NOT_ALLOWED, long_text, _PACK_IN_CHECKED),
                checked_baggage=_side(ALLOWED, _CHECKED_ALLOWED),
            )
        return RuleVerdict(
            hand_baggage=_side(ALLOWED, short_text),
            checked_baggage=_side(ALLOWED, _CHECKED_ALLOWED),
        )

    return evaluate_length


def _fixed(verdict: RuleVerdict) -> Evaluator:
    """Build an evaluator for a category without questions."""

    def evaluate_fixed(_answers: Mapping[str, str]) -> RuleVerdict:
        return verdict

    return evaluate_fixed


def _prohibited(text: tuple[str, str], tip: tuple[str, str] | None = None) -> Evaluator:
    return _fixed(
        RuleVerdict(
            hand_baggage=_side(NOT_ALLOWED, text, tip),
            checked_baggage=_side(NOT_ALLOWED, _PROHIBITED_ALL),
        )
    )


_EVALUATORS: dict[CategoryId, Evaluator] = {
    CategoryId.BATTERY_SPARE: _battery_spare,
    CategoryId.BATTERY_INSTALLED: _battery_installed,
    CategoryId.LIQUIDS_GENERAL: _liquids_general,
    CategoryId.KNIFE: _six_centimetre_rule(
        "blade_size",
        long_text=(
            "Messer mit Klingen ab 6 cm sind im Handgepäck verboten.",
            "Knives with blades 6 cm or longer are prohibited in hand baggage.",
        ),
        short_text=(
            "Messer mit Klingen unter 6 cm sind im Handgepäck erlaubt.",
            "Knives with blades under 6 cm are allowed in hand baggage.",
        ),
    ),
    CategoryId.SCISSORS: _six_centimetre_rule(
        "blade_size",
        long_text=(
            "Scheren mit Klingen ab 6 cm sind im Handgepäck verboten.",
            "Scissors with blades 6 cm or longer are prohibited in hand baggage.",
        ),
        short_text=(
            "Kleine Scheren (unter 6 cm) sind im Handgepäck erlaubt.",
            "Small scissors (under 6 cm) are allowed in hand baggage.",
        ),
    ),
    CategoryId.TOOLS: _six_centimetre_rule(
        "tool_size",
        long_text=(
            "Werkzeuge ab 6 cm Länge sind im Handgepäck nicht erlaubt.",
            "Tools 6 cm or longer are not allowed in hand baggage.",
        ),
        short_text=(
            "Kleine Werkzeuge (unter 6 cm) sind im Handgepäck erlaubt.",
            "Small tools (under 6 cm) are allowed in hand baggage.",
        ),
    ),
    CategoryId.LIGHTER: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                NOT_ALLOWED,
                (
                    "Feuerzeuge sind im Handgepäck verboten.",
                    "Lighters are prohibited in hand baggage.",
                ),
                (
                    "Sie dürfen ein Feuerzeug am Körper tragen (z.B. in der "
                    "Hosentasche).",
                    "You may carry one lighter on your person (e.g. in your pocket).",
                ),
            ),
            checked_baggage=_side(
                NOT_ALLOWED,
                (
                    "Feuerzeuge sind im aufgegebenen Gepäck verboten. Sie dürfen EIN "
                    "Feuerzeug am Körper tragen.",
                    "Lighters are prohibited in checked baggage. You may carry ONE "
                    "lighter on your person.",
                ),
            ),
        )
    ),
    CategoryId.MATCHES: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                NOT_ALLOWED,
                (
                    "Streichhölzer sind im Handgepäck verboten.",
                    "Matches are prohibited in hand baggage.",
                ),
                (
                    "Sie dürfen eine Schachtel Streichhölzer am Körper tragen.",
                    "You may carry one box of matches on your person.",
                ),
            ),
            checked_baggage=_side(
                NOT_ALLOWED,
                (
                    "Streichhölzer sind im aufgegebenen Gepäck verboten.",
                    "Matches are prohibited in checked baggage.",
                ),
            ),
        )
    ),
    CategoryId.E_CIGARETTE: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                ALLOWED,
                (
                    "E-Zigaretten und Vapes sind nur im Handgepäck erlaubt.",
                    "E-cigarettes and vapes are only allowed in hand baggage.",
                ),
            ),
            checked_baggage=_side(
                NOT_ALLOWED,
                (
                    "Im aufgegebenen Gepäck wegen Brandgefahr nie erlaubt.",
                    "Never allowed in checked baggage due to fire risk.",
                ),
                ("Immer im Handgepäck mitführen.", "Always carry in hand baggage."),
            ),
        )
    ),
    CategoryId.ELECTRONICS: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                ALLOWED,
                (
                    "Elektronische Geräte sind erlaubt. Bei der Sicherheitskontrolle "
                    "separat in eine Schale legen.",
                    "Electronic devices are allowed. Place separately in a tray at "
                    "security.",
                ),
            ),
            checked_baggage=_side(
                ALLOWED,
                (
                    "Im aufgegebenen Gepäck erlaubt. Gerät muss vollständig "
                    "ausgeschaltet sein.",
                    "Allowed in checked baggage. Device must be completely "
                    "switched off.",
                ),
            ),
        )
    ),
    CategoryId.SMART_LUGGAGE_REMOVABLE: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                ALLOWED,
                (
                    "Smart Luggage als Handgepäck erlaubt.",
                    "Smart luggage allowed as hand baggage.",
                ),
            ),
            checked_baggage=_side(
                CONDITIONAL,
                (
                    "Der Akku muss entfernt und im Handgepäck mitgeführt werden. "
                    "Pole abkleben.",
                    "Battery must be removed and carried in hand baggage. "
                    "Tape the terminals.",
                ),
                (
                    "Akku vor dem Einchecken entfernen.",
                    "Remove battery before check-in.",
                ),
            ),
        )
    ),
    CategoryId.SMART_LUGGAGE_FIXED: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                NOT_ALLOWED,
                (
                    "Smart Luggage mit fest verbauter Batterie ist nicht erlaubt.",
                    "Smart luggage with a built-in battery is not allowed.",
                ),
                (
                    "Verwenden Sie Gepäck mit herausnehmbarem Akku.",
                    "Use luggage with a removable battery.",
                ),
            ),
            checked_baggage=_side(
                NOT_ALLOWED,
                (
                    "Smart Luggage mit fest verbauter Batterie ist nicht erlaubt.",
                    "Smart luggage with a built-in battery is not allowed.",
                ),
            ),
        )
    ),
    CategoryId.LUGGAGE_TRACKER: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                ALLOWED,
                (
                    "Gepäcktracker sind im Handgepäck erlaubt.",
                    "Luggage trackers are allowed in hand baggage.",
                ),
            ),
            checked_baggage=_side(
                ALLOWED,
                (
                    "Gepäcktracker sind im aufgegebenen Gepäck erlaubt.",
                    "Luggage trackers are allowed in checked baggage.",
                ),
            ),
        )
    ),
    CategoryId.BLUNT_OBJECTS: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                NOT_ALLOWED,
                (
                    "Schläger, Hämmer und ähnliche stumpfe Gegenstände sind im "
                    "Handgepäck verboten.",
                    "Bats, hammers and similar blunt objects are prohibited in hand "
                    "baggage.",
                ),
                _PACK_IN_CHECKED,
            ),
            checked_baggage=_side(ALLOWED, _CHECKED_ALLOWED),
        )
    ),
    CategoryId.SPORTS_EQUIPMENT: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                NOT_ALLOWED,
                (
                    "Sportausrüstung ist im Handgepäck nicht erlaubt.",
                    "Sports equipment is not allowed in hand baggage.",
                ),
                _PACK_IN_CHECKED,
            ),
            checked_baggage=_side(
                ALLOWED,
                (
                    "Im aufgegebenen Gepäck erlaubt. Grössen-/Gewichtslimits der "
                    "Fluggesellschaft beachten.",
                    "Allowed in checked baggage. Check airline size/weight limits.",
                ),
            ),
        )
    ),
    CategoryId.FIREWORKS: _fixed(
        RuleVerdict(
            hand_baggage=_side(
                NOT_ALLOWED,
                (
                    "Feuerwerk ist in allen Gepäckarten verboten.",
                    "Fireworks are prohibited in all baggage.",
                ),
                (
                    "Darf nicht per Flugzeug transportiert werden.",
                    "Cannot be transported by air.",
                ),
            ),
            checked_baggage=_side(
                NOT_ALLOWED,
                (
                    "Feuerwerk ist in allen Gepäckarten verboten.",
                    "Fireworks are prohibited in all baggage.",
                ),
            ),
        )
    ),
    CategoryId.FUEL_PASTE: _prohibited(
        (
            "Brennpasten und brennbare Flüssigkeiten sind verboten.",
            "Fuel paste and flammable liquids are prohibited.",
        )
    ),
    CategoryId.TOXIC_CORROSIVE: _prohibited(
        (
            "Giftige und ätzende Stoffe sind verboten.",
            "Toxic and corrosive substances are prohibited.",
        )
    ),
    CategoryId.GAS_CARTRIDGES: _prohibited(
        (
            "Gaskartuschen und Druckgas sind verboten.",
            "Gas cartridges and compressed gas are prohibited.",
        )
    ),
    CategoryId.PAINTS: _prohibited(
        (
            "Farben und Lösungsmittel sind verboten.",
            "Paints and solvents are prohibited.",
        )
    ),
}

_missing = set(CategoryId) - set(_EVALUATORS)
if _missing:
    raise RuntimeError(f"Categories without rules: {sorted(_missing)}")


def evaluate(
    category_id: str, answers: Mapping[str, str], lang: str = DEFAULT_LANGUAGE
) -> Verdict:
    """Evaluate a category's rule for the given answers."""
    try:
        evaluator = _EVALUATORS[CategoryId(category_id)]
    except ValueError as exc:
        raise CategoryNotFound(str(category_id)) from exc
    return evaluator(answers).render(lang)
