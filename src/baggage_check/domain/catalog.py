"""Static catalog of item categories and their guided questions."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

from baggage_check.domain.errors import CategoryNotFound

Language = Literal["de", "en"]
LANGUAGES: tuple[Language, ...] = ("de", "en")
DEFAULT_LANGUAGE: Language = "de"

Answers = dict[str, str]


class CategoryId(StrEnum):
    """Stable identifiers of every category in the catalog."""

    BATTERY_SPARE = "battery_spare"
    BATTERY_INSTALLED = "battery_installed"
    LIQUIDS_GENERAL = "liquids_general"
    KNIFE = "knife"
    SCISSORS = "scissors"
    TOOLS = "tools"
    LIGHTER = "lighter"
    MATCHES = "matches"
    E_CIGARETTE = "e_cigarette"
    ELECTRONICS = "electronics"
    SMART_LUGGAGE_REMOVABLE = "smart_luggage_removable"
    SMART_LUGGAGE_FIXED = "smart_luggage_fixed"
    LUGGAGE_TRACKER = "luggage_tracker"
    BLUNT_OBJECTS = "blunt_objects"
    SPORTS_EQUIPMENT = "sports_equipment"
    FIREWORKS = "fireworks"
    FUEL_PASTE = "fuel_paste"
    TOXIC_CORROSIVE = "toxic_corrosive"
    GAS_CARTRIDGES = "gas_cartridges"
    PAINTS = "paints"


@dataclass(frozen=True)
class LocalizedText:
    """Pre-authored text in every supported language."""

    de: str
    en: str

    def get(self, lang: str) -> str:
        """Return the text for a language, falling back to German."""
        return self.en if lang == "en" else self.de


@dataclass(frozen=True)
class QuestionOption:
    """Selectable answer to a guided question."""

    value: str
    label: LocalizedText


@dataclass(frozen=True)
class Question:
    """Guided question asked before evaluating a category."""

    id: str
    text: LocalizedText
    options: tuple[QuestionOption, ...]

    def option_values(self) -> set[str]:
        return {option.value for option in self.options}


@dataclass(frozen=True)
class ItemCategory:
    """A class of items sharing one rule."""

    id: CategoryId
    name: LocalizedText
    group: LocalizedText
    icon: str
    questions: tuple[Question, ...] = ()
    keywords: str = ""

    @property
    def is_direct(self) -> bool:
        """Return True when the category yields a verdict without questions."""
        return not self.questions

    def get_question(self, question_id: str) -> Question | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None


def _text(de: str, en: str) -> LocalizedText:
    return LocalizedText(de=de, en=en)


def _option(value: str, de: str, en: str) -> QuestionOption:
    return QuestionOption(value=value, label=_text(de, en))


_BATTERIES = _text("Batterien & Powerbanks", "Batteries & Power Banks")
_LIQUIDS = _text("Flüssigkeiten", "Liquids")
_SHARP = _text("Scharfe Gegenstände", "Sharp Objects")
_FIRE = _text("Feuer & Brennbar", "Fire & Flammable")
_ELECTRONICS = _text("Elektronik", "Electronics")
_SPORTS = _text("Sport & Stumpfe Gegenstände", "Sports & Blunt Objects")
_PROHIBITED = _text("Verboten", "Prohibited")

_SHORT_OR_LONG_BLADE = _text(
    "Ist die Klinge kürzer als 6 cm?", "Is the blade shorter than 6 cm?"
)

CATEGORIES: tuple[ItemCategory, ...] = (
    ItemCategory(
        id=CategoryId.BATTERY_SPARE,
        name=_text("Ersatzbatterie / Powerbank", "Spare Battery / Power Bank"),
        group=_BATTERIES,
        icon="battery-charging",
        keywords=(
            "power bank, portable charger, spare battery, external battery, "
            "battery pack"
        ),
        questions=(
            Question(
                id="size",
                text=_text(
                    "Welche Art Powerbank / Ersatzbatterie haben Sie?",
                    "What kind of power bank / spare battery do you have?",
                ),
                options=(
                    _option(
                        "small",
                        "Standard (z.B. Handy-Ladegerät, kleine Powerbank)",
                        "Standard (e.g. phone charger, small power bank)",
                    ),
                    _option(
                        "large",
                        "Gross (z.B. Laptop-Powerbank, grosse Kapazität)",
                        "Large (e.g. laptop power bank, high capacity)",
                    ),
                    _option(
                        "xlarge", "Sehr gross / Industriell", "Very large / Industrial"
                    ),
                ),
            ),
        ),
    ),
    ItemCategory(
        id=CategoryId.BATTERY_INSTALLED,
        name=_text("Batterie im Gerät verbaut", "Battery Installed in Device"),
        group=_BATTERIES,
        icon="smartphone",
        keywords=(
            "laptop battery, phone battery, tablet battery, "
            "device with built-in battery"
        ),
        questions=(
            Question(
                id="device_type",
                text=_text(
                    "Was für ein Gerät ist es?", "What kind of device is it?"
                ),
                options=(
                    _option(
                        "small",
                        "Handy, Tablet, Kamera oder ähnlich",
                        "Phone, tablet, camera or similar",
                    ),
                    _option(
                        "medium",
                        "Laptop oder grösseres Gerät",
                        "Laptop or larger device",
                    ),
                    _option(
                        "large",
                        "Sehr grosses Gerät (E-Bike-Akku, etc.)",
                        "Very large device (e-bike battery, etc.)",
                    ),
                ),
            ),
        ),
    ),
    ItemCategory(
        id=CategoryId.LIQUIDS_GENERAL,
        name=_text("Flüssigkeiten, Gels & Aerosole", "Liquids, Gels & Aerosols"),
        group=_LIQUIDS,
        icon="droplet",
        keywords=(
            "water, perfume, shampoo, lotion, gel, spray, deodorant, toothpaste, "
            "cream, drink, juice, oil"
        ),
        questions=(
            Question(
                id="container_size",
                text=_text(
                    "Ist der Behälter Reisegrösse (100 ml oder kleiner)?",
                    "Is the container travel-sized (100 ml or smaller)?",
                ),
                options=(
                    _option(
                        "small", "Ja, 100 ml oder kleiner", "Yes, 100 ml or smaller"
                    ),
                    _option(
                        "large", "Nein, grösser als 100 ml", "No, larger than 100 ml"
                    ),
                ),
            ),
            Question(
                id="liquid_type",
                text=_text(
                    "Um was für eine Flüssigkeit handelt es sich?",
                    "What type of liquid is it?",
                ),
                options=(
                    _option(
                        "regular",
                        "Normale Flüssigkeit (Parfüm, Shampoo, etc.)",
                        "Regular liquid (perfume, shampoo, etc.)",
                    ),
                    _option("medication", "Medikament", "Medication"),
                    _option(
                        "baby_food",
                        "Babynahrung / Spezialdiät",
                        "Baby food / Special diet",
                    ),
                    _option("duty_free", "Duty-Free-Kauf", "Duty-free purchase"),
                ),
            ),
        ),
    ),
    ItemCategory(
        id=CategoryId.KNIFE,
        name=_text("Messer", "Knife"),
        group=_SHARP,
        icon="minus",
        keywords=(
            "knife, pocket knife, swiss army knife, utility knife, kitchen knife, "
            "hunting knife"
        ),
        questions=(
            Question(
                id="blade_size",
                text=_SHORT_OR_LONG_BLADE,
                options=(
                    _option("short", "Ja, kürzer als 6 cm", "Yes, shorter than 6 cm"),
                    _option("long", "Nein, 6 cm oder länger", "No, 6 cm or longer"),
                ),
            ),
        ),
    ),
    ItemCategory(
        id=CategoryId.SCISSORS,
        name=_text("Schere", "Scissors"),
        group=_SHARP,
        icon="scissors",
        keywords="scissors, shears, craft scissors, nail scissors",
        questions=(
            Question(
                id="blade_size",
                text=_SHORT_OR_LONG_BLADE,
                options=(
                    _option(
                        "short",
                        "Ja, kürzer als 6 cm (z.B. Nagelschere)",
                        "Yes, shorter than 6 cm (e.g. nail scissors)",
                    ),
                    _option("long", "Nein, 6 cm oder länger", "No, 6 cm or longer"),
                ),
            ),
        ),
    ),
    ItemCategory(
        id=CategoryId.TOOLS,
        name=_text("Werkzeuge (Schraubenzieher, etc.)", "Tools (screwdrivers, etc.)"),
        group=_SHARP,
        icon="tool",
        keywords="screwdriver, wrench, pliers, hammer tool, multi-tool, spanner",
        questions=(
            Question(
                id="tool_size",
                text=_text(
                    "Ist das Werkzeug kürzer als 6 cm?",
                    "Is the tool shorter than 6 cm?",
                ),
                options=(
                    _option("short", "Ja, kürzer als 6 cm", "Yes, shorter than 6 cm"),
                    _option("long", "Nein, 6 cm oder länger", "No, 6 cm or longer"),
                ),
            ),
        ),
    ),
    ItemCategory(
        id=CategoryId.LIGHTER,
        name=_text("Feuerzeug", "Lighter"),
        group=_FIRE,
        icon="zap",
        keywords="lighter, zippo, gas lighter, cigarette lighter, torch lighter",
    ),
    ItemCategory(
        id=CategoryId.MATCHES,
        name=_text("Streichhölzer", "Matches"),
        group=_FIRE,
        icon="zap",
        keywords="matches, matchbox, matchstick",
    ),
    ItemCategory(
        id=CategoryId.E_CIGARETTE,
        name=_text("E-Zigarette / Vape", "E-Cigarette / Vape"),
        group=_ELECTRONICS,
        icon="wind",
        keywords="e-cigarette, vape, vaping device, e-pipe, juul, vape pen",
    ),
    ItemCategory(
        id=CategoryId.ELECTRONICS,
        name=_text(
            "Laptop / Tablet / Handy / Kamera", "Laptop / Tablet / Phone / Camera"
        ),
        group=_ELECTRONICS,
        icon="monitor",
        keywords=(
            "laptop, tablet, phone, camera, smartphone, macbook, ipad, DSLR, "
            "gopro, kindle"
        ),
    ),
    ItemCategory(
        id=CategoryId.SMART_LUGGAGE_REMOVABLE,
        name=_text(
            "Smart Luggage (Akku herausnehmbar)", "Smart Luggage (removable battery)"
        ),
        group=_ELECTRONICS,
        icon="briefcase",
        keywords="smart suitcase, smart luggage with removable battery",
    ),
    ItemCategory(
        id=CategoryId.SMART_LUGGAGE_FIXED,
        name=_text(
            "Smart Luggage (Akku fest verbaut)", "Smart Luggage (built-in battery)"
        ),
        group=_ELECTRONICS,
        icon="briefcase",
        keywords="smart suitcase with permanent battery",
    ),
    ItemCategory(
        id=CategoryId.LUGGAGE_TRACKER,
        name=_text("Gepäcktracker (AirTag, etc.)", "Luggage Tracker (AirTag, etc.)"),
        group=_ELECTRONICS,
        icon="map-pin",
        keywords="airtag, tile tracker, luggage tracker, gps tracker",
    ),
    ItemCategory(
        id=CategoryId.BLUNT_OBJECTS,
        name=_text(
            "Stumpfe Gegenstände (Schläger, Hämmer)", "Blunt Objects (bats, hammers)"
        ),
        group=_SPORTS,
        icon="target",
        keywords="baseball bat, golf club, hammer, cricket bat, hockey stick",
    ),
    ItemCategory(
        id=CategoryId.SPORTS_EQUIPMENT,
        name=_text(
            "Sportausrüstung (Schläger, Stöcke)", "Sports Equipment (rackets, poles)"
        ),
        group=_SPORTS,
        icon="activity",
        keywords="tennis racket, badminton racket, ski poles, hiking poles",
    ),
    ItemCategory(
        id=CategoryId.FIREWORKS,
        name=_text("Feuerwerk / Wunderkerzen", "Fireworks / Sparklers"),
        group=_PROHIBITED,
        icon="alert-triangle",
        keywords="fireworks, sparklers, firecrackers, pyrotechnics",
    ),
    ItemCategory(
        id=CategoryId.FUEL_PASTE,
        name=_text(
            "Brennpasten / Brennbare Flüssigkeiten", "Fuel Paste / Flammable Liquids"
        ),
        group=_PROHIBITED,
        icon="alert-triangle",
        keywords="fuel, gasoline, lighter fluid, flammable liquid",
    ),
    ItemCategory(
        id=CategoryId.TOXIC_CORROSIVE,
        name=_text(
            "Säuren / Giftige / Ätzende Stoffe",
            "Acids / Toxic / Corrosive Substances",
        ),
        group=_PROHIBITED,
        icon="alert-triangle",
        keywords="acid, bleach, corrosive, toxic chemical, poison",
    ),
    ItemCategory(
        id=CategoryId.GAS_CARTRIDGES,
        name=_text("Gaskartuschen / Druckgas", "Gas Cartridges / Compressed Gas"),
        group=_PROHIBITED,
        icon="alert-triangle",
        keywords="gas cartridge, compressed gas, propane, butane, pepper spray",
    ),
    ItemCategory(
        id=CategoryId.PAINTS,
        name=_text("Farben / Lösungsmittel", "Paints / Solvents"),
        group=_PROHIBITED,
        icon="alert-triangle",
        keywords="paint, paint thinner, solvent, turpentine, acetone",
    ),
)

_BY_ID: dict[CategoryId, ItemCategory] = {
    category.id: category for category in CATEGORIES
}

if len(_BY_ID) != len(CATEGORIES):
    raise RuntimeError("Duplicate category identifiers in catalog")


def list_categories() -> tuple[ItemCategory, ...]:
    """Return every category in catalog order."""
    return CATEGORIES


def find_category(category_id: str) -> ItemCategory | None:
    """Return a category by identifier, if known."""
    try:
        return _BY_ID[CategoryId(category_id)]
    except ValueError:
        return None


def get_category(category_id: str) -> ItemCategory:
    """Return a category by identifier or raise CategoryNotFound."""
    category = find_category(category_id)
    if category is None:
        raise CategoryNotFound(category_id)
    return category


def list_groups(lang: str = DEFAULT_LANGUAGE) -> list[str]:
    """Return unique group names in catalog order."""
    groups: list[str] = []
    for category in CATEGORIES:
        name = category.group.get(lang)
        if name not in groups:
            groups.append(name)
    return groups
