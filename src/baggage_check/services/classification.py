"""Image classification service using LLMs."""

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from baggage_check.domain.analysis import AiAnalysis
from baggage_check.domain.catalog import DEFAULT_LANGUAGE, list_categories
from baggage_check.domain.errors import ClassificationUnavailable
from baggage_check.services.analysis import normalize_payload

logger = logging.getLogger(__name__)

_RULES_SUMMARY = """\
ZURICH AIRPORT RULES:
- Spare batteries / power banks: under 100 Wh allowed in hand baggage (tape \
terminals). 100-160 Wh: max 2, airline approval required. Over 160 Wh: \
prohibited. ALWAYS prohibited in checked baggage.
- Devices with installed batteries: under 100 Wh allowed. 100-160 Wh allowed \
with airline approval. Over 160 Wh prohibited. Checked baggage: device must be \
switched off.
- Liquids: hand baggage max 100 ml per container, in a transparent 1 litre \
bag. Medication and baby food exempt. Checked baggage: no size limit.
- Knives / scissors / tools: under 6 cm allowed in hand baggage. 6 cm or \
longer: checked baggage only.
- Lighters: prohibited in baggage, one may be carried on the person.
- Matches: prohibited in baggage, one box may be carried on the person.
- E-cigarettes: hand baggage only, prohibited in checked baggage.
- Smart luggage with fixed battery: prohibited. With removable battery: \
remove the battery and carry it in hand baggage.
- Fireworks, fuels, toxic substances, gas, paints: ALWAYS prohibited."""

_RESPONSE_FORMAT = """\
Respond with raw JSON only (no markdown) in exactly this shape:
{
  "identified": true,
  "itemName": "descriptive item name",
  "categoryId": "one of the category ids above",
  "confidence": "high" | "medium" | "low",
  "detectedProperties": {
    "mah": number or null,
    "voltage": number or null,
    "wh": number or null,
    "volume_ml": number or null,
    "blade_length_cm": number or null
  },
  "verdict": {
    "handBaggage": {
      "status": "allowed" | "conditional" | "not_allowed",
      "text": "clear explanation for the traveler",
      "tip": "optional helpful tip"
    },
    "checkedBaggage": {
      "status": "allowed" | "conditional" | "not_allowed",
      "text": "clear explanation for the traveler",
      "tip": "optional helpful tip"
    }
  },
  "summary": "short description of what you recognized"
}

If you cannot identify an item, respond with:
{"identified": false, "summary": "why the item could not be identified"}"""

_LANGUAGE_NAMES = {"de": "GERMAN", "en": "ENGLISH"}


class ClassifierClient(Protocol):
    """Interface for LLM image classification."""

    async def classify(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        instructions: str,
        prompt: str,
    ) -> str:
        """Return the raw classifier response text."""


@dataclass
class ClassificationService:
    """Service that prepares classification prompts and normalizes results."""

    client: ClassifierClient
    model: str
    reasoning_effort: str | None
    store: bool
    timeout_seconds: float | None = None

    async def classify(
        self, image: bytes | str, lang: str = DEFAULT_LANGUAGE
    ) -> AiAnalysis:
        """Classify a photo; failures raise ClassificationUnavailable."""
        data_url = to_image_data_url(image)
        prompt = (
            "Identify this item, read all visible technical data and give the "
            "complete verdict for the Zurich Airport baggage check."
        )
        request = self.client.classify(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=data_url,
            instructions=build_instructions(lang),
            prompt=prompt,
        )
        try:
            raw = await asyncio.wait_for(request, timeout=self.timeout_seconds)
        except TimeoutError as exc:
            logger.warning(
                "Image classification timed out",
                extra={"timeout_seconds": self.timeout_seconds},
            )
            raise ClassificationUnavailable("Image classification timed out") from exc
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception("Image classification failed")
            raise ClassificationUnavailable("Image classification failed") from exc
        return normalize_payload(raw, lang)


def build_instructions(lang: str = DEFAULT_LANGUAGE) -> str:
    """Build the system instructions listing every category and rule."""
    categories = "\n".join(
        f'- ID: "{category.id}" | Name: "{category.name.en}" | '
        f"Keywords: {category.keywords}"
        for category in list_categories()
    )
    language = _LANGUAGE_NAMES.get(lang, _LANGUAGE_NAMES[DEFAULT_LANGUAGE])
    return (
        "You are an airport security expert at Zurich Airport (ZRH). Identify "
        "the item in the photo and give a complete verdict on whether it is "
        "allowed in hand baggage and in checked baggage.\n\n"
        f"AVAILABLE CATEGORIES:\n{categories}\n\n"
        f"{_RULES_SUMMARY}\n\n"
        "TASK:\n"
        "1. Identify the item.\n"
        "2. Read ALL visible technical data (mAh, Wh, ml, cm, weight); the "
        "traveler should not have to enter anything.\n"
        "3. Apply the rules and return the complete verdict.\n"
        f"4. Write itemName, summary and verdict texts in {language}.\n\n"
        f"{_RESPONSE_FORMAT}\n\n"
        "IMPORTANT: always return a complete verdict when identified is true. "
        "Write for an ordinary traveler, not a technician."
    )


def to_image_data_url(image: bytes | str) -> str:
    """Return a data URL for raw bytes or a (possibly prefixed) base64 string."""
    if isinstance(image, bytes):
        if not image:
            raise ValueError("Image data is required")
        return _to_data_url(image)
    cleaned = image.strip()
    if not cleaned:
        raise ValueError("Image data is required")
    if cleaned.startswith("data:"):
        return cleaned
    return f"data:image/jpeg;base64,{cleaned}"


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
