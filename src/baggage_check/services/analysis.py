"""Validation and normalization of image classifier payloads."""

import json
import logging
import re

from pydantic import ValidationError

from baggage_check.domain.analysis import AiAnalysis, AiVerdict, DetectedProperties
from baggage_check.domain.catalog import DEFAULT_LANGUAGE, LocalizedText, find_category
from baggage_check.domain.errors import MalformedClassificationResult
from baggage_check.domain.verdicts import Verdict
from baggage_check.services.rules import evaluate

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)
_CONFIDENCE_LEVELS = {"high", "medium", "low"}

UNPARSEABLE_SUMMARY = LocalizedText(
    de=(
        "KI-Antwort konnte nicht verarbeitet werden. "
        "Bitte wählen Sie den Gegenstand manuell aus."
    ),
    en="The AI response could not be processed. Please select the item manually.",
)
UNIDENTIFIED_SUMMARY = LocalizedText(
    de=(
        "Der Gegenstand konnte nicht erkannt werden. "
        "Bitte wählen Sie ihn manuell aus."
    ),
    en="The item could not be identified. Please select it manually.",
)


def normalize_payload(raw: object, lang: str = DEFAULT_LANGUAGE) -> AiAnalysis:
    """Turn an untrusted classifier payload into a well-formed analysis.

    Never raises: anything that cannot be parsed or validated becomes an
    ``identified=False`` analysis with a summary the caller can show.
    """
    try:
        payload = _parse_payload(raw)
    except MalformedClassificationResult as exc:
        logger.warning("Malformed classification result", extra={"error": str(exc)})
        return AiAnalysis(identified=False, summary=UNPARSEABLE_SUMMARY.get(lang))

    summary = _optional_text(payload.get("summary"))
    if payload.get("identified") is not True:
        return AiAnalysis(
            identified=False, summary=summary or UNIDENTIFIED_SUMMARY.get(lang)
        )

    return AiAnalysis(
        identified=True,
        item_name=_optional_text(payload.get("itemName")),
        category_id=_optional_text(payload.get("categoryId")),
        confidence=_confidence(payload.get("confidence")),
        detected_properties=_detected_properties(payload.get("detectedProperties")),
        verdict=_verdict(payload.get("verdict")),
        summary=summary,
    )


def resolve_analysis(
    analysis: AiAnalysis, lang: str = DEFAULT_LANGUAGE
) -> Verdict | None:
    """Return the verdict an analysis supports, if any.

    A classifier verdict is used as-is. An identified category without a
    verdict is evaluated with default answers. Anything else cannot be
    classified and returns None.
    """
    if not analysis.identified:
        return None
    if analysis.verdict is not None:
        return analysis.verdict.to_domain()
    if analysis.category_id and find_category(analysis.category_id):
        return evaluate(analysis.category_id, {}, lang)
    return None


def _parse_payload(raw: object) -> dict[str, object]:
    if isinstance(raw, dict):
        return raw
    if raw is None:
        raise MalformedClassificationResult("empty payload")
    if not isinstance(raw, (str, bytes)):
        raise MalformedClassificationResult(
            f"unsupported payload type {type(raw).__name__}"
        )
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedClassificationResult("payload is not UTF-8") from exc
    cleaned = _strip_formatting(raw)
    if not cleaned:
        raise MalformedClassificationResult("empty payload")
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedClassificationResult(f"invalid JSON: {exc.msg}") from exc
    except RecursionError as exc:
        raise MalformedClassificationResult("JSON nested too deeply") from exc
    if not isinstance(payload, dict):
        raise MalformedClassificationResult("payload is not a JSON object")
    return payload


def _strip_formatting(text: str) -> str:
    """Remove markdown fences and prose around the outermost JSON object."""
    cleaned = _FENCE_PATTERN.sub("", text).strip()
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        return cleaned[start : end + 1]
    return cleaned


def _optional_text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _confidence(value: object) -> str | None:
    if isinstance(value, str) and value.lower() in _CONFIDENCE_LEVELS:
        return value.lower()
    return None


def _detected_properties(value: object) -> DetectedProperties | None:
    if not isinstance(value, dict):
        return None
    try:
        return DetectedProperties.model_validate(value)
    except ValidationError:
        logger.warning("Ignoring invalid detected properties")
        return None


def _verdict(value: object) -> AiVerdict | None:
    if value is None:
        return None
    try:
        return AiVerdict.model_validate(value)
    except ValidationError as exc:
        logger.warning(
            "Ignoring invalid classifier verdict",
            extra={"errors": exc.error_count()},
        )
        return None
