"""Tests for language preferences."""

import pytest

from baggage_check.services.kv_store import InMemoryKeyValueStore
from baggage_check.services.preferences import LANGUAGE_KEY, LanguagePreferenceService
from tests.conftest import FailingKeyValueStore


def test_language_defaults_to_german() -> None:
    assert LanguagePreferenceService(InMemoryKeyValueStore()).get_language() == "de"


def test_language_roundtrip() -> None:
    store = InMemoryKeyValueStore()
    service = LanguagePreferenceService(store)

    assert service.set_language("en") == "en"

    assert service.get_language() == "en"
    assert store.get_item(LANGUAGE_KEY) == "en"


def test_unsupported_stored_language_falls_back() -> None:
    store = InMemoryKeyValueStore()
    store.set_item(LANGUAGE_KEY, "fr")

    assert LanguagePreferenceService(store).get_language() == "de"


def test_set_language_rejects_unknown() -> None:
    service = LanguagePreferenceService(InMemoryKeyValueStore())

    with pytest.raises(ValueError):
        service.set_language("fr")


def test_failing_store_uses_default() -> None:
    service = LanguagePreferenceService(FailingKeyValueStore(), default="en")

    assert service.get_language() == "en"
    assert service.set_language("de") == "de"
