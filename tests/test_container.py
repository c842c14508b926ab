"""Tests for container wiring."""

import asyncio

from baggage_check.containers import build_container, build_store
from baggage_check.services.kv_store import InMemoryKeyValueStore


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.scan_service is not None
    assert container.scan_service.history is container.history_service
    assert container.classification_service.model == "gpt-5.2"
    asyncio.run(container.close_resources())


def test_build_store_defaults_to_memory(settings) -> None:
    assert isinstance(build_store(settings), InMemoryKeyValueStore)


def test_build_container_applies_settings(settings) -> None:
    settings.history_limit = 5
    settings.default_language = "en"

    container = build_container(settings)

    assert container.history_service.limit == 5
    assert container.preference_service.get_language() == "en"
    asyncio.run(container.close_resources())
