"""Shared test fixtures."""

import asyncio
import json
from dataclasses import dataclass, field

import pytest

from baggage_check.config import Settings
from baggage_check.containers import AppContainer
from baggage_check.domain.errors import StorageUnavailable
from baggage_check.domain.scans import ScanRecord
from baggage_check.domain.verdicts import VerdictStatus
from baggage_check.services.classification import (
    ClassificationService,
    ClassifierClient,
)
from baggage_check.services.history import HistoryService
from baggage_check.services.kv_store import InMemoryKeyValueStore, KeyValueStore
from baggage_check.services.preferences import LanguagePreferenceService
from baggage_check.services.sessions import ScanService

KNIFE_VERDICT_PAYLOAD: dict[str, object] = {
    "identified": True,
    "itemName": "Taschenmesser",
    "categoryId": "knife",
    "confidence": "high",
    "detectedProperties": {
        "mah": None,
        "voltage": None,
        "wh": None,
        "volume_ml": None,
        "blade_length_cm": 8.5,
    },
    "verdict": {
        "handBaggage": {
            "status": "not_allowed",
            "text": "Klinge länger als 6 cm.",
            "tip": "Im aufgegebenen Gepäck verpacken.",
        },
        "checkedBaggage": {
            "status": "allowed",
            "text": "Im aufgegebenen Gepäck erlaubt.",
        },
    },
    "summary": "Ein Taschenmesser mit langer Klinge.",
}


@dataclass
class FakeClassifierClient(ClassifierClient):
    """Fake classifier client returning a fixed response text."""

    response: str = field(default_factory=lambda: json.dumps(KNIFE_VERDICT_PAYLOAD))
    calls: list[dict[str, object]] = field(default_factory=list)

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
        self.calls.append(
            {
                "model": model,
                "image_data_url": image_data_url,
                "instructions": instructions,
            }
        )
        return self.response


@dataclass
class FailingClassifierClient(ClassifierClient):
    """Classifier client that always fails."""

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
        raise RuntimeError("upstream error")


@dataclass
class BlockingClassifierClient(ClassifierClient):
    """Classifier client that waits until released."""

    response: str = field(default_factory=lambda: json.dumps(KNIFE_VERDICT_PAYLOAD))
    started: asyncio.Event = field(default_factory=asyncio.Event)
    release: asyncio.Event = field(default_factory=asyncio.Event)

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
        self.started.set()
        await self.release.wait()
        return self.response


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Store whose every operation fails."""

    def get_item(self, key: str) -> str | None:
        raise StorageUnavailable("read failed")

    def set_item(self, key: str, value: str) -> None:
        raise StorageUnavailable("write failed")

    def remove_item(self, key: str) -> None:
        raise StorageUnavailable("remove failed")


class ReadOnlyKeyValueStore(InMemoryKeyValueStore):
    """Store that reads normally but rejects writes."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        super().__init__()
        self._items.update(items or {})

    def set_item(self, key: str, value: str) -> None:
        raise StorageUnavailable("write failed")


def make_record(record_id: str, timestamp: int = 1_700_000_000_000) -> ScanRecord:
    return ScanRecord(
        id=record_id,
        category_id="knife",
        category_name="Messer",
        answers={"blade_size": "long"},
        hand_baggage_status=VerdictStatus.NOT_ALLOWED,
        checked_baggage_status=VerdictStatus.ALLOWED,
        hand_baggage_text="Messer mit Klingen ab 6 cm sind im Handgepäck verboten.",
        checked_baggage_text="Im aufgegebenen Gepäck erlaubt.",
        hand_baggage_tip="Im aufgegebenen Gepäck verpacken.",
        timestamp=timestamp,
    )


def make_classification_service(
    client: ClassifierClient | None = None, timeout_seconds: float | None = None
) -> ClassificationService:
    return ClassificationService(
        client=client or FakeClassifierClient(),
        model="gpt-5.2",
        reasoning_effort=None,
        store=False,
        timeout_seconds=timeout_seconds,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key")


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def history_service(store: InMemoryKeyValueStore) -> HistoryService:
    return HistoryService(store)


@pytest.fixture
def classifier_client() -> FakeClassifierClient:
    return FakeClassifierClient()


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryKeyValueStore,
    history_service: HistoryService,
    classifier_client: FakeClassifierClient,
) -> AppContainer:
    classification_service = make_classification_service(classifier_client)
    scan_service = ScanService(
        history=history_service,
        classification_service=classification_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        history_service=history_service,
        preference_service=LanguagePreferenceService(store),
        classification_service=classification_service,
        scan_service=scan_service,
        close_resources=close_resources,
    )
