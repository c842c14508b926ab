"""Tests for scan history persistence."""

import json

from baggage_check.domain.scans import ScanRecord
from baggage_check.domain.verdicts import VerdictStatus
from baggage_check.services.history import HISTORY_KEY, HistoryService
from baggage_check.services.kv_store import InMemoryKeyValueStore
from tests.conftest import FailingKeyValueStore, ReadOnlyKeyValueStore, make_record


def test_append_keeps_newest_first_and_caps_length() -> None:
    service = HistoryService(InMemoryKeyValueStore())

    for index in range(51):
        assert service.append(make_record(f"scan-{index}", timestamp=index))

    records = service.list()
    assert len(records) == 50
    assert records[0].id == "scan-50"
    assert records[-1].id == "scan-1"
    assert service.get("scan-0") is None


def test_record_roundtrip_preserves_fields() -> None:
    service = HistoryService(InMemoryKeyValueStore())
    record = ScanRecord(
        id="scan-1",
        category_id="battery_spare",
        category_name="Ersatzbatterie / Powerbank",
        answers={"size": "large"},
        hand_baggage_status=VerdictStatus.CONDITIONAL,
        checked_baggage_status=VerdictStatus.NOT_ALLOWED,
        hand_baggage_text="Grosse Powerbanks sind erlaubt.",
        checked_baggage_text="Nie im aufgegebenen Gepäck.",
        hand_baggage_tip="Fluggesellschaft kontaktieren.",
        checked_baggage_tip="Im Handgepäck mitführen.",
        photo_ref="file:///photos/powerbank.jpg",
        timestamp=1_700_000_000_123,
    )

    service.append(record)

    assert service.get("scan-1") == record


def test_rows_use_camel_case_keys() -> None:
    store = InMemoryKeyValueStore()
    HistoryService(store).append(make_record("scan-1"))

    rows = json.loads(store.get_item(HISTORY_KEY) or "[]")

    assert rows[0]["categoryId"] == "knife"
    assert rows[0]["handBaggageStatus"] == "not_allowed"
    assert rows[0]["handBaggageTip"] == "Im aufgegebenen Gepäck verpacken."
    assert "checkedBaggageTip" not in rows[0]
    assert "photoUri" not in rows[0]


def test_remove_and_clear() -> None:
    service = HistoryService(InMemoryKeyValueStore())
    service.append(make_record("scan-1"))
    service.append(make_record("scan-2"))

    service.remove("missing")
    assert [record.id for record in service.list()] == ["scan-2", "scan-1"]

    service.remove("scan-2")
    assert [record.id for record in service.list()] == ["scan-1"]

    service.clear()
    assert service.list() == []


def test_unreadable_history_is_treated_as_empty() -> None:
    store = InMemoryKeyValueStore()
    store.set_item(HISTORY_KEY, "{not json")
    service = HistoryService(store)

    assert service.list() == []
    assert service.append(make_record("scan-1"))
    assert [record.id for record in service.list()] == ["scan-1"]


def test_malformed_rows_are_skipped() -> None:
    store = InMemoryKeyValueStore()
    HistoryService(store).append(make_record("scan-1"))
    rows = json.loads(store.get_item(HISTORY_KEY) or "[]")
    rows.append({"id": "broken", "handBaggageStatus": "maybe"})
    rows.append("garbage")
    store.set_item(HISTORY_KEY, json.dumps(rows))

    records = HistoryService(store).list()

    assert [record.id for record in records] == ["scan-1"]


def test_failing_store_degrades_gracefully() -> None:
    service = HistoryService(FailingKeyValueStore())

    assert service.list() == []
    assert service.get("scan-1") is None
    assert service.append(make_record("scan-1")) is False
    service.remove("scan-1")
    service.clear()


def test_failed_write_keeps_previous_history() -> None:
    seeded = InMemoryKeyValueStore()
    HistoryService(seeded).append(make_record("scan-1"))
    store = ReadOnlyKeyValueStore({HISTORY_KEY: seeded.get_item(HISTORY_KEY) or ""})
    service = HistoryService(store)

    assert service.append(make_record("scan-2")) is False
    assert [record.id for record in service.list()] == ["scan-1"]


def test_custom_limit() -> None:
    service = HistoryService(InMemoryKeyValueStore(), limit=2)
    for index in range(3):
        service.append(make_record(f"scan-{index}"))

    assert [record.id for record in service.list()] == ["scan-2", "scan-1"]


def test_rows_with_non_string_optional_fields_are_skipped() -> None:
    store = InMemoryKeyValueStore()
    HistoryService(store).append(make_record("scan-1"))
    rows = json.loads(store.get_item(HISTORY_KEY) or "[]")
    broken = dict(rows[0], id="scan-2", handBaggageTip=42)
    other = dict(rows[0], id="scan-3", photoUri={"path": "x"})
    store.set_item(HISTORY_KEY, json.dumps([broken, other, *rows]))

    records = HistoryService(store).list()

    assert [record.id for record in records] == ["scan-1"]
