"""Scan history persisted as a single capped list."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field

from baggage_check.domain.errors import StorageUnavailable
from baggage_check.domain.scans import ScanRecord
from baggage_check.domain.verdicts import VerdictStatus
from baggage_check.services.kv_store import KeyValueStore

HISTORY_KEY = "zrh_scan_history"
HISTORY_LIMIT = 50

logger = logging.getLogger(__name__)


@dataclass
class HistoryService:
    """Append-only, newest-first scan history.

    Every write reads the whole list, mutates it and writes it back, so the
    cycle runs under a lock. The lock only covers this process.
    """

    store: KeyValueStore
    limit: int = HISTORY_LIMIT
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def list(self) -> list[ScanRecord]:
        """Return stored records, most recent first."""
        try:
            return self._read()
        except StorageUnavailable:
            logger.exception("Scan history unavailable")
            return []

    def get(self, record_id: str) -> ScanRecord | None:
        """Return a single record by id, if present."""
        for record in self.list():
            if record.id == record_id:
                return record
        return None

    def append(self, record: ScanRecord) -> bool:
        """Insert a record at the front and drop entries beyond the cap."""
        with self._lock:
            try:
                records = self._read()
                records.insert(0, record)
                self._write(records[: self.limit])
            except StorageUnavailable:
                logger.exception(
                    "Failed to save scan record", extra={"record_id": record.id}
                )
                return False
        return True

    def remove(self, record_id: str) -> None:
        """Delete a record; unknown ids are ignored."""
        with self._lock:
            try:
                records = self._read()
                remaining = [record for record in records if record.id != record_id]
                if len(remaining) != len(records):
                    self._write(remaining)
            except StorageUnavailable:
                logger.exception(
                    "Failed to delete scan record", extra={"record_id": record_id}
                )

    def clear(self) -> None:
        """Delete every stored record."""
        with self._lock:
            try:
                self.store.remove_item(HISTORY_KEY)
            except StorageUnavailable:
                logger.exception("Failed to clear scan history")

    def _read(self) -> list[ScanRecord]:
        raw = self.store.get_item(HISTORY_KEY)
        if not raw:
            return []
        try:
            rows = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable scan history")
            return []
        if not isinstance(rows, list):
            logger.warning("Discarding unreadable scan history")
            return []
        records = []
        for row in rows:
            record = _record_from_row(row)
            if record is not None:
                records.append(record)
        return records

    def _write(self, records: list[ScanRecord]) -> None:
        payload = json.dumps([_record_to_row(record) for record in records])
        self.store.set_item(HISTORY_KEY, payload)


def _record_to_row(record: ScanRecord) -> dict[str, object]:
    row: dict[str, object] = {
        "id": record.id,
        "categoryId": record.category_id,
        "categoryName": record.category_name,
        "answers": dict(record.answers),
        "handBaggageStatus": record.hand_baggage_status.value,
        "checkedBaggageStatus": record.checked_baggage_status.value,
        "handBaggageText": record.hand_baggage_text,
        "checkedBaggageText": record.checked_baggage_text,
        "timestamp": record.timestamp,
    }
    if record.hand_baggage_tip is not None:
        row["handBaggageTip"] = record.hand_baggage_tip
    if record.checked_baggage_tip is not None:
        row["checkedBaggageTip"] = record.checked_baggage_tip
    if record.photo_ref is not None:
        row["photoUri"] = record.photo_ref
    return row


def _record_from_row(row: object) -> ScanRecord | None:
    if not isinstance(row, dict):
        return None
    try:
        answers = row.get("answers") or {}
        return ScanRecord(
            id=str(row["id"]),
            category_id=str(row["categoryId"]),
            category_name=str(row.get("categoryName", "")),
            answers={str(key): str(value) for key, value in answers.items()},
            hand_baggage_status=VerdictStatus(row["handBaggageStatus"]),
            checked_baggage_status=VerdictStatus(row["checkedBaggageStatus"]),
            hand_baggage_text=str(row["handBaggageText"]),
            checked_baggage_text=str(row["checkedBaggageText"]),
            hand_baggage_tip=_optional_str(row.get("handBaggageTip")),
            checked_baggage_tip=_optional_str(row.get("checkedBaggageTip")),
            photo_ref=_optional_str(row.get("photoUri")),
            timestamp=int(row["timestamp"]),
        )
    except (KeyError, TypeError, ValueError, AttributeError):
        logger.warning(
            "Skipping malformed scan record", extra={"row_id": row.get("id")}
        )
        return None


def _optional_str(value: object) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise TypeError(f"expected a string, got {type(value).__name__}")
