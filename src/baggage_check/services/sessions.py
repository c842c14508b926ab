"""Scan session state machine for a single classification attempt."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import uuid4

from baggage_check.domain.analysis import AiAnalysis
from baggage_check.domain.catalog import (
    DEFAULT_LANGUAGE,
    ItemCategory,
    Question,
    find_category,
    get_category,
)
from baggage_check.domain.errors import ClassificationUnavailable, InvalidSessionState
from baggage_check.domain.scans import ScanRecord
from baggage_check.domain.verdicts import Verdict
from baggage_check.services.analysis import resolve_analysis
from baggage_check.services.classification import ClassificationService
from baggage_check.services.history import HistoryService
from baggage_check.services.rules import evaluate

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY_ID = "unknown"


class SessionState(StrEnum):
    """Lifecycle of a scan session."""

    EMPTY = "EMPTY"
    PHOTO_OPTIONAL = "PHOTO_OPTIONAL"
    CLASSIFYING = "CLASSIFYING"
    ANSWERING = "ANSWERING"
    RESOLVED = "RESOLVED"
    PERSISTED = "PERSISTED"


class ResolutionSource(StrEnum):
    """How the session verdict was produced."""

    MANUAL = "manual"
    AI = "ai"


_CATEGORY_SELECTABLE = {
    SessionState.EMPTY,
    SessionState.PHOTO_OPTIONAL,
    SessionState.CLASSIFYING,
    SessionState.ANSWERING,
}
_AI_RESOLVABLE = {
    SessionState.EMPTY,
    SessionState.PHOTO_OPTIONAL,
    SessionState.CLASSIFYING,
}


class ScanSession:
    """Working state of one classification attempt.

    All mutation goes through the transition methods; an operation invoked
    in the wrong state raises InvalidSessionState. Once persisted the
    session is terminal and keeps returning the record it saved.
    """

    def __init__(self) -> None:
        self.id = str(uuid4())
        self._state = SessionState.EMPTY
        self._photo_ref: str | None = None
        self._category: ItemCategory | None = None
        self._answers: dict[str, str] = {}
        self._verdict: Verdict | None = None
        self._ai_analysis: AiAnalysis | None = None
        self._source: ResolutionSource | None = None
        self._lang = DEFAULT_LANGUAGE
        self._attempt = 0
        self._record: ScanRecord | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def photo_ref(self) -> str | None:
        return self._photo_ref

    @property
    def category(self) -> ItemCategory | None:
        return self._category

    @property
    def answers(self) -> dict[str, str]:
        return dict(self._answers)

    @property
    def verdict(self) -> Verdict | None:
        return self._verdict

    @property
    def ai_analysis(self) -> AiAnalysis | None:
        return self._ai_analysis

    @property
    def source(self) -> ResolutionSource | None:
        return self._source

    @property
    def attempt(self) -> int:
        """Token of the current classification attempt."""
        return self._attempt

    @property
    def record(self) -> ScanRecord | None:
        return self._record

    @property
    def is_ready(self) -> bool:
        """Return True when manual resolution may run."""
        if self._state != SessionState.ANSWERING:
            return False
        return not self.unanswered_questions()

    def unanswered_questions(self) -> list[Question]:
        """Return the selected category's questions still lacking an answer."""
        if self._category is None:
            return []
        return [q for q in self._category.questions if q.id not in self._answers]

    def attach_photo(self, photo_ref: str | None) -> None:
        """Record an optional photo reference."""
        self._require({SessionState.EMPTY}, "attach_photo")
        self._photo_ref = photo_ref
        self._state = SessionState.PHOTO_OPTIONAL

    def select_category(self, category_id: str) -> ItemCategory:
        """Select a category, discarding any previous answers and verdict."""
        self._require(_CATEGORY_SELECTABLE, "select_category")
        category = get_category(category_id)
        if self._state == SessionState.CLASSIFYING:
            self._attempt += 1
        self._category = category
        self._answers = {}
        self._verdict = None
        self._state = SessionState.ANSWERING
        return category

    def set_answer(self, question_id: str, value: str) -> None:
        """Upsert the answer to one of the selected category's questions."""
        self._require({SessionState.ANSWERING}, "set_answer")
        question = self._category.get_question(question_id) if self._category else None
        if question is None:
            raise self._reject(f"Unknown question {question_id!r} for this category")
        if value not in question.option_values():
            raise self._reject(
                f"Unknown option {value!r} for question {question_id!r}"
            )
        self._answers[question_id] = value

    def resolve_manual(self, lang: str = DEFAULT_LANGUAGE) -> Verdict:
        """Evaluate the selected category with the collected answers."""
        self._require({SessionState.ANSWERING}, "resolve_manual")
        missing = [question.id for question in self.unanswered_questions()]
        if missing:
            raise self._reject(f"Unanswered questions: {', '.join(missing)}")
        if self._category is None:
            raise self._reject("No category selected")
        self._verdict = evaluate(self._category.id, self._answers, lang)
        self._source = ResolutionSource.MANUAL
        self._lang = lang
        self._state = SessionState.RESOLVED
        return self._verdict

    def begin_classification(self) -> int:
        """Start an AI attempt and return its token."""
        self._require(_AI_RESOLVABLE, "begin_classification")
        self._attempt += 1
        self._state = SessionState.CLASSIFYING
        return self._attempt

    def abandon_classification(self, attempt: int | None = None) -> None:
        """Invalidate the running AI attempt and return to category selection."""
        if self._state != SessionState.CLASSIFYING:
            return
        if attempt is not None and attempt != self._attempt:
            return
        self._attempt += 1
        self._state = SessionState.PHOTO_OPTIONAL

    def resolve_from_ai(
        self,
        analysis: AiAnalysis,
        lang: str = DEFAULT_LANGUAGE,
        attempt: int | None = None,
    ) -> bool:
        """Apply a normalized classifier result.

        Returns True when the analysis produced a verdict. Otherwise the
        analysis is kept for display and the session goes back to category
        selection.
        """
        self._require(_AI_RESOLVABLE, "resolve_from_ai")
        if attempt is not None and attempt != self._attempt:
            raise self._reject("Classification result belongs to a stale attempt")
        self._ai_analysis = analysis
        verdict = resolve_analysis(analysis, lang)
        if verdict is None:
            self._state = SessionState.PHOTO_OPTIONAL
            return False
        self._category = (
            find_category(analysis.category_id) if analysis.category_id else None
        )
        self._answers = {}
        self._verdict = verdict
        self._source = ResolutionSource.AI
        self._lang = lang
        self._state = SessionState.RESOLVED
        return True

    def persist(
        self, history: HistoryService, now: datetime | None = None
    ) -> ScanRecord | None:
        """Save the resolved result exactly once.

        Returns the saved record, or None when the history store is
        unavailable; in that case the session stays resolved.
        """
        if self._state == SessionState.PERSISTED:
            return self._record
        self._require({SessionState.RESOLVED}, "persist")
        record = self._build_record(now or datetime.now(tz=UTC))
        if not history.append(record):
            return None
        self._record = record
        self._state = SessionState.PERSISTED
        return record

    def _build_record(self, now: datetime) -> ScanRecord:
        if self._verdict is None:
            raise self._reject("Cannot build a record without a verdict")
        category_id = self._category.id.value if self._category else None
        category_name = self._category.name.get(self._lang) if self._category else ""
        if self._source == ResolutionSource.AI and self._ai_analysis is not None:
            category_id = category_id or self._ai_analysis.category_id
            category_name = self._ai_analysis.item_name or category_name
        return ScanRecord(
            id=str(uuid4()),
            category_id=category_id or UNKNOWN_CATEGORY_ID,
            category_name=category_name,
            answers=dict(self._answers),
            hand_baggage_status=self._verdict.hand_baggage.status,
            checked_baggage_status=self._verdict.checked_baggage.status,
            hand_baggage_text=self._verdict.hand_baggage.text,
            checked_baggage_text=self._verdict.checked_baggage.text,
            hand_baggage_tip=self._verdict.hand_baggage.tip,
            checked_baggage_tip=self._verdict.checked_baggage.tip,
            photo_ref=self._photo_ref,
            timestamp=int(now.timestamp() * 1000),
        )

    def _require(self, allowed: set[SessionState], operation: str) -> None:
        if self._state not in allowed:
            raise self._reject(f"{operation} is not allowed in state {self._state}")

    def _reject(self, message: str) -> InvalidSessionState:
        logger.warning(
            "Rejected scan session operation",
            extra={
                "session_id": self.id,
                "state": str(self._state),
                "reason": message,
            },
        )
        return InvalidSessionState(message)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of running the classifier for the active session."""

    analysis: AiAnalysis
    verdict: Verdict | None
    stale: bool = False

    @property
    def needs_manual_selection(self) -> bool:
        """Return True when the user must pick a category manually."""
        return self.verdict is None and not self.stale


@dataclass
class ScanService:
    """Owns the single active scan session and its pending classification."""

    history: HistoryService
    classification_service: ClassificationService
    session: ScanSession = field(default_factory=ScanSession)
    _pending: asyncio.Task | None = field(default=None, repr=False)

    def start_scan(self) -> ScanSession:
        """Discard the active session and start an empty one."""
        self.cancel_classification()
        self.session = ScanSession()
        logger.info("Started scan session", extra={"session_id": self.session.id})
        return self.session

    async def analyze_photo(
        self, image: bytes | str, lang: str = DEFAULT_LANGUAGE
    ) -> AnalysisOutcome:
        """Classify a photo and apply the result to the active session.

        The result is discarded when the session was replaced or the attempt
        was abandoned while the request was in flight.
        """
        session = self.session
        attempt = session.begin_classification()
        task = asyncio.ensure_future(
            self.classification_service.classify(image, lang)
        )
        self._pending = task
        try:
            analysis = await task
        except asyncio.CancelledError:
            session.abandon_classification(attempt)
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            raise ClassificationUnavailable(
                "Image classification was cancelled"
            ) from None
        except (ClassificationUnavailable, ValueError):
            session.abandon_classification(attempt)
            raise
        except Exception as exc:
            session.abandon_classification(attempt)
            logger.exception(
                "Unexpected classification error",
                extra={"session_id": session.id, "attempt": attempt},
            )
            raise ClassificationUnavailable("Image classification failed") from exc
        finally:
            if self._pending is task:
                self._pending = None

        if session is not self.session or session.attempt != attempt:
            logger.info(
                "Discarding stale classification result",
                extra={"session_id": session.id, "attempt": attempt},
            )
            return AnalysisOutcome(analysis=analysis, verdict=None, stale=True)
        resolved = session.resolve_from_ai(analysis, lang, attempt=attempt)
        return AnalysisOutcome(
            analysis=analysis, verdict=session.verdict if resolved else None
        )

    def select_category(self, category_id: str) -> ItemCategory:
        """Select a category, cancelling any classification still in flight."""
        get_category(category_id)
        if self.session.state == SessionState.CLASSIFYING:
            self.cancel_classification()
        return self.session.select_category(category_id)

    def cancel_classification(self) -> bool:
        """Cancel the in-flight classification, if any."""
        task = self._pending
        self.session.abandon_classification()
        if task is None or task.done():
            return False
        task.cancel()
        return True

    def persist(self, now: datetime | None = None) -> ScanRecord | None:
        """Persist the active session's result."""
        return self.session.persist(self.history, now)
