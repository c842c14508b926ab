"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from baggage_check.api.models import (
    AnalyzeImageRequest,
    AnswerRequest,
    CategoryRequest,
    EvaluateRequest,
    LanguageRequest,
    PhotoRequest,
    ResolveRequest,
)
from baggage_check.app_logging import configure_logging
from baggage_check.containers import AppContainer
from baggage_check.domain.analysis import AiAnalysis
from baggage_check.domain.catalog import ItemCategory, list_categories, list_groups
from baggage_check.domain.errors import (
    CategoryNotFound,
    ClassificationUnavailable,
    InvalidSessionState,
)
from baggage_check.domain.scans import ScanRecord
from baggage_check.domain.verdicts import BaggageVerdict, Verdict
from baggage_check.services.rules import evaluate
from baggage_check.services.sessions import ScanSession


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(CategoryNotFound)
    async def category_not_found(_: Request, exc: CategoryNotFound) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)}
        )

    @app.exception_handler(InvalidSessionState)
    async def invalid_session_state(
        _: Request, exc: InvalidSessionState
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"error": str(exc)}
        )

    @app.exception_handler(ClassificationUnavailable)
    async def classification_unavailable(
        _: Request, exc: ClassificationUnavailable
    ) -> JSONResponse:
        logger.warning("Classification unavailable", extra={"error": str(exc)})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Failed to analyze image", "message": str(exc)},
        )

    def _lang(requested: str | None) -> str:
        if requested:
            return requested
        return container.preference_service.get_language()

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/categories")
    async def categories(lang: str | None = None) -> dict[str, object]:
        """Return the category catalog with guided questions."""
        resolved = _lang(lang)
        return {
            "categories": [
                _format_category(category, resolved) for category in list_categories()
            ]
        }

    @app.get("/categories/groups")
    async def category_groups(lang: str | None = None) -> dict[str, object]:
        """Return category group names in catalog order."""
        return {"groups": list_groups(_lang(lang))}

    @app.post("/evaluate")
    async def evaluate_category(body: EvaluateRequest) -> dict[str, object]:
        """Evaluate a category's rule for the given answers."""
        verdict = evaluate(body.category_id, body.answers, _lang(body.lang))
        return _format_verdict(verdict)

    @app.post("/api/analyze-image")
    async def analyze_image(body: AnalyzeImageRequest) -> dict[str, object]:
        """Classify a photo without touching the active scan."""
        if not (body.image and body.image.strip()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Image data (base64) is required",
            )
        analysis = await container.classification_service.classify(
            body.image, _lang(body.lang)
        )
        return _format_analysis(analysis)

    @app.get("/scan")
    async def scan_state() -> dict[str, object]:
        """Return the active scan session."""
        return _format_session(container.scan_service.session)

    @app.post("/scan/start")
    async def scan_start() -> dict[str, object]:
        """Discard the active scan and start a new one."""
        return _format_session(container.scan_service.start_scan())

    @app.post("/scan/photo")
    async def scan_photo(body: PhotoRequest) -> dict[str, object]:
        """Attach an optional photo reference to the active scan."""
        session = container.scan_service.session
        session.attach_photo(body.photo_ref)
        return _format_session(session)

    @app.post("/scan/category")
    async def scan_category(body: CategoryRequest) -> dict[str, object]:
        """Select the category of the active scan."""
        container.scan_service.select_category(body.category_id)
        return _format_session(container.scan_service.session)

    @app.post("/scan/answers")
    async def scan_answer(body: AnswerRequest) -> dict[str, object]:
        """Answer a guided question of the active scan."""
        session = container.scan_service.session
        session.set_answer(body.question_id, body.value)
        return _format_session(session)

    @app.post("/scan/resolve")
    async def scan_resolve(body: ResolveRequest) -> dict[str, object]:
        """Evaluate the active scan from its answers."""
        session = container.scan_service.session
        session.resolve_manual(_lang(body.lang))
        return _format_session(session)

    @app.post("/scan/analyze")
    async def scan_analyze(body: AnalyzeImageRequest) -> dict[str, object]:
        """Classify a photo and apply the result to the active scan."""
        if not (body.image and body.image.strip()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Image data (base64) is required",
            )
        outcome = await container.scan_service.analyze_photo(
            body.image, _lang(body.lang)
        )
        return {
            "analysis": _format_analysis(outcome.analysis),
            "needsManualSelection": outcome.needs_manual_selection,
            "stale": outcome.stale,
            "session": _format_session(container.scan_service.session),
        }

    @app.post("/scan/cancel")
    async def scan_cancel() -> dict[str, object]:
        """Cancel the in-flight classification of the active scan."""
        cancelled = container.scan_service.cancel_classification()
        return {
            "cancelled": cancelled,
            "session": _format_session(container.scan_service.session),
        }

    @app.post("/scan/persist")
    async def scan_persist() -> dict[str, object]:
        """Save the active scan's result to the history."""
        record = container.scan_service.persist()
        return {
            "saved": record is not None,
            "record": _format_record(record) if record else None,
            "session": _format_session(container.scan_service.session),
        }

    @app.get("/history")
    async def history() -> dict[str, object]:
        """Return saved scans, most recent first."""
        records = container.history_service.list()
        return {"records": [_format_record(record) for record in records]}

    @app.get("/history/{record_id}")
    async def history_detail(record_id: str) -> dict[str, object]:
        """Return a single saved scan."""
        record = container.history_service.get(record_id)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _format_record(record)

    @app.delete("/history/{record_id}")
    async def history_delete(record_id: str) -> dict[str, str]:
        """Delete a saved scan; unknown ids are ignored."""
        container.history_service.remove(record_id)
        return {"status": "ok"}

    @app.delete("/history")
    async def history_clear() -> dict[str, str]:
        """Delete every saved scan."""
        container.history_service.clear()
        return {"status": "ok"}

    @app.get("/preferences/language")
    async def get_language() -> dict[str, str]:
        """Return the preferred display language."""
        return {"lang": container.preference_service.get_language()}

    @app.put("/preferences/language")
    async def set_language(body: LanguageRequest) -> dict[str, str]:
        """Store the preferred display language."""
        return {"lang": container.preference_service.set_language(body.lang)}

    return app


def _format_category(category: ItemCategory, lang: str) -> dict[str, object]:
    """Format a catalog entry with its questions in one language."""
    return {
        "id": category.id.value,
        "name": category.name.get(lang),
        "group": category.group.get(lang),
        "icon": category.icon,
        "questions": [
            {
                "id": question.id,
                "text": question.text.get(lang),
                "options": [
                    {"value": option.value, "label": option.label.get(lang)}
                    for option in question.options
                ],
            }
            for question in category.questions
        ],
    }


def _format_baggage_verdict(verdict: BaggageVerdict) -> dict[str, object]:
    payload: dict[str, object] = {"status": verdict.status.value, "text": verdict.text}
    if verdict.tip:
        payload["tip"] = verdict.tip
    return payload


def _format_verdict(verdict: Verdict) -> dict[str, object]:
    return {
        "handBaggage": _format_baggage_verdict(verdict.hand_baggage),
        "checkedBaggage": _format_baggage_verdict(verdict.checked_baggage),
        "overallStatus": verdict.overall_status.value,
    }


def _format_analysis(analysis: AiAnalysis) -> dict[str, object]:
    return analysis.model_dump(mode="json", by_alias=True, exclude_none=True)


def _format_record(record: ScanRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "categoryId": record.category_id,
        "categoryName": record.category_name,
        "answers": record.answers,
        "verdict": _format_verdict(record.verdict),
        "photoUri": record.photo_ref,
        "timestamp": record.timestamp,
    }


def _format_session(session: ScanSession) -> dict[str, object]:
    """Format the scan session for clients rendering the flow."""
    return {
        "id": session.id,
        "state": session.state.value,
        "photoRef": session.photo_ref,
        "categoryId": session.category.id.value if session.category else None,
        "answers": session.answers,
        "pendingQuestions": [q.id for q in session.unanswered_questions()],
        "ready": session.is_ready,
        "verdict": _format_verdict(session.verdict) if session.verdict else None,
        "source": session.source.value if session.source else None,
        "aiAnalysis": (
            _format_analysis(session.ai_analysis) if session.ai_analysis else None
        ),
        "recordId": session.record.id if session.record else None,
    }
