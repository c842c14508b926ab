"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from baggage_check.adapters.openai_classifier_client import OpenAIClassifierClient
from baggage_check.adapters.supabase_kv_store import SupabaseKeyValueStore
from baggage_check.config import Settings
from baggage_check.services.classification import ClassificationService
from baggage_check.services.history import HistoryService
from baggage_check.services.kv_store import InMemoryKeyValueStore, KeyValueStore
from baggage_check.services.preferences import LanguagePreferenceService
from baggage_check.services.sessions import ScanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    history_service: HistoryService
    preference_service: LanguagePreferenceService
    classification_service: ClassificationService
    scan_service: ScanService
    close_resources: Callable[[], Awaitable[None]]


def build_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by the settings."""
    if not settings.uses_supabase:
        return InMemoryKeyValueStore()
    supabase_client = create_client(
        settings.supabase_url, settings.supabase_service_key
    )
    return SupabaseKeyValueStore(
        client=supabase_client,
        table=settings.storage_table,
        scope=settings.storage_scope,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = build_store(resolved_settings)
    history_service = HistoryService(store, limit=resolved_settings.history_limit)
    preference_service = LanguagePreferenceService(
        store, default=resolved_settings.default_language
    )
    classifier_client = OpenAIClassifierClient.create(resolved_settings.openai_api_key)
    classification_service = ClassificationService(
        client=classifier_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        timeout_seconds=resolved_settings.classification_timeout_seconds,
    )
    scan_service = ScanService(
        history=history_service,
        classification_service=classification_service,
    )

    async def close_resources() -> None:
        scan_service.cancel_classification()
        await classifier_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        history_service=history_service,
        preference_service=preference_service,
        classification_service=classification_service,
        scan_service=scan_service,
        close_resources=close_resources,
    )
