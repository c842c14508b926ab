"""Language preference service."""

import logging
from dataclasses import dataclass

from baggage_check.domain.catalog import DEFAULT_LANGUAGE, LANGUAGES, Language
from baggage_check.domain.errors import StorageUnavailable
from baggage_check.services.kv_store import KeyValueStore

LANGUAGE_KEY = "zrh_language"

logger = logging.getLogger(__name__)


@dataclass
class LanguagePreferenceService:
    """Reads and writes the preferred display language."""

    store: KeyValueStore
    default: Language = DEFAULT_LANGUAGE

    def get_language(self) -> Language:
        """Return the stored language or the default when unset or unreadable."""
        try:
            saved = self.store.get_item(LANGUAGE_KEY)
        except StorageUnavailable:
            logger.warning("Language preference unavailable, using default")
            return self.default
        for language in LANGUAGES:
            if saved == language:
                return language
        return self.default

    def set_language(self, lang: str) -> Language:
        """Persist a supported language and return it."""
        if lang not in LANGUAGES:
            raise ValueError(f"Unsupported language: {lang!r}")
        try:
            self.store.set_item(LANGUAGE_KEY, lang)
        except StorageUnavailable:
            logger.warning(
                "Failed to persist language preference", extra={"lang": lang}
            )
        return lang  # type: ignore[return-value]
