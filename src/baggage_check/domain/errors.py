"""Error taxonomy for baggage classification."""


class BaggageCheckError(Exception):
    """Base class for all baggage check errors."""


class CategoryNotFound(BaggageCheckError, LookupError):
    """Raised when a category identifier is not in the catalog."""

    def __init__(self, category_id: str) -> None:
        super().__init__(f"Unknown item category: {category_id!r}")
        self.category_id = category_id


class InvalidSessionState(BaggageCheckError):
    """Raised when a scan session operation is invoked out of sequence."""


class ClassificationUnavailable(BaggageCheckError):
    """Raised when the image classifier failed, timed out or was cancelled."""


class MalformedClassificationResult(BaggageCheckError):
    """Raised when a classifier payload cannot be parsed or validated."""


class StorageUnavailable(BaggageCheckError):
    """Raised when the persisted key-value store cannot be read or written."""
