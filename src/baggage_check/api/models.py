"""Pydantic models for HTTP request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from baggage_check.domain.catalog import Language


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EvaluateRequest(_Request):
    """Manual evaluation of a category."""

    category_id: str = Field(alias="categoryId")
    answers: dict[str, str] = Field(default_factory=dict)
    lang: Language | None = None


class AnalyzeImageRequest(_Request):
    """Photo to classify, as base64 with or without a data URI prefix."""

    image: str | None = None
    lang: Language | None = None


class PhotoRequest(_Request):
    """Optional photo reference for the active scan."""

    photo_ref: str | None = Field(default=None, alias="photoRef")


class CategoryRequest(_Request):
    """Category chosen for the active scan."""

    category_id: str = Field(alias="categoryId")


class AnswerRequest(_Request):
    """Answer to one guided question."""

    question_id: str = Field(alias="questionId")
    value: str


class ResolveRequest(_Request):
    """Language to render the verdict in."""

    lang: Language | None = None


class LanguageRequest(_Request):
    """Preferred display language."""

    lang: Language
