"""Models for image classification results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from baggage_check.domain.verdicts import BaggageVerdict, Verdict, VerdictStatus

Confidence = Literal["high", "medium", "low"]


class DetectedProperties(BaseModel):
    """Technical data read from the photographed item."""

    mah: float | None = None
    voltage: float | None = None
    wh: float | None = None
    volume_ml: float | None = None
    blade_length_cm: float | None = None


class AiBaggageVerdict(BaseModel):
    """Classifier verdict for one baggage type."""

    status: VerdictStatus
    text: str
    tip: str | None = None

    def to_domain(self) -> BaggageVerdict:
        return BaggageVerdict(status=self.status, text=self.text, tip=self.tip)


class AiVerdict(BaseModel):
    """Classifier verdict for both baggage types."""

    model_config = ConfigDict(populate_by_name=True)

    hand_baggage: AiBaggageVerdict = Field(alias="handBaggage")
    checked_baggage: AiBaggageVerdict = Field(alias="checkedBaggage")

    def to_domain(self) -> Verdict:
        return Verdict(
            hand_baggage=self.hand_baggage.to_domain(),
            checked_baggage=self.checked_baggage.to_domain(),
        )


class AiAnalysis(BaseModel):
    """Normalized classifier output, always safe to render."""

    model_config = ConfigDict(populate_by_name=True)

    identified: bool
    item_name: str | None = Field(default=None, alias="itemName")
    category_id: str | None = Field(default=None, alias="categoryId")
    confidence: Confidence | None = None
    detected_properties: DetectedProperties | None = Field(
        default=None, alias="detectedProperties"
    )
    verdict: AiVerdict | None = None
    summary: str | None = None
