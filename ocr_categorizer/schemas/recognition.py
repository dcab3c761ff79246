"""
Data models for text produced by the external recognition service.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BoundingBox(BaseModel):
    """Pixel rectangle in source-image coordinates."""
    model_config = ConfigDict(frozen=True)

    x0: float = 0.0
    y0: float = 0.0
    x1: float = 0.0
    y1: float = 0.0


class RecognizedBlock(BaseModel):
    """A positioned block of recognized text. Not used for classification."""
    model_config = ConfigDict(frozen=True)

    text: str
    confidence: float = Field(ge=0.0, le=100.0)
    bbox: BoundingBox = Field(default_factory=BoundingBox)
    baseline: BoundingBox = Field(default_factory=BoundingBox)


class RecognitionMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: str = "eng"
    processing_time_ms: int = Field(default=0, ge=0)
    image_width: int = Field(default=0, ge=0)
    image_height: int = Field(default=0, ge=0)


class RecognizedText(BaseModel):
    """Whole-document recognition result; immutable input to the pipeline."""
    model_config = ConfigDict(frozen=True)

    text: str
    confidence: float
    blocks: list[RecognizedBlock] = Field(default_factory=list)
    metadata: RecognitionMetadata = Field(default_factory=RecognitionMetadata)

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        return min(max(value, 0.0), 100.0)
