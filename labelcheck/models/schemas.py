from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

FieldStatus = Literal["match", "mismatch", "not_found"]
ImageType = Literal["front", "back", "other"]
LabelStatus = Literal["approved", "conditionally_approved", "needs_correction", "rejected"]


class FrozenModel(BaseModel):
    """Base for engine records. Everything is built once per request and never mutated."""

    model_config = ConfigDict(frozen=True)


class OcrVertex(FrozenModel):
    x: float
    y: float


class OcrWord(FrozenModel):
    """One recognized token.

    bounding_poly holds 4 pixel vertices in reading order:
    top-left, top-right, bottom-right, bottom-left.
    """

    text: str
    bounding_poly: list[OcrVertex] = []
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class OcrResult(FrozenModel):
    """Recognition output for a single image.

    image_width / image_height of 0 mean "unknown", and bounding boxes
    cannot be resolved for such an image.
    """

    words: list[OcrWord] = []
    full_text: str = ""
    image_width: int = 0
    image_height: int = 0


class IndexedWord(FrozenModel):
    """An OcrWord annotated with where it sits across all submitted images."""

    global_index: int
    image_index: int
    local_word_index: int
    text: str
    word: OcrWord


class NormalizedBox(FrozenModel):
    """Axis-aligned box relative to image size (0-1), plus text angle in degrees."""

    x: float
    y: float
    width: float
    height: float
    angle: Optional[float] = None


class ExtractedField(FrozenModel):
    field_name: str
    value: Optional[str] = None
    confidence: float = 0
    reasoning: Optional[str] = None
    bounding_box: Optional[NormalizedBox] = None
    image_index: int = 0


class RuleClassifiedField(FrozenModel):
    field_name: str
    value: Optional[str] = None
    confidence: float = 0
    word_indices: list[int] = []
    reasoning: Optional[str] = None


class ComparisonResult(FrozenModel):
    """Verdict for one (expected, extracted) pair. reasoning is the audit trail shown to reviewers."""

    status: FieldStatus
    confidence: float
    reasoning: str


class ImageClassification(FrozenModel):
    image_index: int
    image_type: ImageType
    confidence: float


class RuleClassificationResult(FrozenModel):
    fields: list[RuleClassifiedField] = []
    image_classifications: list[ImageClassification] = []
    detected_beverage_type: Optional[str] = None


class OverallStatus(FrozenModel):
    """Label-level disposition rolled up from per-field statuses."""

    status: LabelStatus
    deadline_days: Optional[int] = None


class FieldReport(FrozenModel):
    field_name: str
    expected: Optional[str] = None
    extracted: ExtractedField
    comparison: Optional[ComparisonResult] = None


class ValidationReport(FrozenModel):
    """Top-level result of one submission.

    fields holds one entry per classified field; comparison is present only
    for fields that had an expected value to compare against.
    """

    beverage_type: Optional[str] = None
    detected_beverage_type: Optional[str] = None
    fields: list[FieldReport] = []
    image_classifications: list[ImageClassification] = []
    overall: Optional[OverallStatus] = None


class CompareRequest(BaseModel):
    """Body of POST /compare: OCR output produced elsewhere plus expected values."""

    ocr_results: list[OcrResult]
    beverage_type: Optional[str] = None
    expected_values: Optional[dict[str, str]] = None
    container_size_ml: Optional[int] = None


class ImageOCRResult(FrozenModel):
    """Per-image OCR summary returned by /analyze for traceability."""

    image_name: str
    word_count: int
    ocr_text_excerpt: Optional[str] = None


class AnalyzeResponse(ValidationReport):
    image_results: list[ImageOCRResult] = []
