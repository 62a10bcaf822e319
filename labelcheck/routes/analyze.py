import asyncio
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from PIL import UnidentifiedImageError
from pydantic import TypeAdapter, ValidationError

from labelcheck.config import OCR_EXCERPT_LENGTH, OCR_MAX_WORKERS
from labelcheck.models.schemas import AnalyzeResponse, ImageOCRResult, OcrResult
from labelcheck.services.ocr_service import OCRService
from labelcheck.services.validation_service import validate_submission
from labelcheck.utils.file_validation import validate_file_type
from labelcheck.validators.validator_registry import VALIDATOR_REGISTRY, get_validator

logger = logging.getLogger(__name__)

router = APIRouter()

_EXPECTED_VALUES_ADAPTER = TypeAdapter(dict[str, str])

# Thread pool for parallel OCR: several label images are read concurrently
_executor = ThreadPoolExecutor(max_workers=OCR_MAX_WORKERS)


def _ocr_single_image(image_bytes: bytes) -> OcrResult:
    """Run OCR on one image. Runs in a thread."""
    return OCRService.extract_result(image_bytes)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_labels(
    images: list[UploadFile] = File(...),
    beverage_type: Optional[str] = Form(None),
    expected_values: Optional[str] = Form(None),
    container_size_ml: Optional[int] = Form(None),
):
    """Run OCR on uploaded label images, then compare the fields they carry.

    OCR runs on each image in parallel; the comparison pipeline then runs
    once over all images together.
    """
    if beverage_type and get_validator(beverage_type) is None:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid beverage_type '{beverage_type}'. Must be one of: {', '.join(VALIDATOR_REGISTRY)}",
        )

    parsed_expected = None
    if expected_values:
        try:
            raw_expected = json.loads(expected_values)
        except json.JSONDecodeError:
            raise HTTPException(status_code=400, detail="expected_values is not valid JSON")

        try:
            parsed_expected = _EXPECTED_VALUES_ADAPTER.validate_python(raw_expected)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))

    if not images:
        raise HTTPException(status_code=400, detail="At least one image is required")

    # Read all image bytes and validate file types
    image_data = []
    for image_file in images:
        if not validate_file_type(image_file.filename or ""):
            raise HTTPException(
                status_code=400,
                detail=f"Unsupported file type for '{image_file.filename}'. Allowed: PNG, JPG, JPEG",
            )
        image_bytes = await image_file.read()
        image_data.append((image_file.filename or "unknown", image_bytes))

    # Run OCR on all images in parallel
    loop = asyncio.get_running_loop()
    ocr_tasks = [
        loop.run_in_executor(_executor, _ocr_single_image, img_bytes)
        for _, img_bytes in image_data
    ]
    try:
        ocr_results = await asyncio.gather(*ocr_tasks)
    except UnidentifiedImageError as e:
        logger.warning(f"Unreadable image upload: {e}")
        raise HTTPException(status_code=400, detail="One or more images could not be read")

    report = validate_submission(
        list(ocr_results),
        beverage_type=beverage_type,
        expected_values=parsed_expected,
        container_size_ml=container_size_ml,
    )

    # Per-image OCR excerpts for traceability
    image_results = [
        ImageOCRResult(
            image_name=filename,
            word_count=len(result.words),
            ocr_text_excerpt=result.full_text[:OCR_EXCERPT_LENGTH] if result.full_text else None,
        )
        for (filename, _), result in zip(image_data, ocr_results)
    ]

    return AnalyzeResponse(**report.model_dump(), image_results=image_results)
