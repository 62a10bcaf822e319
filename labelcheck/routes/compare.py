from fastapi import APIRouter, HTTPException

from labelcheck.models.schemas import CompareRequest, ValidationReport
from labelcheck.services.validation_service import validate_submission
from labelcheck.validators.validator_registry import VALIDATOR_REGISTRY, get_validator

router = APIRouter()


@router.post("/compare", response_model=ValidationReport)
def compare_labels(request: CompareRequest):
    """Compare OCR output produced elsewhere against expected field values.

    Runs synchronously in FastAPI's threadpool; the engine does no I/O.
    """
    if request.beverage_type and get_validator(request.beverage_type) is None:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Invalid beverage_type '{request.beverage_type}'. "
                f"Must be one of: {', '.join(VALIDATOR_REGISTRY)}"
            ),
        )

    return validate_submission(
        request.ocr_results,
        beverage_type=request.beverage_type,
        expected_values=request.expected_values,
        container_size_ml=request.container_size_ml,
    )
