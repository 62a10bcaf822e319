import importlib.util

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health_check():
    """Confirms FastAPI is running and reports whether OCR is installed."""
    return {
        "status": "healthy",
        "engine": "rule-based",
        "ocr_engine": _check_ocr(),
    }


def _check_ocr() -> dict:
    """Check that RapidOCR is installed without loading its models."""
    if importlib.util.find_spec("rapidocr_onnxruntime") is None:
        return {"available": False, "engine": "RapidOCR", "error": "rapidocr_onnxruntime is not installed"}
    return {"available": True, "engine": "RapidOCR (ONNX Runtime)"}
