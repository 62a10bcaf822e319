import logging
import os

LOG_LEVEL = os.environ.get("LABELCHECK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Worker threads for running OCR on several label images at once.
OCR_MAX_WORKERS = int(os.environ.get("LABELCHECK_OCR_WORKERS", "4"))

# Characters of OCR text echoed back per image by /analyze.
OCR_EXCERPT_LENGTH = 500


def configure_logging() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
