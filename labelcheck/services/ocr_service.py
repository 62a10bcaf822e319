import io
import logging
import re

import numpy as np
from PIL import Image

from labelcheck.models.schemas import OcrResult, OcrVertex, OcrWord

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\S+")


def _lerp(start: OcrVertex, end: OcrVertex, t: float) -> OcrVertex:
    return OcrVertex(x=start.x + (end.x - start.x) * t, y=start.y + (end.y - start.y) * t)


def split_line_into_words(box, text: str, score: float) -> list[OcrWord]:
    """Split one RapidOCR text line into word tokens.

    RapidOCR returns whole lines with a 4-point box (top-left, top-right,
    bottom-right, bottom-left). Each word gets the slice of that box
    matching its character offsets within the line, so rotated and
    skewed lines keep their orientation. Every word inherits the line's
    score.
    """
    if not text or len(box) < 4:
        return []

    top_left, top_right, bottom_right, bottom_left = (OcrVertex(x=float(p[0]), y=float(p[1])) for p in box[:4])
    confidence = min(1.0, max(0.0, float(score)))
    length = len(text)

    words = []
    for match in _WORD_RE.finditer(text):
        t0 = match.start() / length
        t1 = match.end() / length
        words.append(OcrWord(
            text=match.group(0),
            bounding_poly=[
                _lerp(top_left, top_right, t0),
                _lerp(top_left, top_right, t1),
                _lerp(bottom_left, bottom_right, t1),
                _lerp(bottom_left, bottom_right, t0),
            ],
            confidence=confidence,
        ))
    return words


def build_ocr_result(detections, image_width: int, image_height: int) -> OcrResult:
    """Turn RapidOCR detections ([box, text, score] per line) into an OcrResult.

    full_text is the line texts joined by newlines, in the order RapidOCR
    reports them (top to bottom).
    """
    words = []
    lines = []
    for box, text, score in detections or []:
        line = text.strip()
        if not line:
            continue
        lines.append(line)
        words.extend(split_line_into_words(box, line, score))

    return OcrResult(
        words=words,
        full_text="\n".join(lines),
        image_width=image_width,
        image_height=image_height,
    )


class OCRService:
    """Wraps RapidOCR to turn label images into OcrResults.

    RapidOCR uses PaddleOCR's neural network models but runs them through
    ONNX Runtime, so no GPU or cloud service is needed.

    The engine is loaded once and reused across requests. rapidocr_onnxruntime
    is imported on first use, so the comparison engine works without it.
    """

    _instance = None

    @classmethod
    def _get_engine(cls):
        """Lazy-initialize the RapidOCR engine on first use."""
        if cls._instance is None:
            from rapidocr_onnxruntime import RapidOCR

            logger.info("Loading RapidOCR engine")
            cls._instance = RapidOCR()
        return cls._instance

    @staticmethod
    def extract_result(image_bytes: bytes) -> OcrResult:
        """Run OCR on raw image bytes.

        The image is only converted to RGB: word coordinates must stay in
        the pixel space of the uploaded image for bounding boxes to line up.

        Args:
            image_bytes: Raw bytes of a PNG or JPEG image.

        Returns:
            OcrResult with one OcrWord per whitespace-separated token.
        """
        image = Image.open(io.BytesIO(image_bytes)).convert("RGB")
        width, height = image.size

        engine = OCRService._get_engine()
        detections, _ = engine(np.array(image))

        result = build_ocr_result(detections, width, height)
        logger.debug(f"OCR found {len(result.words)} words on a {width}x{height} image")
        return result
