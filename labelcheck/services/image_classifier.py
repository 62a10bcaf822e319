"""Image role classification (front / back / other) from OCR text alone.

The front label carries the brand and marketing wording; the back label
carries the warning statement, producer details and alcohol content.
"""

from labelcheck.models.schemas import ImageClassification, OcrResult

FRONT_LABEL_KEYWORDS = (
    "reserve",
    "estate",
    "vintage",
    "aged",
    "barrel",
    "single malt",
    "small batch",
    "craft",
    "limited edition",
    "special release",
)

BACK_LABEL_KEYWORDS = (
    "government warning",
    "according to the surgeon general",
    "women should not drink",
    "contains sulfites",
    "name and address",
    "produced and bottled by",
    "produced & bottled by",
    "bottled by",
    "distilled by",
    "imported by",
    "vinted by",
    "cellared by",
    "net contents",
    "alc.",
    "alc ",
    "% by vol",
    "by volume",
)

# Non-front images with at least this many back keyword hits are "back".
MIN_BACK_KEYWORD_HITS = 2
# Each word lowers the front signal by 1/WORD_COUNT_DIVISOR (longer text skews back).
WORD_COUNT_DIVISOR = 100


def _keyword_hits(text: str, keywords) -> int:
    return sum(1 for keyword in keywords if keyword in text)


def classify_images_from_ocr(ocr_results: list[OcrResult]) -> list[ImageClassification]:
    """Label each image front, back or other.

    Steps:
      1. No images -> []; a single image is always front (90)
      2. Signal per image = front hits - back hits - words / 100
      3. Highest signal is front (80); when no image hits either keyword
         list, the image with the fewest words is front instead
      4. Every other image is back (80) with 2+ back hits, else other (60)
    """
    if not ocr_results:
        return []
    if len(ocr_results) == 1:
        return [ImageClassification(image_index=0, image_type="front", confidence=90)]

    scores = []
    for result in ocr_results:
        text = result.full_text.lower()
        scores.append((
            _keyword_hits(text, FRONT_LABEL_KEYWORDS),
            _keyword_hits(text, BACK_LABEL_KEYWORDS),
            len(result.words),
        ))

    # max() keeps the first of equal signals
    front_index = max(
        range(len(scores)),
        key=lambda i: scores[i][0] - scores[i][1] - scores[i][2] / WORD_COUNT_DIVISOR,
    )
    if all(front == 0 and back == 0 for front, back, _ in scores):
        front_index = min(range(len(scores)), key=lambda i: scores[i][2])

    classifications = []
    for index, (_, back_hits, _) in enumerate(scores):
        if index == front_index:
            classifications.append(ImageClassification(image_index=index, image_type="front", confidence=80))
        elif back_hits >= MIN_BACK_KEYWORD_HITS:
            classifications.append(ImageClassification(image_index=index, image_type="back", confidence=80))
        else:
            classifications.append(ImageClassification(image_index=index, image_type="other", confidence=60))
    return classifications
