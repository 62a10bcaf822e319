"""Bounding box geometry: OCR word polygons to a normalized box and text angle."""

import math
from typing import Optional

from labelcheck.models.schemas import NormalizedBox, OcrWord


def compute_text_angle(words: list[OcrWord]) -> float:
    """Dominant reading direction of a group of words, in degrees.

    Sums the baseline vectors (vertex 0 -> vertex 1) of every word and
    snaps the resulting angle to the nearest 90 degrees:
    0 horizontal, 90 top-to-bottom, -90 bottom-to-top, 180 upside-down.
    """
    sum_dx = 0.0
    sum_dy = 0.0
    for word in words:
        vertices = word.bounding_poly
        if len(vertices) < 2:
            continue
        sum_dx += vertices[1].x - vertices[0].x
        sum_dy += vertices[1].y - vertices[0].y

    if sum_dx == 0 and sum_dy == 0:
        return 0.0

    angle = math.degrees(math.atan2(sum_dy, sum_dx))
    snapped = math.floor(angle / 90 + 0.5) * 90

    if snapped > 180:
        snapped -= 360
    elif snapped <= -180:
        snapped += 360
    return float(snapped)


def _clamp(value: float, upper: int) -> float:
    return min(max(value, 0.0), float(upper))


def compute_normalized_bounding_box(
    words: list[OcrWord],
    image_width: int,
    image_height: int,
) -> Optional[NormalizedBox]:
    """Axis-aligned box around all vertices of `words`, relative to the image size.

    Vertices outside the image are clamped to its edges. Returns None
    when there are no words, no vertices, the clamped box collapses to a
    line or point, or the image dimensions are unknown (0).
    """
    if not words or not image_width or not image_height:
        return None

    xs = [v.x for word in words for v in word.bounding_poly]
    ys = [v.y for word in words for v in word.bounding_poly]
    if not xs or not ys:
        return None

    # Polygons may run past the image edge; the box stays inside it
    min_x, max_x = _clamp(min(xs), image_width), _clamp(max(xs), image_width)
    min_y, max_y = _clamp(min(ys), image_height), _clamp(max(ys), image_height)
    if max_x <= min_x or max_y <= min_y:
        return None

    return NormalizedBox(
        x=min_x / image_width,
        y=min_y / image_height,
        width=(max_x - min_x) / image_width,
        height=(max_y - min_y) / image_height,
        angle=compute_text_angle(words),
    )
