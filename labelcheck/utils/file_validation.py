import os

# Image formats accepted for label uploads (what Pillow opens for RapidOCR).
ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg"}


def validate_file_type(filename: str) -> bool:
    """True when the upload's extension is an accepted image format.

    The check is case-insensitive, so "Label.JPG" is accepted. Names
    without an extension are rejected.
    """
    _, ext = os.path.splitext(filename)
    return ext.lower() in ALLOWED_EXTENSIONS
