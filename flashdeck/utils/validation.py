from typing import Optional

from flashdeck.core.exceptions import ValidationError


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def require_text(*values: Optional[str], message: str) -> None:
    if any(is_blank(v) for v in values):
        raise ValidationError(message)


def validate_image_upload(content_type: Optional[str], size: int, max_bytes: int) -> None:
    if not content_type or not content_type.lower().startswith("image/"):
        raise ValidationError("Only image files are allowed")
    if size > max_bytes:
        raise ValidationError(f"Image must be at most {max_bytes // (1024 * 1024)}MB")
    if size == 0:
        raise ValidationError("Uploaded image is empty")
