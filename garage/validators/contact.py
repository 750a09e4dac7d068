# garage/validators/contact.py
"""Contact and personal-detail validators shared by user, garage and customer forms."""

import re
from datetime import date

from garage.validators.result import VALID, ValidationResult, as_text, invalid, is_blank

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_RE = re.compile(r"[\d\s\-+()]{10,15}")
POSTAL_CODE_RE = re.compile(r"[a-zA-Z0-9\s\-]{3,10}")
IMAGE_DATA_URL_RE = re.compile(r"data:image/(jpeg|jpg|png|gif|webp);base64,")

# ~5MB of image once base64 overhead is accounted for
MAX_PROFILE_PICTURE_CHARS = int(5 * 1024 * 1024 * 1.37)


def validate_email(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    if not EMAIL_RE.fullmatch(as_text(value)):
        return invalid("Please enter a valid email address")
    return VALID


def validate_phone(value) -> ValidationResult:
    """10-15 characters of digits, spaces and + - ( )."""
    if is_blank(value):
        return VALID
    if not PHONE_RE.fullmatch(as_text(value)):
        return invalid("Please enter a valid phone number (10-15 digits)")
    return VALID


def validate_postal_code(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    if not POSTAL_CODE_RE.fullmatch(as_text(value)):
        return invalid("Please enter a valid postal code")
    return VALID


def validate_iso_date(value) -> ValidationResult:
    if is_blank(value) or isinstance(value, date):
        return VALID
    try:
        date.fromisoformat(as_text(value)[:10])
    except ValueError:
        return invalid("Please enter a valid date (YYYY-MM-DD)")
    return VALID


def validate_profile_picture(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    picture = as_text(value)
    if not IMAGE_DATA_URL_RE.match(picture):
        return invalid("Invalid image format. Please upload a valid image.")
    if len(picture) > MAX_PROFILE_PICTURE_CHARS:
        return invalid("Image size must be less than 5MB")
    return VALID
