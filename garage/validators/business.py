# garage/validators/business.py
"""
Garage business-profile validators (Indian registration, tax and banking
formats plus service/operations fields).

Every field here is optional: blank input is valid and requiredness is
enforced by the caller. Each validator returns a ValidationResult with a
single human-readable error on failure.
"""

import re
from datetime import datetime
from typing import Sequence, Union

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from garage.validators.result import VALID, ValidationResult, as_text, invalid, is_blank

ListInput = Union[str, Sequence[str], None]

GSTIN_RE = re.compile(r"[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][A-Z0-9]Z[A-Z0-9]")
PAN_RE = re.compile(r"[A-Z]{5}[0-9]{4}[A-Z]")
IFSC_RE = re.compile(r"[A-Z]{4}0[A-Z0-9]{6}")

BUSINESS_TYPES = (
    "Sole Proprietorship",
    "Partnership",
    "Limited Liability Partnership (LLP)",
    "Private Limited Company",
    "Public Limited Company",
    "One Person Company",
    "Hindu Undivided Family (HUF)",
)

AUTOMOTIVE_SERVICE_TYPES = (
    "General Repairs", "Engine Diagnostics", "Brake Services", "Oil Change",
    "Tire Services", "Alignment", "AC Repair", "Electrical", "Transmission",
    "Suspension", "Exhaust", "Battery Services", "Car Wash", "Detailing",
    "Paint", "Body Work", "Glass Replacement", "Inspection", "Custom Modifications",
)

VEHICLE_TYPES = (
    "Hatchback", "Sedan", "SUV", "MUV", "Coupe", "Convertible", "Wagon", "Van",
    "Minivan", "Truck", "Pickup Truck", "Electric Vehicle", "Hybrid",
    "Motorcycle", "Scooter", "Three-Wheeler", "Commercial Vehicle",
    "Heavy Vehicle", "Bus", "Tractor", "RV", "Camper",
)

PAYMENT_METHODS = (
    "Cash", "Credit Card", "Debit Card", "UPI", "Net Banking", "Cheque",
    "Digital Wallet", "Paytm", "Google Pay", "PhonePe", "Amazon Pay", "BHIM",
    "Mobile Payment", "Bank Transfer", "EMI",
)

WAITING_AMENITIES = (
    "WiFi", "Television", "Magazines", "Refreshments", "AC", "Seating Area",
    "Restroom", "Charging Points", "Kids Play Area", "Coffee Machine",
    "Water Dispenser", "Newspapers",
)

BILLING_CYCLES = (
    "Daily", "Weekly", "Bi-Weekly", "Monthly", "Quarterly", "Semi-Annually",
    "Annually", "On Delivery", "On Completion", "Advance Payment",
)

_http_url = TypeAdapter(HttpUrl)


# ── Registration & tax ────────────────────────────────────────────────────────

def validate_gstin(value) -> ValidationResult:
    """GSTIN: 2-digit state code + PAN + entity digit + 'Z' + check char, e.g. 29ABCDE1234F1Z5."""
    if is_blank(value):
        return VALID
    gstin = as_text(value).upper()
    if len(gstin) != 15:
        return invalid("GSTIN must be exactly 15 characters long")
    if not GSTIN_RE.fullmatch(gstin):
        return invalid("Invalid GSTIN format. Example: 29ABCDE1234F1Z5")
    return VALID


def validate_pan(value) -> ValidationResult:
    """PAN: 5 letters + 4 digits + 1 letter, e.g. ABCDE1234F."""
    if is_blank(value):
        return VALID
    pan = as_text(value).upper()
    if len(pan) != 10:
        return invalid("PAN must be exactly 10 characters long")
    if not PAN_RE.fullmatch(pan):
        return invalid("Invalid PAN format. Example: ABCDE1234F")
    return VALID


def validate_business_registration_number(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    reg = as_text(value)
    if not 5 <= len(reg) <= 50:
        return invalid("Business registration number must be between 5 and 50 characters")
    if not re.fullmatch(r"[A-Za-z0-9\s\-/]+", reg):
        return invalid("Business registration number can only contain letters, numbers, "
                       "spaces, hyphens, and slashes")
    return VALID


def validate_business_type(value) -> ValidationResult:
    """Known business types pass as-is; custom ones are allowed with a warning."""
    if is_blank(value):
        return VALID
    business_type = as_text(value)
    if business_type in BUSINESS_TYPES:
        return VALID
    if not 2 <= len(business_type) <= 100:
        return invalid("Business type must be between 2 and 100 characters")
    if not re.fullmatch(r"[A-Za-z0-9\s().,\-]+", business_type):
        return invalid("Business type contains invalid characters")
    return ValidationResult(True, warning="Custom business type entered")


def validate_year_established(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    text = as_text(value)
    current_year = datetime.now().year
    try:
        year = int(text)
    except ValueError:
        return invalid("Year must be a valid number")
    if year < 1900:
        return invalid("Year cannot be before 1900")
    if year > current_year:
        return invalid(f"Year cannot be in the future (max: {current_year})")
    if not re.fullmatch(r"\d{4}", text):
        return invalid("Year must be in 4-digit format (e.g., 2010)")
    return VALID


def validate_website(value) -> ValidationResult:
    """Accepts bare domains; https:// is assumed when no scheme is given."""
    if is_blank(value):
        return VALID
    url = as_text(value)
    if not re.match(r"https?://", url, re.IGNORECASE):
        url = "https://" + url
    try:
        parsed = _http_url.validate_python(url)
    except PydanticValidationError:
        return invalid("Invalid website URL. Example: www.example.com or https://example.com")
    if parsed.scheme not in ("http", "https"):
        return invalid("Website must use HTTP or HTTPS protocol")
    host = parsed.host or ""
    if "." not in host:
        return invalid("Invalid website domain")
    if len(host.rstrip(".").rsplit(".", 1)[-1]) < 2:
        return invalid("Invalid website TLD")
    return VALID


# ── Comma-separated list fields ───────────────────────────────────────────────

def split_list(value: ListInput) -> list:
    """'a, b,,c' or ['a', ' b'] -> ['a', 'b', 'c'] (trimmed, blanks dropped)."""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]


def _validate_list(value: ListInput, *, singular: str, plural: str, max_items: int,
                   min_len: int, max_len: int, allowed: str) -> ValidationResult:
    if is_blank(value):
        return VALID
    items = split_list(value)
    if not items:
        return VALID
    if len(items) > max_items:
        return invalid(f"Cannot have more than {max_items} {plural}")
    pattern = re.compile(allowed)
    for item in items:
        if not min_len <= len(item) <= max_len:
            return invalid(f"Each {singular} must be between {min_len} and {max_len} characters")
        if not pattern.fullmatch(item):
            return invalid(f'{singular.capitalize()} "{item}" contains invalid characters')
    return VALID


def validate_service_types(value: ListInput) -> ValidationResult:
    return _validate_list(value, singular="service type", plural="service types",
                          max_items=50, min_len=2, max_len=100,
                          allowed=r"[A-Za-z0-9\s&/\-.,]+")


def validate_vehicle_types(value: ListInput) -> ValidationResult:
    return _validate_list(value, singular="vehicle type", plural="vehicle types",
                          max_items=30, min_len=2, max_len=50,
                          allowed=r"[A-Za-z0-9\s\-.,]+")


def validate_certifications(value: ListInput) -> ValidationResult:
    return _validate_list(value, singular="certification", plural="certifications",
                          max_items=30, min_len=3, max_len=100,
                          allowed=r"[A-Za-z0-9\s()\[\]{}.,\-&/]+")


def validate_payment_methods(value: ListInput) -> ValidationResult:
    return _validate_list(value, singular="payment method", plural="payment methods",
                          max_items=20, min_len=2, max_len=50,
                          allowed=r"[A-Za-z0-9\s.,\-]+")


def validate_waiting_area_amenities(value: ListInput) -> ValidationResult:
    return _validate_list(value, singular="amenity", plural="amenities",
                          max_items=30, min_len=2, max_len=50,
                          allowed=r"[A-Za-z0-9\s.,\-]+")


# ── Capacity & operations ─────────────────────────────────────────────────────

def _bounded_int(value, label: str, minimum: int, min_error: str,
                 maximum: int, max_error: str) -> ValidationResult:
    if is_blank(value):
        return VALID
    try:
        number = int(as_text(value))
    except ValueError:
        return invalid(f"{label} must be a valid number")
    if number < minimum:
        return invalid(min_error)
    if number > maximum:
        return invalid(max_error)
    return VALID


def validate_number_of_service_bays(value) -> ValidationResult:
    return _bounded_int(value, "Number of service bays",
                        1, "Must have at least 1 service bay",
                        100, "Number of service bays cannot exceed 100")


def validate_parking_capacity(value) -> ValidationResult:
    return _bounded_int(value, "Parking capacity",
                        0, "Parking capacity cannot be negative",
                        500, "Parking capacity cannot exceed 500 vehicles")


def validate_insurance_details(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    if not 10 <= len(as_text(value)) <= 500:
        return invalid("Insurance details must be between 10 and 500 characters")
    return VALID


_TIME_RANGE_RE = re.compile(
    r"(\d{1,2}:\d{2}\s?(?:AM|PM))\s*(?:-|–|to)\s*(\d{1,2}:\d{2}\s?(?:AM|PM))",
    re.IGNORECASE,
)
_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})\s?(AM|PM)", re.IGNORECASE)


def validate_operating_hours(value) -> ValidationResult:
    """'9:00 AM - 6:00 PM' (12-hour clock), 'Closed' or 'Not available'."""
    if is_blank(value):
        return VALID
    hours = as_text(value)
    if hours.lower() in ("closed", "not available"):
        return VALID
    match = _TIME_RANGE_RE.fullmatch(hours)
    if not match:
        return invalid('Operating hours must be in format "9:00 AM - 6:00 PM" or "Closed"')
    for label, part in (("start", match.group(1)), ("end", match.group(2))):
        time_match = _TIME_RE.fullmatch(part.strip())
        if not time_match:
            return invalid('Invalid time format. Use "HH:MM AM/PM" format')
        hour, minute = int(time_match.group(1)), int(time_match.group(2))
        if not (1 <= hour <= 12 and 0 <= minute <= 59):
            return invalid(f"Invalid {label} time")
    return VALID


# ── Banking ───────────────────────────────────────────────────────────────────

def validate_bank_name(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    name = as_text(value)
    if not 3 <= len(name) <= 100:
        return invalid("Bank name must be between 3 and 100 characters")
    if not re.fullmatch(r"[A-Za-z0-9\s.,\-&]+", name):
        return invalid("Bank name contains invalid characters")
    return VALID


def validate_account_number(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    number = re.sub(r"\s", "", as_text(value))
    if not 9 <= len(number) <= 18:
        return invalid("Account number must be between 9 and 18 digits")
    if not number.isdigit():
        return invalid("Account number can only contain digits")
    return VALID


def validate_ifsc_code(value) -> ValidationResult:
    """IFSC: 4-letter bank code + '0' + 6-char branch code, e.g. SBIN0001234."""
    if is_blank(value):
        return VALID
    ifsc = as_text(value).upper()
    if len(ifsc) != 11:
        return invalid("IFSC code must be exactly 11 characters (e.g., SBIN0001234)")
    if not IFSC_RE.fullmatch(ifsc):
        return invalid("Invalid IFSC format. Example: SBIN0001234")
    return VALID


def validate_branch(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    branch = as_text(value)
    if not 2 <= len(branch) <= 100:
        return invalid("Branch name must be between 2 and 100 characters")
    if not re.fullmatch(r"[A-Za-z0-9\s.,\-()]+", branch):
        return invalid("Branch name contains invalid characters")
    return VALID


# ── Billing ───────────────────────────────────────────────────────────────────

def validate_default_labor_rate(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    rate = as_text(value)
    if not re.fullmatch(r"\d+(\.\d{1,2})?", rate):
        return invalid("Labor rate must be a valid amount (e.g., 500 or 500.50)")
    if float(rate) > 100000:
        return invalid("Labor rate seems unusually high. Please verify.")
    return VALID


def validate_invoice_prefix(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    prefix = as_text(value)
    if len(prefix) > 10:
        return invalid("Invoice prefix must be between 1 and 10 characters")
    if not re.fullmatch(r"[A-Za-z0-9\-_]+", prefix):
        return invalid("Invoice prefix can only contain letters, numbers, hyphens, and underscores")
    return VALID


def validate_tax_rate(value) -> ValidationResult:
    """18, 18.5 or 18% — between 0 and 100."""
    if is_blank(value):
        return VALID
    rate = as_text(value)
    if not re.fullmatch(r"\d+(\.\d{1,2})?|\d+%", rate):
        return invalid("Tax rate must be a valid percentage (e.g., 18 or 18% or 18.5)")
    if not 0 <= float(rate.rstrip("%")) <= 100:
        return invalid("Tax rate must be between 0 and 100%")
    return VALID


def validate_currency(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    code = as_text(value).upper()
    if len(code) != 3:
        return invalid("Currency code must be 3 characters (e.g., INR, USD)")
    if not re.fullmatch(r"[A-Z]{3}", code):
        return invalid("Invalid currency code format. Use 3-letter ISO code (e.g., INR)")
    return VALID


def validate_billing_cycle(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    cycle = as_text(value)
    if not 2 <= len(cycle) <= 50:
        return invalid("Billing cycle must be between 2 and 50 characters")
    if not re.fullmatch(r"[A-Za-z0-9\s\-.,]+", cycle):
        return invalid("Billing cycle contains invalid characters")
    return VALID


def validate_credit_terms(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    terms = as_text(value)
    if not 2 <= len(terms) <= 200:
        return invalid("Credit terms must be between 2 and 200 characters")
    if not re.fullmatch(r"[A-Za-z0-9\s()\[\]{}.,:\-&/]+", terms):
        return invalid("Credit terms contain invalid characters")
    return VALID


def validate_notes(value) -> ValidationResult:
    if is_blank(value):
        return VALID
    if len(as_text(value)) > 2000:
        return invalid("Notes cannot exceed 2000 characters")
    return VALID
