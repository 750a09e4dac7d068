# garage/schemas/garage.py
from pydantic import field_validator
from typing import Any, Optional
from garage.schemas.common import CamelModel
from garage.validators.business import split_list

# Form inputs that arrive as numbers but are stored as text
_TEXT_FIELDS = (
    "year_established", "number_of_service_bays", "parking_capacity",
    "default_labor_rate", "tax_rate", "account_number",
)

_LIST_FIELDS = (
    "service_types", "vehicle_types_serviced", "certifications",
    "payment_methods", "waiting_area_amenities",
)


class OperatingHours(CamelModel):
    weekdays: Optional[str] = None
    saturday: Optional[str] = None
    sunday: Optional[str] = None


class GarageUpdates(CamelModel):
    garage_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    alternate_phone_number: Optional[str] = None
    whatsapp_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    gstin: Optional[str] = None
    business_registration_number: Optional[str] = None
    business_type: Optional[str] = None
    year_established: Optional[str] = None
    website: Optional[str] = None
    pan_number: Optional[str] = None
    service_types: Optional[list[str]] = None
    vehicle_types_serviced: Optional[list[str]] = None
    number_of_service_bays: Optional[str] = None
    certifications: Optional[list[str]] = None
    insurance_details: Optional[str] = None
    payment_methods: Optional[list[str]] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    branch: Optional[str] = None
    default_labor_rate: Optional[str] = None
    invoice_prefix: Optional[str] = None
    parking_capacity: Optional[str] = None
    waiting_area_amenities: Optional[list[str]] = None
    tow_service_available: Optional[bool] = None
    pickup_drop_service_available: Optional[bool] = None
    operating_hours: Optional[OperatingHours] = None
    tax_rate: Optional[str] = None
    currency: Optional[str] = None
    billing_cycle: Optional[str] = None
    credit_terms: Optional[str] = None
    notes: Optional[str] = None

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _number_to_text(cls, value: Any):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def _comma_list(cls, value: Any):
        if isinstance(value, str):
            return split_list(value)
        return value


class GarageUpdateRequest(CamelModel):
    garage_id: str
    updates: GarageUpdates


class FieldValidationRequest(CamelModel):
    field: str
    value: Any = None
