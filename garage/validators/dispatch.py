# garage/validators/dispatch.py
"""
Field-name → validator routing for the garage profile and user profile forms.

Field identifiers are closed enums; the validator tables are checked for
completeness at import time so a new enum member without a validator fails
fast instead of silently falling through to the generic length check.
"""

from enum import Enum
from typing import Callable, Mapping, Optional, Tuple, Union

from garage.validators import business, contact
from garage.validators.result import VALID, ValidationResult, invalid, is_blank

GENERIC_MAX_LENGTH = 500


class GarageField(str, Enum):
    GSTIN = "gstin"
    PAN_NUMBER = "panNumber"
    BUSINESS_REGISTRATION_NUMBER = "businessRegistrationNumber"
    BUSINESS_TYPE = "businessType"
    YEAR_ESTABLISHED = "yearEstablished"
    WEBSITE = "website"
    SERVICE_TYPES = "serviceTypes"
    VEHICLE_TYPES_SERVICED = "vehicleTypesServiced"
    NUMBER_OF_SERVICE_BAYS = "numberOfServiceBays"
    CERTIFICATIONS = "certifications"
    INSURANCE_DETAILS = "insuranceDetails"
    PAYMENT_METHODS = "paymentMethods"
    BANK_NAME = "bankName"
    ACCOUNT_NUMBER = "accountNumber"
    IFSC_CODE = "ifscCode"
    BRANCH = "branch"
    DEFAULT_LABOR_RATE = "defaultLaborRate"
    INVOICE_PREFIX = "invoicePrefix"
    PARKING_CAPACITY = "parkingCapacity"
    WAITING_AREA_AMENITIES = "waitingAreaAmenities"
    TAX_RATE = "taxRate"
    CURRENCY = "currency"
    BILLING_CYCLE = "billingCycle"
    CREDIT_TERMS = "creditTerms"
    NOTES = "notes"
    OPERATING_HOURS_WEEKDAYS = "operatingHours.weekdays"
    OPERATING_HOURS_SATURDAY = "operatingHours.saturday"
    OPERATING_HOURS_SUNDAY = "operatingHours.sunday"
    EMAIL = "email"
    PHONE_NUMBER = "phoneNumber"
    ALTERNATE_PHONE_NUMBER = "alternatePhoneNumber"
    WHATSAPP_NUMBER = "whatsappNumber"
    ZIP_CODE = "zipCode"


class UserField(str, Enum):
    EMAIL = "email"
    ALTERNATE_EMAIL = "alternateEmail"
    PHONE_NUMBER = "phoneNumber"
    ALTERNATE_PHONE = "alternatePhone"
    EMERGENCY_CONTACT_PHONE = "emergencyContactPhone"
    ZIP_CODE = "zipCode"
    DATE_OF_BIRTH = "dateOfBirth"
    DATE_OF_JOINING = "dateOfJoining"
    PROFILE_PICTURE = "profilePicture"


Validator = Callable[[object], ValidationResult]

GARAGE_FIELD_VALIDATORS: Mapping[GarageField, Validator] = {
    GarageField.GSTIN: business.validate_gstin,
    GarageField.PAN_NUMBER: business.validate_pan,
    GarageField.BUSINESS_REGISTRATION_NUMBER: business.validate_business_registration_number,
    GarageField.BUSINESS_TYPE: business.validate_business_type,
    GarageField.YEAR_ESTABLISHED: business.validate_year_established,
    GarageField.WEBSITE: business.validate_website,
    GarageField.SERVICE_TYPES: business.validate_service_types,
    GarageField.VEHICLE_TYPES_SERVICED: business.validate_vehicle_types,
    GarageField.NUMBER_OF_SERVICE_BAYS: business.validate_number_of_service_bays,
    GarageField.CERTIFICATIONS: business.validate_certifications,
    GarageField.INSURANCE_DETAILS: business.validate_insurance_details,
    GarageField.PAYMENT_METHODS: business.validate_payment_methods,
    GarageField.BANK_NAME: business.validate_bank_name,
    GarageField.ACCOUNT_NUMBER: business.validate_account_number,
    GarageField.IFSC_CODE: business.validate_ifsc_code,
    GarageField.BRANCH: business.validate_branch,
    GarageField.DEFAULT_LABOR_RATE: business.validate_default_labor_rate,
    GarageField.INVOICE_PREFIX: business.validate_invoice_prefix,
    GarageField.PARKING_CAPACITY: business.validate_parking_capacity,
    GarageField.WAITING_AREA_AMENITIES: business.validate_waiting_area_amenities,
    GarageField.TAX_RATE: business.validate_tax_rate,
    GarageField.CURRENCY: business.validate_currency,
    GarageField.BILLING_CYCLE: business.validate_billing_cycle,
    GarageField.CREDIT_TERMS: business.validate_credit_terms,
    GarageField.NOTES: business.validate_notes,
    GarageField.OPERATING_HOURS_WEEKDAYS: business.validate_operating_hours,
    GarageField.OPERATING_HOURS_SATURDAY: business.validate_operating_hours,
    GarageField.OPERATING_HOURS_SUNDAY: business.validate_operating_hours,
    GarageField.EMAIL: contact.validate_email,
    GarageField.PHONE_NUMBER: contact.validate_phone,
    GarageField.ALTERNATE_PHONE_NUMBER: contact.validate_phone,
    GarageField.WHATSAPP_NUMBER: contact.validate_phone,
    GarageField.ZIP_CODE: contact.validate_postal_code,
}

USER_FIELD_VALIDATORS: Mapping[UserField, Validator] = {
    UserField.EMAIL: contact.validate_email,
    UserField.ALTERNATE_EMAIL: contact.validate_email,
    UserField.PHONE_NUMBER: contact.validate_phone,
    UserField.ALTERNATE_PHONE: contact.validate_phone,
    UserField.EMERGENCY_CONTACT_PHONE: contact.validate_phone,
    UserField.ZIP_CODE: contact.validate_postal_code,
    UserField.DATE_OF_BIRTH: contact.validate_iso_date,
    UserField.DATE_OF_JOINING: contact.validate_iso_date,
    UserField.PROFILE_PICTURE: contact.validate_profile_picture,
}

for _enum, _table in ((GarageField, GARAGE_FIELD_VALIDATORS), (UserField, USER_FIELD_VALIDATORS)):
    _missing = set(_enum) - set(_table)
    if _missing:
        raise RuntimeError(f"No validator registered for {sorted(m.value for m in _missing)}")


def _validate_generic(value) -> ValidationResult:
    if isinstance(value, str) and len(value) > GENERIC_MAX_LENGTH:
        return invalid(f"This field cannot exceed {GENERIC_MAX_LENGTH} characters")
    return VALID


def _dispatch(enum_cls, table, field, value) -> ValidationResult:
    if is_blank(value):
        return VALID
    try:
        key = field if isinstance(field, enum_cls) else enum_cls(field)
    except ValueError:
        return _validate_generic(value)
    return table[key](value)


def validate_garage_field(field: Union[GarageField, str], value) -> ValidationResult:
    """Validate one garage-profile field. Unknown field names get the generic length check."""
    return _dispatch(GarageField, GARAGE_FIELD_VALIDATORS, field, value)


def validate_user_field(field: Union[UserField, str], value) -> ValidationResult:
    """Validate one user-profile field. Unknown field names get the generic length check."""
    return _dispatch(UserField, USER_FIELD_VALIDATORS, field, value)


def _first_failure(validate, updates: Mapping) -> Optional[Tuple[str, ValidationResult]]:
    for field, value in updates.items():
        if isinstance(value, Mapping):
            # Nested form groups, e.g. operatingHours -> operatingHours.weekdays
            failure = _first_failure(
                validate, {f"{field}.{key}": sub for key, sub in value.items()}
            )
            if failure:
                return failure
            continue
        result = validate(field, value)
        if not result.is_valid:
            return field, result
    return None


def validate_garage_updates(updates: Mapping) -> Optional[Tuple[str, ValidationResult]]:
    """First (field, failing result) in a garage partial update, or None if all pass."""
    return _first_failure(validate_garage_field, updates)


def validate_user_updates(updates: Mapping) -> Optional[Tuple[str, ValidationResult]]:
    """First (field, failing result) in a user partial update, or None if all pass."""
    return _first_failure(validate_user_field, updates)
