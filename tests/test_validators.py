# tests/test_validators.py
"""Unit tests for garage/user form field validators."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date, datetime
from garage.validators import (GarageField, validate_garage_field, validate_garage_updates,
                               validate_user_field, validate_user_updates)
from garage.validators import business, contact


class TestGstin:
    def test_valid(self):
        assert business.validate_gstin("29ABCDE1234F1Z5").is_valid

    def test_lowercase_accepted(self):
        assert business.validate_gstin("29abcde1234f1z5").is_valid

    def test_wrong_length(self):
        result = business.validate_gstin("29ABCDE1234F1Z")
        assert not result.is_valid
        assert result.error == "GSTIN must be exactly 15 characters long"

    def test_bad_format(self):
        result = business.validate_gstin("29ABCDE1234F1X5")
        assert not result.is_valid
        assert "Example: 29ABCDE1234F1Z5" in result.error

    def test_blank_is_valid(self):
        assert business.validate_gstin("   ").is_valid


class TestRegistrationAndBanking:
    @pytest.mark.parametrize("pan,ok", [("ABCDE1234F", True), ("ABCD1234F", False), ("ABCDE12345", False)])
    def test_pan(self, pan, ok):
        assert business.validate_pan(pan).is_valid is ok

    @pytest.mark.parametrize("ifsc,ok", [("SBIN0001234", True), ("SBIN1001234", False), ("SBIN000123", False)])
    def test_ifsc(self, ifsc, ok):
        assert business.validate_ifsc_code(ifsc).is_valid is ok

    def test_account_number_digits_only(self):
        assert business.validate_account_number("1234 5678 9012").is_valid
        assert not business.validate_account_number("12345678A").is_valid

    def test_custom_business_type_warns(self):
        result = business.validate_business_type("Cooperative Society")
        assert result.is_valid
        assert result.warning == "Custom business type entered"

    def test_year_established_future_rejected(self):
        next_year = datetime.now().year + 1
        assert not business.validate_year_established(str(next_year)).is_valid
        assert business.validate_year_established("2010").is_valid


class TestOperationsFields:
    @pytest.mark.parametrize("hours", ["9:00 AM - 6:00 PM", "9:00AM to 1:30PM", "Closed", "10:00 am – 4:00 pm"])
    def test_operating_hours_accepted(self, hours):
        assert business.validate_operating_hours(hours).is_valid

    @pytest.mark.parametrize("hours", ["9-6", "13:00 PM - 6:00 PM", "always"])
    def test_operating_hours_rejected(self, hours):
        assert not business.validate_operating_hours(hours).is_valid

    def test_service_bays_bounds(self):
        assert not business.validate_number_of_service_bays("0").is_valid
        assert business.validate_number_of_service_bays("100").is_valid
        assert not business.validate_number_of_service_bays("101").is_valid

    def test_list_accepts_comma_string(self):
        assert business.validate_payment_methods("Cash, UPI, Credit Card").is_valid

    def test_list_rejects_bad_item(self):
        result = business.validate_payment_methods(["Cash", "U$PI"])
        assert not result.is_valid
        assert "U$PI" in result.error

    def test_tax_rate(self):
        assert business.validate_tax_rate("18%").is_valid
        assert not business.validate_tax_rate("180").is_valid

    def test_website_without_scheme(self):
        assert business.validate_website("www.example.com").is_valid
        assert not business.validate_website("localhost").is_valid


class TestContact:
    def test_email(self):
        assert contact.validate_email("a@b.co").is_valid
        assert contact.validate_email("not-an-email").error == "Please enter a valid email address"

    def test_phone(self):
        assert contact.validate_phone("+91 98765-43210").is_valid
        assert not contact.validate_phone("12345").is_valid

    def test_profile_picture_must_be_data_url(self):
        assert contact.validate_profile_picture("data:image/png;base64,AAAA").is_valid
        assert not contact.validate_profile_picture("http://example.com/me.png").is_valid


class TestDispatch:
    def test_enum_and_string_keys_equivalent(self):
        assert validate_garage_field(GarageField.IFSC_CODE, "bad").error == \
            validate_garage_field("ifscCode", "bad").error

    def test_unknown_field_gets_length_check(self):
        assert validate_garage_field("somethingElse", "x" * 500).is_valid
        assert not validate_garage_field("somethingElse", "x" * 501).is_valid

    def test_nested_operating_hours_flattened(self):
        failure = validate_garage_updates({"operatingHours": {"weekdays": "9 to 5"}})
        assert failure is not None
        assert failure[0] == "operatingHours.weekdays"

    def test_first_failure_returned(self):
        field, result = validate_garage_updates({"gstin": "29ABCDE1234F1Z5", "panNumber": "bad"})
        assert field == "panNumber"
        assert not result.is_valid

    def test_all_valid_returns_none(self):
        assert validate_garage_updates({"gstin": "29ABCDE1234F1Z5", "towServiceAvailable": True}) is None

    def test_numeric_values_validated(self):
        field, result = validate_garage_updates({"yearEstablished": 1800})
        assert field == "yearEstablished"
        assert result.error == "Year cannot be before 1900"
        field, result = validate_garage_updates({"numberOfServiceBays": 500})
        assert result.error == "Number of service bays cannot exceed 100"
        assert validate_garage_updates({"numberOfServiceBays": 12, "taxRate": 18.5}) is None

    def test_date_values_validated_as_text(self):
        assert validate_user_updates({"dateOfBirth": date(1990, 5, 17)}) is None

    def test_user_fields(self):
        assert not validate_user_field("dateOfBirth", "17/05/1990").is_valid
        assert validate_user_updates({"email": "raj@example.com", "dateOfBirth": "1990-05-17"}) is None

    def test_to_dict(self):
        assert validate_garage_field("currency", "RUPEE").to_dict() == {
            "isValid": False,
            "error": "Currency code must be 3 characters (e.g., INR, USD)",
        }
