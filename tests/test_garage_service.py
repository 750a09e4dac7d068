# tests/test_garage_service.py
"""Tests for garage profile updates and garage-name propagation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import patch
from sqlalchemy.exc import SQLAlchemyError
from garage.errors import NotFoundError, PartialConsistencyError, ValidationError
from garage.models import Garage, GarageAuth
from garage.services.garage_service import get_garage, update_garage


def add_employee_auth(db, uid, login_id, garage_id="G123"):
    db.add(GarageAuth(user_uid=uid, garage_id=garage_id, garage_name="Speed Motors",
                      first_name="Emp", last_name=uid, login_id=login_id, user_role="Mechanic"))
    db.commit()


class TestUpdateGarage:
    def test_name_change_reaches_every_login(self, db, owner):
        add_employee_auth(db, "uid-e1", "emp.e1@g123")
        add_employee_auth(db, "uid-e2", "emp.e2@g123")
        add_employee_auth(db, "uid-x", "emp.x@g999", garage_id="G999")

        result = update_garage(db, "G123", {"garageName": "Rapid Wheels"})

        assert result.success
        assert result.synced_auth_rows == 3
        db.expire_all()
        names = {a.user_uid: a.garage_name for a in db.query(GarageAuth).all()}
        assert names == {"uid-owner": "Rapid Wheels", "uid-e1": "Rapid Wheels",
                         "uid-e2": "Rapid Wheels", "uid-x": "Speed Motors"}

    def test_profile_fields_stored_in_columns(self, db, owner):
        result = update_garage(db, "G123", {
            "gstin": "29ABCDE1234F1Z5",
            "paymentMethods": ["Cash", "UPI"],
            "operatingHours": {"weekdays": "9:00 AM - 6:00 PM", "sunday": "Closed"},
        })
        assert result.success
        assert result.synced_auth_rows == 0
        db.expire_all()
        garage = db.query(Garage).one()
        assert garage.payment_methods == ["Cash", "UPI"]
        assert garage.operating_hours["sunday"] == "Closed"

    def test_operating_hours_partial_keeps_other_days(self, db, owner):
        update_garage(db, "G123", {"operatingHours": {
            "weekdays": "9:00 AM - 6:00 PM", "saturday": "10:00 AM - 2:00 PM", "sunday": "Closed",
        }})
        result = update_garage(db, "G123", {"operatingHours": {"weekdays": "8:00 AM - 8:00 PM"}})
        assert result.success
        db.expire_all()
        assert db.query(Garage).one().operating_hours == {
            "weekdays": "8:00 AM - 8:00 PM", "saturday": "10:00 AM - 2:00 PM", "sunday": "Closed",
        }

    def test_no_auth_rows_still_succeeds(self, db, owner):
        db.query(GarageAuth).delete()
        db.commit()
        result = update_garage(db, "G123", {"garageName": "Rapid Wheels"})
        assert result.success
        assert result.synced_auth_rows == 0

    def test_invalid_field(self, db, owner):
        result = update_garage(db, "G123", {"ifscCode": "SBIN1234"})
        assert not result.success
        assert result.error_type is ValidationError
        assert result.to_dict() == {
            "success": False,
            "error": "IFSC code must be exactly 11 characters (e.g., SBIN0001234)",
        }

    def test_unknown_garage(self, db):
        result = update_garage(db, "NOPE", {"garageName": "X"})
        assert result.error_type is NotFoundError

    def test_propagation_failure_keeps_garage_write(self, db, owner):
        real_commit = db.commit
        calls = []

        def flaky_commit():
            calls.append(1)
            if len(calls) == 2:
                raise SQLAlchemyError("timeout")
            real_commit()

        with patch.object(db, "commit", side_effect=flaky_commit):
            result = update_garage(db, "G123", {"garageName": "Rapid Wheels"})

        assert result.error_type is PartialConsistencyError
        db.expire_all()
        assert db.query(Garage).one().garage_name == "Rapid Wheels"
        assert db.query(GarageAuth).one().garage_name == "Speed Motors"


class TestGetGarage:
    def test_domain_shape(self, db, owner):
        result = get_garage(db, "G123")
        assert result.data["garageName"] == "Speed Motors"
        assert result.data["ownerId"] == "uid-owner"

    def test_missing(self, db):
        assert get_garage(db, "NOPE").status_code == 404
