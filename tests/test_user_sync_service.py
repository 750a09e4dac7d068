# tests/test_user_sync_service.py
"""Tests for the users → garage_auth dual-table update."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date
from unittest.mock import patch
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from garage.errors import ConflictError, NotFoundError, PartialConsistencyError, PersistenceError, ValidationError
from garage.models import GarageAuth, User
from garage.services.user_sync_service import generate_login_id, update_user_across_tables


def auth_row(db, uid="uid-owner"):
    return db.query(GarageAuth).filter(GarageAuth.user_uid == uid).first()


def failing_nth_commit(db, n):
    """Let commits through until the n-th, which raises."""
    real_commit = db.commit
    calls = {"count": 0}

    def _commit():
        calls["count"] += 1
        if calls["count"] == n:
            raise SQLAlchemyError("connection lost")
        real_commit()
    return _commit


class TestGenerateLoginId:
    def test_lowercases_and_strips_spaces(self):
        assert generate_login_id(" Mary Ann ", "De Souza", "G 123") == "maryann.desouza@g123"

    def test_missing_garage_id(self):
        assert generate_login_id("Raj", "Kumar", None) == "raj.kumar@"


class TestUpdateUserAcrossTables:
    def test_first_name_change_updates_both_tables(self, db, owner):
        result = update_user_across_tables(db, "uid-owner", {"firstName": "Rahul"})

        assert result.success
        assert result.new_login_id == "rahul.kumar@g123"
        assert result.to_dict() == {"success": True, "newLoginId": "rahul.kumar@g123"}

        db.expire_all()
        user = db.query(User).filter(User.user_uid == "uid-owner").one()
        auth = auth_row(db)
        assert user.login_id == auth.login_id == "rahul.kumar@g123"
        assert user.first_name == auth.first_name == "Rahul"
        assert auth.last_name == "Kumar"

    def test_non_name_update_keeps_login_id(self, db, owner):
        result = update_user_across_tables(
            db, "uid-owner", {"city": "Pune", "dateOfBirth": date(1990, 5, 17)}
        )
        assert result.success
        assert result.new_login_id is None
        assert "newLoginId" not in result.to_dict()
        assert result.synced_auth_rows == 0

        db.expire_all()
        assert db.query(User).one().date_of_birth == date(1990, 5, 17)
        assert auth_row(db).login_id == "raj.kumar@g123"

    def test_email_never_mirrored(self, db, owner):
        update_user_across_tables(db, "uid-owner", {"email": "new@example.com", "lastName": "Verma"})
        db.expire_all()
        auth = auth_row(db)
        assert auth.last_name == "Verma"
        assert not hasattr(auth, "email")

    def test_missing_auth_row_is_created(self, db, owner):
        db.delete(auth_row(db))
        db.commit()

        result = update_user_across_tables(db, "uid-owner", {"lastName": "Sharma"})

        assert result.success
        assert result.synced_auth_rows == 1
        auth = auth_row(db)
        assert auth.login_id == "raj.sharma@g123"
        assert auth.garage_id == "G123"
        assert auth.garage_name == "Speed Motors"
        assert auth.user_role == "Owner"
        assert auth.password_hash is None

    def test_unknown_user(self, db):
        result = update_user_across_tables(db, "nobody", {"firstName": "X"})
        assert not result.success
        assert result.error == "User not found"
        assert result.error_type is NotFoundError
        assert result.status_code == 404

    def test_invalid_field_rejected_before_any_write(self, db, owner):
        result = update_user_across_tables(db, "uid-owner", {"firstName": "Rahul", "email": "bad"})
        assert not result.success
        assert result.error_type is ValidationError
        db.expire_all()
        assert db.query(User).one().first_name == "Raj"

    def test_primary_write_failure_skips_mirror(self, db, owner):
        with patch.object(db, "commit", side_effect=failing_nth_commit(db, 1)):
            result = update_user_across_tables(db, "uid-owner", {"firstName": "Rahul"})

        assert not result.success
        assert result.error == "Failed to update user data"
        assert result.error_type is PersistenceError
        db.expire_all()
        assert db.query(User).one().first_name == "Raj"
        assert auth_row(db).first_name == "Raj"

    def test_mirror_failure_is_partial_and_primary_kept(self, db, owner):
        with patch.object(db, "commit", side_effect=failing_nth_commit(db, 2)):
            result = update_user_across_tables(db, "uid-owner", {"firstName": "Rahul"})

        assert not result.success
        assert result.error == "Failed to update authentication data"
        assert result.error_type is PartialConsistencyError
        assert result.status_code == 500

        db.expire_all()
        assert db.query(User).one().login_id == "rahul.kumar@g123"
        assert auth_row(db).login_id == "raj.kumar@g123"

    def test_auth_insert_failure_is_partial(self, db, owner):
        db.delete(auth_row(db))
        db.commit()
        with patch.object(db, "commit", side_effect=failing_nth_commit(db, 2)):
            result = update_user_across_tables(db, "uid-owner", {"firstName": "Rahul"})

        assert result.error == "Failed to create authentication record"
        assert result.error_type is PartialConsistencyError


class TestPrimaryWriteErrors:
    def test_null_first_name_rejected(self, db, owner):
        result = update_user_across_tables(db, "uid-owner", {"firstName": None})
        assert result.error_type is ValidationError
        assert result.status_code == 400
        assert result.error == "First name cannot be empty"
        db.expire_all()
        assert db.query(User).one().login_id == "raj.kumar@g123"

    def test_blank_last_name_rejected(self, db, owner):
        result = update_user_across_tables(db, "uid-owner", {"lastName": "   "})
        assert result.error == "Last name cannot be empty"

    def test_login_id_collision_is_conflict(self, db, owner):
        db.add(User(user_uid="uid-2", garage_uid="guid-123", garage_id="G123", first_name="Rahul",
                    last_name="Kumar", garage_name="Speed Motors", user_role="Mechanic",
                    login_id="rahul.kumar@g123"))
        db.commit()

        result = update_user_across_tables(db, "uid-owner", {"firstName": "Rahul"})
        assert result.error_type is ConflictError
        assert result.error == "Failed to update user data: login ID already in use"
        assert auth_row(db).login_id == "raj.kumar@g123"

    def test_other_integrity_error_is_generic(self, db, owner):
        error = IntegrityError("UPDATE users", {}, Exception("NOT NULL constraint failed: users.user_role"))
        with patch.object(db, "commit", side_effect=error):
            result = update_user_across_tables(db, "uid-owner", {"city": "Pune"})
        assert result.error_type is PersistenceError
        assert result.error == "Failed to update user data"
