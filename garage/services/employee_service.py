# garage/services/employee_service.py
"""
Employee accounts under a garage owner.

create_employee() inserts the users row and its garage_auth row in ONE
transaction (unlike profile updates, which mirror after the fact). The
password hash stays empty until the employee sets a password.
"""

import uuid
from datetime import datetime
from typing import Mapping
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from garage.errors import (ConflictError, GarageError, NotFoundError, PersistenceError,
                           ServiceResult, ValidationError)
from garage.models.garage_auth import GarageAuth
from garage.models.user import User
from garage.services.user_sync_service import generate_login_id, get_user
from garage.utils.field_mapper import USER_FIELDS
from garage.utils.logger import get_logger
from garage.validators import contact

logger = get_logger(__name__)

REQUIRED_FIELDS = ("firstName", "lastName", "userRole", "email", "phoneNumber")


def _check_input(data: Mapping) -> None:
    if any(not (data.get(f) or "").strip() for f in REQUIRED_FIELDS):
        raise ValidationError(
            "All fields are required: firstName, lastName, userRole, email, phoneNumber"
        )
    for field, validate in (("email", contact.validate_email),
                            ("phoneNumber", contact.validate_phone)):
        result = validate(data[field])
        if not result.is_valid:
            raise ValidationError(result.error)


def create_employee(db: Session, parent_user_uid: str, data: Mapping) -> ServiceResult:
    """
    New employee inheriting garage_uid / garage_id / garage_name from the
    parent (owner) user. Returns the created user as a domain dict.
    """
    try:
        _check_input(data)
        parent = get_user(db, parent_user_uid)
        if parent is None:
            raise NotFoundError("Parent user not found or invalid")

        first_name, last_name = data["firstName"].strip(), data["lastName"].strip()
        login_id = generate_login_id(first_name, last_name, parent.garage_id or "")

        if db.query(User.id).filter(User.login_id == login_id).first():
            raise ConflictError(f'User with login ID "{login_id}" already exists')

        orphan = db.query(GarageAuth).filter(GarageAuth.login_id == login_id).first()
        if orphan:
            logger.warning(f"[EMPLOYEE] Removing orphaned garage_auth row {orphan.user_uid} "
                           f"holding login {login_id}")
            db.delete(orphan)

        now = datetime.utcnow()
        user = User(
            user_uid=str(uuid.uuid4()),
            garage_uid=parent.garage_uid,
            garage_id=parent.garage_id,
            garage_name=parent.garage_name,
            first_name=first_name,
            last_name=last_name,
            employee_id=(data.get("employeeId") or "").strip() or None,
            login_id=login_id,
            user_role=data["userRole"],
            email=data["email"].strip(),
            phone_number=data["phoneNumber"].strip(),
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        db.add(GarageAuth(
            user_uid=user.user_uid,
            garage_id=user.garage_id,
            garage_name=user.garage_name,
            first_name=first_name,
            last_name=last_name,
            login_id=login_id,
            user_role=user.user_role,
            password_hash=None,
            created_at=now,
            updated_at=now,
        ))
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"[EMPLOYEE] Insert rejected for {login_id}: {e.orig}")
            raise ConflictError(f'User with login ID "{login_id}" already exists')
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[EMPLOYEE] Insert failed for {login_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to create user")
    except GarageError as e:
        return ServiceResult.failed(e)

    logger.info(f"[EMPLOYEE] Created {login_id} | garage={user.garage_id} | role={user.user_role}")
    return ServiceResult.ok(USER_FIELDS.to_domain(user))


def list_employees(db: Session, garage_id: str, include_inactive: bool = False) -> list:
    q = db.query(User).filter(User.garage_id == garage_id)
    if not include_inactive:
        q = q.filter(User.is_active.is_(True))
    return [USER_FIELDS.to_domain(u) for u in q.order_by(User.created_at.asc()).all()]


def get_user_by_uid(db: Session, user_uid: str) -> ServiceResult:
    user = get_user(db, user_uid)
    if user is None:
        return ServiceResult.failed(NotFoundError("User not found"))
    return ServiceResult.ok(USER_FIELDS.to_domain(user))


def get_user_by_login_id(db: Session, login_id: str) -> ServiceResult:
    user = db.query(User).filter(User.login_id == login_id).first()
    if user is None:
        return ServiceResult.failed(NotFoundError("Employee not found"))
    return ServiceResult.ok(USER_FIELDS.to_domain(user))


def deactivate_employee(db: Session, user_uid: str) -> ServiceResult:
    """Soft delete: the users row stays, is_active goes False."""
    user = get_user(db, user_uid)
    if user is None:
        return ServiceResult.failed(NotFoundError("User not found"))

    user.is_active = False
    user.updated_at = datetime.utcnow()
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[EMPLOYEE] Deactivate failed for {user_uid}: {e}", exc_info=True)
        return ServiceResult.failed(PersistenceError("Failed to delete employee"))

    logger.info(f"[EMPLOYEE] Deactivated {user.login_id}")
    return ServiceResult.ok()
