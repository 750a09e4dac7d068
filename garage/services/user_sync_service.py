# garage/services/user_sync_service.py
"""
Dual-table user update: users (primary) → garage_auth (mirror).

Flow for update_user_across_tables():
  1. Fetch the user row (404 if missing)
  2. If firstName/lastName changed → recompute login_id
  3. Commit the users write (failure here → nothing mirrored)
  4. Re-read the persisted name + login_id
  5. Build the mirror subset (first_name, last_name, login_id, garage_name)
  6. Create the garage_auth row if missing, else update changed fields
  7. Mirror failure → PartialConsistencyError (users write is NOT undone)

The two commits are sequential, not one transaction. A failure between
them leaves the tables out of sync and is reported as such.
"""

from datetime import datetime
from typing import Mapping, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from garage.errors import (ConflictError, GarageError, NotFoundError, PartialConsistencyError,
                           PersistenceError, SyncResult, ValidationError)
from garage.models.garage_auth import GarageAuth
from garage.models.user import User
from garage.utils.db_errors import is_unique_violation
from garage.utils.field_mapper import USER_FIELDS, apply_storage
from garage.utils.logger import get_logger
from garage.validators import validate_user_updates
from garage.validators.result import is_blank

logger = get_logger(__name__)

# Columns the auth table mirrors from users
MIRRORED_COLUMNS = ("first_name", "last_name", "login_id", "garage_name")

# Never writable through a profile update
PROTECTED_FIELDS = ("id", "userUid", "loginId", "createdAt", "updatedAt")

# Login id components; NOT NULL in users
NAME_FIELDS = {"firstName": "First name", "lastName": "Last name"}


def generate_login_id(first_name: str, last_name: str, garage_id: Optional[str]) -> str:
    """firstname.lastname@garageid, lowercased with all whitespace removed."""
    def _squash(value):
        return "".join((value or "").split()).lower()
    return f"{_squash(first_name)}.{_squash(last_name)}@{_squash(garage_id)}"


def get_user(db: Session, user_uid: str) -> Optional[User]:
    return db.query(User).filter(User.user_uid == user_uid).first()


def get_auth_row(db: Session, user_uid: str) -> Optional[GarageAuth]:
    return db.query(GarageAuth).filter(GarageAuth.user_uid == user_uid).first()


def _write_primary(db: Session, user: User, updates: Mapping) -> Optional[str]:
    """Steps 2-3. Returns the recomputed login id, if any."""
    payload = USER_FIELDS.to_storage(updates, exclude=PROTECTED_FIELDS)

    new_login_id = None
    if "firstName" in updates or "lastName" in updates:
        for field, label in NAME_FIELDS.items():
            if field in updates and is_blank(updates[field]):
                raise ValidationError(f"{label} cannot be empty")
        new_login_id = generate_login_id(
            updates.get("firstName", user.first_name),
            updates.get("lastName", user.last_name),
            user.garage_id or "",
        )
        payload["login_id"] = new_login_id

    payload["updated_at"] = datetime.utcnow()
    changed = apply_storage(user, payload)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e) and "login_id" in str(e.orig):
            logger.warning(f"[SYNC] users write rejected for {user.user_uid}: {e.orig}")
            raise ConflictError("Failed to update user data: login ID already in use")
        logger.error(f"[SYNC] users write failed for {user.user_uid}: {e}", exc_info=True)
        raise PersistenceError("Failed to update user data")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[SYNC] users write failed for {user.user_uid}: {e}", exc_info=True)
        raise PersistenceError("Failed to update user data")

    logger.info(f"[SYNC] users updated | uid={user.user_uid} | columns={changed}")
    return new_login_id


def _write_mirror(db: Session, user: User) -> int:
    """Steps 4-6. Returns the number of garage_auth rows written."""
    db.refresh(user)
    mirror = {column: getattr(user, column) for column in MIRRORED_COLUMNS}
    auth = get_auth_row(db, user.user_uid)

    if auth is None:
        # No auth record yet: build it from the full user row
        db.add(GarageAuth(
            user_uid=user.user_uid,
            first_name=user.first_name,
            last_name=user.last_name,
            login_id=user.login_id,
            garage_id=user.garage_id,
            garage_name=user.garage_name,
            user_role=user.user_role,
            password_hash=None,
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow(),
        ))
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[SYNC] garage_auth insert failed for {user.user_uid}: {e}", exc_info=True)
            raise PartialConsistencyError("Failed to create authentication record")
        logger.info(f"[SYNC] garage_auth row created | uid={user.user_uid}")
        return 1

    changed = apply_storage(auth, mirror)
    if not changed:
        logger.debug(f"[SYNC] garage_auth already in sync | uid={user.user_uid}")
        return 0

    auth.updated_at = datetime.utcnow()
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            f"[SYNC] users/garage_auth OUT OF SYNC for {user.user_uid} — mirror write failed: {e}",
            exc_info=True,
        )
        raise PartialConsistencyError("Failed to update authentication data")

    logger.info(f"[SYNC] garage_auth updated | uid={user.user_uid} | columns={changed}")
    return 1


def update_user_across_tables(db: Session, user_uid: str, updates: Mapping) -> SyncResult:
    """
    Apply a camelCase partial update to a user and mirror the auth subset.
    Returns SyncResult(success, new_login_id, error).
    """
    try:
        failure = validate_user_updates(updates)
        if failure:
            field, result = failure
            logger.info(f"[SYNC] Rejected update for {user_uid}: {field} — {result.error}")
            raise ValidationError(result.error)

        user = get_user(db, user_uid)
        if user is None:
            raise NotFoundError("User not found")

        new_login_id = _write_primary(db, user, updates)
        synced = _write_mirror(db, user)
    except GarageError as e:
        return SyncResult.failed(e)

    return SyncResult(success=True, new_login_id=new_login_id, synced_auth_rows=synced,
                      data=USER_FIELDS.to_domain(user))
