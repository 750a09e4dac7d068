# garage/services/garage_service.py
"""
Garage profile reads and updates.

A garage name change is propagated to every garage_auth row sharing the
garage_id (owner plus all employees). Same two-commit model as
user_sync_service: the garages write is kept even if propagation fails.
"""

from datetime import datetime
from typing import Mapping, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from garage.errors import (GarageError, NotFoundError, PartialConsistencyError, PersistenceError,
                           ServiceResult, SyncResult, ValidationError)
from garage.models.garage import Garage
from garage.models.garage_auth import GarageAuth
from garage.utils.field_mapper import GARAGE_FIELDS, apply_storage
from garage.utils.logger import get_logger
from garage.validators import validate_garage_updates

logger = get_logger(__name__)

PROTECTED_FIELDS = ("garageId", "ownerId", "createdAt", "updatedAt")


def _find(db: Session, garage_id: str) -> Optional[Garage]:
    return db.query(Garage).filter(Garage.garage_id == garage_id).first()


def get_garage(db: Session, garage_id: str) -> ServiceResult:
    garage = _find(db, garage_id)
    if garage is None:
        return ServiceResult.failed(NotFoundError("Garage not found"))
    return ServiceResult.ok(GARAGE_FIELDS.to_domain(garage))


def _propagate_name(db: Session, garage_id: str, garage_name: str) -> int:
    rows = db.query(GarageAuth).filter(GarageAuth.garage_id == garage_id).all()
    if not rows:
        logger.warning(f"[GARAGE] No garage_auth rows for {garage_id} — name not propagated")
        return 0

    now = datetime.utcnow()
    for row in rows:
        row.garage_name = garage_name
        row.updated_at = now
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            f"[GARAGE] garages/garage_auth OUT OF SYNC for {garage_id} — name propagation failed: {e}",
            exc_info=True,
        )
        raise PartialConsistencyError("Failed to update garage name for users")

    logger.info(f"[GARAGE] Name propagated to {len(rows)} garage_auth row(s) | garage={garage_id}")
    return len(rows)


def update_garage(db: Session, garage_id: str, updates: Mapping) -> SyncResult:
    """Apply a camelCase partial update to a garage profile."""
    try:
        failure = validate_garage_updates(updates)
        if failure:
            field, result = failure
            logger.info(f"[GARAGE] Rejected update for {garage_id}: {field} — {result.error}")
            raise ValidationError(result.error)

        garage = _find(db, garage_id)
        if garage is None:
            raise NotFoundError("Garage not found")

        payload = GARAGE_FIELDS.to_storage(updates, exclude=PROTECTED_FIELDS)
        hours = payload.get("operating_hours")
        if isinstance(hours, Mapping):
            # Days not sent keep their stored value
            payload["operating_hours"] = {**(garage.operating_hours or {}), **hours}
        payload["updated_at"] = datetime.utcnow()
        changed = apply_storage(garage, payload)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[GARAGE] garages write failed for {garage_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to update garage data")
        logger.info(f"[GARAGE] garages updated | garage={garage_id} | columns={changed}")

        synced = 0
        if "garageName" in updates:
            db.refresh(garage)
            synced = _propagate_name(db, garage_id, garage.garage_name)
    except GarageError as e:
        return SyncResult.failed(e)

    return SyncResult(success=True, synced_auth_rows=synced, data=GARAGE_FIELDS.to_domain(garage))
