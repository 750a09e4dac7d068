# garage/services/inventory_service.py
"""
Parts inventory: create / update / list / low-stock.

Every write goes through part_metrics.apply_part_metrics() so stock_status
and profit_margin_pct are always consistent with the stock and price
columns. Callers cannot set those two fields directly.
"""

import math
from datetime import datetime
from typing import Mapping, Optional
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from garage.config import settings
from garage.errors import (ConflictError, GarageError, NotFoundError, PersistenceError,
                           ServiceResult, ValidationError)
from garage.models.part import Part, PartFitment
from garage.services.part_metrics import (LOW_STOCK, MONEY_COLUMNS, OUT_OF_STOCK, apply_part_metrics,
                                          quantize_money)
from garage.utils.db_errors import is_unique_violation
from garage.utils.field_mapper import PART_FIELDS, apply_storage
from garage.utils.logger import get_logger

logger = get_logger(__name__)

# UI labels accepted by the stock status filter
STOCK_STATUS_LABELS = {
    "In Stock": "in-stock",
    "Low Stock": "low-stock",
    "Out of Stock": "out-of-stock",
}

# Derived or identity fields — never taken from a request
READ_ONLY_FIELDS = ("id", "garageId", "status", "margin", "createdAt", "updatedAt")

# Applied on create when the request leaves them empty
CREATE_DEFAULTS = {
    "on_hand_stock": 0,
    "warehouse_stock": 0,
    "purchase_price": 0,
    "selling_price": 0,
    "core_charge": 0,
    "lead_time_days": 0,
    "minimum_order_quantity": 0,
    "warranty_months": 0,
    "is_universal_fitment": False,
}

# NOT NULL columns a request may name but never clear
NON_NULLABLE_FIELDS = {
    "partNumber": "Part number",
    "partName": "Part name",
    "onHandStock": "On-hand stock",
    "warehouseStock": "Warehouse stock",
    "lowStockThreshold": "Low stock threshold",
    "isUniversalFitment": "Universal fitment",
}


def part_to_domain(part: Part, fitment: Optional[list] = None) -> dict:
    body = PART_FIELDS.to_domain(part)
    if fitment is not None:
        body["compatibleVehicles"] = fitment
    return body


def _duplicate(part_number: str) -> ConflictError:
    return ConflictError(f'A part with part number "{part_number}" already exists')


def _check_not_cleared(updates: Mapping) -> None:
    for field, label in NON_NULLABLE_FIELDS.items():
        if field in updates and (updates[field] is None or updates[field] == ""):
            raise ValidationError(f"{label} cannot be empty")


def _storage_payload(data: Mapping) -> dict:
    """camelCase request fields -> column values, prices at the stored scale."""
    payload = PART_FIELDS.to_storage(data, exclude=READ_ONLY_FIELDS)
    for column in MONEY_COLUMNS:
        if column in payload:
            payload[column] = quantize_money(payload[column])
    return payload


def _write_error(e: IntegrityError, part_number: str, action: str) -> GarageError:
    if is_unique_violation(e):
        return _duplicate(part_number)
    return PersistenceError(f"Failed to {action} part")


def _get(db: Session, part_id: int) -> Part:
    part = db.query(Part).filter(Part.id == part_id).first()
    if part is None:
        raise NotFoundError("Part not found")
    return part


def _fitment_ids(db: Session, part_id: int) -> list:
    rows = db.query(PartFitment.motorcycle_id).filter(PartFitment.part_id == part_id).all()
    return [r[0] for r in rows]


def _add_fitment(db: Session, part: Part, motorcycle_ids: list) -> None:
    """Fitment rows are best-effort: a failure is logged and the part is kept."""
    if part.is_universal_fitment or not motorcycle_ids:
        return
    for motorcycle_id in motorcycle_ids:
        db.add(PartFitment(part_id=part.id, motorcycle_id=motorcycle_id, garage_id=part.garage_id))
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[PARTS] Fitment insert failed for part {part.id}: {e}", exc_info=True)
        return
    logger.info(f"[PARTS] Fitment: part {part.id} → {len(motorcycle_ids)} motorcycle(s)")


def create_part(db: Session, data: Mapping) -> ServiceResult:
    """data: camelCase part fields, garageId, optional compatibleVehicles (motorcycle ids)."""
    garage_id = data.get("garageId")
    part_number = data.get("partNumber")
    try:
        if not garage_id:
            raise ValidationError("Garage ID is required")
        if not part_number or not data.get("partName"):
            raise ValidationError("Part number and part name are required")

        exists = (
            db.query(Part.id)
            .filter(Part.garage_id == garage_id, Part.part_number == part_number)
            .first()
        )
        if exists:
            raise _duplicate(part_number)

        payload = _storage_payload(data)
        for column, default in CREATE_DEFAULTS.items():
            if payload.get(column) is None:
                payload[column] = default
        if not payload.get("low_stock_threshold"):
            payload["low_stock_threshold"] = settings.DEFAULT_LOW_STOCK_THRESHOLD

        now = datetime.utcnow()
        part = Part(**payload, garage_id=garage_id, created_at=now, updated_at=now)
        apply_part_metrics(part)
        db.add(part)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"[PARTS] Insert rejected for {part_number}: {e.orig}")
            raise _write_error(e, part_number, "add")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[PARTS] Insert failed for {part_number}: {e}", exc_info=True)
            raise PersistenceError("Failed to add part")
    except GarageError as e:
        return ServiceResult.failed(e)

    logger.info(f"[PARTS] Created part {part.id} ({part_number}) | status={part.stock_status}")
    _add_fitment(db, part, list(data.get("compatibleVehicles") or []))
    return ServiceResult.ok(part_to_domain(part, _fitment_ids(db, part.id)))


def update_part(db: Session, part_id: int, updates: Mapping) -> ServiceResult:
    try:
        _check_not_cleared(updates)
        part = _get(db, part_id)
        new_number = updates.get("partNumber")
        if new_number and new_number != part.part_number:
            taken = (
                db.query(Part.id)
                .filter(Part.garage_id == part.garage_id, Part.part_number == new_number,
                        Part.id != part.id)
                .first()
            )
            if taken:
                raise _duplicate(new_number)

        payload = _storage_payload(updates)
        changed = apply_storage(part, payload)
        if apply_part_metrics(part):
            changed += ["stock_status/profit_margin_pct"]
        part.updated_at = datetime.utcnow()
        number = part.part_number
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"[PARTS] Update rejected for {part_id}: {e.orig}")
            raise _write_error(e, number, "update")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[PARTS] Update failed for {part_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to update part")
    except GarageError as e:
        return ServiceResult.failed(e)

    logger.info(f"[PARTS] Updated part {part_id} | columns={changed}")
    return ServiceResult.ok(part_to_domain(part, _fitment_ids(db, part.id)))


def get_part(db: Session, part_id: int) -> ServiceResult:
    try:
        part = _get(db, part_id)
    except GarageError as e:
        return ServiceResult.failed(e)
    return ServiceResult.ok(part_to_domain(part, _fitment_ids(db, part.id)))


def list_parts(db: Session, garage_id: Optional[str] = None, search: str = "",
               category: str = "", stock_status: str = "", page: int = 1,
               page_size: Optional[int] = None) -> dict:
    """Newest first, filtered and paginated."""
    page = max(page, 1)
    page_size = min(max(page_size or settings.DEFAULT_PAGE_SIZE, 1), settings.MAX_PAGE_SIZE)

    q = db.query(Part)
    if garage_id:
        q = q.filter(Part.garage_id == garage_id)
    if search:
        pattern = f"%{search.lower()}%"
        q = q.filter(or_(
            func.lower(Part.part_name).like(pattern),
            func.lower(Part.part_number).like(pattern),
            func.lower(Part.make).like(pattern),
            func.lower(Part.model).like(pattern),
        ))
    if category:
        q = q.filter(Part.category == category)
    if stock_status:
        q = q.filter(Part.stock_status == STOCK_STATUS_LABELS.get(stock_status, stock_status))

    total = q.count()
    parts = (
        q.order_by(Part.created_at.desc(), Part.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return {
        "parts": [part_to_domain(p) for p in parts],
        "totalCount": total,
        "page": page,
        "pageSize": page_size,
        "totalPages": math.ceil(total / page_size) if total else 0,
    }


def list_part_categories(db: Session, garage_id: Optional[str] = None) -> list:
    q = db.query(Part.category).filter(Part.category.isnot(None))
    if garage_id:
        q = q.filter(Part.garage_id == garage_id)
    return sorted({r[0] for r in q.distinct().all()})


def list_low_stock_parts(db: Session, garage_id: Optional[str] = None) -> list:
    q = db.query(Part).filter(Part.stock_status.in_((LOW_STOCK, OUT_OF_STOCK)))
    if garage_id:
        q = q.filter(Part.garage_id == garage_id)
    parts = q.order_by(Part.on_hand_stock.asc(), Part.part_name.asc()).all()
    return [part_to_domain(p) for p in parts]
