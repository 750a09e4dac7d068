# garage/services/vehicle_service.py
"""
Customer vehicle registry.
Used by customer_service (vehicles submitted with a new customer) and the
vehicles router.

  - licence plate is unique per garage; defaults to the chassis number
  - vin defaults to the chassis number
  - category comes from the motorcycle catalog, never from the request
"""

from datetime import datetime
from typing import Mapping, Optional
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from garage.errors import (ConflictError, GarageError, NotFoundError, PersistenceError,
                           ServiceResult, ValidationError)
from garage.models.customer import Customer
from garage.models.motorcycle import Motorcycle
from garage.models.vehicle import Vehicle
from garage.utils.field_mapper import VEHICLE_FIELDS, apply_storage
from garage.utils.logger import get_logger

logger = get_logger(__name__)

# Identity of the vehicle is fixed once registered
READ_ONLY_FIELDS = ("id", "customerId", "garageId", "make", "model", "year", "category",
                    "createdAt", "updatedAt")

VEHICLE_STATUSES = ("active", "inactive", "in-repair")


def resolve_plate(data: Mapping) -> Optional[str]:
    return data.get("licensePlate") or data.get("chassisNumber")


def plate_exists(db: Session, garage_id: str, plate: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(Vehicle.id).filter(Vehicle.garage_id == garage_id, Vehicle.license_plate == plate)
    if exclude_id is not None:
        q = q.filter(Vehicle.id != exclude_id)
    return q.first() is not None


def lookup_category(db: Session, make: str, model: str) -> Optional[str]:
    """Category of the catalog entry for (make, model), matched ignoring case."""
    row = (
        db.query(Motorcycle.category)
        .filter(func.lower(Motorcycle.make) == make.lower(),
                func.lower(Motorcycle.model) == model.lower())
        .first()
    )
    return row[0] if row else None


def build_vehicle(db: Session, customer_id: int, garage_id: str, data: Mapping) -> Vehicle:
    """Unsaved Vehicle row from a camelCase payload. Raises ValidationError on missing identity fields."""
    for field in ("make", "model", "year"):
        if not data.get(field):
            raise ValidationError("Missing required fields: make, model, year")
    plate = resolve_plate(data)
    if not plate:
        raise ValidationError("License plate or chassis number is required")

    payload = VEHICLE_FIELDS.to_storage(data, exclude=("id", "customerId", "garageId", "category",
                                                       "status", "createdAt", "updatedAt"))
    payload["license_plate"] = plate
    payload["vin"] = data.get("vin") or data.get("chassisNumber")

    now = datetime.utcnow()
    return Vehicle(
        **payload,
        customer_id=customer_id,
        garage_id=garage_id,
        category=lookup_category(db, data["make"], data["model"]),
        status="active",
        created_at=now,
        updated_at=now,
    )


def _get(db: Session, vehicle_id: int) -> Vehicle:
    vehicle = db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
    if vehicle is None:
        raise NotFoundError("Vehicle not found")
    return vehicle


def add_vehicle(db: Session, customer_id: int, garage_id: str, data: Mapping) -> ServiceResult:
    try:
        if db.query(Customer.id).filter(Customer.id == customer_id).first() is None:
            raise NotFoundError("Customer not found")
        plate = resolve_plate(data)
        if plate and plate_exists(db, garage_id, plate):
            raise ConflictError(f'License plate "{plate}" is already registered in this garage.')

        vehicle = build_vehicle(db, customer_id, garage_id, data)
        db.add(vehicle)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[VEHICLE] Insert failed for customer {customer_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to add vehicle")
    except GarageError as e:
        return ServiceResult.failed(e)

    logger.info(f"[VEHICLE] Registered {vehicle.license_plate} | customer={customer_id} | "
                f"category={vehicle.category}")
    return ServiceResult.ok(VEHICLE_FIELDS.to_domain(vehicle))


def update_vehicle(db: Session, vehicle_id: int, updates: Mapping) -> ServiceResult:
    try:
        vehicle = _get(db, vehicle_id)
        if updates.get("status") and updates["status"] not in VEHICLE_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(VEHICLE_STATUSES)}")
        plate = updates.get("licensePlate")
        if plate and plate_exists(db, vehicle.garage_id, plate, exclude_id=vehicle.id):
            raise ConflictError(f'License plate "{plate}" is already registered in this garage.')

        payload = VEHICLE_FIELDS.to_storage(updates, exclude=READ_ONLY_FIELDS)
        payload["updated_at"] = datetime.utcnow()
        changed = apply_storage(vehicle, payload)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[VEHICLE] Update failed for {vehicle_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to update vehicle")
    except GarageError as e:
        return ServiceResult.failed(e)

    logger.info(f"[VEHICLE] Updated vehicle {vehicle_id} | columns={changed}")
    return ServiceResult.ok(VEHICLE_FIELDS.to_domain(vehicle))


def delete_vehicle(db: Session, vehicle_id: int) -> ServiceResult:
    try:
        vehicle = _get(db, vehicle_id)
        db.delete(vehicle)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[VEHICLE] Delete failed for {vehicle_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to delete vehicle")
    except GarageError as e:
        return ServiceResult.failed(e)

    logger.info(f"[VEHICLE] Deleted vehicle {vehicle_id}")
    return ServiceResult.ok()


def list_vehicles(db: Session, garage_id: str) -> list:
    """All vehicles in a garage, newest first, with owner contact details."""
    rows = (
        db.query(Vehicle, Customer)
        .outerjoin(Customer, Customer.id == Vehicle.customer_id)
        .filter(Vehicle.garage_id == garage_id)
        .order_by(Vehicle.created_at.desc())
        .all()
    )
    vehicles = []
    for vehicle, customer in rows:
        body = VEHICLE_FIELDS.to_domain(vehicle)
        body["customerName"] = f"{customer.first_name} {customer.last_name}" if customer else "Unknown"
        body["customerPhone"] = customer.phone_number if customer else None
        body["customerEmail"] = customer.email if customer else None
        vehicles.append(body)
    return vehicles
