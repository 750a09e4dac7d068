# garage/services/customer_service.py
"""
Customer records per garage, each returned with its vehicles attached.
Deleting a customer is a soft delete (status → inactive).
"""

from datetime import datetime
from typing import Mapping
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from garage.errors import (ConflictError, GarageError, NotFoundError, PersistenceError,
                           ServiceResult, ValidationError)
from garage.models.customer import Customer
from garage.services import vehicle_service
from garage.utils.field_mapper import CUSTOMER_FIELDS, VEHICLE_FIELDS, apply_storage
from garage.utils.logger import get_logger
from garage.validators import contact

logger = get_logger(__name__)

PROTECTED_FIELDS = ("id", "garageId", "customerSince", "createdAt", "updatedAt")


def customer_to_domain(customer: Customer) -> dict:
    body = CUSTOMER_FIELDS.to_domain(customer)
    body["vehicles"] = [VEHICLE_FIELDS.to_domain(v) for v in customer.vehicles]
    return body


def _check_contact(data: Mapping) -> None:
    for field, validate in (("email", contact.validate_email),
                            ("phoneNumber", contact.validate_phone),
                            ("alternatePhone", contact.validate_phone),
                            ("zipCode", contact.validate_postal_code)):
        if field in data:
            result = validate(data[field])
            if not result.is_valid:
                raise ValidationError(result.error)


def _get(db: Session, customer_id: int) -> Customer:
    customer = (
        db.query(Customer)
        .options(selectinload(Customer.vehicles))
        .filter(Customer.id == customer_id)
        .first()
    )
    if customer is None:
        raise NotFoundError("Customer not found")
    return customer


def create_customer(db: Session, data: Mapping) -> ServiceResult:
    """
    data: camelCase customer fields plus garageId and an optional `vehicles` list.
    Vehicles are inserted after the customer; a vehicle failure is logged and
    the customer is still returned.
    """
    garage_id = data.get("garageId")
    vehicles = list(data.get("vehicles") or [])
    try:
        if not garage_id:
            raise ValidationError("Garage ID is required")
        _check_contact(data)
        for vehicle in vehicles:
            plate = vehicle_service.resolve_plate(vehicle)
            if plate and vehicle_service.plate_exists(db, garage_id, plate):
                raise ConflictError(f'License plate "{plate}" is already registered in this garage.')

        now = datetime.utcnow()
        customer = Customer(
            **CUSTOMER_FIELDS.to_storage(data, exclude=PROTECTED_FIELDS + ("status",)),
            garage_id=garage_id,
            status="active",
            customer_since=now,
            created_at=now,
            updated_at=now,
        )
        db.add(customer)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[CUSTOMER] Insert failed for garage {garage_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to create customer")
    except GarageError as e:
        return ServiceResult.failed(e)

    logger.info(f"[CUSTOMER] Created customer {customer.id} | garage={garage_id}")

    if vehicles:
        try:
            for vehicle in vehicles:
                db.add(vehicle_service.build_vehicle(db, customer.id, garage_id, vehicle))
            db.commit()
        except (GarageError, SQLAlchemyError) as e:
            db.rollback()
            logger.error(
                f"[CUSTOMER] Customer {customer.id} created but vehicles failed to create: {e}",
                exc_info=True,
            )
        db.refresh(customer)

    return ServiceResult.ok(customer_to_domain(customer))


def list_customers(db: Session, garage_id: str) -> list:
    customers = (
        db.query(Customer)
        .options(selectinload(Customer.vehicles))
        .filter(Customer.garage_id == garage_id)
        .order_by(Customer.created_at.desc())
        .all()
    )
    return [customer_to_domain(c) for c in customers]


def get_customer(db: Session, customer_id: int) -> ServiceResult:
    try:
        return ServiceResult.ok(customer_to_domain(_get(db, customer_id)))
    except GarageError as e:
        return ServiceResult.failed(e)


def search_customers(db: Session, garage_id: str, query: str) -> list:
    """Case-insensitive substring match on first/last name, phone and email."""
    pattern = f"%{query.lower()}%"
    customers = (
        db.query(Customer)
        .options(selectinload(Customer.vehicles))
        .filter(
            Customer.garage_id == garage_id,
            or_(
                func.lower(Customer.first_name).like(pattern),
                func.lower(Customer.last_name).like(pattern),
                func.lower(Customer.phone_number).like(pattern),
                func.lower(Customer.email).like(pattern),
            ),
        )
        .order_by(Customer.created_at.desc())
        .all()
    )
    return [customer_to_domain(c) for c in customers]


def update_customer(db: Session, customer_id: int, updates: Mapping) -> ServiceResult:
    try:
        _check_contact(updates)
        customer = _get(db, customer_id)
        payload = CUSTOMER_FIELDS.to_storage(updates, exclude=PROTECTED_FIELDS)
        payload["updated_at"] = datetime.utcnow()
        changed = apply_storage(customer, payload)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[CUSTOMER] Update failed for {customer_id}: {e}", exc_info=True)
            raise PersistenceError("Failed to update customer")
    except GarageError as e:
        return ServiceResult.failed(e)

    logger.info(f"[CUSTOMER] Updated customer {customer_id} | columns={changed}")
    return ServiceResult.ok(customer_to_domain(customer))


def deactivate_customer(db: Session, customer_id: int) -> ServiceResult:
    return update_customer(db, customer_id, {"status": "inactive"})
