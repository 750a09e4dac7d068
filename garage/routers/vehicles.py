# garage/routers/vehicles.py
"""Vehicle registry — every vehicle belongs to a customer."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from garage.database import get_db
from garage.schemas.vehicle import VehicleCreate, VehicleUpdate
from garage.services import vehicle_service
from garage.utils.responses import respond

router = APIRouter()


@router.get("/vehicles", summary="List vehicles of a garage with owner details")
def list_vehicles(garage_id: str, db: Session = Depends(get_db)):
    vehicles = vehicle_service.list_vehicles(db, garage_id)
    return {"success": True, "vehicles": vehicles, "count": len(vehicles)}


@router.post("/vehicles", summary="Add a vehicle to an existing customer")
def add_vehicle(body: VehicleCreate, db: Session = Depends(get_db)):
    data = body.partial()
    customer_id, garage_id = data.pop("customerId"), data.pop("garageId")
    return respond(vehicle_service.add_vehicle(db, customer_id, garage_id, data), key="vehicle")


@router.put("/vehicles/{vehicle_id}", summary="Update a vehicle")
def update_vehicle(vehicle_id: int, body: VehicleUpdate, db: Session = Depends(get_db)):
    """make, model, year and category are fixed at registration."""
    return respond(vehicle_service.update_vehicle(db, vehicle_id, body.partial()), key="vehicle")


@router.delete("/vehicles/{vehicle_id}", summary="Remove a vehicle")
def delete_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    return respond(vehicle_service.delete_vehicle(db, vehicle_id))
