# garage/schemas/vehicle.py
from datetime import date
from typing import Optional
from garage.schemas.common import CamelModel


class VehicleIn(CamelModel):
    """A vehicle as submitted with a customer or on its own. Category is looked up, not accepted."""
    make: str
    model: str
    year: int
    license_plate: Optional[str] = None
    color: Optional[str] = None
    vin: Optional[str] = None
    engine_number: Optional[str] = None
    chassis_number: Optional[str] = None
    current_mileage: Optional[int] = None
    notes: Optional[str] = None


class VehicleCreate(VehicleIn):
    garage_id: str
    customer_id: int


class VehicleUpdate(CamelModel):
    license_plate: Optional[str] = None
    color: Optional[str] = None
    vin: Optional[str] = None
    engine_number: Optional[str] = None
    chassis_number: Optional[str] = None
    current_mileage: Optional[int] = None
    last_service_date: Optional[date] = None
    status: Optional[str] = None          # active | inactive | in-repair
    notes: Optional[str] = None
