# garage/schemas/customer.py
from typing import Optional
from garage.schemas.common import CamelModel
from garage.schemas.vehicle import VehicleIn


class CustomerCreate(CamelModel):
    garage_id: str
    first_name: str
    last_name: str
    phone_number: str
    email: Optional[str] = None
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    vehicles: list[VehicleIn] = []


class CustomerUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None          # active | inactive
