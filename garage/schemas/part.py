# garage/schemas/part.py
from datetime import date
from typing import Optional
from garage.schemas.common import CamelModel


class PartFields(CamelModel):
    """
    Writable part columns. status and margin are derived and are not
    accepted here.
    """
    part_number: Optional[str] = None
    part_name: Optional[str] = None
    category: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    used_for: Optional[str] = None
    description: Optional[str] = None

    on_hand_stock: Optional[int] = None
    warehouse_stock: Optional[int] = None
    low_stock_threshold: Optional[int] = None

    purchase_price: Optional[float] = None
    selling_price: Optional[float] = None
    wholesale_price: Optional[float] = None
    core_charge: Optional[float] = None

    sku: Optional[str] = None
    oem_part_number: Optional[str] = None
    is_universal_fitment: Optional[bool] = None

    supplier: Optional[str] = None
    supplier_phone: Optional[str] = None
    supplier_email: Optional[str] = None
    supplier_website: Optional[str] = None
    vendor_sku: Optional[str] = None
    lead_time_days: Optional[int] = None
    minimum_order_quantity: Optional[int] = None
    location: Optional[str] = None

    batch_number: Optional[str] = None
    expiration_date: Optional[date] = None
    warranty_months: Optional[int] = None
    country_of_origin: Optional[str] = None


class PartCreate(PartFields):
    garage_id: str
    part_number: str
    part_name: str
    compatible_vehicles: list[int] = []     # motorcycle ids


class PartUpdate(PartFields):
    pass
