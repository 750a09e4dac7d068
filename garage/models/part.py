# garage/models/part.py
"""
Parts inventory table.
stock_status and profit_margin_pct are derived — always written through
garage.services.part_metrics, never set directly by callers.
"""

from datetime import datetime
from sqlalchemy import (Boolean, Column, Date, DateTime, Float, ForeignKey, Integer,
                        Numeric, String, Text, UniqueConstraint)
from garage.database import Base

Money = Numeric(12, 2, asdecimal=False)


class Part(Base):
    __tablename__ = "parts"
    __table_args__ = (
        UniqueConstraint("garage_id", "part_number", name="uq_parts_garage_part_number"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    garage_id = Column(String(64), nullable=False, index=True)

    # Basic information
    part_number = Column(String(100), nullable=False)
    part_name = Column(String(200), nullable=False)
    category = Column(String(100), index=True)
    make = Column(String(100))
    model = Column(String(100))
    used_for = Column(String(200))
    description = Column(Text)

    # Stock
    on_hand_stock = Column(Integer, default=0, nullable=False)
    warehouse_stock = Column(Integer, default=0, nullable=False)
    low_stock_threshold = Column(Integer, default=5, nullable=False)
    stock_status = Column(String(20), index=True)        # in-stock | low-stock | out-of-stock

    # Pricing
    purchase_price = Column(Money, default=0)
    selling_price = Column(Money, default=0)
    wholesale_price = Column(Money)
    core_charge = Column(Money, default=0)
    profit_margin_pct = Column(Float)                    # null when purchase_price is 0

    # Identification
    sku = Column(String(100))
    oem_part_number = Column(String(100))
    is_universal_fitment = Column(Boolean, default=False, nullable=False)

    # Vendor
    supplier = Column(String(200))
    supplier_phone = Column(String(30))
    supplier_email = Column(String(255))
    supplier_website = Column(String(255))
    vendor_sku = Column(String(100))
    lead_time_days = Column(Integer, default=0)
    minimum_order_quantity = Column(Integer, default=0)
    location = Column(String(100))

    # Lifecycle
    batch_number = Column(String(100))
    expiration_date = Column(Date)
    warranty_months = Column(Integer, default=0)
    country_of_origin = Column(String(100))

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Part {self.part_number} status={self.stock_status} stock={self.on_hand_stock}+{self.warehouse_stock}>"


class PartFitment(Base):
    __tablename__ = "parts_fitment"

    id = Column(Integer, primary_key=True, autoincrement=True)
    part_id = Column(Integer, ForeignKey("parts.id", ondelete="CASCADE"), nullable=False, index=True)
    motorcycle_id = Column(Integer, ForeignKey("motorcycles.id"), nullable=False)
    garage_id = Column(String(64), nullable=False)

    def __repr__(self):
        return f"<PartFitment part={self.part_id} motorcycle={self.motorcycle_id}>"
