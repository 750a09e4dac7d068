# garage/models/vehicle.py
"""
Customer vehicles table (vehicle registry).
Every vehicle belongs to exactly one customer. Category is copied from the
motorcycle catalog when the vehicle is registered.
"""

from datetime import datetime
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from garage.database import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    garage_id = Column(String(64), nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    license_plate = Column(String(50), nullable=False, index=True)
    color = Column(String(50))
    vin = Column(String(50))
    engine_number = Column(String(50))
    chassis_number = Column(String(50))
    category = Column(String(50))
    current_mileage = Column(Integer)
    last_service_date = Column(Date)
    status = Column(String(20), default="active", nullable=False)   # active | inactive | in-repair
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow)

    customer = relationship("Customer", back_populates="vehicles")

    def __repr__(self):
        return f"<Vehicle {self.license_plate} {self.make} {self.model} status={self.status}>"
