# garage/models/customer.py
"""
Customers table — contact and address details per garage.
One customer owns many vehicles. Deletion is soft (status='inactive').
"""

from datetime import datetime
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from garage.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    garage_id = Column(String(64), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255))
    phone_number = Column(String(30), nullable=False)
    alternate_phone = Column(String(30))
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    zip_code = Column(String(20))
    country = Column(String(100))
    notes = Column(Text)
    status = Column(String(20), default="active", nullable=False)   # active | inactive
    customer_since = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow)

    vehicles = relationship("Vehicle", back_populates="customer",
                            order_by="Vehicle.created_at.desc()")

    def __repr__(self):
        return f"<Customer {self.id} {self.first_name} {self.last_name} status={self.status}>"
