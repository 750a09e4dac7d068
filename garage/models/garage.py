# garage/models/garage.py
"""
Garages table — business profile keyed by garage_id.
One owner; employees are linked through garage_auth rows sharing garage_id.
"""

from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from garage.database import Base
from garage.models.types import JSONDocument, StringList


class Garage(Base):
    __tablename__ = "garages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    garage_id = Column(String(64), unique=True, nullable=False, index=True)
    owner_id = Column(String(64), nullable=False, index=True)   # users.user_uid
    garage_name = Column(String(200), nullable=False)

    # Contact
    email = Column(String(255))
    phone_number = Column(String(30))
    alternate_phone_number = Column(String(30))
    whatsapp_number = Column(String(30))
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    zip_code = Column(String(20))
    country = Column(String(100))

    # Registration / tax
    gstin = Column(String(15))
    business_registration_number = Column(String(50))
    business_type = Column(String(100))
    year_established = Column(String(4))
    website = Column(String(255))
    pan_number = Column(String(10))

    # Services
    service_types = Column(StringList)
    vehicle_types_serviced = Column(StringList)
    number_of_service_bays = Column(String(10))
    certifications = Column(StringList)
    insurance_details = Column(Text)
    payment_methods = Column(StringList)

    # Banking
    bank_name = Column(String(100))
    account_number = Column(String(18))
    ifsc_code = Column(String(11))
    branch = Column(String(100))

    # Billing / operations
    default_labor_rate = Column(String(20))
    invoice_prefix = Column(String(10))
    parking_capacity = Column(String(10))
    waiting_area_amenities = Column(StringList)
    tow_service_available = Column(Boolean)
    pickup_drop_service_available = Column(Boolean)
    operating_hours = Column(JSONDocument)    # {"weekdays": ..., "saturday": ..., "sunday": ...}
    tax_rate = Column(String(10))
    currency = Column(String(3))
    billing_cycle = Column(String(50))
    credit_terms = Column(String(200))
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Garage {self.garage_id} name={self.garage_name}>"
