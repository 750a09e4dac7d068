# garage/models/user.py
"""
Users table — primary record for garage owners and employees.
Holds identity, contact and employment fields. The auth-relevant subset
(name, login id, garage name, role) is mirrored into garage_auth.
"""

from datetime import datetime
from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text
from garage.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_uid = Column(String(64), unique=True, nullable=False, index=True)
    garage_uid = Column(String(64), nullable=False, index=True)
    garage_id = Column(String(64), index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    garage_name = Column(String(200), nullable=False)
    user_role = Column(String(50), nullable=False)
    login_id = Column(String(255), unique=True, nullable=False, index=True)

    # Contact
    email = Column(String(255))
    alternate_email = Column(String(255))
    phone_number = Column(String(30))
    alternate_phone = Column(String(30))
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(100))
    zip_code = Column(String(20))
    country = Column(String(100))

    # Employment / personal
    date_of_birth = Column(Date)
    blood_group = Column(String(10))
    employee_id = Column(String(50))
    department = Column(String(100))
    date_of_joining = Column(Date)
    emergency_contact_name = Column(String(200))
    emergency_contact_phone = Column(String(30))
    emergency_contact_relation = Column(String(50))
    id_proof_type = Column(String(50))
    id_proof_number = Column(String(100))
    profile_picture = Column(Text)            # base64 data URL

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.user_uid} login={self.login_id} role={self.user_role}>"
