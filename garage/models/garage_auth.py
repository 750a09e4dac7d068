# garage/models/garage_auth.py
"""
Authentication mirror table.
One row per user (owner or employee); several rows share a garage_id.
Only auth-relevant fields live here — never email or phone.
"""

from datetime import datetime
from sqlalchemy import Column, DateTime, Integer, String
from garage.database import Base


class GarageAuth(Base):
    __tablename__ = "garage_auth"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_uid = Column(String(64), unique=True, nullable=False, index=True)
    garage_id = Column(String(64), index=True)
    garage_name = Column(String(200))
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    login_id = Column(String(255), nullable=False, index=True)
    user_role = Column(String(50))
    password_hash = Column(String(255))       # null until the user sets a password
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<GarageAuth {self.user_uid} login={self.login_id} garage={self.garage_id}>"
