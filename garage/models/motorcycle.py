# garage/models/motorcycle.py
"""
Motorcycle make/model catalog.
(make, model) is unique ignoring case; year_end, when present, is not before year_start.
"""

from datetime import datetime
from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, func
from garage.database import Base


class Motorcycle(Base):
    __tablename__ = "motorcycles"
    __table_args__ = (
        CheckConstraint("year_end IS NULL OR year_end >= year_start", name="ck_motorcycles_year_range"),
        CheckConstraint("engine_displacement_cc >= 0", name="ck_motorcycles_displacement"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    make = Column(String(100), nullable=False, index=True)
    model = Column(String(100), nullable=False)
    year_start = Column(Integer, nullable=False)
    year_end = Column(Integer)                            # null while in production
    country_of_origin = Column(String(100))
    category = Column(String(50), nullable=False)
    engine_displacement_cc = Column(Integer, default=0, nullable=False)
    production_status = Column(String(30), default="In Production")   # In Production | Discontinued | Limited
    logo_url = Column(String(500))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Motorcycle {self.make} {self.model} {self.year_start}-{self.year_end or ''}>"


Index(
    "uq_motorcycles_make_model",
    func.lower(Motorcycle.make), func.lower(Motorcycle.model),
    unique=True,
)
