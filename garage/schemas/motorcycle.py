# garage/schemas/motorcycle.py
from pydantic import Field
from typing import Literal, Optional
from garage.schemas.common import CamelModel


class MotorcycleCreate(CamelModel):
    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year_start: int
    year_end: Optional[int] = None
    country_of_origin: Optional[str] = None
    category: str
    engine_displacement_cc: int = 0
    production_status: Literal["In Production", "Discontinued", "Limited"] = "In Production"
    logo_url: Optional[str] = None
