# garage/routers/garages.py
"""Garage profile — update, fetch, and per-field form validation."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from garage.database import get_db
from garage.schemas.garage import FieldValidationRequest, GarageUpdateRequest
from garage.services import garage_service
from garage.utils.responses import respond
from garage.validators import validate_garage_field

router = APIRouter()


@router.put("/garage/update", summary="Update a garage profile")
def update_garage(body: GarageUpdateRequest, db: Session = Depends(get_db)):
    """A garageName change is propagated to every login under the garage."""
    result = garage_service.update_garage(db, body.garage_id, body.updates.partial())
    return JSONResponse(status_code=result.status_code, content=result.to_dict())


@router.get("/garage/{garage_id}", summary="Fetch a garage profile")
def get_garage(garage_id: str, db: Session = Depends(get_db)):
    return respond(garage_service.get_garage(db, garage_id), key="garage")


@router.post("/garage/validate-field", summary="Validate one garage form field")
def validate_field(body: FieldValidationRequest):
    """Always 200; the verdict is in isValid / error / warning."""
    return validate_garage_field(body.field, body.value).to_dict()
