# garage/routers/motorcycles.py
"""Motorcycle catalog — makes grouped with their models, guarded inserts."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from garage.database import get_db
from garage.schemas.motorcycle import MotorcycleCreate
from garage.services import catalog_service
from garage.utils.responses import respond

router = APIRouter()


@router.get("/motorcycles", summary="All makes with their models")
def list_makes(db: Session = Depends(get_db)):
    return respond(catalog_service.get_makes_grouped(db), key="makes")


@router.post("/motorcycles", summary="Add a catalog model")
def add_model(body: MotorcycleCreate, db: Session = Depends(get_db)):
    """Rejected with 409 for duplicates and models filed under the wrong make."""
    return respond(catalog_service.add_motorcycle_model(db, body.model_dump()), key="motorcycle")


@router.get("/motorcycles/exists", summary="Is (make, model) already in the catalog?")
def model_exists(make: str, model: str, db: Session = Depends(get_db)):
    return {"exists": catalog_service.check_model_exists(db, make, model)}


@router.get("/motorcycles/stats", summary="Catalog totals")
def catalog_stats(db: Session = Depends(get_db)):
    return catalog_service.get_catalog_stats(db)


@router.get("/motorcycles/countries", summary="Distinct countries of origin")
def catalog_countries(db: Session = Depends(get_db)):
    return {"countries": catalog_service.get_catalog_countries(db)}


@router.get("/motorcycles/{slug}", summary="One make by slug, e.g. royal-enfield")
def get_make(slug: str, db: Session = Depends(get_db)):
    return respond(catalog_service.get_make_by_slug(db, slug), key="make")
