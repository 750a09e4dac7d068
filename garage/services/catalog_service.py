# garage/services/catalog_service.py
"""
Motorcycle make/model catalog — guarded inserts and grouped reads.

add_motorcycle_model() runs these checks in order, first failure wins:
  1. Manufacturer leakage  — model name contains a different known make
  2. Duplicate              — (make, model) already present, ignoring case
  3. Year range             — year_end before year_start
  4. Electric ⇒ 0 cc
  5. Discontinued ⇒ year_end set
then inserts. The unique index on lower(make), lower(model) backs up
check 2 when two inserts race; its violation maps to a duplicate message.
"""

import re
from datetime import datetime
from typing import Mapping, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from garage.errors import (CatalogResult, ConflictError, GarageError, NotFoundError,
                           PersistenceError, ServiceResult, ValidationError)
from garage.models.motorcycle import Motorcycle
from garage.utils.db_errors import (CHECK_VIOLATION, FOREIGN_KEY_VIOLATION, UNIQUE_VIOLATION,
                                    sqlstate)
from garage.utils.field_mapper import MOTORCYCLE_FIELDS
from garage.utils.logger import get_logger

logger = get_logger(__name__)

KNOWN_MANUFACTURERS = (
    "Ather", "Hero", "Honda", "Bajaj", "TVS", "Yamaha", "Suzuki", "Ola",
    "Royal Enfield", "KTM", "Ducati", "Kawasaki", "Jawa", "Yezdi",
    "Kinetic", "LML", "Vespa", "Bounce", "Okinawa", "Ampere", "Revolt",
    "Simple", "Benling", "Pure", "Komaki", "Hop", "BGauss", "Matter",
)

# Words in real model names that contain a manufacturer name ("Shopper" ⊃ "Hop").
# Removed from the model name before the leakage check.
LEAKAGE_ALLOWED_WORDS = ("shopper",)

PRODUCTION_STATUSES = ("In Production", "Discontinued", "Limited")


def find_leaked_manufacturer(make: str, model: str) -> Optional[str]:
    """Known manufacturer contained in the model name that is not the entry's own make."""
    make_lower, model_lower = make.lower(), model.lower()
    for word in LEAKAGE_ALLOWED_WORDS:
        model_lower = model_lower.replace(word, " ")
    for manufacturer in KNOWN_MANUFACTURERS:
        name = manufacturer.lower()
        if name in make_lower:
            continue
        if name in model_lower:
            return manufacturer
    return None


def _find_model(db: Session, make: str, model: str) -> Optional[Motorcycle]:
    return (
        db.query(Motorcycle)
        .filter(func.lower(Motorcycle.make) == make.lower(),
                func.lower(Motorcycle.model) == model.lower())
        .first()
    )


def _check_entry(db: Session, entry: Mapping) -> None:
    make, model = entry["make"], entry["model"]
    year_start, year_end = entry["year_start"], entry.get("year_end")
    displacement = entry.get("engine_displacement_cc") or 0

    leaked = find_leaked_manufacturer(make, model)
    if leaked:
        raise ConflictError(
            f'Model name "{model}" contains manufacturer name "{leaked}". '
            f'This appears to be a misclassification - the model should likely belong to '
            f'"{leaked}" make instead of "{make}". Please verify the correct make before adding.'
        )

    try:
        existing = _find_model(db, make, model)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[CATALOG] Uniqueness check failed for {make} / {model}: {e}", exc_info=True)
        raise PersistenceError("Failed to validate model uniqueness. Please try again.")
    if existing:
        raise ConflictError(
            f'Model "{model}" already exists for {make}. Each model name must be unique within a make.'
        )

    if year_end is not None and year_end < year_start:
        raise ValidationError(
            f"Invalid year range: year_end ({year_end}) cannot be before year_start ({year_start})."
        )

    if (entry.get("category") or "").lower() == "electric" and displacement != 0:
        raise ValidationError(
            f"Electric vehicles must have engine_displacement_cc set to 0, not {displacement}."
        )

    if entry.get("production_status") == "Discontinued" and not year_end:
        raise ValidationError(
            'Model marked as "Discontinued" must have a year_end value. '
            "Please set the last production year."
        )


def _storage_error(exc: SQLAlchemyError, make: str, model: str) -> GarageError:
    code = sqlstate(exc)
    if code == UNIQUE_VIOLATION:
        return ConflictError(f'Model "{model}" already exists for {make}. Please use a different model name.')
    if code == FOREIGN_KEY_VIOLATION:
        return ValidationError("Invalid country or category. Please check your selections.")
    if code == CHECK_VIOLATION:
        return ValidationError("Invalid year range or engine displacement. Please check your values.")
    return PersistenceError(
        "Failed to add model. Please try again or contact support if the issue persists."
    )


def add_motorcycle_model(db: Session, entry: Mapping) -> CatalogResult:
    """
    Insert one catalog entry. `entry` uses storage (snake_case) keys:
    make, model, year_start, year_end, country_of_origin, category,
    engine_displacement_cc, production_status, logo_url.
    """
    make, model = entry["make"], entry["model"]
    try:
        _check_entry(db, entry)
    except GarageError as e:
        logger.info(f"[CATALOG] Rejected {make} / {model}: {e.message}")
        return CatalogResult.failed(e)

    now = datetime.utcnow()
    motorcycle = Motorcycle(
        make=make,
        model=model,
        year_start=entry["year_start"],
        year_end=entry.get("year_end"),
        country_of_origin=entry.get("country_of_origin"),
        category=entry["category"],
        engine_displacement_cc=entry.get("engine_displacement_cc") or 0,
        production_status=entry.get("production_status") or "In Production",
        logo_url=entry.get("logo_url"),
        created_at=now,
        updated_at=now,
    )
    db.add(motorcycle)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"[CATALOG] Insert rejected for {make} / {model}: {e.orig}")
        return CatalogResult.failed(_storage_error(e, make, model))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[CATALOG] Insert failed for {make} / {model}: {e}", exc_info=True)
        return CatalogResult.failed(_storage_error(e, make, model))

    db.refresh(motorcycle)
    logger.info(f"[CATALOG] Added {make} / {model} (id={motorcycle.id})")
    return CatalogResult.ok(MOTORCYCLE_FIELDS.to_domain(motorcycle))


# ── Reads ────────────────────────────────────────────────────────────────────

def make_slug(make: str) -> str:
    """'Royal Enfield' -> 'royal-enfield'"""
    return re.sub(r"\s+", "-", make.lower())


def model_years(year_start: int, year_end: Optional[int], current_year: Optional[int] = None) -> list:
    """Production years, inclusive. Models still in production run to the current year."""
    last = year_end or current_year or datetime.utcnow().year
    return list(range(year_start, last + 1))


def _model_entry(bike: Motorcycle) -> dict:
    return {
        "id": bike.id,
        "name": bike.model,
        "category": bike.category,
        "years": model_years(bike.year_start, bike.year_end),
        "engineDisplacementCc": bike.engine_displacement_cc,
        "productionStatus": bike.production_status,
    }


def _group(bikes: list) -> list:
    grouped = {}
    for bike in bikes:
        grouped.setdefault(bike.make, []).append(bike)

    makes = []
    for make, models in grouped.items():
        created = [m.created_at for m in models if m.created_at]
        makes.append({
            "id": make_slug(make),
            "name": make,
            "country": models[0].country_of_origin,
            "logoUrl": models[0].logo_url,
            "models": [_model_entry(m) for m in models],
            "createdAt": min(created) if created else None,
        })
    return makes


def _all_models(db: Session) -> list:
    return db.query(Motorcycle).order_by(Motorcycle.make, Motorcycle.model).all()


def get_makes_grouped(db: Session) -> ServiceResult:
    try:
        return ServiceResult.ok(_group(_all_models(db)))
    except SQLAlchemyError as e:
        logger.error(f"[CATALOG] Failed to fetch motorcycles: {e}", exc_info=True)
        return ServiceResult.failed(PersistenceError("Failed to fetch motorcycles"))


def get_make_by_slug(db: Session, slug: str) -> ServiceResult:
    result = get_makes_grouped(db)
    if not result.success:
        return result
    for make in result.data:
        if make["id"] == slug:
            return ServiceResult.ok(make)
    return ServiceResult.failed(NotFoundError("Make not found"))


def check_model_exists(db: Session, make: str, model: str) -> bool:
    return _find_model(db, make, model) is not None


def get_catalog_countries(db: Session) -> list:
    rows = (
        db.query(Motorcycle.country_of_origin)
        .filter(Motorcycle.country_of_origin.isnot(None))
        .distinct()
        .all()
    )
    return sorted(r[0] for r in rows)


def get_catalog_stats(db: Session) -> dict:
    total_models = db.query(func.count(Motorcycle.id)).scalar() or 0
    total_makes = db.query(func.count(func.distinct(Motorcycle.make))).scalar() or 0
    total_countries = db.query(func.count(func.distinct(Motorcycle.country_of_origin))).scalar() or 0
    return {
        "totalMakes": total_makes,
        "totalModels": total_models,
        "totalCountries": total_countries,
        "avgModelsPerMake": round(total_models / total_makes) if total_makes else 0,
    }
