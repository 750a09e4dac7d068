# garage/routers/inventory.py
"""Parts inventory. Stock status and margin are always computed server-side."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from garage.database import get_db
from garage.schemas.part import PartCreate, PartUpdate
from garage.services import inventory_service
from garage.services.part_metrics import recompute_all_parts
from garage.utils.responses import respond

router = APIRouter()


@router.get("/inventory", summary="List parts — search, filter, paginate")
def list_parts(
    garage_id: Optional[str] = None,
    search: str = "",
    category: str = "",
    stock_status: str = Query("", description="in-stock | low-stock | out-of-stock, or the UI label"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    listing = inventory_service.list_parts(
        db, garage_id=garage_id, search=search, category=category,
        stock_status=stock_status, page=page, page_size=page_size,
    )
    return {"success": True, **listing}


@router.post("/inventory", summary="Add a part")
def create_part(body: PartCreate, db: Session = Depends(get_db)):
    return respond(inventory_service.create_part(db, body.partial()), key="part")


@router.get("/inventory/categories", summary="Distinct part categories")
def list_categories(garage_id: Optional[str] = None, db: Session = Depends(get_db)):
    return {"success": True, "categories": inventory_service.list_part_categories(db, garage_id)}


@router.get("/inventory/low-stock", summary="Parts at or below their threshold")
def list_low_stock(garage_id: Optional[str] = None, db: Session = Depends(get_db)):
    parts = inventory_service.list_low_stock_parts(db, garage_id)
    return {"success": True, "parts": parts, "count": len(parts)}


@router.post("/inventory/recompute", summary="Recompute stock status and margin for every part")
def recompute(dry_run: bool = False, db: Session = Depends(get_db)):
    return respond(recompute_all_parts(db, dry_run=dry_run), key="summary")


@router.get("/inventory/{part_id}", summary="Fetch a part with its fitment")
def get_part(part_id: int, db: Session = Depends(get_db)):
    return respond(inventory_service.get_part(db, part_id), key="part")


@router.put("/inventory/{part_id}", summary="Update a part")
def update_part(part_id: int, body: PartUpdate, db: Session = Depends(get_db)):
    return respond(inventory_service.update_part(db, part_id, body.partial()), key="part")
