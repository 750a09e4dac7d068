# garage/services/part_metrics.py
"""
Derived inventory fields: stock_status and profit_margin_pct.

This is the only place these values are computed. The single-part write
path (inventory_service) and the batch backfill (recompute_all_parts,
scripts/maintenance/recompute_part_metrics.py) both go through
apply_part_metrics(), so the two can never drift apart.
"""

from collections import Counter
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from garage.errors import PersistenceError, ServiceResult
from garage.models.part import Part
from garage.utils.logger import get_logger

logger = get_logger(__name__)

OUT_OF_STOCK = "out-of-stock"
LOW_STOCK = "low-stock"
IN_STOCK = "in-stock"
STOCK_STATUSES = (IN_STOCK, LOW_STOCK, OUT_OF_STOCK)

# Scale of the parts price columns, Numeric(12, 2)
MONEY_QUANTUM = Decimal("0.01")
MONEY_COLUMNS = ("purchase_price", "selling_price", "wholesale_price", "core_charge")


@dataclass(frozen=True)
class PartMetrics:
    stock_status: str
    margin_pct: Optional[float]


def quantize_money(value) -> Optional[float]:
    """Round a price to the stored column scale, half away from zero like Postgres numeric."""
    if value is None:
        return None
    return float(Decimal(str(value)).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP))


def compute_part_metrics(on_hand_stock, warehouse_stock, low_stock_threshold,
                         purchase_price, selling_price) -> PartMetrics:
    """
    total = on_hand + warehouse (missing counts as 0)
      total == 0          -> out-of-stock
      total <= threshold  -> low-stock
      otherwise           -> in-stock
    margin = (selling - purchase) / purchase * 100, or None when purchase <= 0

    Prices are taken at the stored scale, so a margin computed before a
    write equals the one recomputed from the persisted row.
    """
    total = (on_hand_stock or 0) + (warehouse_stock or 0)
    threshold = low_stock_threshold or 0

    if total == 0:
        status = OUT_OF_STOCK
    elif total <= threshold:
        status = LOW_STOCK
    else:
        status = IN_STOCK

    purchase = quantize_money(purchase_price or 0)
    if purchase > 0:
        margin = (quantize_money(selling_price or 0) - purchase) / purchase * 100
    else:
        margin = None

    return PartMetrics(stock_status=status, margin_pct=margin)


def apply_part_metrics(part: Part) -> bool:
    """Recompute derived fields on a Part row in place. Returns True if anything changed."""
    metrics = compute_part_metrics(
        part.on_hand_stock, part.warehouse_stock, part.low_stock_threshold,
        part.purchase_price, part.selling_price,
    )
    changed = False
    if part.stock_status != metrics.stock_status:
        part.stock_status = metrics.stock_status
        changed = True
    if part.profit_margin_pct != metrics.margin_pct:
        part.profit_margin_pct = metrics.margin_pct
        changed = True
    return changed


def recompute_all_parts(db: Session, dry_run: bool = False) -> ServiceResult:
    """
    Backfill derived fields for every part. Idempotent: a second run
    reports updated == 0.
    """
    try:
        parts = db.query(Part).order_by(Part.id).all()
        updated = 0
        distribution = Counter()
        for part in parts:
            if apply_part_metrics(part):
                updated += 1
            distribution[part.stock_status] += 1

        if dry_run:
            db.rollback()
        else:
            db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"[PARTS] Batch recompute failed: {e}", exc_info=True)
        return ServiceResult.failed(PersistenceError("Failed to recompute part metrics"))

    logger.info(f"[PARTS] Recomputed {len(parts)} parts — {updated} changed"
                f"{' (dry run)' if dry_run else ''}")
    return ServiceResult.ok({
        "total": len(parts),
        "updated": updated,
        "unchanged": len(parts) - updated,
        "distribution": {status: distribution.get(status, 0) for status in STOCK_STATUSES},
    })
