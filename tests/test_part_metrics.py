# tests/test_part_metrics.py
"""Unit tests for derived part fields (stock status + margin)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import patch
from sqlalchemy.exc import SQLAlchemyError
from garage.errors import PersistenceError
from garage.models import Part
from garage.services.part_metrics import (IN_STOCK, LOW_STOCK, OUT_OF_STOCK, apply_part_metrics,
                                          compute_part_metrics, recompute_all_parts)


def make_part(db, number, on_hand, warehouse=0, threshold=5, purchase=100.0, selling=150.0,
              status=None, margin=None):
    part = Part(garage_id="G123", part_number=number, part_name=f"Part {number}",
                on_hand_stock=on_hand, warehouse_stock=warehouse, low_stock_threshold=threshold,
                purchase_price=purchase, selling_price=selling,
                stock_status=status, profit_margin_pct=margin)
    db.add(part)
    db.commit()
    return part


class TestComputePartMetrics:
    def test_out_of_stock_when_total_zero(self):
        assert compute_part_metrics(0, 0, 5, 100, 150).stock_status == OUT_OF_STOCK

    def test_low_stock_at_threshold(self):
        assert compute_part_metrics(3, 2, 5, 100, 150).stock_status == LOW_STOCK

    def test_in_stock_above_threshold(self):
        assert compute_part_metrics(4, 2, 5, 100, 150).stock_status == IN_STOCK

    def test_missing_stock_counts_as_zero(self):
        assert compute_part_metrics(None, None, 5, 100, 150).stock_status == OUT_OF_STOCK
        assert compute_part_metrics(2, None, 5, 100, 150).stock_status == LOW_STOCK

    def test_warehouse_stock_counts(self):
        assert compute_part_metrics(0, 10, 5, 100, 150).stock_status == IN_STOCK

    def test_margin(self):
        assert compute_part_metrics(1, 0, 0, 100, 150).margin_pct == pytest.approx(50.0)
        assert compute_part_metrics(1, 0, 0, 200, 150).margin_pct == pytest.approx(-25.0)

    @pytest.mark.parametrize("purchase", [0, None, -10])
    def test_margin_absent_without_purchase_price(self, purchase):
        assert compute_part_metrics(1, 0, 0, purchase, 150).margin_pct is None


class TestApplyPartMetrics:
    def test_reports_change_then_no_change(self):
        part = Part(on_hand_stock=0, warehouse_stock=0, low_stock_threshold=5,
                    purchase_price=100, selling_price=120)
        assert apply_part_metrics(part) is True
        assert part.stock_status == OUT_OF_STOCK
        assert part.profit_margin_pct == pytest.approx(20.0)
        assert apply_part_metrics(part) is False


class TestRecomputeAllParts:
    def test_backfill_then_idempotent(self, db):
        make_part(db, "P-1", on_hand=0)
        make_part(db, "P-2", on_hand=3, status=IN_STOCK)
        make_part(db, "P-3", on_hand=50, status=IN_STOCK, margin=50.0)

        first = recompute_all_parts(db)
        assert first.success
        assert first.data["total"] == 3
        assert first.data["updated"] == 2
        assert first.data["distribution"] == {IN_STOCK: 1, LOW_STOCK: 1, OUT_OF_STOCK: 1}

        second = recompute_all_parts(db)
        assert second.data["updated"] == 0
        assert second.data["unchanged"] == 3

    def test_dry_run_saves_nothing(self, db):
        part = make_part(db, "P-1", on_hand=0)
        result = recompute_all_parts(db, dry_run=True)
        assert result.data["updated"] == 1
        db.expire_all()
        assert db.get(Part, part.id).stock_status is None

    def test_storage_failure_reported(self, db):
        make_part(db, "P-1", on_hand=0)
        with patch.object(db, "commit", side_effect=SQLAlchemyError("disk full")):
            result = recompute_all_parts(db)
        assert not result.success
        assert result.error_type is PersistenceError
        assert result.status_code == 500
