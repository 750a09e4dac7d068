# scripts/maintenance/recompute_part_metrics.py
"""
Backfill stock_status and profit_margin_pct for every part.
Uses the same calculation as the inventory API, so running it twice
changes nothing the second time.
Usage: python scripts/maintenance/recompute_part_metrics.py [--dry-run]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import argparse
from garage.database import SessionLocal
from garage.services.part_metrics import recompute_all_parts


def main():
    parser = argparse.ArgumentParser(description="Recompute derived part fields")
    parser.add_argument("--dry-run", action="store_true", help="Report changes without saving them")
    args = parser.parse_args()

    print("📦 Part metrics recompute" + (" (dry run)" if args.dry_run else ""))
    print("=" * 40)

    db = SessionLocal()
    try:
        result = recompute_all_parts(db, dry_run=args.dry_run)
    finally:
        db.close()

    if not result.success:
        print(f"❌ {result.error}")
        sys.exit(1)

    summary = result.data
    print(f"✅ {summary['total']} parts checked — {summary['updated']} updated, "
          f"{summary['unchanged']} unchanged")
    print("\n📊 Stock status distribution:")
    for status, count in summary["distribution"].items():
        print(f"   {status:<14} {count}")


if __name__ == "__main__":
    main()
