"""
Check the dashboard data end to end.

Loads the four source tables, runs the processing pipeline and prints a
summary. Useful after a migration to spot renamed columns or a target
name the pipeline no longer recognizes.

Usage:
    uv run python scripts/check_data.py
    uv run python scripts/check_data.py --target "Kast Rist Jose Antonio"
    uv run python scripts/check_data.py --verbose
"""
import argparse
import logging
import sys

from observatorio.analysis.processor import process_data
from observatorio.analysis.queries import stage_distribution, theme_counts
from observatorio.config.constants import TARGET_VARIANTS
from observatorio.config.settings import configure_logging
from observatorio.database.connection import load_dashboard_data_sync
from observatorio.exceptions import DataLoadError


def main() -> int:
    parser = argparse.ArgumentParser(description="Load and summarize dashboard data")
    parser.add_argument(
        "--target",
        action="append",
        help="Name variant of the target deputy (repeatable, default: known variants)"
    )
    parser.add_argument("--verbose", action="store_true", help="Log column names")
    args = parser.parse_args()

    configure_logging()
    if args.verbose:
        logging.getLogger("observatorio").setLevel(logging.DEBUG)

    print("📊 Loading dashboard data...")
    print("=" * 60)

    try:
        raw = load_dashboard_data_sync()
    except DataLoadError as e:
        print(f"❌ Load failed: {e}")
        return 1

    for table, count in raw.counts().items():
        print(f"   {table}: {count} rows")
    print()

    data = process_data(raw, args.target or TARGET_VARIANTS)

    status = "✅" if data.target_resolved else "⚠️  (default, not found in coautores)"
    print(f"Target: {data.found_name} {status}")
    print(f"   Mociones: {data.total}")
    print(f"   Leyes: {data.leyes_count} ({data.tasa_exito:.1f}%)")
    print(f"   Promedio anual: {data.promedio_anual}")
    print(f"   Aliado principal: {data.top_ally}")
    print()

    print("Etapas:")
    for row in stage_distribution(data.mociones):
        print(f"   • {row.name}: {row.count}")
    print()

    print("Temas:")
    for row in theme_counts(data.mociones):
        print(f"   • {row.name}: {row.count}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
