"""
Main Execution Script for the Resource Availability Engine.
Loads (or generates) a resource catalog, builds month views and exports them for the calendar UI.
"""

import argparse
import json
import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from availability import get_month_availability, summarize_month
from generators.data_factory import DataGenerator, seed_catalog
from models import Booking, DayAvailability, ResourceDescriptor
from settings import Settings

logger = logging.getLogger("Main")


def save_catalog(resources: List[ResourceDescriptor], bookings: List[Booking], filename: str):
    """Helper to save the catalog so we don't re-query the LLM every time."""
    data = {
        "resources": [r.model_dump(mode='json', by_alias=True) for r in resources],
        "bookings": [b.model_dump(mode='json', by_alias=True) for b in bookings],
    }
    with open(filename, 'w') as f:
        json.dump(data, f, indent=2)
    logger.info(f"💾 Saved catalog to {filename}")


def load_cached_catalog(filename: str) -> Tuple[Optional[List[ResourceDescriptor]], Optional[List[Booking]]]:
    """
    Helper to load JSON data and reconstruct Pydantic objects.
    """
    try:
        with open(filename, 'r') as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        logger.warning(f"⚠️ Cache file {filename} not found or invalid. Falling back to Generator.")
        return None, None

    try:
        resources = [ResourceDescriptor(**item) for item in data.get('resources', [])]
        bookings = [Booking(**item) for item in data.get('bookings', [])]
    except ValidationError as e:
        logger.error(f"❌ Cached catalog failed validation: {e}")
        return None, None

    logger.info(f"📂 Cache Loaded: {len(resources)} resources, {len(bookings)} bookings.")
    return resources, bookings


def acquire_catalog(settings: Settings, use_cache: bool, start_date: date) -> Tuple[List[ResourceDescriptor], List[Booking]]:
    """Cache first, then the LLM generator, then the built-in seed."""
    if use_cache:
        resources, bookings = load_cached_catalog(settings.cache_filename)
        if resources:
            return resources, bookings

    if settings.api_key:
        generator = DataGenerator(api_key=settings.api_key, model_name=settings.gemini_model)
        resources, bookings, cost = generator.generate_catalog(start_date=start_date)
        logger.info(f"💸 Total Estimated LLM Cost: ${cost:.4f}")
        if resources:
            save_catalog(resources, bookings, settings.cache_filename)
            return resources, bookings
        logger.warning("Generator returned no resources; using seed catalog.")
    else:
        logger.info("No Google API key configured; using seed catalog.")

    return seed_catalog(start_date)


def export_dashboard_data(views: Dict[str, List[DayAvailability]], filename: str):
    """
    Serializes month views into a JSON format for the frontend:
    { resource_id: { 'YYYY-MM-DD': DayAvailability } }
    """
    logger.info(f"💾 Exporting dashboard data to {filename}...")
    data = {
        resource_id: {d.date.isoformat(): d.model_dump(mode='json', by_alias=True) for d in days}
        for resource_id, days in views.items()
    }
    with open(filename, 'w') as f:
        json.dump(data, f, indent=2)
    logger.info("✅ Dashboard data exported.")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    today = date.today()
    parser = argparse.ArgumentParser(description="Build month availability views for a resource catalog.")
    parser.add_argument("--year", type=int, default=today.year)
    parser.add_argument("--month", type=int, default=today.month, help="Calendar month, 1-12")
    parser.add_argument("--resource", help="Only report on this resource id")
    parser.add_argument("--no-cache", action="store_true", help="Ignore the cached catalog")
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        help="Evaluate as of this ISO timestamp instead of the current time"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    if not 1 <= args.month <= 12:
        logger.error(f"❌ Month must be 1-12, got {args.month}")
        return 2

    # --- PHASE 1: DATA ACQUISITION (Cache vs. GenAI vs. Seed) ---
    start_date = date(args.year, args.month, 1)
    resources, bookings = acquire_catalog(settings, not args.no_cache, start_date)

    if settings.timezone:
        resources = [
            r if r.timezone else r.model_copy(update={"timezone": settings.timezone})
            for r in resources
        ]

    if args.resource:
        resources = [r for r in resources if r.id == args.resource]
        if not resources:
            logger.error(f"❌ Resource {args.resource} not found in catalog.")
            return 1

    # --- PHASE 2: AVAILABILITY VIEWS ---
    logger.info(f"📅 Building {args.year}-{args.month:02d} views for {len(resources)} resources")
    views: Dict[str, List[DayAvailability]] = {}

    for resource in resources:
        own_bookings = [b for b in bookings if b.resource_id in (None, resource.id)]
        days = get_month_availability(args.year, args.month, resource, own_bookings, now=args.now)
        views[resource.id or resource.name or str(len(views))] = days

        stats = summarize_month(days)
        logger.info(
            f"{resource.name or resource.id}: {stats['available_slots']}/{stats['total_slots']} slots free, "
            f"utilization {stats['utilization']}%, days {stats['status_counts']}, "
            f"busiest {stats['busiest_day']}"
        )

    # --- PHASE 3: EXPORT FOR FRONTEND ---
    export_dashboard_data(views, settings.export_filename)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
