# scripts/seed.py
"""
Load a sample outdoor-equipment catalog.

Entries are matched by name, so running the script twice does not duplicate
them. ``--update`` rewrites prices and stock of entries that already exist.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import TypedDict

from sqlalchemy import select

# Run from the repository root
sys.path.append(os.path.abspath("."))

from rental import db
from rental.models import Equipment

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class CatalogEntry(TypedDict):
    name: str
    description: str
    image_url: str
    price_1_to_3_days: int
    price_4_to_7_days: int
    price_8_plus_days: int
    deposit: int
    stock: int
    categories: list[str]


CATALOG: list[CatalogEntry] = [
    {
        "name": "Tent for 2",
        "description": "Freestanding two-person tent, 2.1 kg, three seasons.",
        "image_url": "/images/tent-2.jpg",
        "price_1_to_3_days": 200,
        "price_4_to_7_days": 170,
        "price_8_plus_days": 140,
        "deposit": 1500,
        "stock": 4,
        "categories": ["tents"],
    },
    {
        "name": "Tent for 3",
        "description": "Roomy tunnel tent with two vestibules.",
        "image_url": "/images/tent-3.jpg",
        "price_1_to_3_days": 250,
        "price_4_to_7_days": 210,
        "price_8_plus_days": 180,
        "deposit": 2000,
        "stock": 3,
        "categories": ["tents"],
    },
    {
        "name": "Sleeping bag -5 C",
        "description": "Synthetic mummy bag, comfort temperature -5 C.",
        "image_url": "/images/sleeping-bag.jpg",
        "price_1_to_3_days": 80,
        "price_4_to_7_days": 65,
        "price_8_plus_days": 50,
        "deposit": 500,
        "stock": 10,
        "categories": ["sleeping"],
    },
    {
        "name": "Self-inflating mat",
        "description": "5 cm mat with repair kit.",
        "image_url": "/images/mat.jpg",
        "price_1_to_3_days": 50,
        "price_4_to_7_days": 40,
        "price_8_plus_days": 30,
        "deposit": 300,
        "stock": 10,
        "categories": ["sleeping"],
    },
    {
        "name": "Trekking backpack 65 l",
        "description": "Adjustable back system and rain cover.",
        "image_url": "/images/backpack-65.jpg",
        "price_1_to_3_days": 120,
        "price_4_to_7_days": 100,
        "price_8_plus_days": 80,
        "deposit": 1000,
        "stock": 5,
        "categories": ["backpacks"],
    },
    {
        "name": "Child carrier",
        "description": "Framed hiking carrier for children up to 18 kg.",
        "image_url": "/images/child-carrier.jpg",
        "price_1_to_3_days": 150,
        "price_4_to_7_days": 130,
        "price_8_plus_days": 110,
        "deposit": 1500,
        "stock": 2,
        "categories": ["backpacks", "kids"],
    },
    {
        "name": "Camping stove set",
        "description": "Gas burner, pot set and windscreen. Cartridge not included.",
        "image_url": "/images/stove.jpg",
        "price_1_to_3_days": 90,
        "price_4_to_7_days": 75,
        "price_8_plus_days": 60,
        "deposit": 700,
        "stock": 4,
        "categories": ["cooking"],
    },
    {
        "name": "Trekking poles",
        "description": "Pair of telescopic aluminium poles.",
        "image_url": "/images/poles.jpg",
        "price_1_to_3_days": 40,
        "price_4_to_7_days": 30,
        "price_8_plus_days": 25,
        "deposit": 300,
        "stock": 8,
        "categories": ["general"],
    },
]


async def seed_catalog(*, update: bool) -> tuple[int, int]:
    inserted = updated = 0
    async with db.SessionLocal() as session:
        existing = {
            e.name: e for e in (await session.scalars(select(Equipment))).all()
        }
        next_order = max((e.sort_order for e in existing.values()), default=0) + 1
        for entry in CATALOG:
            current = existing.get(entry["name"])
            if current is None:
                session.add(Equipment(**entry, sort_order=next_order))
                next_order += 1
                inserted += 1
            elif update:
                for key, value in entry.items():
                    setattr(current, key, value)
                updated += 1
        await session.commit()
    return inserted, updated


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed a sample equipment catalog.")
    parser.add_argument(
        "--update",
        action="store_true",
        help="Overwrite prices, stock and texts of entries that already exist.",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (defaults to DATABASE_URL).",
    )
    return parser.parse_args(argv)


async def async_main(args: argparse.Namespace) -> int:
    if args.database_url:
        db.configure_engine(args.database_url)
    inserted, updated = await seed_catalog(update=args.update)
    logger.info("Seeded catalog: %d inserted, %d updated", inserted, updated)
    await db.engine.dispose()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        return asyncio.run(async_main(args))
    except Exception:  # noqa: BLE001
        logger.exception("Seed failed due to an unexpected error.")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
