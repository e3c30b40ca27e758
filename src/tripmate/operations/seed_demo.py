"""Seed a fresh database with demo content.

Usage:
    DATABASE_URL=... SEED_EXTERNAL_SUBJECT=<auth uid> python -m tripmate.operations.seed_demo

Each table is seeded only while it is empty, so re-running is harmless. The
SEED_EXTERNAL_SUBJECT user is created (or promoted) as superadmin and
becomes the author of the demo posts.
"""

from __future__ import annotations

import os
import sys
from datetime import date, timedelta
from typing import Any

from psycopg2.extensions import cursor as PgCursor

from tripmate.domain.collections import (
    BOOKINGS,
    CATEGORIES,
    CONTACT_MESSAGES,
    PACKAGES,
    PAGES,
    POSTS,
    CollectionSpec,
)
from tripmate.infra.db import txn
from tripmate.observability.correlation import correlation_scope
from tripmate.observability.logging import get_logger

logger = get_logger(__name__)

DEMO_CATEGORIES: list[dict[str, Any]] = [
    {"id": "cat-travel-tips", "name": "Travel Tips", "slug": "travel-tips"},
    {"id": "cat-destinations", "name": "Destinations", "slug": "destinations"},
]

DEMO_PACKAGES: list[dict[str, Any]] = [
    {
        "id": "paris-dream-tour",
        "slug": "paris-dream-tour",
        "title": "Parisian Dream Tour",
        "type": "Tour",
        "destination": "Paris, France",
        "duration": 7,
        "price": 180000,
        "rating": 4.8,
        "description": "Art, culture and romance in the City of Lights.",
    },
    {
        "id": "premium-hajj-package",
        "slug": "premium-hajj-package",
        "title": "Premium Hajj Package",
        "type": "Hajj",
        "destination": "Makkah & Madinah, Saudi Arabia",
        "duration": 21,
        "price": 850000,
        "rating": 5.0,
        "description": "5-star hotels near the Haramain with scholarly guidance.",
    },
    {
        "id": "roman-holiday",
        "slug": "roman-holiday",
        "title": "The Roman Holiday",
        "type": "Tour",
        "destination": "Rome, Italy",
        "duration": 5,
        "price": 150000,
        "rating": 4.7,
        "description": "Emperors, gladiators and gelato in the Eternal City.",
    },
]

DEMO_POSTS: list[dict[str, Any]] = [
    {
        "slug": "packing-light-for-umrah",
        "title": "Packing Light for Umrah",
        "content": "A short checklist for a comfortable pilgrimage.",
        "category_id": "cat-travel-tips",
    },
    {
        "slug": "three-days-in-rome",
        "title": "Three Days in Rome",
        "content": "How to see the highlights without rushing.",
        "category_id": "cat-destinations",
    },
]

DEMO_PAGES: list[dict[str, Any]] = [
    {
        "slug": "about-us",
        "title": "About TripMate",
        "content": "Impeccably planned journeys since 2024.",
        "status": "published",
        "show_in_menu": True,
        "menu_order": 1,
    },
]


def env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None or value.strip() == "":
        raise RuntimeError(f"Missing env var: {name}")
    return value


def _demo_bookings() -> list[dict[str, Any]]:
    return [
        {
            "package_id": "paris-dream-tour",
            "package_name": "Parisian Dream Tour",
            "customer_name": "Alice Johnson",
            "customer_email": "customer1@example.com",
            "travelers": 2,
            "departure_date": date.today() + timedelta(days=45),
            "status": "Confirmed",
        },
    ]


def _demo_messages() -> list[dict[str, Any]]:
    return [
        {
            "name": "Bob Williams",
            "email": "customer2@example.com",
            "subject": "Group discount",
            "message": "Do you offer discounts for groups of ten?",
        },
    ]


def seed_table(cur: PgCursor, spec: CollectionSpec, rows: list[dict[str, Any]]) -> int:
    """Insert rows into an empty table; leave a non-empty table alone.

    Returns:
        Number of rows inserted (0 when skipped).
    """
    cur.execute(f"SELECT 1 FROM {spec.table} LIMIT 1")  # noqa: S608
    if cur.fetchone() is not None:
        logger.info(
            "seed skipped, table not empty",
            extra={"extra_fields": {"table": spec.table}},
        )
        return 0

    for row in rows:
        names = list(row)
        cur.execute(
            f"INSERT INTO {spec.table} ({', '.join(names)}) "  # noqa: S608
            f"VALUES ({', '.join(['%s'] * len(names))})",
            [row[name] for name in names],
        )
    logger.info(
        "seed inserted",
        extra={"extra_fields": {"table": spec.table, "rows": len(rows)}},
    )
    return len(rows)


def ensure_superadmin(cur: PgCursor, external_subject: str) -> str:
    """Create the user if needed and make them superadmin. Returns user id."""
    cur.execute(
        """
        INSERT INTO users (external_subject, role)
        VALUES (%s, 'superadmin')
        ON CONFLICT (external_subject)
        DO UPDATE SET role = 'superadmin', updated_at = now()
        RETURNING id
        """,
        (external_subject,),
    )
    return str(cur.fetchone()[0])


def seed(external_subject: str) -> dict[str, int]:
    """Seed all demo tables in one transaction."""
    with txn() as cur:
        admin_id = ensure_superadmin(cur, external_subject)
        posts = [{**p, "author_id": admin_id} for p in DEMO_POSTS]
        return {
            CATEGORIES.table: seed_table(cur, CATEGORIES, DEMO_CATEGORIES),
            PACKAGES.table: seed_table(cur, PACKAGES, DEMO_PACKAGES),
            POSTS.table: seed_table(cur, POSTS, posts),
            PAGES.table: seed_table(cur, PAGES, DEMO_PAGES),
            BOOKINGS.table: seed_table(cur, BOOKINGS, _demo_bookings()),
            CONTACT_MESSAGES.table: seed_table(cur, CONTACT_MESSAGES, _demo_messages()),
        }


def main() -> int:
    with correlation_scope():
        external_subject = env("SEED_EXTERNAL_SUBJECT")
        inserted = seed(external_subject)
        logger.info("seed complete", extra={"extra_fields": {"inserted": inserted}})
    return 0


if __name__ == "__main__":
    sys.exit(main())
