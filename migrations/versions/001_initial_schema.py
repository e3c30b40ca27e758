"""Initial schema (SQL-only).

Creates users, categories and the six trashable tables. Every trashable
table carries deleted_at TIMESTAMPTZ NULL (NULL = active, set = in trash)
and an index on it for the active/trash listings and empty-trash scans.

posts.category_id is deliberately not a foreign key: categories are hard
deleted and posts keep pointing at them.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op

revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

TRASHABLE_TABLES = (
    "packages",
    "posts",
    "bookings",
    "contact_messages",
    "media_files",
    "pages",
)

_SCHEMA = """
CREATE EXTENSION IF NOT EXISTS pgcrypto;

CREATE TABLE IF NOT EXISTS users (
    id               UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    external_subject TEXT NOT NULL UNIQUE,
    email            TEXT,
    name             TEXT,
    role             TEXT NOT NULL DEFAULT 'customer'
                     CHECK (role IN ('customer', 'staff', 'admin', 'superadmin')),
    created_at       TIMESTAMPTZ NOT NULL DEFAULT now(),
    updated_at       TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE TABLE IF NOT EXISTS categories (
    id   TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    name TEXT NOT NULL,
    slug TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS packages (
    id          TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    slug        TEXT NOT NULL UNIQUE,
    title       TEXT NOT NULL,
    type        TEXT NOT NULL,
    destination TEXT NOT NULL,
    duration    INTEGER NOT NULL CHECK (duration > 0),
    price       NUMERIC(12, 2) NOT NULL CHECK (price >= 0),
    rating      NUMERIC(2, 1) NOT NULL DEFAULT 0,
    image_url   TEXT,
    description TEXT NOT NULL DEFAULT '',
    deleted_at  TIMESTAMPTZ
);

CREATE TABLE IF NOT EXISTS posts (
    id                 TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    slug               TEXT NOT NULL UNIQUE,
    title              TEXT NOT NULL,
    content            TEXT NOT NULL DEFAULT '',
    featured_image_url TEXT,
    author_id          TEXT,
    published_at       TIMESTAMPTZ NOT NULL DEFAULT now(),
    category_id        TEXT,
    deleted_at         TIMESTAMPTZ
);

CREATE TABLE IF NOT EXISTS bookings (
    id             TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    package_id     TEXT NOT NULL,
    package_name   TEXT NOT NULL,
    customer_name  TEXT NOT NULL,
    customer_email TEXT NOT NULL,
    customer_phone TEXT,
    travelers      INTEGER NOT NULL DEFAULT 1 CHECK (travelers > 0),
    departure_date DATE NOT NULL,
    booking_date   TIMESTAMPTZ NOT NULL DEFAULT now(),
    status         TEXT NOT NULL DEFAULT 'Pending'
                   CHECK (status IN ('Pending', 'Confirmed', 'Cancelled')),
    deleted_at     TIMESTAMPTZ
);

CREATE TABLE IF NOT EXISTS contact_messages (
    id           TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    name         TEXT NOT NULL,
    email        TEXT NOT NULL,
    subject      TEXT NOT NULL,
    message      TEXT NOT NULL,
    submitted_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    is_read      BOOLEAN NOT NULL DEFAULT false,
    deleted_at   TIMESTAMPTZ
);

CREATE TABLE IF NOT EXISTS media_files (
    id          TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    name        TEXT NOT NULL,
    type        TEXT NOT NULL CHECK (type IN ('image', 'video', 'pdf', 'file')),
    url         TEXT NOT NULL,
    size        TEXT,
    uploaded_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    alt_text    TEXT,
    deleted_at  TIMESTAMPTZ
);

CREATE TABLE IF NOT EXISTS pages (
    id           TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    slug         TEXT NOT NULL UNIQUE,
    title        TEXT NOT NULL,
    content      TEXT NOT NULL DEFAULT '',
    status       TEXT NOT NULL DEFAULT 'draft' CHECK (status IN ('published', 'draft')),
    show_in_menu BOOLEAN NOT NULL DEFAULT false,
    menu_order   INTEGER NOT NULL DEFAULT 0,
    deleted_at   TIMESTAMPTZ
);
"""


def upgrade() -> None:
    op.execute(_SCHEMA)
    for table in TRASHABLE_TABLES:
        op.execute(f"CREATE INDEX IF NOT EXISTS idx_{table}_deleted_at ON {table} (deleted_at)")


def downgrade() -> None:
    for table in reversed(TRASHABLE_TABLES):
        op.execute(f"DROP TABLE IF EXISTS {table}")
    op.execute("DROP TABLE IF EXISTS categories")
    op.execute("DROP TABLE IF EXISTS users")
