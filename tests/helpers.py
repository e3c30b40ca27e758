"""Shared test helpers for TripMate tests.

These are NOT fixtures, just functions and classes that conftest.py and
individual test files import.
"""

from __future__ import annotations

import base64
import time
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Sequence

import jwt
from cryptography.hazmat.primitives.asymmetric import rsa

from tripmate.domain.collections import CollectionSpec
from tripmate.infra.repositories.entity_store import (
    MAX_BATCH_SIZE,
    SERVER_TIMESTAMP,
    EntityNotFoundError,
    View,
)

OIDC_ENV = {
    "OIDC_ISSUER": "https://securetoken.example.com/tripmate",
    "OIDC_AUDIENCE": "tripmate-admin",
    "OIDC_JWKS_URL": "https://securetoken.example.com/jwks.json",
}


# ── JWT helpers ───────────────────────────────────────────────────────────────


def _generate_rsa_keypair():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return private_key, private_key.public_key()


def _create_jwks(public_key, kid: str = "test-key-1") -> dict:
    public_numbers = public_key.public_numbers()

    def int_to_base64(n: int) -> str:
        byte_length = (n.bit_length() + 7) // 8
        return base64.urlsafe_b64encode(n.to_bytes(byte_length, "big")).rstrip(b"=").decode()

    return {
        "keys": [
            {
                "kty": "RSA",
                "use": "sig",
                "alg": "RS256",
                "kid": kid,
                "n": int_to_base64(public_numbers.n),
                "e": int_to_base64(public_numbers.e),
            }
        ]
    }


def _create_token(
    private_key,
    kid: str = "test-key-1",
    sub: str = "user-123",
    iss: str = OIDC_ENV["OIDC_ISSUER"],
    aud: str = OIDC_ENV["OIDC_AUDIENCE"],
    exp: int | None = None,
    azp: str | None = None,
) -> str:
    now = int(time.time())
    payload = {
        "sub": sub,
        "iss": iss,
        "aud": aud,
        "exp": exp if exp is not None else now + 3600,
        "iat": now,
    }
    if azp:
        payload["azp"] = azp
    return jwt.encode(payload, private_key, algorithm="RS256", headers={"kid": kid})


# ── In-memory entity store ────────────────────────────────────────────────────

_INSERT_DEFAULTS: dict[str, dict[str, Callable[[], Any]]] = {
    "posts": {"published_at": lambda: datetime.now(timezone.utc)},
    "bookings": {
        "booking_date": lambda: datetime.now(timezone.utc),
        "status": lambda: "Pending",
    },
    "contactMessages": {
        "submitted_at": lambda: datetime.now(timezone.utc),
        "is_read": lambda: False,
    },
    "media": {"uploaded_at": lambda: datetime.now(timezone.utc)},
}


class InMemoryEntityStore:
    """Dict-backed stand-in for PgEntityStore.

    Set ``fail_with`` to an exception instance to make every call raise it.
    ``after_snapshot`` runs right after trashed_ids() returns, to simulate a
    concurrent writer between the snapshot and the delete.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None):
        self.rows: dict[str, dict[str, dict[str, Any]]] = {}
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.fail_with: Exception | None = None
        self.after_snapshot: Callable[[], None] | None = None
        self.calls: list[str] = []

    def _table(self, spec: CollectionSpec) -> dict[str, dict[str, Any]]:
        return self.rows.setdefault(spec.name, {})

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def _value(self, value: Any) -> Any:
        return self.clock() if value is SERVER_TIMESTAMP else value

    def add(self, spec: CollectionSpec, row: dict[str, Any]) -> dict[str, Any]:
        """Put a row in place directly, bypassing failure injection."""
        self._table(spec)[row["id"]] = dict(row)
        return row

    def query(self, spec: CollectionSpec, view: View = "all") -> list[dict[str, Any]]:
        self._enter("query")
        rows = list(self._table(spec).values())
        if view == "active":
            rows = [r for r in rows if r.get("deleted_at") is None]
        elif view == "trash":
            rows = [r for r in rows if r.get("deleted_at") is not None]
        return [dict(r) for r in rows]

    def get(self, spec: CollectionSpec, entity_id: str) -> dict[str, Any] | None:
        self._enter("get")
        row = self._table(spec).get(entity_id)
        return dict(row) if row is not None else None

    def insert(self, spec: CollectionSpec, values: dict[str, Any]) -> dict[str, Any]:
        self._enter("insert")
        row = {name: make() for name, make in _INSERT_DEFAULTS.get(spec.name, {}).items()}
        row.update(values)
        row.setdefault("id", str(uuid.uuid4()))
        if spec.trashable:
            row.setdefault("deleted_at", None)
        self._table(spec)[row["id"]] = row
        return dict(row)

    def set_field(self, spec: CollectionSpec, entity_id: str, field: str, value: Any) -> None:
        self._enter("set_field")
        table = self._table(spec)
        if entity_id not in table:
            raise EntityNotFoundError(spec.name, [entity_id])
        table[entity_id][field] = self._value(value)

    def set_field_many(
        self, spec: CollectionSpec, ids: Sequence[str], field: str, value: Any
    ) -> int:
        self._enter("set_field_many")
        wanted = list(dict.fromkeys(ids))
        if len(wanted) > MAX_BATCH_SIZE:
            raise ValueError("batch too large")
        table = self._table(spec)
        missing = [i for i in wanted if i not in table]
        if missing:
            raise EntityNotFoundError(spec.name, missing)
        for entity_id in wanted:
            table[entity_id][field] = self._value(value)
        return len(wanted)

    def delete(self, spec: CollectionSpec, entity_id: str) -> None:
        self._enter("delete")
        if self._table(spec).pop(entity_id, None) is None:
            raise EntityNotFoundError(spec.name, [entity_id])

    def trashed_ids(self, spec: CollectionSpec) -> list[str]:
        self._enter("trashed_ids")
        ids = sorted(i for i, r in self._table(spec).items() if r.get("deleted_at") is not None)
        if self.after_snapshot is not None:
            self.after_snapshot()
        return ids

    def batch_delete(self, spec: CollectionSpec, ids: Sequence[str]) -> int:
        self._enter("batch_delete")
        table = self._table(spec)
        return sum(1 for i in dict.fromkeys(ids) if table.pop(i, None) is not None)


# ── Row factories ─────────────────────────────────────────────────────────────


def package_row(entity_id: str = "p1", **overrides: Any) -> dict[str, Any]:
    row = {
        "id": entity_id,
        "slug": entity_id,
        "title": f"Package {entity_id}",
        "type": "Tour",
        "destination": "Paris, France",
        "duration": 7,
        "price": 180000.0,
        "rating": 4.8,
        "image_url": None,
        "description": "",
        "deleted_at": None,
    }
    row.update(overrides)
    return row


def post_row(entity_id: str = "post-1", **overrides: Any) -> dict[str, Any]:
    row = {
        "id": entity_id,
        "slug": entity_id,
        "title": f"Post {entity_id}",
        "content": "",
        "featured_image_url": None,
        "author_id": "admin-1",
        "published_at": datetime(2026, 9, 1, tzinfo=timezone.utc),
        "category_id": None,
        "deleted_at": None,
    }
    row.update(overrides)
    return row


def booking_row(entity_id: str = "b1", **overrides: Any) -> dict[str, Any]:
    row = {
        "id": entity_id,
        "package_id": "paris-dream-tour",
        "package_name": "Parisian Dream Tour",
        "customer_name": "Alice Johnson",
        "customer_email": "alice@example.com",
        "customer_phone": None,
        "travelers": 2,
        "departure_date": date(2026, 12, 1),
        "booking_date": datetime(2026, 10, 1, tzinfo=timezone.utc),
        "status": "Pending",
        "deleted_at": None,
    }
    row.update(overrides)
    return row


def days_ago(days: float) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=days)
