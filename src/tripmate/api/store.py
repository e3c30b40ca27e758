"""Entity store dependency.

Handlers take the store through ``Depends(get_store)`` so tests can swap in
an in-memory double with ``app.dependency_overrides``.
"""

from tripmate.infra.repositories.entity_store import EntityStore, PgEntityStore

_store = PgEntityStore()


def get_store() -> EntityStore:
    return _store
