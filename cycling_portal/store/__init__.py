"""Entity storage with lookup by ID and cascading deletion."""

from cycling_portal.store.entity_store import (
    MAX_NAME_LENGTH,
    DeletionPlan,
    EntityKind,
    EntityStore,
    IdCounters,
    validate_name,
)

__all__ = [
    "MAX_NAME_LENGTH",
    "DeletionPlan",
    "EntityKind",
    "EntityStore",
    "IdCounters",
    "validate_name",
]
