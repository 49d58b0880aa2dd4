"""Save and load the full portal state as JSON."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from cycling_portal.exceptions import PortalStateError
from cycling_portal.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


def save_portal_state(store: EntityStore, json_path: str | Path) -> Path:
    """
    Save every entity and ID counter to a JSON file.

    Args:
        store: Entity store to save
        json_path: Path to output JSON file

    Returns:
        Path to the written file
    """
    json_path = Path(json_path)
    json_path.parent.mkdir(parents=True, exist_ok=True)

    with json_path.open("w", encoding="utf-8") as f:
        json.dump(store.model_dump(mode="json"), f, indent=2)

    logger.info(
        f"Saved portal state to {json_path} ({len(store.races)} races, "
        f"{len(store.riders)} riders)"
    )
    return json_path


def load_portal_state(json_path: str | Path) -> EntityStore:
    """
    Load portal state saved by save_portal_state.

    Args:
        json_path: Path to the JSON file

    Returns:
        EntityStore with all entities and ID counters restored

    Raises:
        FileNotFoundError: If the file does not exist
        PortalStateError: If the file is not valid portal state
    """
    json_path = Path(json_path)
    if not json_path.exists():
        raise FileNotFoundError(f"Portal state file not found: {json_path}")

    try:
        with json_path.open(encoding="utf-8") as f:
            data = json.load(f)
        store = EntityStore.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise PortalStateError(f"Invalid portal state in {json_path}: {e}") from e

    logger.info(
        f"Loaded portal state from {json_path} ({len(store.races)} races, "
        f"{len(store.riders)} riders)"
    )
    return store
