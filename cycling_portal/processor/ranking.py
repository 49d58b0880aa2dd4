"""Stage ranking by real elapsed time."""

import logging
from datetime import timedelta

from cycling_portal.processor.elapsed import (
    adjusted_elapsed_times,
    sort_by_elapsed_time,
)
from cycling_portal.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


def rank_riders(store: EntityStore, stage_id: int) -> list[int]:
    """
    Rider IDs with a result in a stage, fastest real elapsed time first.

    Ties are broken by rider ID. Recomputed on every call.
    """
    store.get_stage(stage_id)
    ranking = [r.rider_id for r in sort_by_elapsed_time(store.stage_results(stage_id))]
    logger.debug(f"Stage {stage_id} ranking: {ranking}")
    return ranking


def ranked_adjusted_elapsed_times(
    store: EntityStore,
    stage_id: int,
    gap_seconds: float | None = None,
) -> list[timedelta]:
    """Adjusted elapsed times in rank order, index-aligned with rank_riders."""
    adjusted = adjusted_elapsed_times(store, stage_id, gap_seconds)
    return [adjusted[rider_id] for rider_id in rank_riders(store, stage_id)]
