"""Real and adjusted elapsed time calculation."""

import logging
from datetime import timedelta

from cycling_portal.config.settings import get_settings
from cycling_portal.models.result import Result
from cycling_portal.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


def sort_by_elapsed_time(results: list[Result]) -> list[Result]:
    """Order results fastest first, ties broken by rider ID."""
    return sorted(results, key=lambda r: (r.elapsed_time, r.rider_id))


def group_elapsed_times(
    ranked: list[tuple[int, timedelta]],
    gap_seconds: float,
) -> dict[int, timedelta]:
    """
    Collapse close finishers onto the time of their group's first rider.

    Groups chain: a rider joins the current group when their gap to the rider
    immediately ahead is below the threshold, however far they end up from
    the group's first rider.

    Args:
        ranked: (rider_id, elapsed_time) pairs, fastest first
        gap_seconds: Consecutive gap below which riders share a group

    Returns:
        Dict mapping rider ID to adjusted elapsed time
    """
    threshold = timedelta(seconds=gap_seconds)
    adjusted: dict[int, timedelta] = {}
    group_time: timedelta | None = None
    previous: timedelta | None = None

    for rider_id, elapsed in ranked:
        if previous is None or elapsed - previous >= threshold:
            group_time = elapsed
        adjusted[rider_id] = group_time
        previous = elapsed

    return adjusted


def adjusted_elapsed_times(
    store: EntityStore,
    stage_id: int,
    gap_seconds: float | None = None,
) -> dict[int, timedelta]:
    """
    Adjusted elapsed time for every rider with a result in a stage.

    Time trials are never grouped: adjusted time equals real elapsed time.

    Args:
        store: Entity store
        stage_id: Stage to compute
        gap_seconds: Grouping threshold (defaults to configured value)

    Returns:
        Dict mapping rider ID to adjusted elapsed time
    """
    stage = store.get_stage(stage_id)
    ranked = [
        (r.rider_id, r.elapsed_time)
        for r in sort_by_elapsed_time(store.stage_results(stage_id))
    ]

    if stage.is_time_trial:
        return dict(ranked)

    if gap_seconds is None:
        gap_seconds = get_settings().group_gap_seconds

    adjusted = group_elapsed_times(ranked, gap_seconds)
    logger.debug(
        f"Stage {stage_id}: {len(ranked)} finishers in "
        f"{len(set(adjusted.values()))} time groups"
    )
    return adjusted


def get_adjusted_elapsed_time(
    store: EntityStore,
    stage_id: int,
    rider_id: int,
    gap_seconds: float | None = None,
) -> timedelta | None:
    """
    Adjusted elapsed time for one rider.

    Returns:
        The adjusted time, or None if the rider has no result in the stage
    """
    store.get_rider(rider_id)
    return adjusted_elapsed_times(store, stage_id, gap_seconds).get(rider_id)
