"""Stage and mountain points allocation."""

import logging

from cycling_portal.models.points import (
    FINISH_POINTS,
    MOUNTAIN_POINTS,
    SPRINT_POINTS,
    points_for_position,
)
from cycling_portal.models.result import Result
from cycling_portal.processor.ranking import rank_riders
from cycling_portal.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


def crossing_order(results: list[Result], checkpoint_index: int) -> list[int]:
    """
    Rider IDs in the order they crossed a checkpoint.

    Args:
        results: Stage results
        checkpoint_index: Position of the checkpoint in the stage (0-based)

    Returns:
        Rider IDs sorted by their timestamp at that checkpoint, then rider ID
    """
    ordered = sorted(
        results,
        key=lambda r: (r.checkpoint_timestamp(checkpoint_index), r.rider_id),
    )
    return [r.rider_id for r in ordered]


def _checkpoint_points(
    store: EntityStore,
    stage_id: int,
    climbs: bool,
) -> dict[int, int]:
    """Sum sprint (climbs=False) or mountain (climbs=True) points per rider."""
    results = store.stage_results(stage_id)
    totals = {r.rider_id: 0 for r in results}

    for index, checkpoint in enumerate(store.stage_checkpoints(stage_id)):
        if checkpoint.is_climb != climbs:
            continue
        table = (
            MOUNTAIN_POINTS[checkpoint.checkpoint_type] if climbs else SPRINT_POINTS
        )
        for position, rider_id in enumerate(crossing_order(results, index), start=1):
            totals[rider_id] += points_for_position(table, position)

    return totals


def finish_points(store: EntityStore, stage_id: int) -> dict[int, int]:
    """Finish points per rider, following strict rank order."""
    table = FINISH_POINTS[store.get_stage(stage_id).stage_type]
    return {
        rider_id: points_for_position(table, position)
        for position, rider_id in enumerate(rank_riders(store, stage_id), start=1)
    }


def stage_points(store: EntityStore, stage_id: int) -> list[int]:
    """
    Stage points in rank order: finish points plus intermediate sprint points.

    Riders with equal adjusted time still receive the points of their own
    rank position.
    """
    finish = finish_points(store, stage_id)
    sprints = _checkpoint_points(store, stage_id, climbs=False)
    ranking = rank_riders(store, stage_id)
    points = [finish[rider_id] + sprints[rider_id] for rider_id in ranking]
    logger.debug(f"Stage {stage_id} points: {points} for riders {ranking}")
    return points


def mountain_points(store: EntityStore, stage_id: int) -> list[int]:
    """Mountain points in rank order, summed over every climb in the stage."""
    climbs = _checkpoint_points(store, stage_id, climbs=True)
    ranking = rank_riders(store, stage_id)
    points = [climbs[rider_id] for rider_id in ranking]
    logger.debug(f"Stage {stage_id} mountain points: {points} for riders {ranking}")
    return points
