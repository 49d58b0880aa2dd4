"""Recording and removal of rider stage results."""

import logging
from collections.abc import Sequence
from datetime import time

from cycling_portal.exceptions import (
    DuplicatedResultError,
    IDNotRecognisedError,
    InvalidCheckpointTimesError,
    StageNotWaitingForResultsError,
)
from cycling_portal.models.result import Result, timedelta_to_time
from cycling_portal.store.entity_store import EntityStore

logger = logging.getLogger(__name__)


def register_result(
    store: EntityStore,
    stage_id: int,
    rider_id: int,
    timestamps: Sequence[time],
) -> Result:
    """
    Record a rider's checkpoint timestamps for a stage.

    Timestamps are stored in the order given: start, each checkpoint in
    location order, finish. They are not re-sorted or otherwise checked.

    Args:
        store: Entity store
        stage_id: Stage the result belongs to
        rider_id: Rider the result belongs to
        timestamps: Start, checkpoint and finish times

    Returns:
        The stored Result

    Raises:
        IDNotRecognisedError: Unknown stage or rider
        StageNotWaitingForResultsError: Stage preparation not concluded
        DuplicatedResultError: Rider already has a result in this stage
        InvalidCheckpointTimesError: Wrong number of timestamps
    """
    stage = store.get_stage(stage_id)
    store.get_rider(rider_id)

    if not stage.is_waiting_for_results:
        raise StageNotWaitingForResultsError(
            f"Stage {stage_id} is not waiting for results"
        )
    if store.get_result(stage_id, rider_id) is not None:
        raise DuplicatedResultError(
            f"Rider {rider_id} already has a result in stage {stage_id}"
        )
    if len(timestamps) != stage.expected_timestamp_count:
        raise InvalidCheckpointTimesError(
            f"Stage {stage_id} needs {stage.expected_timestamp_count} timestamps, "
            f"got {len(timestamps)}"
        )

    result = Result(stage_id=stage_id, rider_id=rider_id, timestamps=list(timestamps))
    store.add_result(result)

    logger.info(
        f"Registered result for rider {rider_id} in stage {stage_id} "
        f"({result.elapsed_time_display})"
    )
    return result


def get_rider_results(store: EntityStore, stage_id: int, rider_id: int) -> list[time]:
    """
    Get the timestamps recorded for a rider in a stage.

    Returns:
        The recorded timestamps followed by the real elapsed time, or an
        empty list if the rider has no result
    """
    store.get_stage(stage_id)
    store.get_rider(rider_id)
    result = store.get_result(stage_id, rider_id)
    if result is None:
        return []
    return [*result.timestamps, timedelta_to_time(result.elapsed_time)]


def delete_result(store: EntityStore, stage_id: int, rider_id: int) -> None:
    """
    Remove a rider's result from a stage.

    Raises:
        IDNotRecognisedError: Unknown stage or rider, or no such result
    """
    store.get_stage(stage_id)
    store.get_rider(rider_id)
    if store.remove_result(stage_id, rider_id) is None:
        raise IDNotRecognisedError(
            f"No result for rider {rider_id} in stage {stage_id}"
        )
    logger.info(f"Deleted result for rider {rider_id} in stage {stage_id}")
