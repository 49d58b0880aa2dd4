"""Checkpoint sequencing and stage preparation."""

import logging

from cycling_portal.exceptions import (
    InvalidLocationError,
    InvalidStageStateError,
    InvalidStageTypeError,
)
from cycling_portal.models.checkpoint import Checkpoint, CheckpointType
from cycling_portal.models.race import Stage, StageState
from cycling_portal.store.entity_store import EntityKind, EntityStore

logger = logging.getLogger(__name__)


def find_insert_position(
    checkpoints: list[Checkpoint],
    location_km: float,
) -> int:
    """
    Find where a new checkpoint goes in a location-ordered sequence.

    Args:
        checkpoints: Existing checkpoints in ascending location order
        location_km: Location of the new checkpoint

    Returns:
        Index to insert at

    Raises:
        InvalidLocationError: If a checkpoint already sits at this location
    """
    for index, checkpoint in enumerate(checkpoints):
        if checkpoint.location_km == location_km:
            raise InvalidLocationError(
                f"Checkpoint {checkpoint.checkpoint_id} already at {location_km}km"
            )
        if checkpoint.location_km > location_km:
            return index
    return len(checkpoints)


def _check_stage_accepts_checkpoint(stage: Stage, location_km: float) -> None:
    if location_km <= 0 or location_km > stage.length_km:
        raise InvalidLocationError(
            f"Location {location_km}km outside stage {stage.stage_id} "
            f"(0, {stage.length_km}]"
        )
    if stage.is_time_trial:
        raise InvalidStageTypeError(
            f"Stage {stage.stage_id} is a time trial and admits no checkpoints"
        )
    if stage.is_waiting_for_results:
        raise InvalidStageStateError(
            f"Stage {stage.stage_id} is waiting for results; checkpoints are frozen"
        )


def add_checkpoint(
    store: EntityStore,
    stage_id: int,
    checkpoint_type: CheckpointType,
    location_km: float,
    average_gradient: float | None = None,
    climb_length_km: float | None = None,
) -> int:
    """
    Add a sprint or climb to a stage, keeping locations strictly increasing.

    Args:
        store: Entity store
        stage_id: Stage to add to
        checkpoint_type: Sprint or climb category
        location_km: Distance from the stage start
        average_gradient: Climb gradient (climbs only)
        climb_length_km: Climb length (climbs only)

    Returns:
        The new checkpoint ID
    """
    stage = store.get_stage(stage_id)
    _check_stage_accepts_checkpoint(stage, location_km)
    position = find_insert_position(store.stage_checkpoints(stage_id), location_km)

    checkpoint = Checkpoint(
        checkpoint_id=store.peek_id(EntityKind.CHECKPOINT),
        stage_id=stage_id,
        checkpoint_type=checkpoint_type,
        location_km=location_km,
        average_gradient=average_gradient,
        climb_length_km=climb_length_km,
    )
    store.add_checkpoint(checkpoint, position)

    logger.info(
        f"Added {checkpoint_type.value} checkpoint {checkpoint.checkpoint_id} "
        f"to stage {stage_id} at {location_km}km"
    )
    return checkpoint.checkpoint_id


def remove_checkpoint(store: EntityStore, checkpoint_id: int) -> None:
    """
    Remove a checkpoint from a stage that is still being prepared.

    Results already recorded for the stage are discarded, since their
    timestamp count no longer matches.
    """
    checkpoint = store.get_checkpoint(checkpoint_id)
    stage = store.get_stage(checkpoint.stage_id)
    if stage.is_waiting_for_results:
        raise InvalidStageStateError(
            f"Stage {stage.stage_id} is waiting for results; checkpoints are frozen"
        )

    plan = store.cascade_delete(EntityKind.CHECKPOINT, checkpoint_id)
    logger.info(
        f"Removed checkpoint {checkpoint_id} from stage {stage.stage_id} "
        f"({len(plan.invalidated_stage_ids)} stage result sets invalidated)"
    )


def conclude_stage_preparation(store: EntityStore, stage_id: int) -> None:
    """Freeze a stage's checkpoints so results can be registered."""
    stage = store.get_stage(stage_id)
    if stage.is_waiting_for_results:
        raise InvalidStageStateError(
            f"Stage {stage_id} preparation has already been concluded"
        )
    stage.state = StageState.WAITING_FOR_RESULTS
    logger.info(f"Stage {stage_id} is now waiting for results")


def get_stage_checkpoints(store: EntityStore, stage_id: int) -> list[int]:
    """Checkpoint IDs of a stage in location order."""
    return list(store.get_stage(stage_id).checkpoint_ids)
