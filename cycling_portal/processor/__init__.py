"""Results processing: checkpoints, results, elapsed times, ranking and points."""

from cycling_portal.processor.checkpoints import (
    add_checkpoint,
    conclude_stage_preparation,
    find_insert_position,
    get_stage_checkpoints,
    remove_checkpoint,
)
from cycling_portal.processor.elapsed import (
    adjusted_elapsed_times,
    get_adjusted_elapsed_time,
    group_elapsed_times,
    sort_by_elapsed_time,
)
from cycling_portal.processor.points import (
    crossing_order,
    finish_points,
    mountain_points,
    stage_points,
)
from cycling_portal.processor.ranking import (
    rank_riders,
    ranked_adjusted_elapsed_times,
)
from cycling_portal.processor.results import (
    delete_result,
    get_rider_results,
    register_result,
)

__all__ = [
    "add_checkpoint",
    "adjusted_elapsed_times",
    "conclude_stage_preparation",
    "crossing_order",
    "delete_result",
    "find_insert_position",
    "finish_points",
    "get_adjusted_elapsed_time",
    "get_rider_results",
    "get_stage_checkpoints",
    "group_elapsed_times",
    "mountain_points",
    "rank_riders",
    "ranked_adjusted_elapsed_times",
    "register_result",
    "remove_checkpoint",
    "sort_by_elapsed_time",
    "stage_points",
]
