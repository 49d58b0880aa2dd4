"""Data models for the cycling portal."""

from cycling_portal.models.checkpoint import (
    CLIMB_CATEGORIES,
    Checkpoint,
    CheckpointType,
)
from cycling_portal.models.points import (
    FINISH_POINTS,
    MOUNTAIN_POINTS,
    SPRINT_POINTS,
    points_for_position,
)
from cycling_portal.models.race import Race, Stage, StageState, StageType
from cycling_portal.models.result import (
    Result,
    format_elapsed,
    time_to_timedelta,
    timedelta_to_time,
)
from cycling_portal.models.team import Rider, Team

__all__ = [  # noqa: RUF022
    # Race models
    "Race",
    "Stage",
    "StageState",
    "StageType",
    # Checkpoint models
    "Checkpoint",
    "CheckpointType",
    "CLIMB_CATEGORIES",
    # Team models
    "Rider",
    "Team",
    # Result models
    "Result",
    "format_elapsed",
    "time_to_timedelta",
    "timedelta_to_time",
    # Points tables
    "FINISH_POINTS",
    "SPRINT_POINTS",
    "MOUNTAIN_POINTS",
    "points_for_position",
]
