"""Checkpoint data models."""

from enum import Enum

from pydantic import BaseModel, Field


class CheckpointType(str, Enum):
    """Intermediate sprint or a categorised climb."""

    SPRINT = "sprint"
    C4 = "C4"
    C3 = "C3"
    C2 = "C2"
    C1 = "C1"
    HC = "HC"

    @property
    def is_climb(self) -> bool:
        """Everything except the intermediate sprint is a climb."""
        return self != CheckpointType.SPRINT


CLIMB_CATEGORIES: tuple[CheckpointType, ...] = (
    CheckpointType.C4,
    CheckpointType.C3,
    CheckpointType.C2,
    CheckpointType.C1,
    CheckpointType.HC,
)


class Checkpoint(BaseModel):
    """A timed point within a stage, other than start and finish."""

    checkpoint_id: int = Field(..., ge=1)
    stage_id: int = Field(..., ge=1, description="Owning stage ID")
    checkpoint_type: CheckpointType
    location_km: float = Field(..., gt=0, description="Distance from stage start")
    average_gradient: float | None = Field(
        default=None, description="Average gradient (climbs only)"
    )
    climb_length_km: float | None = Field(
        default=None, ge=0, description="Climb length (climbs only)"
    )

    @property
    def is_climb(self) -> bool:
        """Check if this checkpoint awards mountain points."""
        return self.checkpoint_type.is_climb
