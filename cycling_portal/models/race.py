"""Race and stage data models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field


class StageType(str, Enum):
    """Stage profile, which selects the finish points table."""

    FLAT = "flat"
    HILLY = "hilly"
    MOUNTAIN = "mountain"
    TIME_TRIAL = "time_trial"


class StageState(str, Enum):
    """Stage lifecycle. A stage only ever moves forward."""

    PREPARING = "preparing"
    WAITING_FOR_RESULTS = "waiting_for_results"


class Stage(BaseModel):
    """A single stage of a race."""

    stage_id: int = Field(..., ge=1)
    race_id: int = Field(..., ge=1, description="Owning race ID")
    name: str = Field(..., min_length=1)
    description: str | None = Field(default=None)
    length_km: float = Field(..., gt=0, description="Stage length in kilometres")
    start_time: datetime = Field(..., description="Stage start")
    stage_type: StageType
    state: StageState = Field(default=StageState.PREPARING)
    checkpoint_ids: list[int] = Field(
        default_factory=list,
        description="Checkpoint IDs in ascending location order",
    )

    @property
    def is_time_trial(self) -> bool:
        """Time trials admit no checkpoints and never group finishers."""
        return self.stage_type == StageType.TIME_TRIAL

    @property
    def is_waiting_for_results(self) -> bool:
        """Check if stage preparation has been concluded."""
        return self.state == StageState.WAITING_FOR_RESULTS

    @computed_field
    @property
    def checkpoint_count(self) -> int:
        """Number of checkpoints between start and finish."""
        return len(self.checkpoint_ids)

    @property
    def expected_timestamp_count(self) -> int:
        """Timestamps a result must carry: start, each checkpoint, finish."""
        return self.checkpoint_count + 2


class Race(BaseModel):
    """A race made of stages run in insertion order."""

    race_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    description: str | None = Field(default=None)
    stage_ids: list[int] = Field(
        default_factory=list,
        description="Stage IDs in racing order",
    )

    @computed_field
    @property
    def number_of_stages(self) -> int:
        """Number of stages added to the race."""
        return len(self.stage_ids)
