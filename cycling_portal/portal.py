"""Cycling portal: races, stages, teams, riders and stage results."""

import logging
from datetime import datetime, time, timedelta
from pathlib import Path

from cycling_portal import processor
from cycling_portal.config.settings import Settings, get_settings
from cycling_portal.exceptions import (
    InvalidCheckpointTypeError,
    InvalidLengthError,
    InvalidRiderError,
)
from cycling_portal.models.checkpoint import CheckpointType
from cycling_portal.models.race import Race, Stage, StageType
from cycling_portal.models.team import Rider, Team
from cycling_portal.persistence import load_portal_state, save_portal_state
from cycling_portal.store.entity_store import EntityKind, EntityStore

logger = logging.getLogger(__name__)

MIN_YEAR_OF_BIRTH = 1900


class CyclingPortal:
    """
    Single entry point for managing races and computing stage results.

    Every mutating operation validates its input before changing anything, so
    a raised error always leaves the portal as it was.
    """

    def __init__(
        self,
        store: EntityStore | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the portal.

        Args:
            store: Optional entity store (a fresh one is created by default)
            settings: Optional settings (defaults to environment settings)
        """
        self.store = store if store is not None else EntityStore()
        self.settings = settings if settings is not None else get_settings()

    # Races

    def get_race_ids(self) -> list[int]:
        """IDs of all races, in creation order."""
        return list(self.store.races)

    def create_race(self, name: str, description: str | None = None) -> int:
        """Create a race and return its ID."""
        self.store.check_race_name(name)
        race = Race(
            race_id=self.store.peek_id(EntityKind.RACE),
            name=name,
            description=description,
        )
        self.store.add_race(race)
        logger.info(f"Created race {race.race_id} '{name}'")
        return race.race_id

    def view_race_details(self, race_id: int) -> str:
        """Summary of a race: ID, name, description, stages and total length."""
        race = self.store.get_race(race_id)
        total_length = sum(self.store.stages[s].length_km for s in race.stage_ids)
        return (
            f"Race[id={race.race_id}, name={race.name}, "
            f"description={race.description}, stages={race.number_of_stages}, "
            f"length={total_length:g}km]"
        )

    def remove_race_by_id(self, race_id: int) -> None:
        """Remove a race with its stages, checkpoints and results."""
        plan = self.store.cascade_delete(EntityKind.RACE, race_id)
        logger.info(f"Removed race {race_id} and {len(plan.stage_ids)} stages")

    def get_number_of_stages(self, race_id: int) -> int:
        """Number of stages in a race."""
        return self.store.get_race(race_id).number_of_stages

    # Stages

    def add_stage_to_race(
        self,
        race_id: int,
        stage_name: str,
        description: str | None,
        length: float,
        start_time: datetime,
        stage_type: StageType,
    ) -> int:
        """
        Append a stage to a race.

        Raises:
            IDNotRecognisedError: Unknown race
            InvalidNameError: Stage name breaks the naming rule
            NameAlreadyExistsError: Stage name already used anywhere
            InvalidLengthError: Stage shorter than the minimum length
        """
        self.store.get_race(race_id)
        self.store.check_stage_name(stage_name)
        if length < self.settings.min_stage_length_km:
            raise InvalidLengthError(
                f"Stage length {length}km is below "
                f"{self.settings.min_stage_length_km}km"
            )

        stage = Stage(
            stage_id=self.store.peek_id(EntityKind.STAGE),
            race_id=race_id,
            name=stage_name,
            description=description,
            length_km=length,
            start_time=start_time,
            stage_type=StageType(stage_type),
        )
        self.store.add_stage(stage)
        logger.info(
            f"Added {stage.stage_type.value} stage {stage.stage_id} '{stage_name}' "
            f"to race {race_id}"
        )
        return stage.stage_id

    def get_race_stages(self, race_id: int) -> list[int]:
        """Stage IDs of a race in racing order."""
        return list(self.store.get_race(race_id).stage_ids)

    def get_stage_length(self, stage_id: int) -> float:
        """Length of a stage in kilometres."""
        return self.store.get_stage(stage_id).length_km

    def remove_stage_by_id(self, stage_id: int) -> None:
        """Remove a stage with its checkpoints and results."""
        self.store.cascade_delete(EntityKind.STAGE, stage_id)
        logger.info(f"Removed stage {stage_id}")

    # Checkpoints

    def add_categorized_climb_to_stage(
        self,
        stage_id: int,
        location: float,
        checkpoint_type: CheckpointType,
        average_gradient: float,
        length: float,
    ) -> int:
        """Add a categorised climb to a stage and return its ID."""
        checkpoint_type = CheckpointType(checkpoint_type)
        if not checkpoint_type.is_climb:
            raise InvalidCheckpointTypeError(
                f"{checkpoint_type.value} is not a climb category"
            )
        return processor.add_checkpoint(
            self.store,
            stage_id,
            checkpoint_type,
            location,
            average_gradient=average_gradient,
            climb_length_km=length,
        )

    def add_intermediate_sprint_to_stage(self, stage_id: int, location: float) -> int:
        """Add an intermediate sprint to a stage and return its ID."""
        return processor.add_checkpoint(
            self.store, stage_id, CheckpointType.SPRINT, location
        )

    def remove_checkpoint(self, checkpoint_id: int) -> None:
        """Remove a checkpoint from a stage still being prepared."""
        processor.remove_checkpoint(self.store, checkpoint_id)

    def conclude_stage_preparation(self, stage_id: int) -> None:
        """Freeze a stage's checkpoints and open it for results."""
        processor.conclude_stage_preparation(self.store, stage_id)

    def get_stage_checkpoints(self, stage_id: int) -> list[int]:
        """Checkpoint IDs of a stage in location order."""
        return processor.get_stage_checkpoints(self.store, stage_id)

    # Teams and riders

    def create_team(self, name: str, description: str | None = None) -> int:
        """Create a team and return its ID."""
        self.store.check_team_name(name)
        team = Team(
            team_id=self.store.peek_id(EntityKind.TEAM),
            name=name,
            description=description,
        )
        self.store.add_team(team)
        logger.info(f"Created team {team.team_id} '{name}'")
        return team.team_id

    def remove_team(self, team_id: int) -> None:
        """Remove a team with its riders and their results."""
        plan = self.store.cascade_delete(EntityKind.TEAM, team_id)
        logger.info(f"Removed team {team_id} and {len(plan.rider_ids)} riders")

    def get_teams(self) -> list[int]:
        """IDs of all teams, in creation order."""
        return list(self.store.teams)

    def get_team_riders(self, team_id: int) -> list[int]:
        """IDs of a team's riders."""
        return list(self.store.get_team(team_id).rider_ids)

    def create_rider(self, team_id: int, name: str, year_of_birth: int) -> int:
        """
        Register a rider with a team.

        Raises:
            IDNotRecognisedError: Unknown team
            InvalidRiderError: Empty name or year of birth before 1900
        """
        self.store.get_team(team_id)
        if not name:
            raise InvalidRiderError("Rider name must not be empty")
        if year_of_birth < MIN_YEAR_OF_BIRTH:
            raise InvalidRiderError(
                f"Year of birth {year_of_birth} is before {MIN_YEAR_OF_BIRTH}"
            )

        rider = Rider(
            rider_id=self.store.peek_id(EntityKind.RIDER),
            team_id=team_id,
            name=name,
            year_of_birth=year_of_birth,
        )
        self.store.add_rider(rider)
        logger.info(f"Created rider {rider.rider_id} '{name}' in team {team_id}")
        return rider.rider_id

    def remove_rider(self, rider_id: int) -> None:
        """Remove a rider and all their results."""
        self.store.cascade_delete(EntityKind.RIDER, rider_id)
        logger.info(f"Removed rider {rider_id}")

    # Results

    def register_rider_results_in_stage(
        self,
        stage_id: int,
        rider_id: int,
        *checkpoint_times: time,
    ) -> None:
        """Record start, checkpoint and finish times for a rider in a stage."""
        processor.register_result(self.store, stage_id, rider_id, checkpoint_times)

    def get_rider_results_in_stage(self, stage_id: int, rider_id: int) -> list[time]:
        """Recorded timestamps then elapsed time for a rider, or an empty list."""
        return processor.get_rider_results(self.store, stage_id, rider_id)

    def get_rider_adjusted_elapsed_time_in_stage(
        self,
        stage_id: int,
        rider_id: int,
    ) -> timedelta | None:
        """Adjusted elapsed time for a rider, or None without a result."""
        return processor.get_adjusted_elapsed_time(
            self.store,
            stage_id,
            rider_id,
            gap_seconds=self.settings.group_gap_seconds,
        )

    def delete_rider_results_in_stage(self, stage_id: int, rider_id: int) -> None:
        """Remove a rider's result from a stage."""
        processor.delete_result(self.store, stage_id, rider_id)

    def get_riders_rank_in_stage(self, stage_id: int) -> list[int]:
        """Rider IDs ordered by real elapsed time."""
        return processor.rank_riders(self.store, stage_id)

    def get_ranked_adjusted_elapsed_times_in_stage(
        self,
        stage_id: int,
    ) -> list[timedelta]:
        """Adjusted elapsed times aligned with get_riders_rank_in_stage."""
        return processor.ranked_adjusted_elapsed_times(
            self.store,
            stage_id,
            gap_seconds=self.settings.group_gap_seconds,
        )

    def get_riders_points_in_stage(self, stage_id: int) -> list[int]:
        """Stage points aligned with get_riders_rank_in_stage."""
        return processor.stage_points(self.store, stage_id)

    def get_riders_mountain_points_in_stage(self, stage_id: int) -> list[int]:
        """Mountain points aligned with get_riders_rank_in_stage."""
        return processor.mountain_points(self.store, stage_id)

    # Platform state

    def erase_cycling_portal(self) -> None:
        """Remove everything and restart ID numbering."""
        self.store.clear()
        logger.info("Erased cycling portal")

    def save_cycling_portal(self, filename: str | Path | None = None) -> Path:
        """Save the full portal state (defaults to the configured state path)."""
        return save_portal_state(self.store, filename or self.settings.state_file)

    def load_cycling_portal(self, filename: str | Path | None = None) -> None:
        """Replace the portal state with a previously saved one."""
        self.store = load_portal_state(filename or self.settings.state_file)
