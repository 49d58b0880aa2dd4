"""In-memory arena of portal entities keyed by integer ID."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field

from cycling_portal.exceptions import (
    IDNotRecognisedError,
    InvalidNameError,
    NameAlreadyExistsError,
)
from cycling_portal.models.checkpoint import Checkpoint
from cycling_portal.models.race import Race, Stage
from cycling_portal.models.result import Result
from cycling_portal.models.team import Rider, Team

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 30


class EntityKind(str, Enum):
    """Kinds of entity held by the store, each with its own ID sequence."""

    RACE = "race"
    STAGE = "stage"
    CHECKPOINT = "checkpoint"
    TEAM = "team"
    RIDER = "rider"


class IdCounters(BaseModel):
    """Next unused ID for each entity kind. IDs are never reused."""

    race: int = Field(default=1, ge=1)
    stage: int = Field(default=1, ge=1)
    checkpoint: int = Field(default=1, ge=1)
    team: int = Field(default=1, ge=1)
    rider: int = Field(default=1, ge=1)

    def peek_id(self, kind: EntityKind) -> int:
        """Get the ID the next entity of this kind will receive."""
        return getattr(self, kind.value)

    def next_id(self, kind: EntityKind) -> int:
        """Hand out the next ID for this kind and advance the counter."""
        entity_id = self.peek_id(kind)
        setattr(self, kind.value, entity_id + 1)
        return entity_id

    def claim(self, kind: EntityKind, entity_id: int) -> None:
        """Make sure the counter has moved past an ID already in use."""
        if entity_id >= self.peek_id(kind):
            setattr(self, kind.value, entity_id + 1)


def validate_name(name: str | None) -> str:
    """
    Check a race, stage or team name.

    Args:
        name: Candidate name

    Returns:
        The name, unchanged

    Raises:
        InvalidNameError: If the name is empty, too long or contains whitespace
    """
    if not name or len(name) > MAX_NAME_LENGTH:
        raise InvalidNameError(f"Name must be 1-{MAX_NAME_LENGTH} characters: {name!r}")
    if any(c.isspace() for c in name):
        raise InvalidNameError(f"Name must not contain whitespace: {name!r}")
    return name


@dataclass
class DeletionPlan:
    """Every entity a cascade delete will remove, collected before any removal."""

    race_ids: set[int] = field(default_factory=set)
    stage_ids: set[int] = field(default_factory=set)
    checkpoint_ids: set[int] = field(default_factory=set)
    team_ids: set[int] = field(default_factory=set)
    rider_ids: set[int] = field(default_factory=set)
    # Stages whose results are invalidated without the stage being removed
    invalidated_stage_ids: set[int] = field(default_factory=set)


class EntityStore(BaseModel):
    """
    Arena of races, stages, checkpoints, teams, riders and results.

    Ownership is expressed through back-references (a stage stores its race ID,
    a rider its team ID) plus ordered child ID lists on the parent. Results are
    keyed by stage ID, then rider ID.
    """

    counters: IdCounters = Field(default_factory=IdCounters)
    races: dict[int, Race] = Field(default_factory=dict)
    stages: dict[int, Stage] = Field(default_factory=dict)
    checkpoints: dict[int, Checkpoint] = Field(default_factory=dict)
    teams: dict[int, Team] = Field(default_factory=dict)
    riders: dict[int, Rider] = Field(default_factory=dict)
    results: dict[int, dict[int, Result]] = Field(default_factory=dict)

    # Lookups

    def lookup_race(self, race_id: int) -> Race | None:
        """Find a race by ID."""
        return self.races.get(race_id)

    def lookup_stage(self, stage_id: int) -> Stage | None:
        """Find a stage by ID."""
        return self.stages.get(stage_id)

    def lookup_checkpoint(self, checkpoint_id: int) -> Checkpoint | None:
        """Find a checkpoint by ID."""
        return self.checkpoints.get(checkpoint_id)

    def lookup_team(self, team_id: int) -> Team | None:
        """Find a team by ID."""
        return self.teams.get(team_id)

    def lookup_rider(self, rider_id: int) -> Rider | None:
        """Find a rider by ID."""
        return self.riders.get(rider_id)

    def get_race(self, race_id: int) -> Race:
        """Get a race, raising if the ID is unknown."""
        race = self.lookup_race(race_id)
        if race is None:
            raise IDNotRecognisedError(f"Race ID not recognised: {race_id}")
        return race

    def get_stage(self, stage_id: int) -> Stage:
        """Get a stage, raising if the ID is unknown."""
        stage = self.lookup_stage(stage_id)
        if stage is None:
            raise IDNotRecognisedError(f"Stage ID not recognised: {stage_id}")
        return stage

    def get_checkpoint(self, checkpoint_id: int) -> Checkpoint:
        """Get a checkpoint, raising if the ID is unknown."""
        checkpoint = self.lookup_checkpoint(checkpoint_id)
        if checkpoint is None:
            raise IDNotRecognisedError(f"Checkpoint ID not recognised: {checkpoint_id}")
        return checkpoint

    def get_team(self, team_id: int) -> Team:
        """Get a team, raising if the ID is unknown."""
        team = self.lookup_team(team_id)
        if team is None:
            raise IDNotRecognisedError(f"Team ID not recognised: {team_id}")
        return team

    def get_rider(self, rider_id: int) -> Rider:
        """Get a rider, raising if the ID is unknown."""
        rider = self.lookup_rider(rider_id)
        if rider is None:
            raise IDNotRecognisedError(f"Rider ID not recognised: {rider_id}")
        return rider

    def get_result(self, stage_id: int, rider_id: int) -> Result | None:
        """Find a rider's result in a stage."""
        return self.results.get(stage_id, {}).get(rider_id)

    def stage_results(self, stage_id: int) -> list[Result]:
        """All results registered for a stage."""
        return list(self.results.get(stage_id, {}).values())

    def stage_checkpoints(self, stage_id: int) -> list[Checkpoint]:
        """A stage's checkpoints in location order."""
        stage = self.get_stage(stage_id)
        return [self.checkpoints[cp_id] for cp_id in stage.checkpoint_ids]

    def next_id(self, kind: EntityKind) -> int:
        """Hand out the next unused ID for an entity kind."""
        return self.counters.next_id(kind)

    def peek_id(self, kind: EntityKind) -> int:
        """Get the ID the next entity of this kind will receive."""
        return self.counters.peek_id(kind)

    # Name rules

    def check_race_name(self, name: str | None) -> str:
        """Validate a new race name and check it is not taken."""
        validate_name(name)
        if any(race.name == name for race in self.races.values()):
            raise NameAlreadyExistsError(f"Race name already exists: {name}")
        return name

    def check_stage_name(self, name: str | None) -> str:
        """Validate a new stage name and check it is not taken platform-wide."""
        validate_name(name)
        if any(stage.name == name for stage in self.stages.values()):
            raise NameAlreadyExistsError(f"Stage name already exists: {name}")
        return name

    def check_team_name(self, name: str | None) -> str:
        """Validate a new team name and check it is not taken."""
        validate_name(name)
        if any(team.name == name for team in self.teams.values()):
            raise NameAlreadyExistsError(f"Team name already exists: {name}")
        return name

    # Insertion (callers validate first)

    def add_race(self, race: Race) -> None:
        """Store a new race."""
        self.counters.claim(EntityKind.RACE, race.race_id)
        self.races[race.race_id] = race

    def add_stage(self, stage: Stage) -> None:
        """Store a new stage and append it to its race's racing order."""
        race = self.get_race(stage.race_id)
        self.counters.claim(EntityKind.STAGE, stage.stage_id)
        self.stages[stage.stage_id] = stage
        race.stage_ids.append(stage.stage_id)

    def add_checkpoint(self, checkpoint: Checkpoint, position: int) -> None:
        """Store a new checkpoint at a position in its stage's sequence."""
        stage = self.get_stage(checkpoint.stage_id)
        self.counters.claim(EntityKind.CHECKPOINT, checkpoint.checkpoint_id)
        self.checkpoints[checkpoint.checkpoint_id] = checkpoint
        stage.checkpoint_ids.insert(position, checkpoint.checkpoint_id)

    def add_team(self, team: Team) -> None:
        """Store a new team."""
        self.counters.claim(EntityKind.TEAM, team.team_id)
        self.teams[team.team_id] = team

    def add_rider(self, rider: Rider) -> None:
        """Store a new rider and add them to their team."""
        team = self.get_team(rider.team_id)
        self.counters.claim(EntityKind.RIDER, rider.rider_id)
        self.riders[rider.rider_id] = rider
        team.rider_ids.append(rider.rider_id)

    def add_result(self, result: Result) -> None:
        """Store a result for a (stage, rider) pair."""
        self.results.setdefault(result.stage_id, {})[result.rider_id] = result

    def remove_result(self, stage_id: int, rider_id: int) -> Result | None:
        """Remove a single result, returning it if it existed."""
        stage_results = self.results.get(stage_id)
        if not stage_results or rider_id not in stage_results:
            return None
        result = stage_results.pop(rider_id)
        if not stage_results:
            del self.results[stage_id]
        return result

    # Cascading deletion

    def plan_deletion(self, kind: EntityKind, entity_id: int) -> DeletionPlan:
        """
        Collect everything that removing an entity removes.

        Args:
            kind: Kind of the entity being removed
            entity_id: Its ID

        Returns:
            DeletionPlan listing the entity and all its dependants

        Raises:
            IDNotRecognisedError: If the entity does not exist
        """
        plan = DeletionPlan()

        if kind == EntityKind.RACE:
            race = self.get_race(entity_id)
            plan.race_ids.add(entity_id)
            for stage_id in race.stage_ids:
                self._plan_stage(stage_id, plan)
        elif kind == EntityKind.STAGE:
            self.get_stage(entity_id)
            self._plan_stage(entity_id, plan)
        elif kind == EntityKind.CHECKPOINT:
            checkpoint = self.get_checkpoint(entity_id)
            plan.checkpoint_ids.add(entity_id)
            plan.invalidated_stage_ids.add(checkpoint.stage_id)
        elif kind == EntityKind.TEAM:
            team = self.get_team(entity_id)
            plan.team_ids.add(entity_id)
            plan.rider_ids.update(team.rider_ids)
        elif kind == EntityKind.RIDER:
            self.get_rider(entity_id)
            plan.rider_ids.add(entity_id)

        return plan

    def _plan_stage(self, stage_id: int, plan: DeletionPlan) -> None:
        stage = self.stages[stage_id]
        plan.stage_ids.add(stage_id)
        plan.checkpoint_ids.update(stage.checkpoint_ids)

    def apply_deletion(self, plan: DeletionPlan) -> None:
        """Remove everything in a deletion plan. Never raises for planned IDs."""
        # Results first so nothing ever references a missing stage or rider
        for stage_id in plan.stage_ids | plan.invalidated_stage_ids:
            self.results.pop(stage_id, None)
        if plan.rider_ids:
            for stage_id in list(self.results):
                for rider_id in plan.rider_ids:
                    self.results[stage_id].pop(rider_id, None)
                if not self.results[stage_id]:
                    del self.results[stage_id]

        for checkpoint_id in plan.checkpoint_ids:
            checkpoint = self.checkpoints.pop(checkpoint_id)
            stage = self.stages[checkpoint.stage_id]
            if checkpoint_id in stage.checkpoint_ids:
                stage.checkpoint_ids.remove(checkpoint_id)

        for stage_id in plan.stage_ids:
            stage = self.stages.pop(stage_id)
            race = self.races.get(stage.race_id)
            if race is not None and stage_id in race.stage_ids:
                race.stage_ids.remove(stage_id)

        for race_id in plan.race_ids:
            del self.races[race_id]

        for rider_id in plan.rider_ids:
            rider = self.riders.pop(rider_id)
            team = self.teams.get(rider.team_id)
            if team is not None and rider_id in team.rider_ids:
                team.rider_ids.remove(rider_id)

        for team_id in plan.team_ids:
            del self.teams[team_id]

    def cascade_delete(self, kind: EntityKind, entity_id: int) -> DeletionPlan:
        """
        Remove an entity and everything that depends on it.

        The full set of dependants is collected before anything is removed, so
        an unknown ID leaves the store untouched.

        Returns:
            The applied DeletionPlan
        """
        plan = self.plan_deletion(kind, entity_id)
        self.apply_deletion(plan)
        logger.debug(
            f"Cascade delete {kind.value} {entity_id}: "
            f"{len(plan.stage_ids)} stages, {len(plan.checkpoint_ids)} checkpoints, "
            f"{len(plan.rider_ids)} riders"
        )
        return plan

    def clear(self) -> None:
        """Remove every entity and reset all ID counters."""
        self.counters = IdCounters()
        self.races.clear()
        self.stages.clear()
        self.checkpoints.clear()
        self.teams.clear()
        self.riders.clear()
        self.results.clear()
