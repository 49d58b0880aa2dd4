"""Tests for the entity store."""

from datetime import datetime

import pytest

from cycling_portal.exceptions import (
    IDNotRecognisedError,
    InvalidNameError,
    NameAlreadyExistsError,
)
from cycling_portal.models import (
    Checkpoint,
    CheckpointType,
    Race,
    Result,
    Rider,
    Stage,
    StageType,
    Team,
)
from cycling_portal.store import EntityKind, EntityStore, IdCounters, validate_name
from tests.timing import at


def build_store() -> EntityStore:
    """
    Store with one race of two stages, one team of two riders, and results.

    Stage 1 has a checkpoint; both riders have results in both stages.
    """
    store = EntityStore()
    store.add_race(Race(race_id=1, name="Race"))
    for stage_id in (1, 2):
        store.add_stage(
            Stage(
                stage_id=stage_id,
                race_id=1,
                name=f"Stage{stage_id}",
                length_km=50,
                start_time=datetime(2026, 7, stage_id),
                stage_type=StageType.FLAT,
            )
        )
    store.add_checkpoint(
        Checkpoint(
            checkpoint_id=1,
            stage_id=1,
            checkpoint_type=CheckpointType.SPRINT,
            location_km=10,
        ),
        position=0,
    )
    store.add_team(Team(team_id=1, name="Team"))
    for rider_id in (1, 2):
        store.add_rider(
            Rider(rider_id=rider_id, team_id=1, name=f"R{rider_id}", year_of_birth=1990)
        )
        store.add_result(
            Result(
                stage_id=1, rider_id=rider_id, timestamps=[at(12), at(12, 5), at(13)]
            )
        )
        store.add_result(
            Result(stage_id=2, rider_id=rider_id, timestamps=[at(12), at(14)])
        )
    return store


class TestValidateName:
    """Tests for the shared name rule."""

    @pytest.mark.parametrize("name", ["Tour", "a", "x" * 30, "Giro-2026"])
    def test_valid_names(self, name: str):
        """Test names accepted by the rule."""
        assert validate_name(name) == name

    @pytest.mark.parametrize(
        "name", [None, "", "x" * 31, "Tour de France", "Tab\tName", "New\nLine"]
    )
    def test_invalid_names(self, name):
        """Test empty, long and whitespace names are rejected."""
        with pytest.raises(InvalidNameError):
            validate_name(name)


class TestIdCounters:
    """Tests for ID generation."""

    def test_ids_increment_per_kind(self):
        """Test each kind has its own sequence."""
        counters = IdCounters()
        assert counters.next_id(EntityKind.RACE) == 1
        assert counters.next_id(EntityKind.RACE) == 2
        assert counters.next_id(EntityKind.RIDER) == 1

    def test_peek_does_not_advance(self):
        """Test peeking leaves the counter alone."""
        counters = IdCounters()
        assert counters.peek_id(EntityKind.TEAM) == 1
        assert counters.peek_id(EntityKind.TEAM) == 1

    def test_seeded_counters(self):
        """Test counters can be seeded for deterministic IDs."""
        store = EntityStore(counters=IdCounters(stage=100))
        assert store.next_id(EntityKind.STAGE) == 100

    def test_ids_not_reused_after_delete(self):
        """Test removed IDs are never handed out again."""
        store = build_store()
        store.cascade_delete(EntityKind.RIDER, 2)
        assert store.peek_id(EntityKind.RIDER) == 3


class TestLookups:
    """Tests for lookup by ID."""

    def test_lookup_returns_none_for_unknown(self, store):
        """Test lookups return None for unknown IDs."""
        assert store.lookup_race(1) is None
        assert store.lookup_stage(1) is None
        assert store.lookup_checkpoint(1) is None
        assert store.lookup_team(1) is None
        assert store.lookup_rider(1) is None

    @pytest.mark.parametrize(
        "getter", ["get_race", "get_stage", "get_checkpoint", "get_team", "get_rider"]
    )
    def test_get_raises_for_unknown(self, store, getter: str):
        """Test get_* raises for unknown IDs."""
        with pytest.raises(IDNotRecognisedError):
            getattr(store, getter)(42)

    def test_stage_checkpoints_in_sequence_order(self):
        """Test checkpoints come back in stored order."""
        store = build_store()
        assert [c.checkpoint_id for c in store.stage_checkpoints(1)] == [1]
        assert store.stage_checkpoints(2) == []


class TestNameUniqueness:
    """Tests for name uniqueness checks."""

    def test_duplicate_race_name(self):
        """Test race names are unique."""
        store = build_store()
        with pytest.raises(NameAlreadyExistsError):
            store.check_race_name("Race")

    def test_duplicate_stage_name(self):
        """Test stage names are unique across the platform."""
        store = build_store()
        with pytest.raises(NameAlreadyExistsError):
            store.check_stage_name("Stage2")

    def test_duplicate_team_name(self):
        """Test team names are unique."""
        store = build_store()
        with pytest.raises(NameAlreadyExistsError):
            store.check_team_name("Team")

    def test_same_name_different_kinds(self):
        """Test a team may share a race's name."""
        store = build_store()
        assert store.check_team_name("Race") == "Race"


class TestCascadeDelete:
    """Tests for cascading deletion."""

    def test_delete_race_removes_everything_below(self):
        """Test race removal takes stages, checkpoints and results with it."""
        store = build_store()
        store.cascade_delete(EntityKind.RACE, 1)

        assert store.races == {}
        assert store.stages == {}
        assert store.checkpoints == {}
        assert store.results == {}
        assert len(store.riders) == 2

    def test_delete_stage_keeps_other_stages(self):
        """Test stage removal only touches that stage."""
        store = build_store()
        store.cascade_delete(EntityKind.STAGE, 1)

        assert store.races[1].stage_ids == [2]
        assert store.checkpoints == {}
        assert 1 not in store.results
        assert len(store.stage_results(2)) == 2

    def test_delete_checkpoint_invalidates_stage_results(self):
        """Test checkpoint removal drops that stage's results."""
        store = build_store()
        plan = store.cascade_delete(EntityKind.CHECKPOINT, 1)

        assert plan.invalidated_stage_ids == {1}
        assert store.stages[1].checkpoint_ids == []
        assert store.stage_results(1) == []
        assert len(store.stage_results(2)) == 2

    def test_delete_rider_removes_only_their_results(self):
        """Test rider removal drops their results across all stages."""
        store = build_store()
        store.cascade_delete(EntityKind.RIDER, 1)

        assert store.teams[1].rider_ids == [2]
        assert [r.rider_id for r in store.stage_results(1)] == [2]
        assert [r.rider_id for r in store.stage_results(2)] == [2]

    def test_delete_team_removes_riders_and_results(self):
        """Test team removal cascades to riders and their results."""
        store = build_store()
        store.cascade_delete(EntityKind.TEAM, 1)

        assert store.teams == {}
        assert store.riders == {}
        assert store.results == {}
        assert len(store.stages) == 2

    def test_unknown_id_leaves_store_unchanged(self):
        """Test a failed cascade delete changes nothing."""
        store = build_store()
        before = store.model_dump()

        with pytest.raises(IDNotRecognisedError):
            store.cascade_delete(EntityKind.STAGE, 99)

        assert store.model_dump() == before

    def test_plan_does_not_mutate(self):
        """Test planning a deletion leaves the store intact."""
        store = build_store()
        plan = store.plan_deletion(EntityKind.RACE, 1)

        assert plan.stage_ids == {1, 2}
        assert plan.checkpoint_ids == {1}
        assert len(store.stages) == 2


class TestClear:
    """Tests for erasing the store."""

    def test_clear_resets_entities_and_counters(self):
        """Test clear empties the store and restarts IDs."""
        store = build_store()
        store.clear()

        assert store.races == {}
        assert store.riders == {}
        assert store.results == {}
        assert store.peek_id(EntityKind.RACE) == 1
        assert store.peek_id(EntityKind.RIDER) == 1
