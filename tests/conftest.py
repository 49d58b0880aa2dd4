"""Pytest fixtures for cycling portal tests."""

from datetime import datetime

import pytest

from cycling_portal import CyclingPortal
from cycling_portal.config.settings import Settings
from cycling_portal.models import CheckpointType, StageType
from cycling_portal.store import EntityStore


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def store() -> EntityStore:
    """Create an empty entity store."""
    return EntityStore()


@pytest.fixture
def portal(store, settings) -> CyclingPortal:
    """Create an empty portal."""
    return CyclingPortal(store=store, settings=settings)


@pytest.fixture
def race_id(portal) -> int:
    """Create a race."""
    return portal.create_race("TourDeTest", "A test race")


@pytest.fixture
def flat_stage_id(portal, race_id) -> int:
    """
    20km flat stage with a sprint at 5km and a C2 climb at 15km.

    Preparation is still open.
    """
    stage_id = portal.add_stage_to_race(
        race_id,
        "FlatStage",
        "Flat with a late climb",
        20.0,
        datetime(2026, 7, 1, 12, 0),
        StageType.FLAT,
    )
    portal.add_intermediate_sprint_to_stage(stage_id, 5.0)
    portal.add_categorized_climb_to_stage(stage_id, 15.0, CheckpointType.C2, 5.5, 2.0)
    return stage_id


@pytest.fixture
def time_trial_stage_id(portal, race_id) -> int:
    """Time trial stage, waiting for results."""
    stage_id = portal.add_stage_to_race(
        race_id,
        "Chrono",
        None,
        30.0,
        datetime(2026, 7, 2, 12, 0),
        StageType.TIME_TRIAL,
    )
    portal.conclude_stage_preparation(stage_id)
    return stage_id


@pytest.fixture
def team_id(portal) -> int:
    """Create a team."""
    return portal.create_team("Velocio", "Test team")


@pytest.fixture
def rider_ids(portal, team_id) -> list[int]:
    """Create three riders in the same team."""
    return [
        portal.create_rider(team_id, "Alice Sprinter", 1995),
        portal.create_rider(team_id, "Bob Climber", 1990),
        portal.create_rider(team_id, "Carol Rouleur", 1998),
    ]
