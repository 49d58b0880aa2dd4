"""Points tables for stage finishes, intermediate sprints and climbs."""

from cycling_portal.models.checkpoint import CheckpointType
from cycling_portal.models.race import StageType

# Finish points by stage type, indexed by finish rank
FINISH_POINTS: dict[StageType, tuple[int, ...]] = {
    StageType.FLAT: (50, 30, 20, 18, 16, 14, 12, 10, 8, 7, 6, 5, 4, 3, 2),
    StageType.HILLY: (30, 25, 22, 19, 17, 15, 13, 11, 9, 7, 6, 5, 4, 3, 2),
    StageType.MOUNTAIN: (20, 17, 15, 13, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1),
    StageType.TIME_TRIAL: (12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1),
}

# Points for each intermediate sprint, indexed by crossing order
SPRINT_POINTS: tuple[int, ...] = (20, 17, 15, 13, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1)

# Mountain points by climb category, indexed by crossing order
MOUNTAIN_POINTS: dict[CheckpointType, tuple[int, ...]] = {
    CheckpointType.HC: (20, 15, 12, 10, 8, 6, 4, 2),
    CheckpointType.C1: (10, 8, 6, 4, 2, 1),
    CheckpointType.C2: (5, 3, 2, 1),
    CheckpointType.C3: (2, 1),
    CheckpointType.C4: (1,),
}


def points_for_position(table: tuple[int, ...], position: int) -> int:
    """Points for a 1-based position; 0 beyond the end of the table."""
    if position < 1 or position > len(table):
        return 0
    return table[position - 1]
