"""Rider stage result data model."""

from datetime import time, timedelta

from pydantic import BaseModel, Field, computed_field

# Elapsed times are assumed to be shorter than a day
ONE_DAY = timedelta(days=1)


class Result(BaseModel):
    """
    Raw checkpoint timestamps for one rider in one stage.

    Timestamps are stored exactly as registered: start, one per checkpoint in
    location order, then finish.
    """

    stage_id: int = Field(..., ge=1)
    rider_id: int = Field(..., ge=1)
    timestamps: list[time] = Field(..., min_length=2)

    @computed_field
    @property
    def elapsed_time(self) -> timedelta:
        """Real elapsed time, finish minus start, wrapping past midnight."""
        elapsed = time_to_timedelta(self.timestamps[-1]) - time_to_timedelta(
            self.timestamps[0]
        )
        return elapsed % ONE_DAY

    @computed_field
    @property
    def elapsed_time_display(self) -> str:
        """Format elapsed time as H:MM:SS(.fff)."""
        return format_elapsed(self.elapsed_time)

    def checkpoint_timestamp(self, index: int) -> time:
        """Timestamp at the index-th checkpoint (0-based, start excluded)."""
        return self.timestamps[index + 1]


def time_to_timedelta(value: time) -> timedelta:
    """Convert a time of day to the offset since midnight."""
    return timedelta(
        hours=value.hour,
        minutes=value.minute,
        seconds=value.second,
        microseconds=value.microsecond,
    )


def format_elapsed(elapsed: timedelta) -> str:
    """Format an elapsed time as H:MM:SS, with milliseconds when present."""
    negative = elapsed < timedelta(0)
    elapsed = abs(elapsed)
    total_seconds = int(elapsed.total_seconds())
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60
    millis = elapsed.microseconds // 1000

    display = f"{hours}:{minutes:02d}:{secs:02d}"
    if millis:
        display += f".{millis:03d}"
    return f"-{display}" if negative else display


def timedelta_to_time(elapsed: timedelta) -> time:
    """Express an elapsed time under a day as a time of day."""
    elapsed = elapsed % ONE_DAY
    total_seconds = int(elapsed.total_seconds())
    return time(
        total_seconds // 3600,
        (total_seconds % 3600) // 60,
        total_seconds % 60,
        elapsed.microseconds,
    )
