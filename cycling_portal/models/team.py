"""Team and rider data models."""

from pydantic import BaseModel, Field


class Rider(BaseModel):
    """A rider, registered with exactly one team."""

    rider_id: int = Field(..., ge=1)
    team_id: int = Field(..., ge=1, description="Owning team ID")
    name: str = Field(..., min_length=1)
    year_of_birth: int = Field(..., ge=1900)


class Team(BaseModel):
    """A team and the IDs of its riders."""

    team_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    description: str | None = Field(default=None)
    rider_ids: list[int] = Field(default_factory=list)
