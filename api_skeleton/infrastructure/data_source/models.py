"""Records held by the in-memory data source."""

from pydantic import BaseModel, ConfigDict, Field


class Pet(BaseModel):
    """A pet record as stored in the data file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(..., min_length=1, description="Unique identifier")
    name: str = Field(..., min_length=1, description="Name of the pet")
    species: str = Field(..., min_length=1, description="Species, e.g. dog or cat")
    owner: str | None = Field(default=None, description="Name of the owner")
