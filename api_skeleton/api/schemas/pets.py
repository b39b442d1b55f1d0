"""JSON:API style documents for the pets resource.

These models are the declared response schemas of the pets routes; the
response validator checks outgoing bodies against them.
"""

from typing import Literal

from pydantic import BaseModel, Field

from api_skeleton.api.pagination.paginator import PaginationLinks
from api_skeleton.infrastructure.data_source.models import Pet


class SelfLink(BaseModel):
    """Link to the resource itself."""

    self: str = Field(..., description="URI of this resource")


class CollectionLinks(PaginationLinks):
    """Links of a paginated collection document."""

    self: str = Field(..., description="URI of the current request")


class PetAttributes(BaseModel):
    """Attributes of a pet resource."""

    name: str = Field(..., examples=["Rex"])
    species: str = Field(..., examples=["dog"])
    owner: str | None = Field(default=None, examples=["Alice"])


class PetResource(BaseModel):
    """A single pet resource object."""

    type: Literal["pet"] = "pet"
    id: str = Field(..., examples=["1"])
    attributes: PetAttributes
    links: SelfLink


class PetCollectionDocument(BaseModel):
    """Paginated list of pets."""

    links: CollectionLinks
    data: list[PetResource]


class PetDocument(BaseModel):
    """A single pet."""

    links: SelfLink
    data: PetResource


def serialize_pet(pet: Pet, self_link: str) -> dict[str, object]:
    """Build the resource object of ``pet``.

    Args:
        pet: The record.
        self_link: URI of the pet resource.

    Returns:
        dict[str, object]: The JSON:API resource object.
    """
    return {
        "type": "pet",
        "id": pet.id,
        "attributes": {"name": pet.name, "species": pet.species, "owner": pet.owner},
        "links": {"self": self_link},
    }
