"""Pets resource: a paginated, filterable list and single-item lookup."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from api_skeleton.api.pagination import PageLinkBuilder, PageRequest, paginate
from api_skeleton.api.pagination.dependencies import get_link_builder, get_page_request
from api_skeleton.api.pagination.links import public_url
from api_skeleton.api.schemas.errors import ErrorResponse
from api_skeleton.api.schemas.pets import (
    PetCollectionDocument,
    PetDocument,
    serialize_pet,
)
from api_skeleton.api.validation import ValidatedRoute
from api_skeleton.core.config import Settings
from api_skeleton.core.exceptions import NotFoundError
from api_skeleton.infrastructure.data_source import Pet, PetRepository

router = APIRouter(prefix="/pets", tags=["pets"], route_class=ValidatedRoute)


def _pet_link(request: Request, pet: Pet) -> str:
    settings: Settings = request.app.state.settings
    return str(
        public_url(request.url_for("get_pet", pet_id=pet.id), settings.api_base_url)
    )


@router.get(
    "",
    response_model=None,
    responses={
        200: {"model": PetCollectionDocument},
        400: {"model": ErrorResponse},
    },
)
async def list_pets(
    request: Request,
    repository: PetRepository,
    page: Annotated[PageRequest, Depends(get_page_request)],
    links: Annotated[PageLinkBuilder, Depends(get_link_builder)],
    species: Annotated[
        str | None, Query(description="Only pets of this species")
    ] = None,
) -> dict[str, Any]:
    """List pets one page at a time.

    Args:
        request: The incoming request.
        repository: Pet records.
        page: Requested page from ``page[number]`` and ``page[size]``.
        links: Link builder bound to the request URL.
        species: Optional species filter.

    Returns:
        dict[str, Any]: A pet collection document.
    """
    rows = repository.filter_by(species=species)
    result = paginate(rows, page, links)

    return {
        "links": {
            "self": links.self_link(),
            **result.pagination_links.model_dump(),
        },
        "data": [
            serialize_pet(pet, _pet_link(request, pet))
            for pet in result.paginated_rows
        ],
    }


@router.get(
    "/{pet_id}",
    response_model=None,
    responses={
        200: {"model": PetDocument},
        404: {"model": ErrorResponse},
    },
)
async def get_pet(
    request: Request,
    pet_id: str,
    repository: PetRepository,
) -> dict[str, Any]:
    """Fetch a single pet.

    Raises:
        NotFoundError: If no pet has ``pet_id``.
    """
    pet = repository.get_by_id(pet_id)
    if pet is None:
        raise NotFoundError(f"Pet {pet_id} not found", context={"pet_id": pet_id})

    self_link = _pet_link(request, pet)
    return {"links": {"self": self_link}, "data": serialize_pet(pet, self_link)}
