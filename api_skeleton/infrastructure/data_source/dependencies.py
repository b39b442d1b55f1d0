"""FastAPI dependency injection helpers for the data source."""

from typing import Annotated

from fastapi import Depends, Request

from api_skeleton.infrastructure.data_source.models import Pet
from api_skeleton.infrastructure.data_source.repository import InMemoryRepository


def get_pet_repository(request: Request) -> InMemoryRepository[Pet]:
    """Return the pet repository loaded during application startup."""
    repository: InMemoryRepository[Pet] = request.app.state.pet_repository
    return repository


PetRepository = Annotated[InMemoryRepository[Pet], Depends(get_pet_repository)]
