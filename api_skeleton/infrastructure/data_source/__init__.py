"""In-memory data source backing the example resource.

- **models**: record types
- **repository**: read-only lookups over loaded records
- **loader**: reading and validating the JSON file at startup
- **dependencies**: FastAPI dependency injection helpers
"""

from api_skeleton.infrastructure.data_source.dependencies import (
    PetRepository,
    get_pet_repository,
)
from api_skeleton.infrastructure.data_source.loader import DataSourceError, load_pets
from api_skeleton.infrastructure.data_source.models import Pet
from api_skeleton.infrastructure.data_source.repository import InMemoryRepository

__all__ = [
    "DataSourceError",
    "InMemoryRepository",
    "Pet",
    "PetRepository",
    "get_pet_repository",
    "load_pets",
]
