"""Loading and validating the JSON data source at startup."""

from pathlib import Path

import orjson
from loguru import logger
from pydantic import TypeAdapter

from api_skeleton.infrastructure.data_source.models import Pet
from api_skeleton.infrastructure.data_source.repository import InMemoryRepository

_pet_list = TypeAdapter(list[Pet])


class DataSourceError(RuntimeError):
    """The data source is missing or does not hold valid records."""


def load_pets(path: Path) -> InMemoryRepository[Pet]:
    """Read the pet records from ``path``.

    The file must contain a JSON array of pet objects.

    Args:
        path: Location of the JSON file.

    Returns:
        InMemoryRepository[Pet]: Repository over the records, in file order.

    Raises:
        DataSourceError: If the file cannot be read, is not JSON, or holds
            invalid or duplicate records.
    """
    try:
        raw = orjson.loads(path.read_bytes())
        pets = _pet_list.validate_python(raw)
        repository = InMemoryRepository(pets)
    except OSError as exc:
        msg = f"Cannot read data source {path}: {exc}"
        raise DataSourceError(msg) from exc
    except ValueError as exc:
        # orjson.JSONDecodeError and pydantic.ValidationError are ValueErrors
        msg = f"Invalid data source {path}: {exc}"
        raise DataSourceError(msg) from exc

    logger.info("Loaded {} pets from {}", repository.count(), path)
    return repository
