"""Read-only repository over records loaded into memory.

The repository mirrors the lookup operations of a database-backed one
(``get_by_id``, ``filter_by``, ``count``) so route handlers do
not depend on where the rows come from. The rows are never mutated; every
query returns a new list in the original order.
"""

from collections.abc import Iterable

from pydantic import BaseModel


class InMemoryRepository[T: BaseModel]:
    """Lookups over an ordered, immutable collection of records.

    Args:
        rows: The records, in the order they should be listed.
        id_field: Name of the unique identifier attribute.
    """

    def __init__(self, rows: Iterable[T], id_field: str = "id") -> None:
        self._rows: tuple[T, ...] = tuple(rows)
        self._id_field = id_field
        self._index = {getattr(row, id_field): row for row in self._rows}
        if len(self._index) != len(self._rows):
            msg = f"Duplicate {id_field} values in data source"
            raise ValueError(msg)

    def get_by_id(self, entity_id: str) -> T | None:
        """Return the record with ``entity_id`` or None."""
        return self._index.get(entity_id)

    def filter_by(self, **kwargs: object) -> list[T]:
        """Return records whose attributes equal every given value.

        Filters whose value is None are ignored.

        Raises:
            AttributeError: If a filter names an unknown attribute.
        """
        filters = {key: value for key, value in kwargs.items() if value is not None}
        for key in filters:
            if self._rows and not hasattr(self._rows[0], key):
                msg = f"Unknown filter field: {key}"
                raise AttributeError(msg)
        return [
            row
            for row in self._rows
            if all(getattr(row, key) == value for key, value in filters.items())
        ]

    def count(self) -> int:
        """Return the number of records."""
        return len(self._rows)
