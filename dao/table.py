"""
dao/table.py
------------
Schema description types: column descriptors and row filters.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Optional, Sequence, Union

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def check_identifier(name: str) -> str:
    """
    Ensure `name` is a bare SQL identifier.

    Raises:
        ValueError: If the name contains anything besides letters, digits and underscores.
    """
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise ValueError(f"Not a valid SQL identifier: {name!r}")
    return name


class AttrRole(str, Enum):
    """Role of a column within its table."""
    IDENTITY = "identity"
    REQUIRED = "required"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class TableAttr:
    """
    Describes one column of a table.

    Attributes:
        name: Column name, also the entity attribute it maps to.
        role: Identity, required or optional column.
    """
    name: str
    role: AttrRole = AttrRole.OPTIONAL

    def __post_init__(self):
        check_identifier(self.name)

    @property
    def is_identity(self) -> bool:
        return self.role is AttrRole.IDENTITY

    def __str__(self) -> str:
        return self.name


class Filter:
    """
    Ordered conjunction of ``attribute = value`` predicates.

    Order matters only for parameter binding. A ``None`` value matches
    NULL columns (``IS NULL``).
    """

    def __init__(self, predicates: Optional[Iterable[tuple]] = None):
        self._predicates: list[tuple[str, Any]] = []
        for attr, value in predicates or ():
            self.add(attr, value)

    def add(self, attr: Union[TableAttr, str], value: Any) -> "Filter":
        """Append a predicate and return the filter for chaining."""
        name = attr.name if isinstance(attr, TableAttr) else attr
        self._predicates.append((name, value))
        return self

    def attr_name(self, index: int) -> str:
        return self._predicates[index][0]

    def value(self, index: int) -> Any:
        return self._predicates[index][1]

    def attr_names(self) -> list[str]:
        return [name for name, _ in self._predicates]

    def __len__(self) -> int:
        return len(self._predicates)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._predicates)

    def __eq__(self, other) -> bool:
        return isinstance(other, Filter) and self._predicates == other._predicates

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={value!r}" for name, value in self._predicates)
        return f"Filter({body})"


def validate_filter(filter: Filter, allowable_attributes: Sequence[TableAttr]) -> bool:
    """
    Check that every attribute named by `filter` is one of `allowable_attributes`.

    Returns:
        True if the filter can be run against a table with these attributes.
    """
    allowed = {attr.name for attr in allowable_attributes}
    return all(name in allowed for name in filter.attr_names())
