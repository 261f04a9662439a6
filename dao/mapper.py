"""
dao/mapper.py
-------------
Entity capability set consumed by EntityDAO.

A mapper knows how one entity type is validated, turned into bound
parameters, rebuilt from a result row, and which of its values are absent.
EntityDAO is written once against this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, Protocol, Sequence, TypeVar

from dao.exceptions import EntityMappingError
from dao.table import AttrRole, TableAttr


class Identifiable(Protocol):
    """Anything with a surrogate key that is None until first persisted."""
    id: Optional[int]


T = TypeVar("T", bound=Identifiable)


class EntityMapper(ABC, Generic[T]):
    """Per-entity hooks used by EntityDAO."""

    @abstractmethod
    def validate_for_insert(self, entity: T) -> bool:
        """Return True if `entity` may be inserted (e.g. required fields are set)."""

    @abstractmethod
    def bind_attributes(self, entity: T, skip_identity: bool) -> list[Any]:
        """
        Parameter values of `entity` in table attribute order.

        Args:
            entity: The entity to bind.
            skip_identity: Leave the identity value out of the list.
        """

    @abstractmethod
    def materialize(self, row: Sequence[Any]) -> T:
        """
        Build an entity from a result row (columns in table attribute order).

        Raises:
            EntityMappingError: If the row cannot be mapped.
        """

    @abstractmethod
    def null_attribute_mask(self, entity: T) -> list[bool]:
        """One flag per table attribute, True where the entity's value is absent."""


class AttributeMapper(EntityMapper[T]):
    """
    Mapper for dataclass-like entities whose attribute names equal the column names.

    By default an entity is valid for insert when every REQUIRED column has
    a value; subclasses extend `validate_for_insert` with their own rules.
    """

    def __init__(self, entity_cls: type, table_attributes: Sequence[TableAttr], id_attr: TableAttr):
        self.entity_cls = entity_cls
        self.table_attributes = tuple(table_attributes)
        self.id_attr = id_attr

    def validate_for_insert(self, entity: T) -> bool:
        return all(
            getattr(entity, attr.name) is not None
            for attr in self.table_attributes
            if attr.role is AttrRole.REQUIRED
        )

    def bind_attributes(self, entity: T, skip_identity: bool) -> list[Any]:
        return [
            getattr(entity, attr.name)
            for attr in self.table_attributes
            if not (skip_identity and attr.name == self.id_attr.name)
        ]

    def materialize(self, row: Sequence[Any]) -> T:
        if len(row) != len(self.table_attributes):
            raise EntityMappingError(
                f"Row has {len(row)} columns, {self.entity_cls.__name__} expects {len(self.table_attributes)}"
            )
        values = {attr.name: value for attr, value in zip(self.table_attributes, row)}
        try:
            return self.entity_cls(**values)
        except (TypeError, ValueError) as e:
            raise EntityMappingError(f"Cannot build {self.entity_cls.__name__} from row: {e}") from e

    def null_attribute_mask(self, entity: T) -> list[bool]:
        return [getattr(entity, attr.name) is None for attr in self.table_attributes]
