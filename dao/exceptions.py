"""
dao/exceptions.py
-----------------
Error taxonomy of the data access layer.

Driver errors (psycopg2.Error) never leave the DAO raw: they are wrapped in
InternalDAOError with the original error chained as ``__cause__``.
"""

from typing import Optional


class DAOError(Exception):
    """Base exception for all data-access errors."""


class InvalidEntityError(DAOError):
    """An entity is not fit for the requested operation (insert validation, missing id)."""

    def __init__(self, entity, message: Optional[str] = None):
        self.entity = entity
        super().__init__(message or f"Invalid entity: {entity!r}")


class InvalidRequestError(DAOError):
    """A request (filter) does not match the table it is run against."""


class InternalDAOError(DAOError):
    """The database failed to execute a statement."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Internal database error: {cause}")
        self.__cause__ = cause


class EntityMappingError(DAOError):
    """A result row could not be turned into an entity."""


def filter_doesnt_match_table_message(table_name: str, filter) -> str:
    return f"Filter {filter!r} references attributes missing from table '{table_name}'"


def entity_doesnt_contain_id_message(entity) -> str:
    return f"Entity {entity!r} doesn't contain an id"


def entity_rejected_for_insert_message(table_name: str, entity) -> str:
    return f"Entity {entity!r} failed validation for insert into '{table_name}'"
