"""
dao/ - Generic Data Access Layer
================================
Maps typed entities onto rows of a single table with generated,
parameterized SQL. Concrete entity DAOs live in `repositories/`.
"""

from dao.entity_dao import EntityDAO
from dao.exceptions import (
    DAOError,
    EntityMappingError,
    InternalDAOError,
    InvalidEntityError,
    InvalidRequestError,
)
from dao.mapper import AttributeMapper, EntityMapper, Identifiable
from dao.table import AttrRole, Filter, TableAttr, validate_filter

__all__ = [
    "AttrRole",
    "AttributeMapper",
    "DAOError",
    "EntityDAO",
    "EntityMapper",
    "EntityMappingError",
    "Filter",
    "Identifiable",
    "InternalDAOError",
    "InvalidEntityError",
    "InvalidRequestError",
    "TableAttr",
    "validate_filter",
]
