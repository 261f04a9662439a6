"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
All users live in the `users` table.
"""

from typing import Optional

from dao.entity_dao import EntityDAO
from dao.mapper import AttributeMapper
from dao.table import AttrRole, Filter, TableAttr
from db.connection import ConnectionPool
from models.user import ROLES, User

USERS_TABLE = "users"

ID = TableAttr("id", AttrRole.IDENTITY)
LOGIN = TableAttr("login", AttrRole.REQUIRED)
PASSWORD_HASH = TableAttr("password_hash", AttrRole.REQUIRED)
NAME = TableAttr("name")
SURNAME = TableAttr("surname")
EMAIL = TableAttr("email", AttrRole.REQUIRED)
ROLE = TableAttr("role", AttrRole.REQUIRED)

USER_ATTRIBUTES = (ID, LOGIN, PASSWORD_HASH, NAME, SURNAME, EMAIL, ROLE)


class UserMapper(AttributeMapper[User]):
    """Maps `User` dataclasses onto `users` rows."""

    def __init__(self):
        super().__init__(User, USER_ATTRIBUTES, ID)

    def validate_for_insert(self, user: User) -> bool:
        if not super().validate_for_insert(user):
            return False
        return user.role in ROLES and "@" in user.email


class UserDAO(EntityDAO[User]):
    """DAO for the users table."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        super().__init__(USERS_TABLE, USER_ATTRIBUTES, ID, UserMapper(), pool)

    def get_by_login(self, login: str) -> Optional[User]:
        """
        Fetch a user by login name.

        Returns:
            The User or None.
        """
        found = self.get_by_filter(Filter().add(LOGIN, login))
        return found[0] if found else None
