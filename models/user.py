"""
models/user.py
--------------
Domain model for system users (students, teachers, administrators).
"""

from dataclasses import dataclass
from typing import Optional

ROLES = ("student", "teacher", "admin")


@dataclass
class User:
    """
    Represents a registered user.

    A None attribute means "not set": it is skipped by partial updates.

    Attributes:
        id: Database primary key (None for new records).
        login: Unique login name.
        password_hash: Hashed password, never the plain text.
        name: First name.
        surname: Last name.
        email: Unique e-mail address.
        role: One of 'student', 'teacher', 'admin'.
    """
    login: Optional[str] = None
    password_hash: Optional[str] = None
    name: Optional[str] = None
    surname: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None  # 'student' | 'teacher' | 'admin'
    id: Optional[int] = None

    def is_teacher(self) -> bool:
        return self.role == "teacher"

    def __str__(self) -> str:
        full_name = " ".join(part for part in (self.name, self.surname) if part)
        return f"{self.login} ({self.role}) {full_name}".rstrip()
