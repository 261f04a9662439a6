"""
models/course.py
----------------
Domain model for training courses.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Course:
    """
    Represents a course led by a teacher.

    Attributes:
        id: Database primary key (None for new records).
        title: Course title.
        description: Optional free text.
        hours: Total academic hours.
        start_date: First day of the course.
        end_date: Last day of the course.
        teacher_id: Id of the leading teacher (users.id).
    """
    title: Optional[str] = None
    description: Optional[str] = None
    hours: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    teacher_id: Optional[int] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        period = f"{self.start_date} - {self.end_date}" if self.start_date else "not scheduled"
        return f"{self.title} | {self.hours or 0}h | {period}"
