"""
repositories/course_repo.py
-----------------------------
Data access layer for courses.
Enrollments are removed by the schema (ON DELETE CASCADE) when a course is deleted.
"""

from typing import Optional

from dao.entity_dao import EntityDAO
from dao.mapper import AttributeMapper
from dao.table import AttrRole, Filter, TableAttr
from db.connection import ConnectionPool
from models.course import Course

COURSES_TABLE = "courses"

ID = TableAttr("id", AttrRole.IDENTITY)
TITLE = TableAttr("title", AttrRole.REQUIRED)
DESCRIPTION = TableAttr("description")
HOURS = TableAttr("hours")
START_DATE = TableAttr("start_date")
END_DATE = TableAttr("end_date")
TEACHER_ID = TableAttr("teacher_id")

COURSE_ATTRIBUTES = (ID, TITLE, DESCRIPTION, HOURS, START_DATE, END_DATE, TEACHER_ID)


class CourseMapper(AttributeMapper[Course]):
    """Maps `Course` dataclasses onto `courses` rows."""

    def __init__(self):
        super().__init__(Course, COURSE_ATTRIBUTES, ID)

    def validate_for_insert(self, course: Course) -> bool:
        if not super().validate_for_insert(course) or not course.title.strip():
            return False
        if course.hours is not None and course.hours < 0:
            return False
        if course.start_date and course.end_date and course.end_date < course.start_date:
            return False
        return True


class CourseDAO(EntityDAO[Course]):
    """DAO for the courses table."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        super().__init__(COURSES_TABLE, COURSE_ATTRIBUTES, ID, CourseMapper(), pool)

    def get_by_teacher(self, teacher_id: int) -> list[Course]:
        """All courses led by a teacher, in database order."""
        return self.get_by_filter(Filter().add(TEACHER_ID, teacher_id))
