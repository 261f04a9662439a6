"""Round-trip tests against a real PostgreSQL; set TEST_DATABASE_URL to run them."""
import os

import pytest

from dao.table import Filter
from db import connection as db_connection
from db.connection import ConnectionPool
from db.init_db import create_tables
from models.course import Course
from models.user import User
from repositories.course_repo import CourseDAO
from repositories.user_repo import UserDAO

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(not TEST_DATABASE_URL, reason="TEST_DATABASE_URL not set")


@pytest.fixture
def pg_pool(monkeypatch):
    pool = ConnectionPool(TEST_DATABASE_URL, 1, 4)
    monkeypatch.setattr(db_connection, "_pool", pool)
    create_tables()
    with pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute("TRUNCATE course_enrollments, courses, users RESTART IDENTITY CASCADE")
        conn.commit()
    yield pool
    pool.close()


def test_insert_then_read_back(pg_pool):
    dao = CourseDAO(pg_pool)
    dao.add([Course(title="Python", hours=40), Course(title="SQL", hours=20)])

    stored = dao.get_by_filter(Filter().add("title", "SQL"))
    assert len(stored) == 1
    assert dao.get_by_id(stored[0].id) == Course(title="SQL", hours=20, id=stored[0].id)


def test_sparse_update_leaves_other_columns(pg_pool):
    dao = CourseDAO(pg_pool)
    dao.add([Course(title="Go", description="Intro", hours=10)])
    course_id = dao.get_by_filter(Filter().add("title", "Go"))[0].id

    dao.update([Course(id=course_id, hours=12)])
    dao.update([Course(id=course_id, hours=12)])

    course = dao.get_by_id(course_id)
    assert course.hours == 12
    assert course.description == "Intro"


def test_delete_cascade_removes_enrollments(pg_pool):
    users, courses = UserDAO(pg_pool), CourseDAO(pg_pool)
    users.add([User(login="ann", password_hash="h", email="ann@example.com", role="student")])
    courses.add([Course(title="Rust")])
    student = users.get_by_login("ann")
    course = courses.get_by_filter(Filter().add("title", "Rust"))[0]
    with pg_pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "INSERT INTO course_enrollments (course_id, student_id) VALUES (%s, %s)",
                (course.id, student.id),
            )
        conn.commit()

    with pytest.deprecated_call():
        courses.delete_cascade([course])

    assert courses.get_by_id(course.id) is None
    with pg_pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT count(*) FROM course_enrollments")
            assert cur.fetchone()[0] == 0
