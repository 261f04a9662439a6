"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: students, teachers and administrators
CREATE TABLE IF NOT EXISTS users (
    id              SERIAL PRIMARY KEY,
    login           VARCHAR(50) UNIQUE NOT NULL,
    password_hash   VARCHAR(255) NOT NULL,
    name            VARCHAR(100),
    surname         VARCHAR(100),
    email           VARCHAR(255) UNIQUE NOT NULL,
    role            VARCHAR(20) NOT NULL CHECK (role IN ('student', 'teacher', 'admin'))
);

-- Courses table: each course is led by one teacher
CREATE TABLE IF NOT EXISTS courses (
    id              SERIAL PRIMARY KEY,
    title           VARCHAR(200) NOT NULL,
    description     TEXT,
    hours           INT CHECK (hours >= 0),
    start_date      DATE,
    end_date        DATE,
    teacher_id      INT REFERENCES users(id) ON DELETE SET NULL
);

-- Enrollments: removed together with their course or student
CREATE TABLE IF NOT EXISTS course_enrollments (
    id              SERIAL PRIMARY KEY,
    course_id       INT NOT NULL REFERENCES courses(id) ON DELETE CASCADE,
    student_id      INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    mark            INT,
    UNIQUE(course_id, student_id)
);

CREATE INDEX IF NOT EXISTS idx_courses_teacher ON courses(teacher_id);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    logger.info("Database schema created successfully.")
