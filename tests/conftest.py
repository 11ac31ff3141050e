# /tests/conftest.py

import itertools
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import base  # noqa: F401  registers every model on Base.metadata
from app.db.base_class import Base
from app.db.models.hierarchy_models import Program, Course, Class, PrincipalLecturer
from app.db.models.user_models import User
from app.services.database_service import DatabaseService


@pytest.fixture
def db_session():
    """
    A session over a fresh in-memory SQLite database for EACH test function.
    StaticPool keeps the single connection alive so every query sees the
    same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_service(db_session):
    """A real DatabaseService bound to the in-memory session."""
    return DatabaseService(db_session=db_session)


class Seeder:
    """Small factory for the hierarchy rows most tests need."""

    def __init__(self, session):
        self.session = session
        self._emails = itertools.count(1)

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def user(self, name, role, class_id=None):
        email = f"user{next(self._emails)}@example.edu"
        return self._save(User(name=name, email=email, role=role, class_id=class_id))

    def program(self, name, pl_id):
        return self._save(Program(name=name, pl_id=pl_id))

    def course(self, name, code, program_id=None, faculty_name="Faculty of Computing", assigned_to=None, stream_id=None):
        return self._save(Course(
            name=name, code=code, program_id=program_id, faculty_name=faculty_name,
            assigned_to=assigned_to, stream_id=stream_id,
        ))

    def klass(self, name, course_id, lecturer_id=None, venue="Room 1", schedule_time="08:00", stream_id=None):
        return self._save(Class(
            name=name, course_id=course_id, lecturer_id=lecturer_id,
            venue=venue, schedule_time=schedule_time, stream_id=stream_id,
        ))

    def prl(self, user_id, stream_id):
        return self._save(PrincipalLecturer(id=user_id, stream_id=stream_id))

    def students(self, count, class_id):
        return [self.user(f"Student {i}", "student", class_id=class_id) for i in range(1, count + 1)]


@pytest.fixture
def seed(db_session):
    return Seeder(db_session)


@pytest.fixture
def report_payload():
    """Builds a valid submission payload; keyword overrides replace fields."""
    def _build(lecturer_id, **overrides):
        payload = {
            "lecturer_id": lecturer_id,
            "week_of_reporting": "Week 1",
            "date_of_lecture": date(2024, 2, 5),
            "topic_taught": "Normalisation",
            "learning_outcomes": "Students can reach 3NF",
            "recommendations": "More practice",
            "students_present": 18,
            "total_registered": 20,
        }
        payload.update(overrides)
        return payload
    return _build
