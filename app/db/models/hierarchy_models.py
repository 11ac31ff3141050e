# /reporting-backend/app/db/models/hierarchy_models.py

"""
This module defines the SQLAlchemy ORM models for the organisational
hierarchy that reports hang off: `Program` -> `Course` -> `Class`, plus the
`PrincipalLecturer` record that pins a PRL to the stream they oversee.
"""

from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base


class Program(Base):
    """
    SQLAlchemy model representing an academic program.

    A program is owned by exactly one Program Leader (`pl_id`) and is the
    root of the primary Program -> Course -> Class -> Report path.
    """
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    pl_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    courses = relationship("Course", back_populates="program")


class Course(Base):
    """
    SQLAlchemy model representing a course.

    `program_id` is the primary link into the hierarchy. `assigned_to` and
    `stream_id` predate it and are still populated on older rows; they are
    plain integers without foreign keys because legacy data stored program
    ids in them.
    """
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    code = Column(String(50), nullable=False, index=True)
    faculty_name = Column(String(255), nullable=False, default="")

    program_id = Column(Integer, ForeignKey("programs.id"), nullable=True, index=True)
    assigned_to = Column(Integer, nullable=True, index=True)
    stream_id = Column(Integer, nullable=True, index=True)

    program = relationship("Program", back_populates="courses")
    classes = relationship("Class", back_populates="course")


class Class(Base):
    """
    SQLAlchemy model representing a scheduled class. A class belongs to
    exactly one course and is taught by at most one lecturer.
    """
    __tablename__ = "classes"  # Override automatic pluralization

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    venue = Column(String(255), nullable=False, default="")
    schedule_time = Column(String(100), nullable=False, default="")

    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    lecturer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    stream_id = Column(Integer, nullable=True, index=True)

    course = relationship("Course", back_populates="classes")
    lecturer = relationship("User", foreign_keys=[lecturer_id])


class PrincipalLecturer(Base):
    """The stream a Principal Lecturer oversees, keyed by the PRL's user id."""
    __tablename__ = "principal_lecturers"

    id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    stream_id = Column(Integer, nullable=True, index=True)
