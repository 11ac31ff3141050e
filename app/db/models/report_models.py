# /reporting-backend/app/db/models/report_models.py

"""
This module defines the SQLAlchemy ORM models for lecture reports and the two
per-student tables that hang off them: the roster snapshot (`StudentReport`)
and student ratings (`Rating`).
"""

from sqlalchemy import Column, String, Integer, Float, Date, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from ..base_class import Base


class Report(Base):
    """
    SQLAlchemy model representing a weekly lecture report.

    The faculty/class/course/venue columns are a snapshot copied when the
    report is submitted. They are never refreshed from the live Class or
    Course rows, so a report keeps reading the same after renames.
    `class_id` is NULL when no class could be resolved for the lecturer.
    """
    id = Column(Integer, primary_key=True, index=True)
    lecturer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=True, index=True)

    week_of_reporting = Column(String(50), nullable=False, index=True)
    date_of_lecture = Column(Date, nullable=False)
    topic_taught = Column(Text, nullable=False)
    learning_outcomes = Column(Text, nullable=False, default="")
    recommendations = Column(Text, nullable=False, default="")
    students_present = Column(Integer, nullable=False, default=0)
    total_registered = Column(Integer, nullable=False, default=0)
    feedback = Column(Text, nullable=True)

    # Snapshot fields
    faculty_name = Column(String(255), nullable=False, default="")
    class_name = Column(String(255), nullable=False, default="")
    course_name = Column(String(255), nullable=False, default="")
    course_code = Column(String(50), nullable=False, default="")
    venue = Column(String(255), nullable=False, default="")
    scheduled_time = Column(String(100), nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class StudentReport(Base):
    """Roster snapshot: which students belonged to the report's class at submission."""
    __tablename__ = "student_reports"

    id = Column(Integer, primary_key=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    report_id = Column(Integer, ForeignKey("reports.id"), nullable=False, index=True)

    __table_args__ = (UniqueConstraint("student_id", "report_id", name="uix_student_report"),)


class Rating(Base):
    """
    A student's rating of a report. The unique constraint on
    (student_id, report_id) is what makes the rating upsert atomic.
    """
    id = Column(Integer, primary_key=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    report_id = Column(Integer, ForeignKey("reports.id"), nullable=False, index=True)
    rating = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (UniqueConstraint("student_id", "report_id", name="uix_rating_student_report"),)
