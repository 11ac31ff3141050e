# /reporting-backend/app/models/report_model.py

# --- Core Imports ---
from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Submission Payload ---

class ReportCreate(BaseModel):
    """
    The payload a lecturer sends to submit a weekly report.

    Every field is optional at the schema level. The submission engine checks
    required fields itself (400 "Missing required fields"), and the numeric
    fields accept any value and are coerced. `date_of_lecture` may be any
    date string the submission engine can parse.
    """
    lecturer_id: Optional[int] = None
    week_of_reporting: Optional[str] = None
    date_of_lecture: Optional[Union[date, str]] = None
    topic_taught: Optional[str] = None
    learning_outcomes: Optional[str] = None
    recommendations: Optional[str] = None
    students_present: Any = None
    total_registered: Any = None
    venue: Optional[str] = None
    scheduled_time: Optional[str] = None
    feedback: Optional[str] = None

    # Free-text class hints. Used to look up a class when the lecturer has no
    # assignment, and echoed verbatim when no class matches.
    class_name: Optional[str] = None
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    faculty_name: Optional[str] = None


class ReportCreated(BaseModel):
    message: str = "Report added successfully"
    id: int = Field(..., description="The server-generated id of the new report.")


# --- Snapshot Value ---

class ReportSnapshot(BaseModel):
    """
    The denormalised class/course context copied onto a report when it is
    submitted. Frozen: once captured it is written as-is and never
    re-derived from the live Class/Course rows.
    """
    model_config = ConfigDict(frozen=True)

    class_id: Optional[int] = None
    faculty_name: str = ""
    class_name: str = ""
    course_name: str = ""
    course_code: str = ""
    venue: str = ""
    scheduled_time: str = ""


# --- Read Models ---

class Report(BaseModel):
    """The full representation of a report as stored and returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    lecturer_id: int
    class_id: Optional[int] = None
    week_of_reporting: str
    date_of_lecture: date
    topic_taught: str
    learning_outcomes: str = ""
    recommendations: str = ""
    students_present: int = 0
    total_registered: int = 0
    feedback: Optional[str] = None
    faculty_name: str = ""
    class_name: str = ""
    course_name: str = ""
    course_code: str = ""
    venue: str = ""
    scheduled_time: str = ""
    created_at: Optional[datetime] = None


class ReportWithLecturer(Report):
    lecturer_name: Optional[str] = None


class StudentReportView(ReportWithLecturer):
    """A report as seen by one student, carrying that student's own rating."""
    rating: float = Field(default=0, description="The student's rating, 0 when not yet rated.")
