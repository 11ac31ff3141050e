# /reporting-backend/app/models/stats_model.py

# --- Core Imports ---
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


# --- Model Definitions ---

class WeeklyCount(BaseModel):
    """One bucket of a week-of-reporting grouping. Only observed weeks are emitted."""
    week: str = Field(..., examples=["Week 3"])
    count: int = Field(..., examples=[7])


class ProgramStats(BaseModel):
    """
    Report count for one program owned by a Program Leader. Every owned
    program appears, with `totalReports = 0` when nothing hangs off it.
    """
    programId: int
    programName: str
    totalReports: int = 0


class LecturerOverview(BaseModel):
    """One lecturer row of the PRL monitoring overview."""
    lecturer_id: int
    lecturer_name: str
    total_reports: int = 0
    avg_rating: Optional[float] = Field(default=None, description="Rounded to one decimal; null when unrated.")
    last_submission: Optional[datetime] = None


class ReportMonitoring(BaseModel):
    """Per-report roster size and rating average for a lecturer's dashboard."""
    report_id: int
    week_of_reporting: str
    date_of_lecture: date
    topic_taught: str
    faculty_name: str = ""
    class_name: str = ""
    course_name: str = ""
    students_count: int = 0
    avg_rating: float = 0


class PrlClassSummary(BaseModel):
    class_id: int
    class_name: str
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    lecturer_name: Optional[str] = None
    total_students: int = 0


class PrlCourseSummary(BaseModel):
    course_id: int
    course_name: str
    course_code: str
    faculty_name: str = ""
    total_classes: int = 0
