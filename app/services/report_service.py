# /reporting-backend/app/services/report_service.py

"""
This service module is the business logic layer for lecture reports.

Submission is the only write: it validates the payload, resolves the class
context, persists a denormalised snapshot, and fans the new report out to the
class roster. Submissions are append-only events, so resubmitting the same
payload creates a second report.

The read functions return plain lists of report dictionaries shaped by the
Pydantic models in `report_model`. Supervisor reads go through the hierarchy
resolver and return an empty list when the supervisor's scope is empty.
"""

import logging
from typing import Dict, List

from ..models.class_model import ClassHints
from ..models.report_model import (
    Report,
    ReportCreate,
    ReportCreated,
    ReportWithLecturer,
    StudentReportView,
)
from . import class_context_service, hierarchy_service
from .database_service import DatabaseService
from .report_helpers import roster, snapshot, validation

logger = logging.getLogger(__name__)


# --- Submission ---

def submit_report(payload: ReportCreate, db: DatabaseService) -> ReportCreated:
    """
    Submits a new weekly report.

    Raises:
        ReportValidationError: a required field is missing or the lecture date
            cannot be parsed. Nothing is written.
    """
    validation.require_fields(payload.model_dump(), validation.REQUIRED_REPORT_FIELDS)
    lecture_date = validation.parse_lecture_date(payload.date_of_lecture)

    hints = ClassHints(
        class_name=payload.class_name,
        course_code=payload.course_code,
        course_name=payload.course_name,
        faculty_name=payload.faculty_name,
    )
    context = class_context_service.resolve_context(payload.lecturer_id, hints, db)
    frozen = snapshot.build_snapshot(context, payload)

    report_record = {
        "lecturer_id": payload.lecturer_id,
        "week_of_reporting": payload.week_of_reporting,
        "date_of_lecture": lecture_date,
        "topic_taught": payload.topic_taught,
        "learning_outcomes": payload.learning_outcomes or "",
        "recommendations": payload.recommendations or "",
        "students_present": validation.safe_count(payload.students_present),
        "total_registered": validation.safe_count(payload.total_registered),
        "feedback": payload.feedback or "",
        **frozen.model_dump(),
    }
    new_report = db.add_report(report_record)

    linked = 0
    if frozen.class_id is not None:
        linked = roster.snapshot_roster(new_report.id, frozen.class_id, db)

    logger.info(
        "Report submitted",
        extra={
            "report_id": new_report.id,
            "lecturer_id": payload.lecturer_id,
            "class_id": frozen.class_id,
            "students_linked": linked,
        },
    )
    return ReportCreated(id=new_report.id)


# --- Read Paths ---

def list_all_reports(db: DatabaseService) -> List[Report]:
    return [Report.model_validate(r) for r in db.get_all_reports()]


def list_lecturer_reports(lecturer_id: int, db: DatabaseService) -> List[ReportWithLecturer]:
    return [ReportWithLecturer.model_validate(r) for r in db.get_reports_by_lecturer(lecturer_id)]


def list_student_reports(student_id: int, db: DatabaseService) -> List[StudentReportView]:
    """Reports the student was rostered on, each carrying the student's own rating."""
    return [StudentReportView.model_validate(r) for r in db.get_reports_for_student(student_id)]


def _reports_in_scope(scope: hierarchy_service.Scope, db: DatabaseService) -> List[ReportWithLecturer]:
    if scope.is_empty:
        return []
    rows: List[Dict] = db.get_reports_by_class_ids(scope.class_ids)
    return [ReportWithLecturer.model_validate(r) for r in rows]


def list_pl_reports(pl_id: int, db: DatabaseService) -> List[ReportWithLecturer]:
    """All reports under the Program Leader's programs, newest first."""
    return _reports_in_scope(hierarchy_service.resolve_pl_scope(pl_id, db), db)


def list_prl_reports(prl_id: int, db: DatabaseService) -> List[ReportWithLecturer]:
    """All reports in the Principal Lecturer's stream, newest first."""
    return _reports_in_scope(hierarchy_service.resolve_prl_scope(prl_id, db), db)
