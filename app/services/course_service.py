# /reporting-backend/app/services/course_service.py

"""
Course maintenance for Program Leaders and the course list of a Principal
Lecturer's stream.

A course is placed into a program through `program_id`, the primary link of
the scope walk. The legacy `assigned_to` column is never written here.
"""

import logging
from typing import List

from ..db.models.hierarchy_models import Course
from ..models.course_model import CourseCreate, CourseCreated, ProgramAssignment
from ..models.stats_model import PrlCourseSummary
from .database_service import DatabaseService
from .errors import HierarchyNotFoundError, HierarchyValidationError
from .report_helpers import validation

logger = logging.getLogger(__name__)

REQUIRED_COURSE_FIELDS = ("course_name", "course_code", "faculty_name")


def _require_owned_program(program_id: int, pl_id: int, db: DatabaseService) -> None:
    if db.get_program_for_pl(program_id, pl_id) is None:
        raise HierarchyNotFoundError("Program not found")


def create_course(payload: CourseCreate, pl_id: int, db: DatabaseService) -> CourseCreated:
    """
    Adds a course, optionally straight into one of the caller's programs.

    Raises:
        HierarchyValidationError: name, code or faculty is blank.
        HierarchyNotFoundError: `program_id` is not a program the caller owns.
    """
    values = payload.model_dump()
    validation.require_fields(values, REQUIRED_COURSE_FIELDS, error=HierarchyValidationError)
    if payload.program_id is not None:
        _require_owned_program(payload.program_id, pl_id, db)

    course = db.add_course({
        "name": payload.course_name.strip(),
        "code": payload.course_code.strip(),
        "faculty_name": payload.faculty_name.strip(),
        "program_id": payload.program_id,
        "stream_id": payload.stream_id,
    })
    logger.info("Course added", extra={"course_id": course.id, "program_id": payload.program_id, "pl_id": pl_id})
    return CourseCreated(id=course.id)


def assign_course_to_program(course_id: int, payload: ProgramAssignment, pl_id: int, db: DatabaseService) -> Course:
    """
    Links the course to one of the caller's programs, which brings its
    classes and their reports into that Program Leader's scope.

    Raises:
        HierarchyValidationError: no program id was given.
        HierarchyNotFoundError: the course does not exist, or the program is
            not one the caller owns.
    """
    if payload.program_id is None:
        raise HierarchyValidationError("Program ID is required")
    _require_owned_program(payload.program_id, pl_id, db)

    updated = db.update_course(course_id, {"program_id": payload.program_id})
    if updated is None:
        raise HierarchyNotFoundError("Course not found")

    logger.info("Course assigned to program", extra={"course_id": course_id, "program_id": payload.program_id})
    return updated


def list_prl_courses(prl_id: int, db: DatabaseService) -> List[PrlCourseSummary]:
    """Courses in the PRL's stream; empty when the PRL has no stream."""
    stream_id = db.get_stream_id_for_prl(prl_id)
    if stream_id is None:
        return []
    return [PrlCourseSummary.model_validate(row) for row in db.get_course_summaries_by_stream(stream_id)]
