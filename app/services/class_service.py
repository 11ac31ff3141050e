# /reporting-backend/app/services/class_service.py

"""
Program Leader maintenance of classes: who teaches a class and which course
it belongs to.

Both updates feed straight into the rest of the backend. The class
assignment is what report submission resolves a lecturer's class from, and
the course link is the last hop of every supervisor scope walk.
"""

import logging

from ..db.models.hierarchy_models import Class
from ..models.class_model import CourseAssignment, LecturerAssignment
from .database_service import DatabaseService
from .errors import HierarchyNotFoundError, HierarchyValidationError

logger = logging.getLogger(__name__)


def assign_lecturer_to_class(class_id: int, payload: LecturerAssignment, db: DatabaseService) -> Class:
    """
    Makes the lecturer the one assigned to the class, replacing any previous
    assignment.

    Raises:
        HierarchyValidationError: no lecturer id was given.
        HierarchyNotFoundError: the class or the lecturer does not exist.
    """
    if payload.lecturer_id is None:
        raise HierarchyValidationError("Lecturer ID is required")
    if db.get_user_by_id_and_role(payload.lecturer_id, "lecturer") is None:
        raise HierarchyNotFoundError("Lecturer not found")

    updated = db.update_class(class_id, {"lecturer_id": payload.lecturer_id})
    if updated is None:
        raise HierarchyNotFoundError("Class not found")

    logger.info("Lecturer assigned to class", extra={"class_id": class_id, "lecturer_id": payload.lecturer_id})
    return updated


def assign_course_to_class(class_id: int, payload: CourseAssignment, db: DatabaseService) -> Class:
    """
    Moves the class under another course.

    Raises:
        HierarchyValidationError: no course id was given.
        HierarchyNotFoundError: the class or the course does not exist.
    """
    if payload.course_id is None:
        raise HierarchyValidationError("Course ID is required")
    if db.get_course_by_id(payload.course_id) is None:
        raise HierarchyNotFoundError("Course not found")

    updated = db.update_class(class_id, {"course_id": payload.course_id})
    if updated is None:
        raise HierarchyNotFoundError("Class not found")

    logger.info("Course assigned to class", extra={"class_id": class_id, "course_id": payload.course_id})
    return updated
