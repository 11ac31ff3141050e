# /reporting-backend/app/services/rating_service.py

"""
This service reconciles student ratings and report feedback.

A student holds at most one rating per report. Rating again overwrites the
value and timestamp through a single database upsert; there is no
application-level lock. Feedback writes are ownership-scoped in the UPDATE
itself, which is the one access check this backend enforces at the data layer.
"""

import logging
from typing import Dict

from ..models.rating_model import RatingAggregate, RatingResult, RatingStatus
from . import hierarchy_service
from .database_service import DatabaseService
from .errors import ReportNotFoundError
from .report_helpers import validation

logger = logging.getLogger(__name__)


# --- Ratings ---

def rate_report(student_id, report_id: int, rating, db: DatabaseService) -> RatingResult:
    """
    Creates or overwrites the student's rating of a report.

    Non-numeric ratings are stored as 0. The created/updated label comes from
    a lookup made before the upsert and is informational only; the write
    itself is atomic and the last writer wins.

    Raises:
        ReportValidationError: the student id or the rating is absent.
        ReportNotFoundError: the report does not exist.
    """
    validation.require_fields(
        {"student_id": student_id, "rating": rating},
        ("student_id", "rating"),
        message="Missing student ID or rating",
    )
    if db.get_report_by_id(report_id) is None:
        raise ReportNotFoundError(f"Report {report_id} not found")

    value = validation.safe_number(rating)
    existed = db.rating_exists(student_id, report_id)
    db.upsert_rating(student_id, report_id, value)

    status = RatingStatus.UPDATED if existed else RatingStatus.CREATED
    logger.info(
        "Rating recorded",
        extra={"student_id": student_id, "report_id": report_id, "rating": value, "status": status.value},
    )
    message = "Rating updated" if existed else "Rating recorded"
    return RatingResult(status=status, message=message)


def get_aggregate(report_id: int, db: DatabaseService) -> RatingAggregate:
    """Average and count of a report's ratings; `{0, 0}` for an unrated report."""
    avg_rating, total = db.get_rating_aggregate(report_id)
    if not total:
        return RatingAggregate(avgRating=0, totalRatings=0)
    return RatingAggregate(avgRating=float(avg_rating or 0), totalRatings=int(total))


def get_ratings_by_student(student_id: int, db: DatabaseService) -> Dict[int, float]:
    """Maps report id -> rating for every report the student has rated."""
    return {r.report_id: r.rating for r in db.get_ratings_by_student(student_id)}


# --- Feedback ---

def submit_feedback(report_id: int, lecturer_id, feedback, db: DatabaseService) -> None:
    """
    Sets feedback on a report the lecturer owns.

    Raises:
        ReportValidationError: lecturer id or feedback is absent.
        ReportNotFoundError: no such report, or it belongs to another lecturer.
            Both cases carry the same message.
    """
    validation.require_fields(
        {"lecturer_id": lecturer_id, "feedback": feedback},
        ("lecturer_id", "feedback"),
        message="Feedback and lecturer_id are required",
    )
    affected = db.update_feedback_for_lecturer(report_id, lecturer_id, feedback)
    if affected == 0:
        logger.info("Feedback rejected", extra={"report_id": report_id, "lecturer_id": lecturer_id})
        raise ReportNotFoundError("Report not found or you are not authorized")


def submit_supervisor_feedback(report_id: int, prl_id: int, feedback, db: DatabaseService) -> None:
    """
    Sets feedback on a report inside the Principal Lecturer's stream.

    Raises:
        ReportValidationError: feedback is absent.
        ReportNotFoundError: no such report, or it is outside the PRL's scope.
    """
    validation.require_fields({"feedback": feedback}, ("feedback",), message="Feedback is required")
    scope = hierarchy_service.resolve_prl_scope(prl_id, db)
    affected = db.update_feedback_in_classes(report_id, scope.class_ids, feedback)
    if affected == 0:
        raise ReportNotFoundError("Report not found or you are not authorized")
