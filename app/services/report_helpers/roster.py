# /reporting-backend/app/services/report_helpers/roster.py

import logging

from sqlalchemy.exc import SQLAlchemyError

from ..database_service import DatabaseService

logger = logging.getLogger(__name__)


def snapshot_roster(report_id: int, class_id: int, db: DatabaseService) -> int:
    """
    Links every student currently in `class_id` to the report and returns how
    many students were on the roster.

    Best effort: the report is already committed when this runs, so a store
    failure here is logged, the fan-out is rolled back, and 0 is returned.
    Existing (student, report) pairs are skipped, not treated as errors.
    """
    try:
        student_ids = db.get_student_ids_by_class(class_id)
        if not student_ids:
            return 0
        db.add_student_report_links(report_id, student_ids)
        return len(student_ids)
    except SQLAlchemyError:
        db.rollback()
        logger.warning(
            "Roster fan-out failed; report kept without student links",
            exc_info=True,
            extra={"report_id": report_id, "class_id": class_id},
        )
        return 0
