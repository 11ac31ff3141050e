# /reporting-backend/app/services/report_helpers/snapshot.py

from ...models.class_model import ClassContext
from ...models.report_model import ReportCreate, ReportSnapshot


def _first_filled(*values) -> str:
    for value in values:
        if value:
            return value
    return ""


def build_snapshot(context: ClassContext, payload: ReportCreate) -> ReportSnapshot:
    """
    Freezes the class/course context for a new report.

    Names come from the resolved class and fall back, field by field, to what
    the lecturer typed. Venue and time go the other way round: the
    lecturer's entry wins over the class's timetable slot.
    """
    return ReportSnapshot(
        class_id=context.class_id,
        faculty_name=_first_filled(context.faculty_name, payload.faculty_name),
        class_name=_first_filled(context.class_name, payload.class_name),
        course_name=_first_filled(context.course_name, payload.course_name),
        course_code=_first_filled(context.course_code, payload.course_code),
        venue=_first_filled(payload.venue, context.venue),
        scheduled_time=_first_filled(payload.scheduled_time, context.scheduled_time),
    )
