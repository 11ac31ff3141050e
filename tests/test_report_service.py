# /tests/test_report_service.py

from datetime import date, datetime

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from app.db.models.report_models import Report, StudentReport
from app.models.class_model import ClassContext, ClassHints
from app.models.report_model import ReportCreate
from app.services import class_context_service, report_service
from app.services.errors import ReportValidationError
from app.services.report_helpers import validation


# --- Validation Helpers ---

@pytest.mark.parametrize("raw, expected", [
    ("12", 12.0),
    (7, 7.0),
    ("", 0.0),
    (None, 0.0),
    ("abc", 0.0),
    ("nan", 0.0),
    ("inf", 0.0),
])
def test_safe_number_coerces_garbage_to_zero(raw, expected):
    assert validation.safe_number(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("18", 18),
    ("18.9", 18),
    ("1e20", 0),
    (-(2**31), 0),
    (2**31 - 1, 2**31 - 1),
])
def test_safe_count_drops_values_a_count_column_cannot_hold(raw, expected):
    assert validation.safe_count(raw) == expected


@pytest.mark.parametrize("raw", ["2024-02-05", "05 Feb 2024", "2024/02/05", date(2024, 2, 5), datetime(2024, 2, 5, 9, 30)])
def test_lecture_date_accepts_common_formats(raw):
    assert validation.parse_lecture_date(raw) == date(2024, 2, 5)


def test_require_fields_names_every_missing_field():
    with pytest.raises(ReportValidationError) as exc_info:
        validation.require_fields({"lecturer_id": 1, "topic_taught": "  "}, validation.REQUIRED_REPORT_FIELDS)

    message = str(exc_info.value)
    assert message.startswith("Missing required fields")
    assert "week_of_reporting" in message
    assert "date_of_lecture" in message
    assert "topic_taught" in message
    assert "lecturer_id" not in message


# --- Class Context Resolution ---

def test_assigned_class_wins_over_hints(db_service, seed):
    lecturer = seed.user("Mr. Teach", "lecturer")
    course = seed.course("Operating Systems", "OS201", faculty_name="FICT")
    assigned = seed.klass("OS-A", course.id, lecturer_id=lecturer.id, venue="Lab 3", schedule_time="10:00")
    seed.klass("Other", course.id)

    context = class_context_service.resolve_context(
        lecturer.id, ClassHints(class_name="Other"), db_service
    )

    assert context.class_id == assigned.id
    assert context.course_code == "OS201"
    assert context.faculty_name == "FICT"
    assert context.venue == "Lab 3"


def test_lowest_class_id_wins_for_multiple_assignments(db_service, seed):
    lecturer = seed.user("Mr. Busy", "lecturer")
    course = seed.course("Compilers", "CMP1")
    first = seed.klass("CMP-A", course.id, lecturer_id=lecturer.id)
    seed.klass("CMP-B", course.id, lecturer_id=lecturer.id)

    context = class_context_service.resolve_context(lecturer.id, ClassHints(), db_service)

    assert context.class_id == first.id


def test_hint_matches_on_course_code_alone(db_service, seed):
    lecturer = seed.user("Ms. Unassigned", "lecturer")
    course = seed.course("Web Design", "WEB100")
    klass = seed.klass("WEB-1", course.id)

    context = class_context_service.resolve_context(
        lecturer.id, ClassHints(course_code="WEB100"), db_service
    )

    assert context.class_id == klass.id
    assert context.class_name == "WEB-1"


def test_hints_are_echoed_when_nothing_matches(db_service, seed):
    lecturer = seed.user("Ms. Unassigned", "lecturer")
    hints = ClassHints(class_name="Ghost", course_code="NONE1", course_name="Nothing", faculty_name="FABE")

    context = class_context_service.resolve_context(lecturer.id, hints, db_service)

    assert context.class_id is None
    assert context.class_name == "Ghost"
    assert context.course_name == "Nothing"
    assert context.faculty_name == "FABE"


def test_hint_match_skips_lookup_without_keys():
    mock_db = MagicMock()

    result = class_context_service.HintMatchStrategy().resolve(1, ClassHints(course_name="Only a name"), mock_db)

    assert result is None
    mock_db.find_class_by_name_or_course_code.assert_not_called()


def test_custom_strategy_list_is_honoured():
    class FixedStrategy(class_context_service.ClassResolutionStrategy):
        name = "fixed"

        def resolve(self, lecturer_id, hints, db):
            return ClassContext(class_id=99, class_name="Fixed")

    context = class_context_service.resolve_context(1, ClassHints(), MagicMock(), strategies=[FixedStrategy()])

    assert context.class_id == 99


# --- Submission ---

def test_missing_fields_write_nothing():
    """
    GIVEN a payload without topic_taught
    WHEN it is submitted
    THEN validation fails before the store is touched at all.
    """
    mock_db = MagicMock()
    payload = ReportCreate(lecturer_id=1, week_of_reporting="Week 1", date_of_lecture="2024-02-05")

    with pytest.raises(ReportValidationError):
        report_service.submit_report(payload, mock_db)

    assert mock_db.method_calls == []


def test_submission_snapshots_roster(db_service, db_session, seed, report_payload):
    """
    GIVEN a lecturer assigned to a class with 4 students
    WHEN a report is submitted twice
    THEN each submission is its own report with its own 4 roster rows.
    """
    lecturer = seed.user("Mr. Teach", "lecturer")
    course = seed.course("Databases", "DB101", faculty_name="FICT")
    klass = seed.klass("DB-A", course.id, lecturer_id=lecturer.id)
    students = seed.students(4, class_id=klass.id)

    first = report_service.submit_report(ReportCreate(**report_payload(lecturer.id)), db_service)
    second = report_service.submit_report(ReportCreate(**report_payload(lecturer.id)), db_service)

    assert first.message == "Report added successfully"
    assert first.id != second.id
    expected = sorted(s.id for s in students)
    assert db_service.get_student_ids_for_report(first.id) == expected
    assert db_service.get_student_ids_for_report(second.id) == expected
    assert db_session.query(StudentReport).count() == 8

    stored = db_session.get(Report, first.id)
    assert stored.class_id == klass.id
    assert stored.course_code == "DB101"
    assert stored.faculty_name == "FICT"
    print("\n✅ SUCCESS: test_submission_snapshots_roster passed.")


def test_numeric_fields_are_coerced(db_service, db_session, seed, report_payload):
    lecturer = seed.user("Mr. Teach", "lecturer")
    payload = report_payload(lecturer.id, students_present="abc", total_registered="", feedback=None)

    created = report_service.submit_report(ReportCreate(**payload), db_service)

    stored = db_session.get(Report, created.id)
    assert stored.students_present == 0
    assert stored.total_registered == 0
    assert stored.feedback == ""


def test_oversized_count_is_stored_as_zero(db_service, db_session, seed, report_payload):
    """
    GIVEN students_present="1e20", which parses but overflows an integer column
    WHEN the report is submitted
    THEN it is stored with 0 present instead of failing the insert.
    """
    lecturer = seed.user("Mr. Teach", "lecturer")

    created = report_service.submit_report(
        ReportCreate(**report_payload(lecturer.id, students_present="1e20")), db_service
    )

    assert db_session.get(Report, created.id).students_present == 0


def test_free_text_lecture_date_is_normalised(db_service, db_session, seed, report_payload):
    lecturer = seed.user("Mr. Teach", "lecturer")

    created = report_service.submit_report(
        ReportCreate(**report_payload(lecturer.id, date_of_lecture="05 Feb 2024")), db_service
    )

    assert db_session.get(Report, created.id).date_of_lecture == date(2024, 2, 5)


def test_unparseable_lecture_date_writes_nothing():
    mock_db = MagicMock()
    payload = ReportCreate(
        lecturer_id=1, week_of_reporting="Week 1", date_of_lecture="not a date", topic_taught="Joins"
    )

    with pytest.raises(ReportValidationError, match="Invalid date_of_lecture"):
        report_service.submit_report(payload, mock_db)

    assert mock_db.method_calls == []


def test_unresolved_class_produces_classless_report(db_service, db_session, seed, report_payload):
    lecturer = seed.user("Ms. Unassigned", "lecturer")
    payload = report_payload(lecturer.id, class_name="Evening Group", course_name="Statistics")

    created = report_service.submit_report(ReportCreate(**payload), db_service)

    stored = db_session.get(Report, created.id)
    assert stored.class_id is None
    assert stored.class_name == "Evening Group"
    assert stored.course_name == "Statistics"
    assert db_session.query(StudentReport).count() == 0


def test_empty_class_links_no_students(db_service, db_session, seed, report_payload):
    lecturer = seed.user("Mr. Teach", "lecturer")
    course = seed.course("Databases", "DB101")
    seed.klass("DB-A", course.id, lecturer_id=lecturer.id)

    created = report_service.submit_report(ReportCreate(**report_payload(lecturer.id)), db_service)

    assert created.id is not None
    assert db_session.query(StudentReport).count() == 0


def test_payload_venue_overrides_timetable(db_service, db_session, seed, report_payload):
    lecturer = seed.user("Mr. Teach", "lecturer")
    course = seed.course("Databases", "DB101")
    seed.klass("DB-A", course.id, lecturer_id=lecturer.id, venue="Lab 1", schedule_time="08:00")

    created = report_service.submit_report(
        ReportCreate(**report_payload(lecturer.id, venue="Hall 7")), db_service
    )

    stored = db_session.get(Report, created.id)
    assert stored.venue == "Hall 7"
    assert stored.scheduled_time == "08:00"


def test_snapshot_survives_class_rename(db_service, db_session, seed, report_payload):
    lecturer = seed.user("Mr. Teach", "lecturer")
    course = seed.course("Databases", "DB101")
    klass = seed.klass("DB-A", course.id, lecturer_id=lecturer.id)
    created = report_service.submit_report(ReportCreate(**report_payload(lecturer.id)), db_service)

    klass.name = "DB-Renamed"
    db_session.commit()

    reports = report_service.list_lecturer_reports(lecturer.id, db_service)
    assert reports[0].id == created.id
    assert reports[0].class_name == "DB-A"
    assert reports[0].lecturer_name == "Mr. Teach"


# --- Scoped Reads ---

def test_pl_reads_only_reports_in_scope(db_service, seed, report_payload):
    pl = seed.user("Dr. Leader", "pl")
    program = seed.program("BSc SE", pl.id)
    inside_course = seed.course("Inside", "IN1", program_id=program.id)
    outside_course = seed.course("Outside", "OUT1")
    inside_lecturer = seed.user("Inside Lecturer", "lecturer")
    outside_lecturer = seed.user("Outside Lecturer", "lecturer")
    seed.klass("IN-A", inside_course.id, lecturer_id=inside_lecturer.id)
    seed.klass("OUT-A", outside_course.id, lecturer_id=outside_lecturer.id)
    inside = report_service.submit_report(ReportCreate(**report_payload(inside_lecturer.id)), db_service)
    report_service.submit_report(ReportCreate(**report_payload(outside_lecturer.id)), db_service)

    reports = report_service.list_pl_reports(pl.id, db_service)

    assert [r.id for r in reports] == [inside.id]


def test_pl_without_programs_reads_empty_list(db_service, seed):
    pl = seed.user("Dr. Empty", "pl")

    assert report_service.list_pl_reports(pl.id, db_service) == []


def test_student_reads_rostered_reports_with_rating(db_service, seed, report_payload):
    lecturer = seed.user("Mr. Teach", "lecturer")
    course = seed.course("Databases", "DB101")
    klass = seed.klass("DB-A", course.id, lecturer_id=lecturer.id)
    student = seed.students(1, class_id=klass.id)[0]
    created = report_service.submit_report(ReportCreate(**report_payload(lecturer.id)), db_service)

    reports = report_service.list_student_reports(student.id, db_service)

    assert [r.id for r in reports] == [created.id]
    assert reports[0].rating == 0


def test_roster_failure_keeps_report(mocker, db_service, db_session, seed, report_payload):
    """
    GIVEN a store that fails while linking students
    WHEN a report is submitted
    THEN the report is still committed and the fan-out is rolled back.
    """
    lecturer = seed.user("Mr. Teach", "lecturer")
    course = seed.course("Databases", "DB101")
    klass = seed.klass("DB-A", course.id, lecturer_id=lecturer.id)
    seed.students(2, class_id=klass.id)
    mocker.patch.object(
        db_service, "add_student_report_links",
        side_effect=OperationalError("INSERT", {}, Exception("locked")),
    )
    rollback = mocker.spy(db_service, "rollback")

    created = report_service.submit_report(ReportCreate(**report_payload(lecturer.id)), db_service)

    assert db_session.get(Report, created.id) is not None
    assert db_session.query(StudentReport).count() == 0
    rollback.assert_called_once()
