# /tests/test_rating_service.py

from datetime import datetime

import pytest
from unittest.mock import MagicMock

from app.db.models.report_models import Rating, Report
from app.models.rating_model import RatingStatus
from app.models.report_model import ReportCreate
from app.services import rating_service, report_service
from app.services.errors import ReportNotFoundError, ReportValidationError


@pytest.fixture
def rated_setup(db_service, seed, report_payload):
    """A lecturer with one class, two students, and one submitted report."""
    lecturer = seed.user("Mr. Teach", "lecturer")
    course = seed.course("Databases", "DB101")
    klass = seed.klass("DB-A", course.id, lecturer_id=lecturer.id)
    students = seed.students(2, class_id=klass.id)
    created = report_service.submit_report(ReportCreate(**report_payload(lecturer.id)), db_service)
    return {"lecturer": lecturer, "klass": klass, "students": students, "report_id": created.id}


# --- Ratings ---

def test_rerating_overwrites_single_row(db_service, db_session, rated_setup):
    """
    GIVEN a student who rated a report 3
    WHEN they rate it again with 5
    THEN one rating row remains and the aggregate is {5.0, 1}.
    """
    student = rated_setup["students"][0]
    report_id = rated_setup["report_id"]

    first = rating_service.rate_report(student.id, report_id, 3, db_service)
    second = rating_service.rate_report(student.id, report_id, 5, db_service)

    assert first.status == RatingStatus.CREATED
    assert first.message == "Rating recorded"
    assert second.status == RatingStatus.UPDATED
    assert second.message == "Rating updated"
    assert db_session.query(Rating).filter(Rating.report_id == report_id).count() == 1

    aggregate = rating_service.get_aggregate(report_id, db_service)
    assert aggregate.avgRating == 5.0
    assert aggregate.totalRatings == 1
    print("\n✅ SUCCESS: test_rerating_overwrites_single_row passed.")


def test_rerating_refreshes_timestamp(db_service, db_session, rated_setup):
    """
    GIVEN a stored rating whose timestamp is years old
    WHEN the student rates the report again
    THEN the same row carries the new value and a new timestamp.
    """
    student = rated_setup["students"][0]
    report_id = rated_setup["report_id"]
    stale = datetime(2020, 1, 1)
    rating_service.rate_report(student.id, report_id, 3, db_service)
    db_session.query(Rating).update({Rating.created_at: stale})
    db_session.commit()

    rating_service.rate_report(student.id, report_id, 5, db_service)
    db_session.expire_all()

    rows = db_session.query(Rating).filter(Rating.report_id == report_id).all()
    assert len(rows) == 1
    assert rows[0].rating == 5.0
    assert rows[0].created_at.replace(tzinfo=None) > stale


def test_aggregate_averages_across_students(db_service, rated_setup):
    report_id = rated_setup["report_id"]
    s1, s2 = rated_setup["students"]

    rating_service.rate_report(s1.id, report_id, 4, db_service)
    rating_service.rate_report(s2.id, report_id, "5", db_service)

    aggregate = rating_service.get_aggregate(report_id, db_service)
    assert aggregate.avgRating == 4.5
    assert aggregate.totalRatings == 2


def test_unrated_report_aggregate_is_zero(db_service, rated_setup):
    aggregate = rating_service.get_aggregate(rated_setup["report_id"], db_service)

    assert aggregate.avgRating == 0
    assert aggregate.totalRatings == 0


def test_non_numeric_rating_is_stored_as_zero(db_service, rated_setup):
    student = rated_setup["students"][0]

    rating_service.rate_report(student.id, rated_setup["report_id"], "great", db_service)

    assert rating_service.get_ratings_by_student(student.id, db_service) == {rated_setup["report_id"]: 0.0}


@pytest.mark.parametrize("student_id, rating", [(None, 4), (1, None), (1, "")])
def test_rating_requires_student_and_value(student_id, rating):
    mock_db = MagicMock()

    with pytest.raises(ReportValidationError) as exc_info:
        rating_service.rate_report(student_id, 1, rating, mock_db)

    assert str(exc_info.value).startswith("Missing student ID or rating")
    mock_db.upsert_rating.assert_not_called()


def test_rating_unknown_report_is_not_found(db_service, seed):
    student = seed.user("Lonely Student", "student")

    with pytest.raises(ReportNotFoundError):
        rating_service.rate_report(student.id, 999, 4, db_service)


# --- Feedback ---

def test_owner_feedback_is_saved(db_service, db_session, rated_setup):
    report_id = rated_setup["report_id"]

    rating_service.submit_feedback(report_id, rated_setup["lecturer"].id, "Well prepared", db_service)

    db_session.expire_all()
    assert db_session.get(Report, report_id).feedback == "Well prepared"


def test_non_owner_feedback_is_rejected_and_report_unchanged(db_service, db_session, seed, rated_setup):
    report_id = rated_setup["report_id"]
    intruder = seed.user("Ms. Other", "lecturer")

    with pytest.raises(ReportNotFoundError) as exc_info:
        rating_service.submit_feedback(report_id, intruder.id, "Overwritten", db_service)

    assert str(exc_info.value) == "Report not found or you are not authorized"
    db_session.expire_all()
    assert db_session.get(Report, report_id).feedback == ""


def test_feedback_requires_text():
    with pytest.raises(ReportValidationError):
        rating_service.submit_feedback(1, 2, "", MagicMock())


def test_prl_feedback_inside_stream(db_service, db_session, seed, report_payload):
    prl_user = seed.user("Prof. Stream", "prl")
    seed.prl(prl_user.id, stream_id=4)
    lecturer = seed.user("Mr. Teach", "lecturer")
    course = seed.course("Databases", "DB101", stream_id=4)
    seed.klass("DB-A", course.id, lecturer_id=lecturer.id)
    created = report_service.submit_report(ReportCreate(**report_payload(lecturer.id)), db_service)

    rating_service.submit_supervisor_feedback(created.id, prl_user.id, "Reviewed", db_service)

    db_session.expire_all()
    assert db_session.get(Report, created.id).feedback == "Reviewed"


def test_prl_feedback_outside_stream_is_rejected(db_service, seed, rated_setup):
    prl_user = seed.user("Prof. Elsewhere", "prl")
    seed.prl(prl_user.id, stream_id=77)

    with pytest.raises(ReportNotFoundError):
        rating_service.submit_supervisor_feedback(rated_setup["report_id"], prl_user.id, "Nope", db_service)
