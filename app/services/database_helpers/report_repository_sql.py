# /reporting-backend/app/services/database_helpers/report_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Report and
StudentReport tables. Reports are append-only: nothing here deletes one, and
the only column ever updated after insert is `feedback`.
"""

from typing import Collection, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.report_models import Report, StudentReport, Rating
from app.db.models.user_models import User
from .dialect_statements import insert_ignore_duplicates


def _as_dict(obj) -> Dict:
    return {c.name: getattr(obj, c.name) for c in obj.__table__.columns}


class ReportRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Report Write Methods ---

    def add_report(self, record: Dict) -> Report:
        """Creates a new Report record and returns it with its generated id."""
        new_report = Report(**record)
        self.db.add(new_report)
        self.db.commit()
        self.db.refresh(new_report)
        return new_report

    def update_feedback_for_lecturer(self, report_id: int, lecturer_id: int, feedback: str) -> int:
        """
        Sets a report's feedback only when the report belongs to the lecturer.
        Returns the number of affected rows (0 or 1).
        """
        affected = (
            self.db.query(Report)
            .filter(Report.id == report_id, Report.lecturer_id == lecturer_id)
            .update({Report.feedback: feedback}, synchronize_session=False)
        )
        self.db.commit()
        return affected

    def update_feedback_in_classes(self, report_id: int, class_ids: Collection[int], feedback: str) -> int:
        """Sets a report's feedback only when the report belongs to one of `class_ids`."""
        if not class_ids:
            return 0
        affected = (
            self.db.query(Report)
            .filter(Report.id == report_id, Report.class_id.in_(list(class_ids)))
            .update({Report.feedback: feedback}, synchronize_session=False)
        )
        self.db.commit()
        return affected

    # --- Report Read Methods ---

    def get_report_by_id(self, report_id: int) -> Optional[Report]:
        return self.db.query(Report).filter(Report.id == report_id).first()

    def get_all_reports(self) -> List[Report]:
        return self.db.query(Report).order_by(Report.created_at.desc(), Report.id.desc()).all()

    def get_reports_by_lecturer(self, lecturer_id: int) -> List[Dict]:
        rows = (
            self.db.query(Report, User.name.label("lecturer_name"))
            .join(User, Report.lecturer_id == User.id)
            .filter(Report.lecturer_id == lecturer_id)
            .order_by(Report.week_of_reporting.asc(), Report.id.asc())
            .all()
        )
        return [{**_as_dict(report), "lecturer_name": name} for report, name in rows]

    def get_reports_by_class_ids(self, class_ids: Collection[int]) -> List[Dict]:
        """Reports filed against any of `class_ids`, newest first, with lecturer names."""
        if not class_ids:
            return []
        rows = (
            self.db.query(Report, User.name.label("lecturer_name"))
            .join(User, Report.lecturer_id == User.id)
            .filter(Report.class_id.in_(list(class_ids)))
            .order_by(Report.created_at.desc(), Report.id.desc())
            .all()
        )
        return [{**_as_dict(report), "lecturer_name": name} for report, name in rows]

    def get_reports_for_student(self, student_id: int) -> List[Dict]:
        """
        Reports the student was on the roster for, each with that student's own
        rating (0 when unrated).
        """
        rows = (
            self.db.query(
                Report,
                User.name.label("lecturer_name"),
                func.coalesce(Rating.rating, 0).label("rating"),
            )
            .join(StudentReport, StudentReport.report_id == Report.id)
            .outerjoin(User, Report.lecturer_id == User.id)
            .outerjoin(Rating, (Rating.report_id == Report.id) & (Rating.student_id == student_id))
            .filter(StudentReport.student_id == student_id)
            .order_by(Report.week_of_reporting.asc(), Report.id.asc())
            .all()
        )
        return [
            {**_as_dict(report), "lecturer_name": name, "rating": rating}
            for report, name, rating in rows
        ]

    # --- Aggregation Feeds ---
    # Flat rows for the aggregation service to group with pandas.

    def get_week_rows_by_class_ids(self, class_ids: Collection[int]) -> List[Dict]:
        if not class_ids:
            return []
        rows = (
            self.db.query(Report.id, Report.class_id, Report.week_of_reporting)
            .filter(Report.class_id.in_(list(class_ids)))
            .all()
        )
        return [dict(row._mapping) for row in rows]

    def get_week_rows_by_lecturer(self, lecturer_id: int) -> List[Dict]:
        rows = (
            self.db.query(Report.id, Report.week_of_reporting)
            .filter(Report.lecturer_id == lecturer_id)
            .all()
        )
        return [dict(row._mapping) for row in rows]

    def get_week_rows_by_student(self, student_id: int) -> List[Dict]:
        rows = (
            self.db.query(Report.id, Report.week_of_reporting)
            .join(StudentReport, StudentReport.report_id == Report.id)
            .filter(StudentReport.student_id == student_id)
            .all()
        )
        return [dict(row._mapping) for row in rows]

    def get_submission_rows_by_class_ids(self, class_ids: Collection[int]) -> List[Dict]:
        """One row per report in scope with its lecturer, for the PRL overview."""
        if not class_ids:
            return []
        rows = (
            self.db.query(
                Report.id.label("report_id"),
                Report.lecturer_id,
                User.name.label("lecturer_name"),
                Report.created_at,
            )
            .join(User, Report.lecturer_id == User.id)
            .filter(Report.class_id.in_(list(class_ids)))
            .all()
        )
        return [dict(row._mapping) for row in rows]

    def count_roster_by_report(self, report_ids: Collection[int]) -> Dict[int, int]:
        if not report_ids:
            return {}
        rows = (
            self.db.query(StudentReport.report_id, func.count(StudentReport.student_id).label("students"))
            .filter(StudentReport.report_id.in_(list(report_ids)))
            .group_by(StudentReport.report_id)
            .all()
        )
        return {row.report_id: row.students for row in rows}

    # --- Roster Snapshot Methods ---

    def get_student_ids_by_class(self, class_id: int) -> List[int]:
        rows = (
            self.db.query(User.id)
            .filter(User.role == "student", User.class_id == class_id)
            .order_by(User.id)
            .all()
        )
        return [row.id for row in rows]

    def add_student_report_links(self, report_id: int, student_ids: Collection[int]) -> None:
        """One StudentReport row per student; pairs that already exist are skipped."""
        rows = [{"student_id": student_id, "report_id": report_id} for student_id in student_ids]
        insert_ignore_duplicates(self.db, StudentReport, rows, conflict_columns=("student_id", "report_id"))
        self.db.commit()

    def get_student_ids_for_report(self, report_id: int) -> List[int]:
        rows = (
            self.db.query(StudentReport.student_id)
            .filter(StudentReport.report_id == report_id)
            .order_by(StudentReport.student_id)
            .all()
        )
        return [row.student_id for row in rows]

    def rollback(self) -> None:
        self.db.rollback()
