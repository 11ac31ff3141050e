# /reporting-backend/app/services/aggregation_service.py

"""
This service produces the counts and monitoring tables shown on the
supervisor, lecturer and student dashboards.

Two enumeration rules apply:

* Program statistics enumerate the programs a PL owns, so every program
  appears, with 0 when nothing hangs off it.
* Weekly statistics enumerate the weeks observed in the data, so a week with
  no reports is simply absent.

Raw rows come from the `DatabaseService`; the grouping is done with pandas.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd

from ..models.stats_model import (
    LecturerOverview,
    PrlClassSummary,
    ProgramStats,
    ReportMonitoring,
    WeeklyCount,
)
from . import hierarchy_service
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


# --- Grouping Helpers ---

def _weekly_counts(rows: List[Dict]) -> List[WeeklyCount]:
    """Counts rows per `week_of_reporting`, ascending by week, observed weeks only."""
    if not rows:
        return []
    df = pd.DataFrame(rows)
    counts = df.groupby("week_of_reporting").size().sort_index()
    return [WeeklyCount(week=str(week), count=int(n)) for week, n in counts.items()]


def _average_by_report(rating_rows: List[Dict]) -> Dict[int, float]:
    if not rating_rows:
        return {}
    df = pd.DataFrame(rating_rows)
    return df.groupby("report_id")["rating"].mean().to_dict()


def _none_if_missing(value) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def _as_datetime(value):
    return value.to_pydatetime() if isinstance(value, pd.Timestamp) else value


# --- Weekly Statistics ---

def weekly_stats_for_pl(pl_id: int, db: DatabaseService) -> List[WeeklyCount]:
    scope = hierarchy_service.resolve_pl_scope(pl_id, db)
    if scope.is_empty:
        return []
    return _weekly_counts(db.get_week_rows_by_class_ids(scope.class_ids))


def weekly_stats_for_prl(prl_id: int, db: DatabaseService) -> List[WeeklyCount]:
    scope = hierarchy_service.resolve_prl_scope(prl_id, db)
    if scope.is_empty:
        return []
    return _weekly_counts(db.get_week_rows_by_class_ids(scope.class_ids))


def weekly_stats_for_lecturer(lecturer_id: int, db: DatabaseService) -> List[WeeklyCount]:
    return _weekly_counts(db.get_week_rows_by_lecturer(lecturer_id))


def weekly_stats_for_student(student_id: int, db: DatabaseService) -> List[WeeklyCount]:
    return _weekly_counts(db.get_week_rows_by_student(student_id))


# --- Program Statistics ---

def program_stats(pl_id: int, db: DatabaseService) -> List[ProgramStats]:
    """
    One entry per program the PL owns, in program id order. A program whose
    course or class chain is empty reports `totalReports = 0`.
    """
    breakdown = hierarchy_service.resolve_program_breakdown(pl_id, db)
    if not breakdown:
        return []

    all_class_ids = sorted({cid for entry in breakdown for cid in entry.scope.class_ids})
    per_class: Dict[int, int] = {}
    if all_class_ids:
        rows = db.get_week_rows_by_class_ids(all_class_ids)
        if rows:
            per_class = pd.DataFrame(rows).groupby("class_id").size().to_dict()

    return [
        ProgramStats(
            programId=entry.program_id,
            programName=entry.program_name,
            totalReports=int(sum(per_class.get(cid, 0) for cid in entry.scope.class_ids)),
        )
        for entry in breakdown
    ]


# --- Monitoring Tables ---

def prl_lecturer_overview(prl_id: int, db: DatabaseService) -> List[LecturerOverview]:
    """
    Per-lecturer totals for the reports in the PRL's stream: report count,
    average rating (one decimal) and latest submission, busiest lecturer first.
    Only lecturers with at least one report in scope are listed.
    """
    scope = hierarchy_service.resolve_prl_scope(prl_id, db)
    if scope.is_empty:
        return []
    submissions = pd.DataFrame(db.get_submission_rows_by_class_ids(scope.class_ids))
    if submissions.empty:
        return []

    totals = (
        submissions.groupby(["lecturer_id", "lecturer_name"])
        .agg(total_reports=("report_id", "nunique"), last_submission=("created_at", "max"))
        .reset_index()
    )

    rating_rows = db.get_rating_rows_for_reports(submissions["report_id"].tolist())
    averages: Dict[int, float] = {}
    if rating_rows:
        rated = pd.DataFrame(rating_rows).merge(submissions[["report_id", "lecturer_id"]], on="report_id")
        averages = rated.groupby("lecturer_id")["rating"].mean().round(1).to_dict()

    totals = totals.sort_values(["total_reports", "lecturer_name"], ascending=[False, True])
    return [
        LecturerOverview(
            lecturer_id=int(row.lecturer_id),
            lecturer_name=row.lecturer_name,
            total_reports=int(row.total_reports),
            avg_rating=_none_if_missing(averages.get(row.lecturer_id)),
            last_submission=_as_datetime(row.last_submission),
        )
        for row in totals.itertuples(index=False)
    ]


def lecturer_report_monitoring(lecturer_id: int, db: DatabaseService) -> List[ReportMonitoring]:
    """Roster size and rating average for each of a lecturer's reports, by week."""
    reports = db.get_reports_by_lecturer(lecturer_id)
    if not reports:
        return []
    report_ids = [r["id"] for r in reports]
    roster_counts = db.count_roster_by_report(report_ids)
    averages = _average_by_report(db.get_rating_rows_for_reports(report_ids))

    return [
        ReportMonitoring(
            report_id=r["id"],
            week_of_reporting=r["week_of_reporting"],
            date_of_lecture=r["date_of_lecture"],
            topic_taught=r["topic_taught"],
            faculty_name=r["faculty_name"],
            class_name=r["class_name"],
            course_name=r["course_name"],
            students_count=roster_counts.get(r["id"], 0),
            avg_rating=float(averages.get(r["id"], 0)),
        )
        for r in reports
    ]


def prl_classes(prl_id: int, db: DatabaseService) -> List[PrlClassSummary]:
    """The classes in the PRL's stream with their course, lecturer and student count."""
    scope = hierarchy_service.resolve_prl_scope(prl_id, db)
    if scope.is_empty:
        return []
    return [PrlClassSummary.model_validate(row) for row in db.get_class_summaries(scope.class_ids)]
