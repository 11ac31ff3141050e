# /reporting-backend/app/services/database_service.py

from typing import Collection, Dict, Generator, List, Optional, Tuple

from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.hierarchy_repository_sql import HierarchyRepositorySQL
from .database_helpers.report_repository_sql import ReportRepositorySQL
from .database_helpers.rating_repository_sql import RatingRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Initializes the DatabaseService over one SQLAlchemy session.

        This facade is the only thing the business services see of the store:
        every method delegates to one of the SQL repositories, which makes the
        services easy to exercise against a `MagicMock` in unit tests.
        """
        if db_session is None:
            raise ValueError("A database session is required.")
        self.hierarchy_repo = HierarchyRepositorySQL(db_session)
        self.report_repo = ReportRepositorySQL(db_session)
        self.rating_repo = RatingRepositorySQL(db_session)

    # --- HIERARCHY METHODS (DELEGATED) ---
    def get_programs_by_pl(self, pl_id: int) -> List: return self.hierarchy_repo.get_programs_by_pl(pl_id)
    def get_program_ids_by_pl(self, pl_id: int) -> List[int]: return self.hierarchy_repo.get_program_ids_by_pl(pl_id)
    def get_course_ids_by_programs(self, program_ids: Collection[int]) -> List[int]: return self.hierarchy_repo.get_course_ids_by_programs(program_ids)
    def get_course_ids_by_legacy_link(self, program_ids: Collection[int]) -> List[int]: return self.hierarchy_repo.get_course_ids_by_legacy_link(program_ids)
    def get_class_ids_by_courses(self, course_ids: Collection[int]) -> List[int]: return self.hierarchy_repo.get_class_ids_by_courses(course_ids)
    def get_stream_id_for_prl(self, prl_id: int) -> Optional[int]: return self.hierarchy_repo.get_stream_id_for_prl(prl_id)
    def get_class_ids_by_stream(self, stream_id: int) -> List[int]: return self.hierarchy_repo.get_class_ids_by_stream(stream_id)
    def get_class_summaries(self, class_ids: Collection[int]) -> List[Dict]: return self.hierarchy_repo.get_class_summaries(class_ids)

    # --- CLASS LOOKUP METHODS (DELEGATED) ---
    def get_first_class_for_lecturer(self, lecturer_id: int) -> Optional[Tuple]: return self.hierarchy_repo.get_first_class_for_lecturer(lecturer_id)
    def find_class_by_name_or_course_code(self, class_name: Optional[str], course_code: Optional[str]) -> Optional[Tuple]:
        return self.hierarchy_repo.find_class_by_name_or_course_code(class_name, course_code)

    # --- HIERARCHY MAINTENANCE METHODS (DELEGATED) ---
    def get_class_by_id(self, class_id: int): return self.hierarchy_repo.get_class_by_id(class_id)
    def get_course_by_id(self, course_id: int): return self.hierarchy_repo.get_course_by_id(course_id)
    def get_program_for_pl(self, program_id: int, pl_id: int): return self.hierarchy_repo.get_program_for_pl(program_id, pl_id)
    def get_user_by_id_and_role(self, user_id: int, role: str): return self.hierarchy_repo.get_user_by_id_and_role(user_id, role)
    def update_class(self, class_id: int, data: Dict): return self.hierarchy_repo.update_class(class_id, data)
    def add_course(self, record: Dict): return self.hierarchy_repo.add_course(record)
    def update_course(self, course_id: int, data: Dict): return self.hierarchy_repo.update_course(course_id, data)
    def get_course_summaries_by_stream(self, stream_id: int) -> List[Dict]: return self.hierarchy_repo.get_course_summaries_by_stream(stream_id)

    # --- REPORT METHODS (DELEGATED) ---
    def add_report(self, record: Dict): return self.report_repo.add_report(record)
    def get_report_by_id(self, report_id: int): return self.report_repo.get_report_by_id(report_id)
    def get_all_reports(self) -> List: return self.report_repo.get_all_reports()
    def get_reports_by_lecturer(self, lecturer_id: int) -> List[Dict]: return self.report_repo.get_reports_by_lecturer(lecturer_id)
    def get_reports_by_class_ids(self, class_ids: Collection[int]) -> List[Dict]: return self.report_repo.get_reports_by_class_ids(class_ids)
    def get_reports_for_student(self, student_id: int) -> List[Dict]: return self.report_repo.get_reports_for_student(student_id)
    def update_feedback_for_lecturer(self, report_id: int, lecturer_id: int, feedback: str) -> int:
        return self.report_repo.update_feedback_for_lecturer(report_id, lecturer_id, feedback)
    def update_feedback_in_classes(self, report_id: int, class_ids: Collection[int], feedback: str) -> int:
        return self.report_repo.update_feedback_in_classes(report_id, class_ids, feedback)

    # --- ROSTER SNAPSHOT METHODS (DELEGATED) ---
    def get_student_ids_by_class(self, class_id: int) -> List[int]: return self.report_repo.get_student_ids_by_class(class_id)
    def add_student_report_links(self, report_id: int, student_ids: Collection[int]) -> None: self.report_repo.add_student_report_links(report_id, student_ids)
    def get_student_ids_for_report(self, report_id: int) -> List[int]: return self.report_repo.get_student_ids_for_report(report_id)

    # --- AGGREGATION FEEDS (DELEGATED) ---
    def get_week_rows_by_class_ids(self, class_ids: Collection[int]) -> List[Dict]: return self.report_repo.get_week_rows_by_class_ids(class_ids)
    def get_week_rows_by_lecturer(self, lecturer_id: int) -> List[Dict]: return self.report_repo.get_week_rows_by_lecturer(lecturer_id)
    def get_week_rows_by_student(self, student_id: int) -> List[Dict]: return self.report_repo.get_week_rows_by_student(student_id)
    def get_submission_rows_by_class_ids(self, class_ids: Collection[int]) -> List[Dict]: return self.report_repo.get_submission_rows_by_class_ids(class_ids)
    def count_roster_by_report(self, report_ids: Collection[int]) -> Dict[int, int]: return self.report_repo.count_roster_by_report(report_ids)

    # --- RATING METHODS (DELEGATED) ---
    def rating_exists(self, student_id: int, report_id: int) -> bool: return self.rating_repo.rating_exists(student_id, report_id)
    def upsert_rating(self, student_id: int, report_id: int, rating: float) -> None: self.rating_repo.upsert_rating(student_id, report_id, rating)
    def get_rating_aggregate(self, report_id: int) -> Tuple[Optional[float], int]: return self.rating_repo.get_aggregate(report_id)
    def get_ratings_by_student(self, student_id: int) -> List: return self.rating_repo.get_ratings_by_student(student_id)
    def get_rating_rows_for_reports(self, report_ids: Collection[int]) -> List[Dict]: return self.rating_repo.get_rating_rows_for_reports(report_ids)

    # --- SESSION CONTROL ---
    def rollback(self) -> None: self.report_repo.rollback()


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
