# /reporting-backend/app/services/database_helpers/rating_repository_sql.py

from datetime import datetime, timezone
from typing import Collection, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.report_models import Rating
from .dialect_statements import upsert


class RatingRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def rating_exists(self, student_id: int, report_id: int) -> bool:
        return (
            self.db.query(Rating.id)
            .filter(Rating.student_id == student_id, Rating.report_id == report_id)
            .first()
            is not None
        )

    def upsert_rating(self, student_id: int, report_id: int, rating: float) -> None:
        """Creates the (student, report) rating or overwrites its value and timestamp."""
        upsert(
            self.db,
            Rating,
            values={
                "student_id": student_id,
                "report_id": report_id,
                "rating": rating,
                "created_at": datetime.now(timezone.utc),
            },
            conflict_columns=("student_id", "report_id"),
            update_columns=("rating", "created_at"),
        )
        self.db.commit()

    def get_aggregate(self, report_id: int) -> Tuple[Optional[float], int]:
        """(average, count) over every rating of the report. Average is None when count is 0."""
        row = (
            self.db.query(func.avg(Rating.rating).label("avg_rating"), func.count(Rating.id).label("total"))
            .filter(Rating.report_id == report_id)
            .one()
        )
        return row.avg_rating, row.total

    def get_ratings_by_student(self, student_id: int) -> List[Rating]:
        return self.db.query(Rating).filter(Rating.student_id == student_id).order_by(Rating.report_id).all()

    def get_rating_rows_for_reports(self, report_ids: Collection[int]) -> List[dict]:
        if not report_ids:
            return []
        rows = (
            self.db.query(Rating.report_id, Rating.rating)
            .filter(Rating.report_id.in_(list(report_ids)))
            .all()
        )
        return [dict(row._mapping) for row in rows]
