# /reporting-backend/app/routers/students_router.py

from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models import rating_model, report_model, stats_model
from ..services import aggregation_service, rating_service, report_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.errors import ReportNotFoundError, ReportValidationError

router = APIRouter()


@router.get("/{student_id}/reports", response_model=List[report_model.StudentReportView], summary="Get Reports a Student Attended")
def get_student_reports(student_id: int, db: DatabaseService = Depends(get_db_service)):
    return report_service.list_student_reports(student_id=student_id, db=db)


@router.get("/{student_id}/ratings", response_model=Dict[int, float], summary="Get a Student's Ratings Keyed by Report")
def get_student_ratings(student_id: int, db: DatabaseService = Depends(get_db_service)):
    return rating_service.get_ratings_by_student(student_id=student_id, db=db)


@router.get("/{student_id}/stats", response_model=List[stats_model.WeeklyCount], summary="Weekly Report Counts for a Student")
def get_student_stats(student_id: int, db: DatabaseService = Depends(get_db_service)):
    return aggregation_service.weekly_stats_for_student(student_id=student_id, db=db)


@router.post("/{student_id}/rate/{report_id}", response_model=rating_model.RatingResult, summary="Rate a Report as a Student")
def rate_report(
    student_id: int,
    report_id: int,
    payload: rating_model.StudentRatingCreate,
    response: Response,
    db: DatabaseService = Depends(get_db_service),
):
    try:
        result = rating_service.rate_report(student_id=student_id, report_id=report_id, rating=payload.rating, db=db)
    except ReportValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ReportNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if result.status == rating_model.RatingStatus.CREATED:
        response.status_code = status.HTTP_201_CREATED
    return result
