# /reporting-backend/app/routers/lecturers_router.py

from typing import List

from fastapi import APIRouter, Depends

from ..models import report_model, stats_model
from ..services import aggregation_service, report_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("/{lecturer_id}/reports", response_model=List[report_model.ReportWithLecturer], summary="Get Reports Submitted by a Lecturer")
def get_lecturer_reports(lecturer_id: int, db: DatabaseService = Depends(get_db_service)):
    return report_service.list_lecturer_reports(lecturer_id=lecturer_id, db=db)


@router.get("/{lecturer_id}/stats", response_model=List[stats_model.WeeklyCount], summary="Weekly Submission Counts for a Lecturer")
def get_lecturer_stats(lecturer_id: int, db: DatabaseService = Depends(get_db_service)):
    return aggregation_service.weekly_stats_for_lecturer(lecturer_id=lecturer_id, db=db)


@router.get("/{lecturer_id}/monitoring", response_model=List[stats_model.ReportMonitoring], summary="Roster and Rating Figures per Report")
def get_lecturer_monitoring(lecturer_id: int, db: DatabaseService = Depends(get_db_service)):
    return aggregation_service.lecturer_report_monitoring(lecturer_id=lecturer_id, db=db)
