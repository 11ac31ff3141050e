# /reporting-backend/app/routers/reports_router.py

from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import require_role
from ..models import rating_model, report_model, stats_model
from ..services import aggregation_service, rating_service, report_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.errors import ReportNotFoundError, ReportValidationError

router = APIRouter()


# --- REPORT COLLECTION ENDPOINTS (/api/reports) ---

@router.get("", response_model=List[report_model.Report], summary="Get All Reports")
def get_all_reports(db: DatabaseService = Depends(get_db_service)):
    return report_service.list_all_reports(db=db)


@router.post("", response_model=report_model.ReportCreated, status_code=status.HTTP_201_CREATED, summary="Submit a Lecture Report")
def submit_report(payload: report_model.ReportCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return report_service.submit_report(payload=payload, db=db)
    except ReportValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/lecturer/{lecturer_id}", response_model=List[report_model.ReportWithLecturer], summary="Get a Lecturer's Reports")
def get_lecturer_reports(lecturer_id: int, db: DatabaseService = Depends(get_db_service)):
    return report_service.list_lecturer_reports(lecturer_id=lecturer_id, db=db)


@router.get("/student/{student_id}", response_model=List[report_model.StudentReportView], summary="Get a Student's Reports")
def get_student_reports(student_id: int, db: DatabaseService = Depends(get_db_service)):
    return report_service.list_student_reports(student_id=student_id, db=db)


@router.get("/student/{student_id}/ratings", response_model=Dict[int, float], summary="Get a Student's Ratings Keyed by Report")
def get_student_ratings(student_id: int, db: DatabaseService = Depends(get_db_service)):
    return rating_service.get_ratings_by_student(student_id=student_id, db=db)


# --- SUPERVISOR SCOPE ENDPOINTS ---

@router.get(
    "/pl/{pl_id}",
    response_model=List[report_model.ReportWithLecturer],
    dependencies=[Depends(require_role("pl"))],
    summary="Get Reports in a Program Leader's Scope",
)
def get_pl_reports(pl_id: int, db: DatabaseService = Depends(get_db_service)):
    return report_service.list_pl_reports(pl_id=pl_id, db=db)


@router.get(
    "/pl/{pl_id}/stats",
    response_model=List[stats_model.WeeklyCount],
    dependencies=[Depends(require_role("pl"))],
    summary="Weekly Report Counts for a Program Leader",
)
def get_pl_stats(pl_id: int, db: DatabaseService = Depends(get_db_service)):
    return aggregation_service.weekly_stats_for_pl(pl_id=pl_id, db=db)


@router.get(
    "/pl/{pl_id}/program-stats",
    response_model=List[stats_model.ProgramStats],
    dependencies=[Depends(require_role("pl"))],
    summary="Report Counts per Program",
)
def get_program_stats(pl_id: int, db: DatabaseService = Depends(get_db_service)):
    return aggregation_service.program_stats(pl_id=pl_id, db=db)


@router.get(
    "/prl/{prl_id}",
    response_model=List[report_model.ReportWithLecturer],
    dependencies=[Depends(require_role("prl"))],
    summary="Get Reports in a Principal Lecturer's Stream",
)
def get_prl_reports(prl_id: int, db: DatabaseService = Depends(get_db_service)):
    return report_service.list_prl_reports(prl_id=prl_id, db=db)


# --- INDIVIDUAL REPORT ENDPOINTS (/api/reports/{report_id}) ---

@router.post("/{report_id}/rate", response_model=rating_model.RatingResult, summary="Rate a Report")
def rate_report(report_id: int, payload: rating_model.RatingCreate, db: DatabaseService = Depends(get_db_service)):
    try:
        return rating_service.rate_report(
            student_id=payload.student_id, report_id=report_id, rating=payload.rating, db=db
        )
    except ReportValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ReportNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{report_id}/ratings", response_model=rating_model.RatingAggregate, summary="Get a Report's Rating Statistics")
def get_report_ratings(report_id: int, db: DatabaseService = Depends(get_db_service)):
    return rating_service.get_aggregate(report_id=report_id, db=db)


@router.post("/{report_id}/feedback", summary="Submit Feedback on an Owned Report")
def submit_feedback(report_id: int, payload: rating_model.FeedbackUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        rating_service.submit_feedback(
            report_id=report_id, lecturer_id=payload.lecturer_id, feedback=payload.feedback, db=db
        )
    except ReportValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ReportNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": "Feedback submitted successfully"}


@router.post("/{report_id}/prl-feedback", summary="Submit Principal Lecturer Feedback")
def submit_prl_feedback(
    report_id: int,
    payload: rating_model.SupervisorFeedbackUpdate,
    principal=Depends(require_role("prl")),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        rating_service.submit_supervisor_feedback(
            report_id=report_id, prl_id=principal.id, feedback=payload.feedback, db=db
        )
    except ReportValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ReportNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": f"Feedback submitted for report {report_id}"}
