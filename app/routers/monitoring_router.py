# /reporting-backend/app/routers/monitoring_router.py

from typing import List

from fastapi import APIRouter, Depends

from ..core.deps import require_role
from ..models import stats_model
from ..services import aggregation_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_role("prl"))])


@router.get("/prl/{prl_id}", response_model=List[stats_model.LecturerOverview], summary="Lecturer Overview for a Principal Lecturer")
def get_prl_overview(prl_id: int, db: DatabaseService = Depends(get_db_service)):
    return aggregation_service.prl_lecturer_overview(prl_id=prl_id, db=db)


@router.get("/prl/{prl_id}/stats", response_model=List[stats_model.WeeklyCount], summary="Weekly Submission Counts for a Stream")
def get_prl_stats(prl_id: int, db: DatabaseService = Depends(get_db_service)):
    return aggregation_service.weekly_stats_for_prl(prl_id=prl_id, db=db)
