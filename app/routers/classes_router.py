# /reporting-backend/app/routers/classes_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import require_role
from ..models import class_model, stats_model
from ..services import aggregation_service, class_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.errors import HierarchyNotFoundError, HierarchyValidationError

router = APIRouter()


@router.get(
    "/prl/{prl_id}",
    response_model=List[stats_model.PrlClassSummary],
    dependencies=[Depends(require_role("prl"))],
    summary="Get All Classes in a Principal Lecturer's Stream",
)
def get_prl_classes(prl_id: int, db: DatabaseService = Depends(get_db_service)):
    return aggregation_service.prl_classes(prl_id=prl_id, db=db)


# --- PROGRAM LEADER MAINTENANCE (/api/classes/{class_id}) ---

@router.put("/{class_id}/assign", dependencies=[Depends(require_role("pl"))], summary="Assign a Lecturer to a Class")
def assign_lecturer(class_id: int, payload: class_model.LecturerAssignment, db: DatabaseService = Depends(get_db_service)):
    try:
        class_service.assign_lecturer_to_class(class_id=class_id, payload=payload, db=db)
    except HierarchyValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except HierarchyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": "Lecturer assigned to class"}


@router.put("/{class_id}/assign-course", dependencies=[Depends(require_role("pl"))], summary="Move a Class to Another Course")
def assign_course(class_id: int, payload: class_model.CourseAssignment, db: DatabaseService = Depends(get_db_service)):
    try:
        class_service.assign_course_to_class(class_id=class_id, payload=payload, db=db)
    except HierarchyValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except HierarchyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": "Course assigned to class"}
