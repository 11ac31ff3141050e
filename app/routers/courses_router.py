# /reporting-backend/app/routers/courses_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import require_role
from ..models import course_model, stats_model
from ..services import course_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.errors import HierarchyNotFoundError, HierarchyValidationError

router = APIRouter()


@router.post(
    "",
    response_model=course_model.CourseCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Add a Course",
)
def create_course(
    payload: course_model.CourseCreate,
    principal=Depends(require_role("pl")),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return course_service.create_course(payload=payload, pl_id=principal.id, db=db)
    except HierarchyValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except HierarchyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{course_id}/assign", summary="Place a Course in One of the Caller's Programs")
def assign_course_to_program(
    course_id: int,
    payload: course_model.ProgramAssignment,
    principal=Depends(require_role("pl")),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        course_service.assign_course_to_program(course_id=course_id, payload=payload, pl_id=principal.id, db=db)
    except HierarchyValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except HierarchyNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"message": "Course assigned to program"}


@router.get(
    "/prl/{prl_id}",
    response_model=List[stats_model.PrlCourseSummary],
    dependencies=[Depends(require_role("prl"))],
    summary="Get All Courses in a Principal Lecturer's Stream",
)
def get_prl_courses(prl_id: int, db: DatabaseService = Depends(get_db_service)):
    return course_service.list_prl_courses(prl_id=prl_id, db=db)
