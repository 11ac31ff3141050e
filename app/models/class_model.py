# /reporting-backend/app/models/class_model.py

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ClassHints(BaseModel):
    """Free-text class details a lecturer may type into the report form."""
    class_name: Optional[str] = None
    course_code: Optional[str] = None
    course_name: Optional[str] = None
    faculty_name: Optional[str] = None

    def has_lookup_keys(self) -> bool:
        """Only a class name or a course code can be used to look a class up."""
        return bool(self.class_name or self.course_code)


class ClassContext(BaseModel):
    """
    The class/course/faculty context resolved for a new report.
    `class_id` is None when the context is only an echo of the hints.
    """
    model_config = ConfigDict(frozen=True)

    class_id: Optional[int] = None
    class_name: str = ""
    course_name: str = ""
    course_code: str = ""
    faculty_name: str = ""
    venue: str = ""
    scheduled_time: str = ""


class LecturerAssignment(BaseModel):
    """Body of a Program Leader's lecturer-to-class assignment."""
    lecturer_id: Optional[int] = None


class CourseAssignment(BaseModel):
    """Body of a Program Leader's course-to-class assignment."""
    course_id: Optional[int] = None
