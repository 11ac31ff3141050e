# /reporting-backend/app/models/course_model.py

# --- Core Imports ---
from typing import Optional

from pydantic import BaseModel, Field


# --- Model Definitions ---

class CourseCreate(BaseModel):
    """
    A new course added by a Program Leader. Name, code and faculty are
    required; they are optional here so a missing one is reported as a 400
    naming the field rather than a schema error.
    """
    course_name: Optional[str] = Field(default=None, examples=["Operating Systems"])
    course_code: Optional[str] = Field(default=None, examples=["OS201"])
    faculty_name: Optional[str] = Field(default=None, examples=["Faculty of Computing"])
    program_id: Optional[int] = Field(default=None, description="Must be a program the caller owns.")
    stream_id: Optional[int] = None


class CourseCreated(BaseModel):
    message: str = "Course added"
    id: int


class ProgramAssignment(BaseModel):
    """Body of a course-to-program assignment."""
    program_id: Optional[int] = None
