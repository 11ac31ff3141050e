# /reporting-backend/app/models/rating_model.py

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class RatingCreate(BaseModel):
    """Body of a rate request. `rating` is coerced, so any JSON scalar is accepted."""
    student_id: Optional[int] = None
    rating: Any = None


class StudentRatingCreate(BaseModel):
    """Body of the student-scoped rate request, where the student id is in the path."""
    rating: Any = None


class RatingStatus(str, Enum):
    CREATED = "created"
    UPDATED = "updated"


class RatingResult(BaseModel):
    status: RatingStatus
    message: str


class RatingAggregate(BaseModel):
    """
    Aggregate statistics for one report. A report nobody has rated yet reads
    as `{avgRating: 0, totalRatings: 0}`, never null.
    """
    avgRating: float = Field(default=0, examples=[4.25])
    totalRatings: int = Field(default=0, examples=[12])


class FeedbackUpdate(BaseModel):
    lecturer_id: Optional[int] = None
    feedback: Optional[str] = None


class SupervisorFeedbackUpdate(BaseModel):
    feedback: Optional[str] = None
