# /reporting-backend/app/services/class_context_service.py

"""
This service works out which class a new report belongs to.

Resolution is an ordered list of strategies. Each one either returns a
`ClassContext` or None, and the first non-None answer wins:

1. `AssignedClassStrategy`: a class currently assigned to the lecturer.
2. `HintMatchStrategy`: a class whose name or course code equals a hint the
   lecturer typed in. Either hint alone is enough.
3. `HintEchoStrategy`: the typed hints echoed verbatim with no class id.

The last strategy always answers, so resolution never fails for lack of a
class. A class-less report is a valid outcome, not an error.
"""

import logging
from typing import List, Optional, Sequence

from ..models.class_model import ClassContext, ClassHints
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


def _context_from_row(row) -> ClassContext:
    class_obj, course = row
    return ClassContext(
        class_id=class_obj.id,
        class_name=class_obj.name or "",
        course_name=course.name or "",
        course_code=course.code or "",
        faculty_name=course.faculty_name or "",
        venue=class_obj.venue or "",
        scheduled_time=class_obj.schedule_time or "",
    )


class ClassResolutionStrategy:
    """One step of the fallback chain."""

    name = "base"

    def resolve(self, lecturer_id: int, hints: ClassHints, db: DatabaseService) -> Optional[ClassContext]:
        raise NotImplementedError


class AssignedClassStrategy(ClassResolutionStrategy):
    """A class whose `lecturer_id` is this lecturer. With several, the lowest id wins."""

    name = "assigned"

    def resolve(self, lecturer_id: int, hints: ClassHints, db: DatabaseService) -> Optional[ClassContext]:
        row = db.get_first_class_for_lecturer(lecturer_id)
        return _context_from_row(row) if row else None


class HintMatchStrategy(ClassResolutionStrategy):
    name = "hint_match"

    def resolve(self, lecturer_id: int, hints: ClassHints, db: DatabaseService) -> Optional[ClassContext]:
        if not hints.has_lookup_keys():
            return None
        row = db.find_class_by_name_or_course_code(hints.class_name, hints.course_code)
        return _context_from_row(row) if row else None


class HintEchoStrategy(ClassResolutionStrategy):
    name = "hint_echo"

    def resolve(self, lecturer_id: int, hints: ClassHints, db: DatabaseService) -> Optional[ClassContext]:
        return ClassContext(
            class_id=None,
            class_name=hints.class_name or "",
            course_name=hints.course_name or "",
            course_code=hints.course_code or "",
            faculty_name=hints.faculty_name or "",
        )


DEFAULT_STRATEGIES: List[ClassResolutionStrategy] = [
    AssignedClassStrategy(),
    HintMatchStrategy(),
    HintEchoStrategy(),
]


def resolve_context(
    lecturer_id: int,
    hints: ClassHints,
    db: DatabaseService,
    strategies: Sequence[ClassResolutionStrategy] = DEFAULT_STRATEGIES,
) -> ClassContext:
    """Runs the strategies in order and returns the first context found."""
    for strategy in strategies:
        context = strategy.resolve(lecturer_id, hints, db)
        if context is not None:
            logger.debug(
                "Class context resolved",
                extra={"lecturer_id": lecturer_id, "strategy": strategy.name, "class_id": context.class_id},
            )
            return context
    # Only reachable with a custom strategy list that lacks a terminal echo.
    return ClassContext()
