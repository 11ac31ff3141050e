# /reporting-backend/app/services/hierarchy_service.py

"""
This service resolves a supervisor's scope: the set of programs, courses and
classes (and therefore reports) that sit under a Program Leader or a
Principal Lecturer.

Each hop of the Program -> Course -> Class walk is exposed as its own small
function taking parent ids and returning child ids, and the resolvers chain
them, stopping at the first empty hop so no deeper queries are issued. A
failed lookup aborts the whole resolution with `ScopeResolutionError`; a
partially resolved scope is never returned.
"""

import logging
from dataclasses import dataclass, field
from typing import Collection, List

from sqlalchemy.exc import SQLAlchemyError

from .database_service import DatabaseService
from .errors import ScopeResolutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scope:
    """The resolved ids at each level of the hierarchy."""
    program_ids: List[int] = field(default_factory=list)
    course_ids: List[int] = field(default_factory=list)
    class_ids: List[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.class_ids


@dataclass(frozen=True)
class ProgramScope:
    program_id: int
    program_name: str
    scope: Scope


# --- Hop Functions ---

def program_ids_for_pl(pl_id: int, db: DatabaseService) -> List[int]:
    return db.get_program_ids_by_pl(pl_id)


def course_ids_for_programs(program_ids: Collection[int], db: DatabaseService) -> List[int]:
    """
    Courses under the given programs.

    The `program_id` link is tried first. Only when it yields nothing is the
    legacy `assigned_to`/`stream_id` link queried, and only once.
    """
    if not program_ids:
        return []
    course_ids = db.get_course_ids_by_programs(program_ids)
    if course_ids:
        return course_ids
    legacy_ids = db.get_course_ids_by_legacy_link(program_ids)
    if legacy_ids:
        logger.info(
            "Resolved courses through legacy link",
            extra={"program_ids": list(program_ids), "course_count": len(legacy_ids)},
        )
    return legacy_ids


def class_ids_for_courses(course_ids: Collection[int], db: DatabaseService) -> List[int]:
    if not course_ids:
        return []
    return db.get_class_ids_by_courses(course_ids)


def _chain_from_programs(program_ids: List[int], db: DatabaseService) -> Scope:
    course_ids = course_ids_for_programs(program_ids, db)
    if not course_ids:
        return Scope(program_ids=program_ids)
    class_ids = class_ids_for_courses(course_ids, db)
    return Scope(program_ids=program_ids, course_ids=course_ids, class_ids=class_ids)


# --- Public Resolvers ---

def resolve_pl_scope(pl_id: int, db: DatabaseService) -> Scope:
    """Everything under the programs a Program Leader owns."""
    try:
        program_ids = program_ids_for_pl(pl_id, db)
        if not program_ids:
            return Scope()
        return _chain_from_programs(program_ids, db)
    except SQLAlchemyError as e:
        logger.exception("PL scope resolution failed", extra={"pl_id": pl_id})
        raise ScopeResolutionError(f"Could not resolve scope for program leader {pl_id}") from e


def resolve_prl_scope(prl_id: int, db: DatabaseService) -> Scope:
    """
    Everything in a Principal Lecturer's stream. This is a single hop: the
    classes whose own stream, or whose course's stream, is the PRL's.
    """
    try:
        stream_id = db.get_stream_id_for_prl(prl_id)
        if stream_id is None:
            return Scope()
        return Scope(class_ids=db.get_class_ids_by_stream(stream_id))
    except SQLAlchemyError as e:
        logger.exception("PRL scope resolution failed", extra={"prl_id": prl_id})
        raise ScopeResolutionError(f"Could not resolve scope for principal lecturer {prl_id}") from e


def resolve_program_breakdown(pl_id: int, db: DatabaseService) -> List[ProgramScope]:
    """
    One independently resolved scope per program the PL owns. Every owned
    program is present exactly once, with an empty scope when its course or
    class chain is empty.
    """
    try:
        programs = db.get_programs_by_pl(pl_id)
        return [
            ProgramScope(program_id=p.id, program_name=p.name, scope=_chain_from_programs([p.id], db))
            for p in programs
        ]
    except SQLAlchemyError as e:
        logger.exception("Program breakdown failed", extra={"pl_id": pl_id})
        raise ScopeResolutionError(f"Could not resolve programs for program leader {pl_id}") from e
