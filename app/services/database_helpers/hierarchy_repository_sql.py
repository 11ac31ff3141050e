# /reporting-backend/app/services/database_helpers/hierarchy_repository_sql.py

"""
This module contains the raw SQLAlchemy queries that walk the organisational
hierarchy (Program -> Course -> Class), look classes up for report
submission and apply a Program Leader's class and course updates.

Every hop method takes a collection of parent ids and returns a list of child
ids. An empty input short-circuits to an empty list without touching the
database, so callers can chain hops without guarding each one.
"""

from typing import Collection, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, aliased

from app.db.models.hierarchy_models import Program, Course, Class, PrincipalLecturer
from app.db.models.user_models import User


class HierarchyRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Program Methods ---

    def get_programs_by_pl(self, pl_id: int) -> List[Program]:
        """Every program owned by the given Program Leader, in id order."""
        return self.db.query(Program).filter(Program.pl_id == pl_id).order_by(Program.id).all()

    def get_program_ids_by_pl(self, pl_id: int) -> List[int]:
        rows = self.db.query(Program.id).filter(Program.pl_id == pl_id).order_by(Program.id).all()
        return [row.id for row in rows]

    # --- Course Methods ---

    def get_course_ids_by_programs(self, program_ids: Collection[int]) -> List[int]:
        """Primary hop: courses linked through `program_id`."""
        if not program_ids:
            return []
        rows = self.db.query(Course.id).filter(Course.program_id.in_(list(program_ids))).all()
        return [row.id for row in rows]

    def get_course_ids_by_legacy_link(self, program_ids: Collection[int]) -> List[int]:
        """Legacy hop: courses whose `assigned_to` or `stream_id` holds a program id."""
        if not program_ids:
            return []
        ids = list(program_ids)
        rows = (
            self.db.query(Course.id)
            .filter(or_(Course.assigned_to.in_(ids), Course.stream_id.in_(ids)))
            .all()
        )
        return [row.id for row in rows]

    # --- Class Methods ---

    def get_class_ids_by_courses(self, course_ids: Collection[int]) -> List[int]:
        if not course_ids:
            return []
        rows = self.db.query(Class.id).filter(Class.course_id.in_(list(course_ids))).all()
        return [row.id for row in rows]

    def get_stream_id_for_prl(self, prl_id: int) -> Optional[int]:
        record = self.db.query(PrincipalLecturer).filter(PrincipalLecturer.id == prl_id).first()
        return record.stream_id if record else None

    def get_class_ids_by_stream(self, stream_id: int) -> List[int]:
        """
        Classes in a stream: either the class itself carries the stream id or
        the course it belongs to does.
        """
        rows = (
            self.db.query(Class.id)
            .join(Course, Class.course_id == Course.id)
            .filter(or_(Class.stream_id == stream_id, Course.stream_id == stream_id))
            .order_by(Class.id)
            .all()
        )
        return [row.id for row in rows]

    def get_first_class_for_lecturer(self, lecturer_id: int) -> Optional[Tuple[Class, Course]]:
        """The lowest-id class currently assigned to the lecturer, with its course."""
        return (
            self.db.query(Class, Course)
            .join(Course, Class.course_id == Course.id)
            .filter(Class.lecturer_id == lecturer_id)
            .order_by(Class.id)
            .first()
        )

    def find_class_by_name_or_course_code(
        self, class_name: Optional[str], course_code: Optional[str]
    ) -> Optional[Tuple[Class, Course]]:
        """The lowest-id class matching either hint; a missing hint never matches."""
        conditions = []
        if class_name:
            conditions.append(Class.name == class_name)
        if course_code:
            conditions.append(Course.code == course_code)
        if not conditions:
            return None
        return (
            self.db.query(Class, Course)
            .join(Course, Class.course_id == Course.id)
            .filter(or_(*conditions))
            .order_by(Class.id)
            .first()
        )

    def get_class_summaries(self, class_ids: Collection[int]) -> List[Dict]:
        """Class rows with course, lecturer name and current student count, by class name."""
        if not class_ids:
            return []
        lecturer = aliased(User)
        student = aliased(User)
        rows = (
            self.db.query(
                Class.id.label("class_id"),
                Class.name.label("class_name"),
                Course.name.label("course_name"),
                Course.code.label("course_code"),
                lecturer.name.label("lecturer_name"),
                func.count(student.id).label("total_students"),
            )
            .outerjoin(Course, Class.course_id == Course.id)
            .outerjoin(lecturer, Class.lecturer_id == lecturer.id)
            .outerjoin(student, (student.class_id == Class.id) & (student.role == "student"))
            .filter(Class.id.in_(list(class_ids)))
            .group_by(Class.id, Class.name, Course.name, Course.code, lecturer.name)
            .order_by(Class.name)
            .all()
        )
        return [dict(row._mapping) for row in rows]

    # --- Maintenance Methods ---

    def get_class_by_id(self, class_id: int) -> Optional[Class]:
        return self.db.query(Class).filter(Class.id == class_id).first()

    def get_course_by_id(self, course_id: int) -> Optional[Course]:
        return self.db.query(Course).filter(Course.id == course_id).first()

    def get_program_for_pl(self, program_id: int, pl_id: int) -> Optional[Program]:
        """A program, but only if the given Program Leader owns it."""
        return (
            self.db.query(Program)
            .filter(Program.id == program_id, Program.pl_id == pl_id)
            .first()
        )

    def get_user_by_id_and_role(self, user_id: int, role: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id, User.role == role).first()

    def update_class(self, class_id: int, data: Dict) -> Optional[Class]:
        """Applies `data` to the class. Returns None when the class does not exist."""
        db_class = self.get_class_by_id(class_id)
        if db_class:
            for key, value in data.items():
                setattr(db_class, key, value)
            self.db.commit()
            self.db.refresh(db_class)
        return db_class

    def add_course(self, record: Dict) -> Course:
        new_course = Course(**record)
        self.db.add(new_course)
        self.db.commit()
        self.db.refresh(new_course)
        return new_course

    def update_course(self, course_id: int, data: Dict) -> Optional[Course]:
        db_course = self.get_course_by_id(course_id)
        if db_course:
            for key, value in data.items():
                setattr(db_course, key, value)
            self.db.commit()
            self.db.refresh(db_course)
        return db_course

    def get_course_summaries_by_stream(self, stream_id: int) -> List[Dict]:
        """
        Courses in a stream, by course name: either the course carries the
        stream id or at least one of its classes does. `total_classes` counts
        every class of the course.
        """
        stream_class_courses = select(Class.course_id).where(Class.stream_id == stream_id)
        rows = (
            self.db.query(
                Course.id.label("course_id"),
                Course.name.label("course_name"),
                Course.code.label("course_code"),
                Course.faculty_name.label("faculty_name"),
                func.count(Class.id).label("total_classes"),
            )
            .outerjoin(Class, Class.course_id == Course.id)
            .filter(or_(Course.stream_id == stream_id, Course.id.in_(stream_class_courses)))
            .group_by(Course.id, Course.name, Course.code, Course.faculty_name)
            .order_by(Course.name)
            .all()
        )
        return [dict(row._mapping) for row in rows]
