# /reporting-backend/app/db/models/user_models.py

from sqlalchemy import Column, String, Integer, ForeignKey

from ..base_class import Base


class User(Base):
    """
    SQLAlchemy model representing every principal in the system: students,
    lecturers, Program Leaders ('pl') and Principal Lecturers ('prl').

    `class_id` is only meaningful for students and is what the report
    submission roster snapshot keys on.
    """
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), index=True, nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id", use_alter=True), nullable=True, index=True)
