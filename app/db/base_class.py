# /reporting-backend/app/db/base_class.py

"""
Declarative base shared by every ORM model.

Table names default to the lower-cased class name plus an "s" (`Program` ->
`programs`); models whose plural is irregular set `__tablename__` themselves.
"""

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"
