# /reporting-backend/app/services/database_helpers/dialect_statements.py

"""
Dialect-native INSERT variants used by the repositories.

Two write paths need the database itself to resolve uniqueness conflicts
rather than a read-then-write in Python: the roster fan-out ("insert, skip
pairs that already exist") and the rating upsert ("insert, or overwrite the
existing pair"). SQLAlchemy only exposes these through dialect-specific
`insert()` constructs, so this module picks the right one for the bound
engine. PostgreSQL, SQLite and MySQL/MariaDB are supported.
"""

from typing import Dict, List, Sequence, Type

from sqlalchemy.orm import Session


def _dialect_insert(db: Session, model: Type):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    elif dialect in ("mysql", "mariadb"):
        from sqlalchemy.dialects.mysql import insert
    else:
        raise NotImplementedError(f"Conflict-aware inserts are not supported on '{dialect}'.")
    return dialect, insert(model.__table__)


def insert_ignore_duplicates(db: Session, model: Type, rows: List[Dict], conflict_columns: Sequence[str]) -> None:
    """Inserts `rows`, silently skipping any that violate the unique key on `conflict_columns`."""
    if not rows:
        return
    dialect, stmt = _dialect_insert(db, model)
    if dialect in ("mysql", "mariadb"):
        stmt = stmt.prefix_with("IGNORE")
    else:
        stmt = stmt.on_conflict_do_nothing(index_elements=list(conflict_columns))
    db.execute(stmt, rows)


def upsert(db: Session, model: Type, values: Dict, conflict_columns: Sequence[str], update_columns: Sequence[str]) -> None:
    """
    Inserts one row, or overwrites `update_columns` on the row that already
    holds the same `conflict_columns` key. A single statement, so concurrent
    writers to the same key resolve inside the database (last write wins).
    """
    dialect, stmt = _dialect_insert(db, model)
    stmt = stmt.values(**values)
    if dialect in ("mysql", "mariadb"):
        stmt = stmt.on_duplicate_key_update({col: stmt.inserted[col] for col in update_columns})
    else:
        stmt = stmt.on_conflict_do_update(
            index_elements=list(conflict_columns),
            set_={col: stmt.excluded[col] for col in update_columns},
        )
    db.execute(stmt)
