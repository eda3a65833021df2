import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from app.core.config import settings

# Create SQLAlchemy engine
if settings.DATABASE_URL.startswith("sqlite"):
    # One shared connection so an in-memory database survives across sessions
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine = create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,  # Connection pool size
        max_overflow=20  # Allow up to 20 connections beyond pool_size
    )

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# Positional placeholders ($1, $2, ...) as produced by the SQL helpers
_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute SQL written with positional placeholders and return rows as dicts.

    `$N` placeholders are rewritten to SQLAlchemy named binds (`:pN`) and
    bound to values[N - 1], so the same statement runs on PostgreSQL and
    SQLite. Statements that return no rows yield an empty list.

    Args:
        db: Database session
        sql: SQL text using $1, $2, ... placeholders
        values: Values in placeholder order

    Returns:
        List of row mappings (column label -> value)
    """
    bound_sql = _POSITIONAL_PARAM.sub(lambda m: f":p{m.group(1)}", sql)
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    result = db.execute(text(bound_sql), params)
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]


def init_db():
    """
    Initialize database.

    We rely on Alembic for table creation, so this is just a placeholder
    to ensure models are imported/registered.

    Use "alembic upgrade head" to create/update database schema.
    """
    from app.models import company, job, user, application  # noqa: F401  Import models to register them
