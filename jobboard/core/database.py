import logging
import re
from typing import Any, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Result
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from jobboard.core.config import settings

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,
    max_overflow=20
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

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


def init_db():
    """
    Create the companies and jobs tables if they don't exist yet.
    """
    from jobboard.models import company, job  # noqa: F401  Import models to register them
    Base.metadata.create_all(bind=engine)


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """
    Execute a SQL statement written with positional $1, $2, ... placeholders.

    The placeholders are rewritten to SQLAlchemy named binds (:p1, :p2, ...)
    so that values[i] binds to $<i+1>.

    Args:
        db: Database session
        sql: SQL statement with $n placeholders
        values: Positional values, in placeholder order

    Returns:
        SQLAlchemy Result for the statement
    """
    bound_sql = _POSITIONAL_PARAM.sub(r":p\1", sql)
    if db.get_bind().dialect.name == "sqlite":
        # SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII
        bound_sql = bound_sql.replace(" ILIKE ", " LIKE ")

    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    logger.debug("Executing SQL: %s | values: %s", " ".join(bound_sql.split()), list(values))
    return db.execute(text(bound_sql), params)
