"""
CRUD operations for jobs, plus the GET /jobs filter builder.
"""

import logging
from typing import Any, Dict, List, Mapping, Tuple

from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.errors import BadRequestError, NotFoundError
from app.core.sql import sql_for_partial_update
from app.schemas.job import JobNew

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# Request field -> column, where they differ
JS_TO_SQL = {
    "companyHandle": "company_handle",
}


def has_equity_to_sql(has_equity: Any, preceded: bool) -> str:
    """
    The equity predicate: only hasEquity=True filters anything.

    `preceded` says whether another predicate comes before it and so
    whether it needs a leading AND.
    """
    if has_equity is not True:
        return ""
    return " AND equity != '0'" if preceded else "equity != '0'"


def is_unfiltered(filters: Mapping[str, Any]) -> bool:
    """hasEquity=false on its own means "all jobs"."""
    return (
        filters.get("title") is None
        and filters.get("minSalary") is None
        and filters.get("hasEquity") is False
    )


def job_filter_to_sql(filters: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """
    Build the WHERE body for a job search.

    Example:
        {"title": "Eng", "minSalary": 50000, "hasEquity": True}
        -> ("LOWER(title) LIKE $1 AND salary >= $2 AND equity != '0'",
            ["%eng%", 50000])

    Unknown keys are not checked here; JobFilter validation rejects them.
    """
    title = filters.get("title")
    min_salary = filters.get("minSalary")

    predicates = []
    values: List[Any] = []

    if title is not None:
        values.append(f"%{str(title).lower()}%")
        predicates.append(f"LOWER(title) LIKE ${len(values)}")
    if min_salary is not None:
        values.append(min_salary)
        predicates.append(f"salary >= ${len(values)}")

    where = " AND ".join(predicates)
    where += has_equity_to_sql(filters.get("hasEquity"), bool(predicates))

    return where, values


def create(db: Session, job_data: JobNew) -> Dict[str, Any]:
    """
    Create a job.

    Raises:
        BadRequestError: If the company does not exist
    """
    company = run_query(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [job_data.company_handle],
    )
    if not company:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    rows = run_query(
        db,
        f"""INSERT INTO jobs
           (title, salary, equity, company_handle)
           VALUES ($1, $2, $3, $4)
           RETURNING {JOB_COLUMNS}""",
        [job_data.title, job_data.salary, job_data.equity, job_data.company_handle],
    )
    db.commit()

    return rows[0]


def get_all(db: Session) -> List[Dict[str, Any]]:
    """All jobs, ordered by title."""
    return run_query(db, f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY title")


def find_filtered(db: Session, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Jobs matching the filters, ordered by title.

    Raises:
        NotFoundError: If nothing matches
    """
    where = ""
    values: List[Any] = []
    if not is_unfiltered(filters):
        where, values = job_filter_to_sql(filters)
    where_clause = f"WHERE {where}" if where else ""

    rows = run_query(
        db,
        f"""SELECT {JOB_COLUMNS}
           FROM jobs
           {where_clause}
           ORDER BY title""",
        values,
    )
    if not rows:
        raise NotFoundError("No job fitting query parameters found")

    return rows


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    A job with its company embedded.

    Raises:
        NotFoundError: If there is no such job
    """
    rows = run_query(
        db,
        """SELECT jobs.id,
                  jobs.title,
                  jobs.salary,
                  jobs.equity,
                  companies.handle,
                  companies.name,
                  companies.description,
                  companies.num_employees AS "numEmployees",
                  companies.logo_url AS "logoUrl"
           FROM jobs
           JOIN companies ON jobs.company_handle = companies.handle
           WHERE jobs.id = $1""",
        [job_id],
    )
    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    row = rows[0]
    return {
        "id": row["id"],
        "title": row["title"],
        "salary": row["salary"],
        "equity": row["equity"],
        "company": {
            "handle": row["handle"],
            "name": row["name"],
            "description": row["description"],
            "numEmployees": row["numEmployees"],
            "logoUrl": row["logoUrl"],
        },
    }


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the given fields change.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If there is no such job
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    id_idx = len(values) + 1

    rows = run_query(
        db,
        f"""UPDATE jobs
           SET {set_cols}
           WHERE id = ${id_idx}
           RETURNING {JOB_COLUMNS}""",
        [*values, job_id],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If there is no such job
    """
    rows = run_query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
