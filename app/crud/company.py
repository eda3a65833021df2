"""
CRUD operations for companies, plus the GET /companies filter builder.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.errors import BadRequestError, NotFoundError
from app.core.sql import sql_for_partial_update
from app.schemas.company import CompanyNew

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

# Request field -> column, where they differ
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

ALLOWED_FILTERS = ("name", "minEmployees", "maxEmployees")


def min_max_employees_to_sql(
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
    start: int = 1
) -> Tuple[str, List[int]]:
    """
    Build the num_employees range predicate.

    Placeholders are numbered from `start`. Returns ("", []) when neither
    bound is given; the AND only appears when both are.
    """
    predicates = []
    values = []

    if min_employees is not None:
        values.append(min_employees)
        predicates.append(f"num_employees >= ${start + len(values) - 1}")
    if max_employees is not None:
        values.append(max_employees)
        predicates.append(f"num_employees <= ${start + len(values) - 1}")

    return " AND ".join(predicates), values


def company_filter_to_sql(filters: Mapping[str, Any]) -> Tuple[str, List[Any]]:
    """
    Build the WHERE body for a company search.

    Example:
        {"name": "And", "minEmployees": 100}
        -> ("LOWER(name) LIKE $1 AND num_employees >= $2", ["%and%", 100])

    An empty filter map gives ("", []); the caller then skips WHERE.

    Raises:
        BadRequestError: On keys other than name/minEmployees/maxEmployees,
            or when minEmployees > maxEmployees
    """
    if any(key not in ALLOWED_FILTERS for key in filters):
        raise BadRequestError(
            "can only have name and/or minEmployees and/or maxEmployees as query parameters"
        )

    name = filters.get("name")
    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")

    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be more than maxEmployees")

    predicates = []
    values: List[Any] = []

    if name is not None:
        values.append(f"%{str(name).lower()}%")
        predicates.append(f"LOWER(name) LIKE ${len(values)}")

    range_sql, range_values = min_max_employees_to_sql(
        min_employees, max_employees, start=len(values) + 1
    )
    if range_sql:
        predicates.append(range_sql)
        values.extend(range_values)

    return " AND ".join(predicates), values


def create(db: Session, company_data: CompanyNew) -> Dict[str, Any]:
    """
    Create a company.

    Raises:
        BadRequestError: If the handle is already taken
    """
    duplicate = run_query(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [company_data.handle],
    )
    if duplicate:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    rows = run_query(
        db,
        f"""INSERT INTO companies
           (handle, name, description, num_employees, logo_url)
           VALUES ($1, $2, $3, $4, $5)
           RETURNING {COMPANY_COLUMNS}""",
        [
            company_data.handle,
            company_data.name,
            company_data.description,
            company_data.num_employees,
            company_data.logo_url,
        ],
    )
    db.commit()

    return rows[0]


def get_all(db: Session) -> List[Dict[str, Any]]:
    """All companies, ordered by name."""
    return run_query(db, f"SELECT {COMPANY_COLUMNS} FROM companies ORDER BY name")


def find_filtered(db: Session, filters: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Companies matching the filters, ordered by name.

    No match is not an error: an empty list is returned.
    """
    where, values = company_filter_to_sql(filters)
    where_clause = f"WHERE {where}" if where else ""

    return run_query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
           FROM companies
           {where_clause}
           ORDER BY name""",
        values,
    )


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    A company and its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = run_query(
        db,
        f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1",
        [handle],
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = run_query(
        db,
        """SELECT id, title, salary, equity, company_handle AS "companyHandle"
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    )
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only the given fields change.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no company has this handle
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    handle_idx = len(values) + 1

    rows = run_query(
        db,
        f"""UPDATE companies
           SET {set_cols}
           WHERE handle = ${handle_idx}
           RETURNING {COMPANY_COLUMNS}""",
        [*values, handle],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = run_query(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
