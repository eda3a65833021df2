"""
CRUD operations for users and their job applications.

WARNING: update() can set a new password or make a user an admin. Callers
must have checked who is asking before passing those fields through.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)

# Request field -> column, where they differ
JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    rows = run_query(
        db,
        f"SELECT {USER_COLUMNS}, password FROM users WHERE username = $1",
        [username],
    )
    if rows:
        user = rows[0]
        if verify_password(password, user.pop("password")):
            return user

    raise UnauthorizedError("Invalid username/password")


def register(db: Session, user_data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a user from camelCase fields, hashing the password.

    Raises:
        BadRequestError: If the username is taken
    """
    username = user_data["username"]
    duplicate = run_query(db, "SELECT username FROM users WHERE username = $1", [username])
    if duplicate:
        raise BadRequestError(f"Duplicate username: {username}")

    rows = run_query(
        db,
        f"""INSERT INTO users
           (username, password, first_name, last_name, email, is_admin)
           VALUES ($1, $2, $3, $4, $5, $6)
           RETURNING {USER_COLUMNS}""",
        [
            username,
            get_password_hash(user_data["password"]),
            user_data["firstName"],
            user_data["lastName"],
            user_data["email"],
            user_data.get("isAdmin", False),
        ],
    )
    db.commit()

    logger.info(f"Registered user {username}")
    return rows[0]


def group_applications(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Collapse user/application join rows into one dict per user.

    Rows carry the user columns plus `job_id` (None for users without
    applications). Users keep their first-seen order and get a `jobs` list.
    """
    users: Dict[str, Dict[str, Any]] = {}
    for row in rows:
        row = dict(row)
        job_id = row.pop("job_id")
        user = users.setdefault(row["username"], {**row, "jobs": []})
        if job_id is not None:
            user["jobs"].append(job_id)
    return list(users.values())


def get_all(db: Session) -> List[Dict[str, Any]]:
    """All users ordered by username, each with the ids of jobs applied to."""
    rows = run_query(
        db,
        """SELECT users.username,
                  users.first_name AS "firstName",
                  users.last_name AS "lastName",
                  users.email,
                  users.is_admin AS "isAdmin",
                  applications.job_id
           FROM users
           LEFT JOIN applications ON users.username = applications.username
           ORDER BY users.username, applications.job_id""",
    )
    return group_applications(rows)


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    A user with the ids of jobs applied to.

    Raises:
        NotFoundError: If there is no such user
    """
    rows = run_query(db, f"SELECT {USER_COLUMNS} FROM users WHERE username = $1", [username])
    if not rows:
        raise NotFoundError(f"No user: {username}")

    user = rows[0]
    applications = run_query(
        db,
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        [username],
    )
    user["jobs"] = [app["job_id"] for app in applications]
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user; a new password is hashed before storing.

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If there is no such user
    """
    data = dict(data)
    if "password" in data:
        data["password"] = get_password_hash(data["password"])

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    username_idx = len(values) + 1

    rows = run_query(
        db,
        f"""UPDATE users
           SET {set_cols}
           WHERE username = ${username_idx}
           RETURNING {USER_COLUMNS}""",
        [*values, username],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    return rows[0]


def remove(db: Session, username: str) -> None:
    """
    Delete a user (their applications go with them).

    Raises:
        NotFoundError: If there is no such user
    """
    rows = run_query(
        db,
        "DELETE FROM users WHERE username = $1 RETURNING username",
        [username],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")


def apply(db: Session, username: str, job_id: Any) -> int:
    """
    Record that a user applied to a job.

    Returns:
        The job id applied to

    Raises:
        BadRequestError: If job_id is not an integer, the user or job does
            not exist, or the user already applied
    """
    try:
        job_id = int(job_id)
    except (TypeError, ValueError):
        raise BadRequestError("job id needs to be an integer")

    try:
        run_query(
            db,
            "INSERT INTO applications (username, job_id) VALUES ($1, $2)",
            [username, job_id],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Cannot apply {username} to job {job_id}")

    logger.info(f"User {username} applied to job {job_id}")
    return job_id
