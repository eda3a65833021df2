"""
User management endpoints.

- POST /users: admin creates a user (possibly another admin), gets a token back
- GET /users: admin lists all users
- GET/PATCH/DELETE /users/{username}: the user themselves or an admin
- POST /users/{username}/jobs/{job_id}: apply to a job
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin, ensure_correct_user_or_admin, ensure_logged_in
from app.core.errors import UnauthorizedError
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.user import (
    UserNew,
    UserUpdate,
    UserCreatedOut,
    UserOut,
    UserDetailOut,
    UserListOut,
    UserDeletedOut,
    AppliedOut,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=201,
    response_model=UserCreatedOut,
    dependencies=[Depends(ensure_logged_in), Depends(ensure_admin)],
)
def create_user(request: UserNew, db: Session = Depends(get_db)):
    """
    Add a new user. Unlike /auth/register this can create admins.

    Authorization: login and admin
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    return {"user": user, "token": create_token(user)}


@router.get(
    "",
    response_model=UserListOut,
    dependencies=[Depends(ensure_logged_in), Depends(ensure_admin)],
)
def list_users(db: Session = Depends(get_db)):
    """
    List all users with the ids of jobs they applied to.

    Authorization: login and admin
    """
    return {"users": user_crud.get_all(db)}


@router.get("/{username}", response_model=UserDetailOut)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_correct_user_or_admin),
):
    """
    Retrieve a user with the ids of jobs they applied to.

    Authorization: same user or admin
    """
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserOut)
def update_user(
    username: str,
    request: UserUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_correct_user_or_admin),
):
    """
    Partially update a user. Fields: firstName, lastName, password, email,
    and isAdmin (admins only).

    Authorization: same user or admin
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    if "isAdmin" in data and current_user.get("isAdmin") is not True:
        raise UnauthorizedError("Only admins can change isAdmin")

    return {"user": user_crud.update(db, username, data)}


@router.delete("/{username}", response_model=UserDeletedOut)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_correct_user_or_admin),
):
    """
    Delete a user.

    Authorization: same user or admin
    """
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", response_model=AppliedOut)
def apply_to_job(
    username: str,
    job_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(ensure_correct_user_or_admin),
):
    """
    Apply a user to a job.

    Authorization: same user or admin
    """
    return {"applied": user_crud.apply(db, username, job_id)}
