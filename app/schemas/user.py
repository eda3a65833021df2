"""
Pydantic schemas for users, registration and login.
"""

from pydantic import EmailStr, Field
from typing import List

from app.schemas.base import CamelModel, RequestModel


class UserAuth(RequestModel):
    """Request schema for POST /auth/token"""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class UserRegister(RequestModel):
    """Request schema for self-registration; never creates admins"""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserNew(UserRegister):
    """Request schema for admin-created users"""
    is_admin: bool = False


class UserUpdate(RequestModel):
    """
    Partial update of a user.

    Fields may be omitted but not set to null. isAdmin is accepted here but
    only honoured for admin callers; the endpoint rejects it otherwise.
    """
    password: str = Field(None, min_length=5, max_length=72)
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    email: EmailStr = None
    is_admin: bool = None


class UserResponse(CamelModel):
    """User profile response (no password hash)"""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserWithJobs(UserResponse):
    """User plus the ids of the jobs they applied to"""
    jobs: List[int] = []


class TokenResponse(CamelModel):
    token: str


class UserCreatedOut(CamelModel):
    user: UserResponse
    token: str


class UserOut(CamelModel):
    user: UserResponse


class UserDetailOut(CamelModel):
    user: UserWithJobs


class UserListOut(CamelModel):
    users: List[UserWithJobs]


class UserDeletedOut(CamelModel):
    deleted: str


class AppliedOut(CamelModel):
    applied: int
