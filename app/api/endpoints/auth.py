"""
Authentication endpoints.

- POST /auth/token: exchange username/password for a JWT
- POST /auth/register: create a (non-admin) account and get a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_token
from app.crud import user as user_crud
from app.schemas.user import UserAuth, UserRegister, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def get_token(request: UserAuth, db: Session = Depends(get_db)):
    """
    Authenticate and return a JWT for use in the Authorization header.

    Authorization: none
    """
    user = user_crud.authenticate(db, request.username, request.password)
    return TokenResponse(token=create_token(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(request: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user account and return a JWT for immediate login.

    Authorization: none
    """
    user = user_crud.register(db, {**request.model_dump(by_alias=True), "isAdmin": False})
    return TokenResponse(token=create_token(user))
