from datetime import timedelta
from typing import Annotated
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from app.database.database import get_session
from app.core.config import get_settings, Settings
from app.core.dependencies import get_current_user
from app.core.security import authenticate_user, create_access_token
from app.exceptions import InvalidCredentialsError
from app.models.token import Token
from app.models.user import User, UserCreate, UserPublic
from app.services import user as user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(
    user_in: UserCreate,
    session: Annotated[Session, Depends(get_session)],
):
    """
    Create a job seeker or employer account.

    Employers start without a verification record and must upload a document
    before an admin can approve them. Admin accounts cannot self-register.

    Raises:
        `409 Conflict`: If the email is already registered.
    """
    return user_service.create_user(session, user_in)


@router.post("/token", response_model=Token)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """OAuth2 password flow; `username` carries the account email."""
    user = authenticate_user(session, form_data.username, form_data.password)
    if not user:
        raise InvalidCredentialsError()
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        data={"sub": user.email}, expires_delta=access_token_expires
    )
    return Token(access_token=access_token, token_type="bearer")


@router.get("/me", response_model=UserPublic)
def read_current_user(current_user: Annotated[User, Depends(get_current_user)]):
    return current_user
