"""
Authentication endpoints for registration, login and profile

HTTP   URI                      Action
----   ---                      ------
POST   /api/auth/register       Create an account (first account is admin)
POST   /api/auth/login          Exchange email/password for a bearer token
GET    /api/auth/profile        Current user
"""

from fastapi import APIRouter, HTTPException, status

from core.deps import SessionDep
from api.auth.models import User, UserRegister, UserLogin, UserPublic, TokenResponse
from api.auth.deps import CurrentUser
import api.auth.services as auth_services

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED
)
def register(session: SessionDep, user_data: UserRegister) -> TokenResponse:
    """
    Register a new user account and return a token for it.
    """
    user = auth_services.register_user(session, user_data)
    return auth_services.issue_token(user)


@router.post("/login", response_model=TokenResponse)
def login(session: SessionDep, credentials: UserLogin) -> TokenResponse:
    """
    Login with email and password
    """
    user = auth_services.authenticate_user(
        session,
        credentials.email,
        credentials.password
    )

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return auth_services.issue_token(user)


@router.get("/profile", response_model=UserPublic)
def get_profile(current_user: CurrentUser) -> User:
    """
    Return the signed-in user.
    """
    return current_user
