from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.settings import ACCESS_TOKEN_EXPIRE_MINUTES, SESSION_COOKIE_NAME
from shared.schemas import SuccessResponse
from shared.security.dependencies import get_optional_user

from .models import User
from .schemas import TokenResponse, UserCreate, UserLogin, UserResponse
from .service import AuthService

router = APIRouter(tags=["auth"])


@router.post(
    "/auth.register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    return await AuthService.register(db, payload)


@router.post(
    "/auth.login",
    response_model=TokenResponse,
    summary="Authenticate, receive a JWT and a session cookie",
)
async def login(payload: UserLogin, response: Response, db: AsyncSession = Depends(get_db)):
    token = await AuthService.login(db, payload)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token.access_token,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )
    return token


@router.get(
    "/auth.me",
    response_model=Optional[UserResponse],
    summary="The current caller, or null when anonymous",
)
async def me(user: Optional[User] = Depends(get_optional_user)):
    return user


@router.post("/auth.logout", response_model=SuccessResponse)
async def logout(response: Response):
    response.delete_cookie(SESSION_COOKIE_NAME)
    return SuccessResponse()
