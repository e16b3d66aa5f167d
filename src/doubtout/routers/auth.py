"""Signup, login and token introspection endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from doubtout.db import get_db
from doubtout.exceptions import UnauthorizedError
from doubtout.schemas.auth import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    LoginUser,
    SignupRequest,
    SignupResponse,
)
from doubtout.services.auth import AuthService

router = APIRouter(tags=["Auth"])

bearer_scheme = HTTPBearer(auto_error=False)


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a student or professor",
)
async def signup(
    request: SignupRequest,
    session: AsyncSession = Depends(get_db),
) -> SignupResponse:
    """Create an account for an institutional email address."""
    service = AuthService(session)
    user = await service.register(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        role=request.role,
    )
    return SignupResponse(user_id=user.id, email=user.email, role=user.role)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in with email, password and role",
)
async def login(
    request: LoginRequest,
    session: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Verify credentials and issue a bearer token."""
    service = AuthService(session)
    user = await service.authenticate(
        email=request.email,
        password=request.password,
        role=request.role,
    )
    if user is None:
        raise UnauthorizedError("Invalid credentials")

    return LoginResponse(
        token=service.issue_token(user),
        user=LoginUser.model_validate(user),
    )


@router.get(
    "/auth/me",
    response_model=CurrentUserResponse,
    summary="Get the user behind a bearer token",
)
async def current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db),
) -> CurrentUserResponse:
    """Resolve the bearer token to its user."""
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")

    service = AuthService(session)
    user = await service.resolve_token(credentials.credentials)
    logger.debug("Token resolved", user_id=user.id)
    return CurrentUserResponse.model_validate(user)
