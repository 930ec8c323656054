# File: todo_portal/api/v1/routes_auth.py

"""
Auth API routes: register, login, logout.
"""

from fastapi import APIRouter, Depends, status

from todo_portal.api.deps import get_account_service, get_current_session
from todo_portal.schemas.user import AuthResponse, MessageResponse, UserCreate, UserLogin, UserRead
from todo_portal.services.auth_service import AccountService
from todo_portal.services.session_guard import AuthenticatedSession

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(
    payload: UserCreate,
    accounts: AccountService = Depends(get_account_service),
):
    user, token = accounts.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        address=payload.address.to_model() if payload.address else None,
    )
    return AuthResponse(
        message="User registered successfully",
        user=UserRead.model_validate(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse, summary="User login")
def login(
    payload: UserLogin,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Exchange email + password for a bearer token.

    Unknown email and wrong password get the same 401 answer.
    """
    user, token = accounts.login(email=payload.email, password=payload.password)
    return AuthResponse(
        message="Login successful",
        user=UserRead.model_validate(user),
        token=token,
    )


@router.post("/logout", response_model=MessageResponse, summary="Invalidate the current token")
def logout(
    session: AuthenticatedSession = Depends(get_current_session),
    accounts: AccountService = Depends(get_account_service),
):
    accounts.logout(session.token)
    return MessageResponse(message="Logout successful")
