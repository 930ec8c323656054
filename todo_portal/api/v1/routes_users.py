# File: todo_portal/api/v1/routes_users.py

"""
Profile routes for the authenticated user.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from todo_portal.api.deps import get_account_service, get_current_session
from todo_portal.schemas.user import (
    AccountDelete,
    MessageResponse,
    UserProfileUpdate,
    UserRead,
    UserUpdateResponse,
)
from todo_portal.services.auth_service import AccountService
from todo_portal.services.session_guard import AuthenticatedSession

router = APIRouter()


@router.get("/profile", response_model=UserRead, summary="Get the caller's profile")
def get_profile(session: AuthenticatedSession = Depends(get_current_session)):
    return UserRead.model_validate(session.user)


@router.put("/profile", response_model=UserUpdateResponse, summary="Update the caller's profile")
def update_profile(
    payload: UserProfileUpdate,
    session: AuthenticatedSession = Depends(get_current_session),
    accounts: AccountService = Depends(get_account_service),
):
    changes = payload.model_dump(exclude_unset=True, include={"phone", "address"})
    if "address" in changes:
        changes["address"] = payload.address.to_model() if payload.address else None

    user = accounts.update_profile(
        session.user,
        name=payload.name,
        email=payload.email,
        current_password=payload.current_password,
        new_password=payload.new_password,
        **changes,
    )
    return UserUpdateResponse(message="Profile updated successfully", user=UserRead.model_validate(user))


@router.delete("/profile", response_model=MessageResponse, summary="Delete the caller's account")
def delete_account(
    payload: Optional[AccountDelete] = None,
    session: AuthenticatedSession = Depends(get_current_session),
    accounts: AccountService = Depends(get_account_service),
):
    """
    Delete the account and every todo it owns. Requires the password again.
    """
    accounts.delete_account(session.user, password=payload.password if payload else None)
    return MessageResponse(message="Account deleted successfully")
