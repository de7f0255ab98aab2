# dayflow/api/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dayflow.core.config import get_db
from dayflow.core.security import get_current_user
from dayflow.services.user_auth import user_auth_service
from dayflow.models.user import User
from dayflow.schemas.user import (
    # Auth schemas
    SignupRequest,
    LoginRequest,
    TokenResponse,
    RefreshTokenRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,

    # Profile schemas
    UserOutDetailed,
    UserUpdate,
    PasswordChange,

    # Response schemas
    SuccessResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


# =====================================================================
# PUBLIC ENDPOINTS - No authentication required
# =====================================================================

@router.post(
    "/signup",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account"
)
def signup(
    user_data: SignupRequest,
    db: Session = Depends(get_db)
):
    """
    Create an account and its profile, and sign in straight away.

    - **email**: Valid email address (required)
    - **password**: Min 8 characters with upper, lower case and a digit (required)
    - **display_name**: Optional name shown in the app and e-mails
    - **timezone**: Optional IANA zone used for "today" and reminders
    """
    user = user_auth_service.signup(db, user_data)
    return user_auth_service.issue_tokens(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login to get access token"
)
def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and receive access and refresh tokens.

    **Note**: Account will be locked for 30 minutes after 5 failed attempts.
    """
    return user_auth_service.login(db, login_data)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token"
)
def refresh_token(
    token_data: RefreshTokenRequest,
    db: Session = Depends(get_db)
):
    """Exchange a valid refresh token for a new token pair."""
    return user_auth_service.refresh(db, token_data.refresh_token)


@router.post(
    "/forgot-password",
    response_model=SuccessResponse,
    summary="Request a password reset link"
)
def forgot_password(
    data: ForgotPasswordRequest,
    db: Session = Depends(get_db)
):
    """
    E-mail a reset link if the account exists.

    The response is identical whether or not the e-mail is registered.
    """
    message = user_auth_service.forgot_password(db, data.email)
    return SuccessResponse(message=message)


@router.post(
    "/reset-password",
    response_model=SuccessResponse,
    summary="Set a new password with a reset token"
)
def reset_password(
    data: ResetPasswordRequest,
    db: Session = Depends(get_db)
):
    user_auth_service.reset_password(db, data)
    return SuccessResponse(message="Password has been reset. You can now log in.")


# =====================================================================
# AUTHENTICATED ENDPOINTS - Own profile
# =====================================================================

@router.get(
    "/me",
    response_model=UserOutDetailed,
    summary="Get current user profile"
)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch(
    "/me",
    response_model=UserOutDetailed,
    summary="Update current user profile"
)
def update_me(
    update_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Update profile fields. Only the fields sent are changed.

    - **display_name**, **photo_url**, **goals**: free text
    - **timezone**: IANA zone name
    - **theme**: theme-forest, theme-sunset or theme-azure
    """
    return user_auth_service.update_profile(db, current_user, update_data)


@router.post(
    "/me/change-password",
    response_model=SuccessResponse,
    summary="Change own password"
)
def change_password(
    data: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    user_auth_service.change_password(db, current_user, data)
    return SuccessResponse(message="Password updated successfully")


@router.delete(
    "/me",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete own account"
)
def delete_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete the account together with all logs, plans and settings."""
    user_auth_service.delete_account(db, current_user)
