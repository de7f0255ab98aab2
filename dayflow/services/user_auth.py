# services/user_auth.py
import logging
from sqlalchemy.orm import Session

from dayflow.core.config import settings
from dayflow.core.exceptions import (
    AccountLockedError,
    ConflictError,
    DatabaseConflictError,
    UnauthorizedError,
    ValidationError,
)
from dayflow.core.security import (
    create_access_token,
    create_refresh_token,
    create_reset_token,
    decode_token,
    parse_user_id,
    verify_refresh_token,
)
from dayflow.crud.user import crud_user
from dayflow.models.user import User
from dayflow.schemas.user import (
    SignupRequest,
    UserUpdate,
    PasswordChange,
    LoginRequest,
    TokenResponse,
    UserOut,
    ResetPasswordRequest,
)
from dayflow.services import email as email_service

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If an account exists for that e-mail, a reset link has been sent."


# =====================================================================
# SERVICE CLASS
# =====================================================================


class UserAuthService:
    """Service layer for accounts, sessions and the profile."""

    def __init__(self):
        self.crud = crud_user

    # =====================================================================
    # REGISTRATION
    # =====================================================================

    def signup(self, db: Session, data: SignupRequest) -> User:
        """
        Create an account and its profile.

        Raises:
            ConflictError: If the e-mail is already registered
        """
        if self.crud.get_by_email(db, email=data.email):
            raise ConflictError("Email already registered")

        try:
            user = self.crud.create(db, obj_in=data, default_timezone=settings.DEFAULT_TIMEZONE)
        except DatabaseConflictError as e:
            raise ConflictError("Email already registered") from e

        logger.info(f"New account created: {user.id}")
        return user

    # =====================================================================
    # AUTHENTICATION & SESSIONS
    # =====================================================================

    def authenticate(self, db: Session, login_data: LoginRequest) -> User:
        """
        Check e-mail and password.

        Five wrong passwords in a row lock the account for 30 minutes.

        Raises:
            UnauthorizedError: If credentials are invalid
            AccountLockedError: If the account is locked
        """
        user = self.crud.get_by_email(db, email=login_data.email)
        if not user:
            raise UnauthorizedError("Invalid email or password")

        if self.crud.is_account_locked(user):
            raise AccountLockedError(
                "Too many failed login attempts. Please try again later."
            )

        if not self.crud.verify_password(login_data.password, user.password_hash):
            self.crud.increment_failed_attempts(db, user)
            logger.warning(f"Failed login for user {user.id} ({user.failed_login_attempts} attempts)")
            raise UnauthorizedError("Invalid email or password")

        self.crud.record_login(db, user)
        return user

    def issue_tokens(self, user: User) -> TokenResponse:
        return TokenResponse(
            access_token=create_access_token({"sub": str(user.id)}),
            refresh_token=create_refresh_token({"sub": str(user.id)}),
            user=UserOut.model_validate(user),
        )

    def login(self, db: Session, login_data: LoginRequest) -> TokenResponse:
        return self.issue_tokens(self.authenticate(db, login_data))

    def refresh(self, db: Session, refresh_token: str) -> TokenResponse:
        user_id = parse_user_id(verify_refresh_token(refresh_token))
        user = self.crud.get(db, id=user_id)
        if not user:
            raise UnauthorizedError("User not found")
        return self.issue_tokens(user)

    # =====================================================================
    # PASSWORD RESET
    # =====================================================================

    def forgot_password(self, db: Session, email: str) -> str:
        """
        Send a reset link when the account exists.

        The answer is the same either way so the endpoint cannot be used
        to probe for registered e-mails.
        """
        user = self.crud.get_by_email(db, email=email)
        if user:
            token = create_reset_token(user.id, user.password_hash)
            link = f"{settings.APP_URL.rstrip('/')}/reset-password?token={token}"
            sent = email_service.send_password_reset_email(user.email, link)
            logger.info(f"Password reset requested for user {user.id} (sent={sent})")
        return FORGOT_PASSWORD_MESSAGE

    def reset_password(self, db: Session, data: ResetPasswordRequest) -> User:
        """
        Raises:
            UnauthorizedError: If the token is invalid, expired or already used
        """
        payload = decode_token(data.token, settings.SECRET_KEY, "reset")
        user = self.crud.get(db, id=parse_user_id(payload["sub"]))
        if not user or payload.get("pwd") != user.password_hash[-12:]:
            raise UnauthorizedError("This reset link is invalid or has already been used.")

        user = self.crud.set_password(db, db_obj=user, new_password=data.new_password)
        logger.info(f"Password reset for user {user.id}")
        return user

    # =====================================================================
    # PROFILE
    # =====================================================================

    def update_profile(self, db: Session, user: User, update_data: UserUpdate) -> User:
        return self.crud.update(db, db_obj=user, obj_in=update_data)

    def change_password(self, db: Session, user: User, data: PasswordChange) -> User:
        """
        Raises:
            ValidationError: If the current password is wrong
        """
        if not self.crud.verify_password(data.old_password, user.password_hash):
            raise ValidationError("Current password is incorrect")
        return self.crud.set_password(db, db_obj=user, new_password=data.new_password)

    def delete_account(self, db: Session, user: User) -> None:
        """Delete the account and, through cascades, every log, plan and setting."""
        user_id = user.id
        self.crud.delete(db, id=user_id)
        logger.info(f"Account deleted: {user_id}")


# Singleton instance
user_auth_service = UserAuthService()
