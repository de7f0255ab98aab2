# crud/user.py
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone, timedelta
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from passlib.context import CryptContext

from dayflow.core.clock import as_utc
from dayflow.core.exceptions import DatabaseConflictError
from dayflow.models.user import User
from dayflow.schemas.user import SignupRequest, UserUpdate

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

MAX_FAILED_ATTEMPTS = 5
LOCKOUT_MINUTES = 30


class UserCRUD:
    """CRUD operations for the User model."""

    # =====================================================================
    # HELPER METHODS
    # =====================================================================

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def is_account_locked(user: User) -> bool:
        """Check if account is locked."""
        if user.lockout_until and as_utc(user.lockout_until) > datetime.now(timezone.utc):
            return True
        return False

    @staticmethod
    def increment_failed_attempts(
        db: Session, user: User, max_attempts: int = MAX_FAILED_ATTEMPTS
    ) -> None:
        """Increment failed login attempts and lock account if needed."""
        user.failed_login_attempts = (user.failed_login_attempts or 0) + 1

        if user.failed_login_attempts >= max_attempts:
            user.lockout_until = datetime.now(timezone.utc) + timedelta(minutes=LOCKOUT_MINUTES)

        db.commit()

    @staticmethod
    def record_login(db: Session, user: User) -> None:
        user.failed_login_attempts = 0
        user.lockout_until = None
        user.last_login_at = datetime.now(timezone.utc)
        db.commit()

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(self, db: Session, *, obj_in: SignupRequest, default_timezone: str) -> User:
        """
        Create a new user with its profile.

        Args:
            db: Database session
            obj_in: SignupRequest with the plain password
            default_timezone: Zone used when the request carries none

        Returns:
            Created User instance

        Raises:
            DatabaseConflictError: If the e-mail is already taken
        """
        db_obj = User(
            email=obj_in.email.lower(),
            password_hash=self.hash_password(obj_in.password),
            display_name=obj_in.display_name,
            timezone=obj_in.timezone or default_timezone,
        )

        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise DatabaseConflictError("Email already registered") from e
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def update(self, db: Session, *, db_obj: User, obj_in: UserUpdate) -> User:
        """
        Update profile fields.

        Only fields present in the request change; an explicit empty string
        clears an optional text field.
        """
        update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if value is None and field in ("timezone", "theme"):
                continue
            setattr(db_obj, field, value if value != "" else None)

        db_obj.updated_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_password(self, db: Session, *, db_obj: User, new_password: str) -> User:
        """
        Replace the password hash and clear any lockout.

        Args:
            db: Database session
            db_obj: Existing User instance
            new_password: New plain password

        Returns:
            Updated User instance
        """
        db_obj.password_hash = self.hash_password(new_password)
        db_obj.password_changed_at = datetime.now(timezone.utc)
        db_obj.updated_at = datetime.now(timezone.utc)
        db_obj.failed_login_attempts = 0
        db_obj.lockout_until = None

        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, id: UUID) -> Optional[User]:
        """Get user by ID."""
        return db.query(User).filter(User.id == id).first()

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        return db.query(User).filter(User.email == email.lower()).first()

    # =====================================================================
    # DELETE OPERATIONS
    # =====================================================================

    def delete(self, db: Session, *, id: UUID) -> Optional[User]:
        """
        Delete user by ID together with everything the user owns.

        Returns:
            Deleted User instance or None
        """
        obj = db.query(User).filter(User.id == id).first()
        if obj:
            db.delete(obj)
            db.commit()
        return obj


# Create singleton instance
crud_user = UserCRUD()
