# crud/google_credential.py
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from dayflow.models.google_credential import GoogleCredential


class GoogleCredentialCRUD:
    """Stored Google OAuth tokens, one row per user."""

    def get(self, db: Session, *, user_id: UUID) -> Optional[GoogleCredential]:
        return db.query(GoogleCredential).filter(GoogleCredential.user_id == user_id).first()

    def upsert(
        self,
        db: Session,
        *,
        user_id: UUID,
        access_token: Optional[str],
        refresh_token: Optional[str],
        token_uri: str,
        scopes: List[str],
        expiry: Optional[datetime],
    ) -> GoogleCredential:
        """
        Store fresh tokens.

        Google only returns a refresh token on the consent screen, so an
        existing refresh token is kept when the new one is missing.
        """
        obj = self.get(db, user_id=user_id)
        if obj is None:
            obj = GoogleCredential(user_id=user_id)
            db.add(obj)

        obj.access_token = access_token
        if refresh_token:
            obj.refresh_token = refresh_token
        obj.token_uri = token_uri
        obj.scopes = list(scopes or [])
        obj.expiry = expiry

        db.commit()
        db.refresh(obj)
        return obj

    def delete(self, db: Session, *, user_id: UUID) -> Optional[GoogleCredential]:
        obj = self.get(db, user_id=user_id)
        if obj:
            db.delete(obj)
            db.commit()
        return obj


crud_google_credential = GoogleCredentialCRUD()
