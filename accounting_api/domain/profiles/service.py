"""Profile service - contact and KYC details keyed by user email"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from ...models import ClientProfile, User
from ..users.service import ensure_user
from .schemas import NotificationPrefs, ProfileUpdate

logger = logging.getLogger(__name__)


def notification_flags(prefs: Optional[NotificationPrefs]) -> dict:
    """Email notifications default on, WhatsApp off"""
    email = prefs.email if prefs and prefs.email is not None else True
    whatsapp = prefs.whatsapp if prefs and prefs.whatsapp is not None else False
    return {"notify_email": bool(email), "notify_whatsapp": bool(whatsapp)}


def upsert_profile(
    db: Session,
    user: User,
    fields: dict,
    created_at: Optional[datetime] = None,
    updated_at: Optional[datetime] = None,
) -> ClientProfile:
    """Create or update the single profile owned by ``user``"""
    profile = db.query(ClientProfile).filter(ClientProfile.user_id == user.id).first()
    if profile is None:
        profile = ClientProfile(user=user, **fields)
        if created_at:
            profile.created_at = created_at
        db.add(profile)
    else:
        for key, value in fields.items():
            setattr(profile, key, value)

    if updated_at:
        profile.updated_at = updated_at
    db.flush()
    return profile


class ProfileService:
    """Service layer for client profiles"""

    def __init__(self, db: Session):
        self.db = db

    def list_profiles(self) -> list[ClientProfile]:
        return (
            self.db.query(ClientProfile)
            .options(joinedload(ClientProfile.user), joinedload(ClientProfile.aadhaar_document))
            .order_by(ClientProfile.updated_at.desc())
            .all()
        )

    def get_or_provision(self, email: str) -> ClientProfile:
        """Read a profile, creating the user and an empty profile when missing"""
        email = self._require_email(email)
        user = ensure_user(self.db, email)
        profile = upsert_profile(self.db, user, {})
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def update_profile(self, email: str, data: ProfileUpdate) -> ClientProfile:
        email = self._require_email(email)
        user = ensure_user(self.db, email, name=data.name)

        fields = {
            "phone": data.phone or "",
            "whatsapp": data.whatsapp or "",
            "address": data.address or "",
            "pan": data.pan or "",
            "aadhaar": data.aadhaar or "",
            **notification_flags(data.notificationPrefs),
        }
        profile = upsert_profile(self.db, user, fields)
        self.db.commit()
        self.db.refresh(profile)
        logger.info(f"Updated profile for {email}")
        return profile

    @staticmethod
    def _require_email(email: str) -> str:
        email = (email or "").strip()
        if not email:
            raise HTTPException(status_code=400, detail="email is required")
        return email
