"""Activity service - audit log"""

from typing import Optional

from sqlalchemy.orm import Session

from ...config import ACTIVITIES_DEFAULT_TAKE, ACTIVITIES_MAX_TAKE
from ...models import Activity
from ...schemas import text
from ...shared.pagination import clamp
from ..users.service import ensure_user
from .schemas import ActivityCreate


class ActivityService:
    """Service layer for the activity log"""

    def __init__(self, db: Session):
        self.db = db

    def list_activities(self, email: Optional[str] = None, take: int = ACTIVITIES_DEFAULT_TAKE) -> list[Activity]:
        query = self.db.query(Activity)
        if text(email):
            query = query.filter(Activity.user_email == text(email))
        take = clamp(take, 1, ACTIVITIES_MAX_TAKE)
        return query.order_by(Activity.created_at.desc()).limit(take).all()

    def record(self, data: ActivityCreate) -> Activity:
        """Append an entry, linking it to the user when an email is given"""
        user_email = text(data.userEmail)
        user_name = text(data.userName)
        linked = ensure_user(self.db, user_email, name=user_name) if user_email else None

        activity = Activity(
            user_id=linked.id if linked else None,
            user_name=user_name or (linked.name if linked else "") or "User",
            user_email=user_email,
            action=data.action or "",
            details=data.details or "",
        )
        if data.id:
            activity.id = data.id

        self.db.add(activity)
        self.db.commit()
        self.db.refresh(activity)
        return activity
