"""User service - identity resolution by email"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import User
from ...shared.normalizers import normalize_role
from .repository import UserRepository

logger = logging.getLogger(__name__)


def default_name_for(email: str) -> str:
    return email.split("@")[0] or "User"


def ensure_user(
    db: Session,
    email: str,
    name: Optional[str] = None,
    role: Optional[str] = None,
    default_role: Optional[str] = None,
) -> User:
    """
    Find-or-create a user by email.

    An existing user's name changes only when a non-empty name is given, and
    its role only when ``role`` is given. ``default_role`` is applied to newly
    created users and never overrides an existing role.

    GET handlers call this too, so reading a profile can provision the user.
    """
    email = (email or "").strip()
    if not email:
        raise ValueError("email is required")

    next_name = (name or "").strip()
    explicit_role = (role or "").strip()

    user = UserRepository.get_by_email(db, email)
    if user is None:
        user = UserRepository.create(
            db,
            email=email,
            name=next_name or default_name_for(email),
            role=normalize_role(explicit_role or default_role),
        )
        logger.info(f"Provisioned user {email} with role {user.role}")
        return user

    if next_name and user.name != next_name:
        user.name = next_name
    if explicit_role:
        user.role = normalize_role(explicit_role)
    db.flush()
    return user


class UserService:
    """Service layer for user listing"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def list_users(self, role: Optional[str] = None) -> list[User]:
        return self.repo.list_users(self.db, normalize_role(role) if role else None)
