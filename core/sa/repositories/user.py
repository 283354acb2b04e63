# core/sa/repositories/user.py
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from core.sa.models import User


class UserRepository:
    """Repository for looking up storefront accounts."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by their ID.

        Args:
            user_id: The ID of the user to retrieve

        Returns:
            The User object if found, None otherwise
        """
        return self.session.query(User).filter(User.id == user_id).one_or_none()

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, ignoring case.

        Args:
            email: The email address to look up

        Returns:
            The User object if found, None otherwise
        """
        if not email:
            return None
        return (
            self.session.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .one_or_none()
        )
