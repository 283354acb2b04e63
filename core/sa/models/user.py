# core/sa/models/user.py
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Storefront account as issued by the auth service.

    Accounts are created elsewhere; the core only looks them up, for example
    to map a paying customer's email to the library that should be fulfilled.
    """
    __tablename__ = 'user'

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")
