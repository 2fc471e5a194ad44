"""SQLAlchemy models for the Users API."""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from core.database import Base


class User(Base):
    """A user record.

    Mapped as a dataclass, so two instances compare equal when all their
    fields match. Lookups go through ``id`` only.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
