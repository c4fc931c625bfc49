"""
PostBoard Backend: User ORM Model
=================================

Table Design:
    - id: 32-char hex UUID generated in Python, so it works the same on
      SQLite and PostgreSQL. This is the "persistence layer's own scheme"
      as opposed to the random integers of the in-memory store.
    - name / email / phone: untyped strings, no uniqueness or format checks
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base


def new_record_id() -> str:
    return uuid.uuid4().hex


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(32),
        primary_key=True,
        default=new_record_id,
        comment="Hex UUID assigned on insert",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)

    def __repr__(self) -> str:
        return f"<UserRow(id={self.id}, name='{self.name}')>"
