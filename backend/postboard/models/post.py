"""PostBoard Backend: Post ORM Model (same id scheme as users)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base
from postboard.models.user import new_record_id


class PostRow(Base):
    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_record_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # TEXT: descriptions have no natural length limit
    description: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<PostRow(id={self.id}, title='{self.title}')>"
