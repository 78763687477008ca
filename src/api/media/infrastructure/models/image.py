"""SQLAlchemy ORM model for the images table.

One row per uploaded photo. The id is assigned by the blob store, so there is
no foreign key to anything in this database; ownership is by username.
"""

from datetime import datetime

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class ImageModel(Base):
    """ORM model for images table."""

    __tablename__ = "images"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    caption: Mapped[str | None] = mapped_column(Text, nullable=True)
    captured: Mapped[datetime] = mapped_column(nullable=False)
    uploaded: Mapped[datetime] = mapped_column(nullable=False)

    __table_args__ = (
        Index("idx_images_username_captured", "username", "captured"),
        Index("idx_images_username_uploaded", "username", "uploaded"),
    )

    def __repr__(self) -> str:
        return f"<ImageModel(id={self.id}, username={self.username})>"
