from __future__ import annotations

from sqlalchemy import String, Text, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, ULIDMixin


class Report(Base, ULIDMixin):
    __tablename__ = "reports"

    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"), index=True)
    location: Mapped[str] = mapped_column(Text)
    waste_type: Mapped[str] = mapped_column(String(255))
    amount: Mapped[str] = mapped_column(String(255))
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)  # preview data URL
    verification_result: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(String(30), default="pending")  # pending | in_progress | completed

    user = relationship("User", back_populates="reports")
