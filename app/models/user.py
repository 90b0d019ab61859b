from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, ULIDMixin


class User(Base, ULIDMixin):
    __tablename__ = "users"

    # Case-sensitive, stored exactly as the login flow cached it
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), default="")

    reports = relationship("Report", back_populates="user")
