"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.user import User
from app.models.report import Report

__all__ = ["Base", "User", "Report"]
