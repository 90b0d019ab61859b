"""CRUD operations for users and reports."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import User, Report

DEFAULT_RECENT_LIMIT = 10


# ── User ──────────────────────────────────────────────────

async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def create_user(db: AsyncSession, email: str, name: str) -> User:
    user = User(email=email, name=name)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


# ── Report ────────────────────────────────────────────────

async def create_report(
    db: AsyncSession, user_id: str, location: str, waste_type: str, amount: str,
    image_url: str | None = None, verification_result: dict | None = None,
) -> Report:
    report = Report(
        user_id=user_id, location=location, waste_type=waste_type, amount=amount,
        image_url=image_url, verification_result=verification_result,
    )
    db.add(report)
    await db.commit()
    await db.refresh(report)
    return report


async def get_recent_reports(db: AsyncSession, limit: int = DEFAULT_RECENT_LIMIT) -> list[Report]:
    """Most recent first. ULIDs are time-ordered, so id breaks created_at ties."""
    result = await db.execute(
        select(Report)
        .order_by(Report.created_at.desc(), Report.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())
