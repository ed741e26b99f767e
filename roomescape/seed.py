"""초기 데이터 시드 스크립트 — 관리자 계정, 기본 테마, 예약 시간 생성.

Seed script — Creates the admin member, a starter theme, and bookable times.
Run this script once to bootstrap the database with required initial data.

Usage:
    python -m roomescape.seed

Creates:
    - 1개 관리자 계정: admin@roomescape.com / admin123! (1 admin member)
    - 1개 테마: "레벨2 탈출" (1 theme)
    - 예약 시간: 10:00 ~ 22:00, 2시간 간격 (Start times every two hours)
"""

import asyncio
from datetime import time

from sqlalchemy import select

from roomescape.database import async_session, engine, Base
from roomescape.models import Member, ReservationTime, Theme
from roomescape.models.member import ROLE_ADMIN
from roomescape.utils.password import hash_password


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data. Creates tables if they don't exist.

    Idempotent: 관리자 계정이 있으면 건너뜁니다 (Skips if the admin already exists).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Member).where(Member.role == ROLE_ADMIN).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        db.add(Member(
            name="관리자",
            email="admin@roomescape.com",
            password_hash=hash_password("admin123!"),
            role=ROLE_ADMIN,
        ))
        db.add(Theme(
            name="레벨2 탈출",
            description="우테코 레벨2를 탈출하는 내용입니다.",
            thumbnail="https://i.pinimg.com/236x/6e/bc/46/6ebc461a94a49f9ea3b8bbe2204145d4.jpg",
        ))
        for hour in range(10, 23, 2):
            db.add(ReservationTime(start_at=time(hour, 0)))

        await db.commit()
        print("Seed complete: admin@roomescape.com / admin123!")


if __name__ == "__main__":
    asyncio.run(seed())
