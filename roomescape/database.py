"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
PostgreSQL via asyncpg in production; the same builder also accepts
SQLite (aiosqlite) URLs for local runs and tests.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from roomescape.config import settings


def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """URL에 맞는 비동기 엔진을 생성합니다.

    Build an async engine. Connection pool sizing applies only to server
    databases when no explicit poolclass is given; SQLite gets defaults.

    Args:
        url: SQLAlchemy 비동기 연결 URL (Async connection URL)
        **kwargs: create_async_engine 추가 인자 (Extra engine options)
    """
    options: dict[str, Any] = {"echo": settings.DEBUG, **kwargs}
    if not url.startswith("sqlite") and "poolclass" not in options:
        # pool_pre_ping=True: 풀에서 꺼낸 연결을 사용 전에 확인 (Validates connections before use)
        options.setdefault("pool_pre_ping", True)
        options.setdefault("pool_size", 5)
        options.setdefault("max_overflow", 10)
    return create_async_engine(url, **options)


# 비동기 데이터베이스 엔진 — Async database engine
engine: AsyncEngine = build_engine(settings.DATABASE_URL)

# 비동기 세션 팩토리 — Async session factory
# expire_on_commit=False: 커밋 후에도 응답 변환 시 속성 접근 가능 (Attributes stay readable after commit)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스 — 회원, 테마, 시간, 예약 모델의 부모."""

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 비동기 세션을 제공합니다.

    FastAPI dependency yielding one session per request. Routers commit
    after the service returns; anything left uncommitted is rolled back
    when the session closes.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
