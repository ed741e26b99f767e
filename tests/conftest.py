"""테스트 인프라 — 임시 DB, 세션, httpx 클라이언트, 결제 게이트웨이 픽스처.

Test infrastructure — Temporary database, session, httpx client and
payment gateway fixtures.
TEST_DATABASE_URL overrides the database (e.g. a PostgreSQL test DB);
by default each test gets its own SQLite file. The schema is created
before and dropped after every test.
"""

import json
import os
from collections.abc import AsyncGenerator, Callable
from datetime import date, time, timedelta
from pathlib import Path

# 테스트에서는 bcrypt 비용을 낮춤 — settings는 roomescape 임포트 시점에 읽힘
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from roomescape.database import Base, build_engine, get_db
from roomescape.main import app
from roomescape.models import *  # noqa: F401,F403 — register all models with metadata
from roomescape.models.member import ROLE_ADMIN, ROLE_USER, Member
from roomescape.models.theme import ReservationTime, Theme
from roomescape.services.payment_service import payment_service
from roomescape.utils.jwt import create_access_token
from roomescape.utils.password import hash_password


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 생성하고 삭제합니다."""
    url: str = os.environ.get("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    eng = build_engine(url, echo=False, poolclass=NullPool)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """테스트 데이터 준비용 DB 세션. 픽스처는 생성 후 커밋합니다."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — 요청마다 새 세션을 사용합니다.

    Each request gets its own session, so a request that fails before
    the router commits leaves nothing behind.
    """
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 결제 게이트웨이: httpx.MockTransport
# ---------------------------------------------------------------------------
class FakePaymentGateway:
    """결제 승인 API를 흉내내는 MockTransport 핸들러.

    Records every confirmation request. By default approves the payment
    and echoes the payment key and amount back; tests replace
    ``responder`` to simulate rejections, outages or network errors.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] | None = None

    @property
    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    def reject(self, status_code: int, code: str, message: str) -> None:
        self.responder = lambda request: httpx.Response(
            status_code, json={"code": code, "message": message}
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responder is not None:
            return self.responder(request)
        body: dict = json.loads(request.content)
        return httpx.Response(200, json={
            "paymentKey": body["paymentKey"],
            "orderId": body["orderId"],
            "status": "DONE",
            "totalAmount": body["amount"],
        })


@pytest.fixture
def payment_gateway(monkeypatch: pytest.MonkeyPatch) -> FakePaymentGateway:
    """결제 서비스의 전송 계층을 가짜 게이트웨이로 교체합니다."""
    gateway = FakePaymentGateway()
    monkeypatch.setattr(payment_service, "transport", httpx.MockTransport(gateway.handler))
    return gateway


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def _create_member(db: AsyncSession, name: str, email: str, role: str) -> Member:
    member = Member(name=name, email=email, password_hash=hash_password("password1!"), role=role)
    db.add(member)
    await db.commit()
    return member


@pytest_asyncio.fixture
async def admin_member(db: AsyncSession) -> Member:
    """관리자 회원을 생성합니다."""
    return await _create_member(db, "어드민", "admin@test.com", ROLE_ADMIN)


@pytest_asyncio.fixture
async def user_member(db: AsyncSession) -> Member:
    """일반 회원을 생성합니다."""
    return await _create_member(db, "브라운", "brown@test.com", ROLE_USER)


@pytest_asyncio.fixture
async def other_member(db: AsyncSession) -> Member:
    """두 번째 일반 회원을 생성합니다."""
    return await _create_member(db, "솔라", "solar@test.com", ROLE_USER)


@pytest_asyncio.fixture
async def third_member(db: AsyncSession) -> Member:
    """세 번째 일반 회원을 생성합니다."""
    return await _create_member(db, "네오", "neo@test.com", ROLE_USER)


@pytest_asyncio.fixture
async def theme(db: AsyncSession) -> Theme:
    """테스트 테마를 생성합니다."""
    t = Theme(name="레벨2 탈출", description="우테코 레벨2를 탈출하는 내용입니다.", thumbnail="https://example.com/t.jpg")
    db.add(t)
    await db.commit()
    return t


@pytest_asyncio.fixture
async def reservation_time(db: AsyncSession) -> ReservationTime:
    """10:00 예약 시간을 생성합니다."""
    rt = ReservationTime(start_at=time(10, 0))
    db.add(rt)
    await db.commit()
    return rt


@pytest.fixture
def tomorrow() -> date:
    return date.today() + timedelta(days=1)


def make_token(member: Member) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(member.id), "role": member.role})


@pytest.fixture
def admin_token(admin_member: Member) -> str:
    return make_token(admin_member)


@pytest.fixture
def user_token(user_member: Member) -> str:
    return make_token(user_member)


@pytest.fixture
def other_token(other_member: Member) -> str:
    return make_token(other_member)


@pytest.fixture
def third_token(third_member: Member) -> str:
    return make_token(third_member)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
