"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - members: 예약 주체인 회원 (Members who own reservations)
"""

from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomescape.database import Base

# 회원 역할 — Member roles
ROLE_USER: str = "USER"
ROLE_ADMIN: str = "ADMIN"


class Member(Base):
    """회원 모델 — 예약 및 예약 대기를 소유하는 사용자.

    Member model — The user who owns reservations and waitlist entries.
    Admin members additionally manage themes, times and all reservations.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        name: 회원 이름 (Display name)
        email: 로그인 이메일 (Login email, unique)
        password_hash: bcrypt 해시 (Bcrypt password hash)
        role: 역할 USER | ADMIN (Role)
        created_at: 가입 일시 UTC (Signup timestamp)
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # 로그인 이메일 — 전체 회원 중 고유 (Unique across all members)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_USER)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    reservations = relationship("Reservation", back_populates="member", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
