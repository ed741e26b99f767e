"""테마 및 예약 시간 SQLAlchemy ORM 모델 정의.

Theme and reservation time SQLAlchemy ORM model definitions.
Together with a date they form the slot reservations compete for.

Tables:
    - themes: 방탈출 테마 (Room escape themes)
    - reservation_times: 예약 가능 시작 시각 (Bookable start times)
"""

from datetime import datetime, time, timezone
from sqlalchemy import String, DateTime, Integer, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from roomescape.database import Base


class Theme(Base):
    """테마 모델 — 예약 대상이 되는 방탈출 테마.

    Theme model — A room escape theme that can be reserved.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        name: 테마 이름, 고유 (Theme name, unique)
        description: 테마 설명 (Description)
        thumbnail: 썸네일 이미지 URL (Thumbnail URL)
    """

    __tablename__ = "themes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))


class ReservationTime(Base):
    """예약 시간 모델 — 하루 중 예약 가능한 시작 시각.

    Reservation time model — A bookable start time of day.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        start_at: 시작 시각, 고유 (Start time of day, unique)
    """

    __tablename__ = "reservation_times"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    start_at: Mapped[time] = mapped_column(Time, unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
