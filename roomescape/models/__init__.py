"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the SQLAlchemy
metadata, which Alembic migrations and relationship resolution rely on.

Modules:
    member: 회원 (Member)
    theme: 테마 및 예약 시간 (Theme, ReservationTime)
    reservation: 예약, 예약 상태, 취소 보관 (Reservation, ReservationStatus, CanceledReservation)
"""

from roomescape.models.member import Member
from roomescape.models.theme import Theme, ReservationTime
from roomescape.models.reservation import Reservation, ReservationStatus, CanceledReservation

__all__ = [
    "Member",
    "Theme", "ReservationTime",
    "Reservation", "ReservationStatus", "CanceledReservation",
]
