"""예약 시간 레포지토리 — 예약 시간 CRUD 쿼리.

Reservation Time Repository — CRUD queries for bookable start times.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models.theme import ReservationTime
from roomescape.repositories.base import BaseRepository


class ReservationTimeRepository(BaseRepository[ReservationTime]):
    """예약 시간 레포지토리.

    Reservation time repository.
    """

    def __init__(self) -> None:
        super().__init__(ReservationTime)

    async def get_all_ordered(self, db: AsyncSession) -> Sequence[ReservationTime]:
        """시작 시각 순으로 모든 예약 시간을 조회합니다."""
        return await self.get_all(db, order_by=ReservationTime.start_at)


# 싱글턴 인스턴스 — Singleton instance
reservation_time_repository: ReservationTimeRepository = ReservationTimeRepository()
