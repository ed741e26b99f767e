"""취소 예약 레포지토리 — 취소 보관 레코드 조회 및 저장.

Canceled Reservation Repository — Stores and lists archived canceled entries.
Records are append-only: the repository offers no update or delete.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from roomescape.models.reservation import CanceledReservation
from roomescape.repositories.base import BaseRepository


class CanceledReservationRepository(BaseRepository[CanceledReservation]):
    """취소 예약 레포지토리.

    Canceled reservation repository.
    """

    def __init__(self) -> None:
        super().__init__(CanceledReservation)

    async def get_all_with_details(
        self,
        db: AsyncSession,
    ) -> list[CanceledReservation]:
        """취소 기록 전체를 시간/테마/회원과 함께 취소 순으로 조회합니다.

        Retrieve every canceled record in cancellation order with time,
        theme and member eagerly loaded.
        """
        query: Select = (
            select(CanceledReservation)
            .options(
                selectinload(CanceledReservation.time),
                selectinload(CanceledReservation.theme),
                selectinload(CanceledReservation.member),
            )
            .order_by(CanceledReservation.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def exists_by_theme(self, db: AsyncSession, theme_id: int) -> bool:
        return await self.exists(db, {"theme_id": theme_id})

    async def exists_by_time(self, db: AsyncSession, time_id: int) -> bool:
        return await self.exists(db, {"time_id": time_id})


# 싱글턴 인스턴스 — Singleton instance
canceled_reservation_repository: CanceledReservationRepository = CanceledReservationRepository()
