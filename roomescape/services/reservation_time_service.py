"""예약 시간 서비스 — 예약 가능 시각 CRUD 비즈니스 로직.

Reservation Time Service — Business logic for bookable start times.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models.theme import ReservationTime
from roomescape.repositories.canceled_reservation_repository import canceled_reservation_repository
from roomescape.repositories.reservation_repository import reservation_repository
from roomescape.repositories.reservation_time_repository import reservation_time_repository
from roomescape.schemas.theme import ReservationTimeCreate, ReservationTimeResponse
from roomescape.utils.exceptions import DuplicateError, NotFoundError


class ReservationTimeService:
    """예약 시간 서비스.

    Reservation time service.
    """

    def _to_response(self, reservation_time: ReservationTime) -> ReservationTimeResponse:
        return ReservationTimeResponse(id=reservation_time.id, start_at=reservation_time.start_at)

    async def list_times(self, db: AsyncSession) -> list[ReservationTimeResponse]:
        """모든 예약 시간을 시작 시각 순으로 조회합니다."""
        times = await reservation_time_repository.get_all_ordered(db)
        return [self._to_response(t) for t in times]

    async def create_time(self, db: AsyncSession, data: ReservationTimeCreate) -> ReservationTimeResponse:
        """새 예약 시간을 생성합니다.

        Raises:
            DuplicateError: 같은 시작 시각이 이미 존재할 때 (Start time already exists)
        """
        if await reservation_time_repository.exists(db, {"start_at": data.start_at}):
            raise DuplicateError(f"이미 존재하는 예약 시간입니다. 시작 시각:{data.start_at.strftime('%H:%M')}")

        reservation_time: ReservationTime = await reservation_time_repository.create(
            db, {"start_at": data.start_at}
        )
        return self._to_response(reservation_time)

    async def delete_time(self, db: AsyncSession, time_id: int) -> None:
        """예약 시간을 삭제합니다. 예약 기록이 남아 있으면 삭제할 수 없습니다.

        Raises:
            NotFoundError: 예약 시간이 없을 때 (Time not found)
            DuplicateError: 예약 시간을 참조하는 예약이 있을 때 (Time still referenced)
        """
        reservation_time: ReservationTime | None = await reservation_time_repository.get_by_id(db, time_id)
        if reservation_time is None:
            raise NotFoundError(f"존재하지 않는 예약 시간입니다. 요청 시간 id:{time_id}")

        if await reservation_repository.exists_by_time(db, time_id) or await canceled_reservation_repository.exists_by_time(db, time_id):
            raise DuplicateError("예약 기록이 있는 시간은 삭제할 수 없습니다. (Time is referenced by reservations)")

        await reservation_time_repository.delete(db, time_id)


# 싱글턴 인스턴스 — Singleton instance
reservation_time_service: ReservationTimeService = ReservationTimeService()
