"""예약 레포지토리 — 예약 및 예약 대기 관련 DB 쿼리 담당.

Reservation Repository — Database queries for reservations and waitlist entries.
Extends BaseRepository with slot lookups, criteria search, and waiting-order counts.
"""

from datetime import date

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from roomescape.models.reservation import Reservation, ReservationStatus
from roomescape.models.theme import ReservationTime
from roomescape.repositories.base import BaseRepository


class ReservationRepository(BaseRepository[Reservation]):
    """예약 레포지토리.

    Reservation repository. A slot is the (date, time_id, theme_id) triple;
    entries of one slot are ordered by id.

    Extends:
        BaseRepository[Reservation]
    """

    def __init__(self) -> None:
        super().__init__(Reservation)

    def _with_details(self) -> Select:
        """시간/테마/회원을 함께 로드하는 기본 쿼리."""
        return select(Reservation).options(
            selectinload(Reservation.time),
            selectinload(Reservation.theme),
            selectinload(Reservation.member),
        )

    async def get_detail(
        self,
        db: AsyncSession,
        reservation_id: int,
    ) -> Reservation | None:
        """예약을 시간/테마/회원과 함께 조회합니다.

        Retrieve a reservation with its time, theme and member eagerly loaded.
        Existing identities are refreshed so status changes made in this
        session are visible together with the relationships.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            reservation_id: 예약 ID (Reservation id)

        Returns:
            Reservation | None: 예약 또는 None (Reservation or None)
        """
        query: Select = (
            self._with_details()
            .where(Reservation.id == reservation_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_all_by_status(
        self,
        db: AsyncSession,
        status: ReservationStatus,
    ) -> list[Reservation]:
        """상태별 예약 목록을 생성 순으로 조회합니다.

        Retrieve all reservations with the given status in creation order.
        """
        query: Select = (
            self._with_details()
            .where(Reservation.status == status.value)
            .order_by(Reservation.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_criteria(
        self,
        db: AsyncSession,
        theme_id: int | None = None,
        member_id: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Reservation]:
        """조건에 맞는 예약을 조회합니다. 모든 조건은 선택이며 날짜 범위는 양 끝을 포함합니다.

        Retrieve reservations matching optional criteria.
        The date range is inclusive on both ends.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            theme_id: 테마 ID 필터 (Optional theme filter)
            member_id: 회원 ID 필터 (Optional member filter)
            date_from: 시작일 (Optional range start date)
            date_to: 종료일 (Optional range end date)

        Returns:
            list[Reservation]: 날짜, 시간 순 예약 목록 (Reservations ordered by date, time)
        """
        query: Select = self._with_details().join(Reservation.time)

        if theme_id is not None:
            query = query.where(Reservation.theme_id == theme_id)
        if member_id is not None:
            query = query.where(Reservation.member_id == member_id)
        if date_from is not None:
            query = query.where(Reservation.date >= date_from)
        if date_to is not None:
            query = query.where(Reservation.date <= date_to)

        query = query.order_by(Reservation.date, ReservationTime.start_at, Reservation.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_member(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> list[Reservation]:
        """회원의 예약 및 예약 대기를 날짜, 시간 순으로 조회합니다.

        Retrieve a member's reservations and waitlist entries ordered by date and time.
        """
        query: Select = (
            self._with_details()
            .join(Reservation.time)
            .where(Reservation.member_id == member_id)
            .order_by(Reservation.date, ReservationTime.start_at, Reservation.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def exists_by_slot_and_status(
        self,
        db: AsyncSession,
        reservation_date: date,
        time_id: int,
        theme_id: int,
        status: ReservationStatus,
    ) -> bool:
        """슬롯에 해당 상태의 예약이 있는지 확인합니다."""
        return await self.exists(
            db,
            {
                "date": reservation_date,
                "time_id": time_id,
                "theme_id": theme_id,
                "status": status.value,
            },
        )

    async def exists_by_slot_and_member(
        self,
        db: AsyncSession,
        reservation_date: date,
        time_id: int,
        theme_id: int,
        member_id: int,
    ) -> bool:
        """회원이 슬롯에 예약 또는 대기를 이미 가지고 있는지 확인합니다."""
        return await self.exists(
            db,
            {
                "date": reservation_date,
                "time_id": time_id,
                "theme_id": theme_id,
                "member_id": member_id,
            },
        )

    async def find_first_by_slot_and_status(
        self,
        db: AsyncSession,
        reservation_date: date,
        time_id: int,
        theme_id: int,
        status: ReservationStatus,
    ) -> Reservation | None:
        """슬롯에서 가장 먼저 생성된 해당 상태의 예약을 조회합니다.

        Retrieve the earliest-created entry of the slot with the given status.
        """
        query: Select = (
            select(Reservation)
            .where(
                Reservation.date == reservation_date,
                Reservation.time_id == time_id,
                Reservation.theme_id == theme_id,
                Reservation.status == status.value,
            )
            .order_by(Reservation.id)
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def count_waiting_ahead(
        self,
        db: AsyncSession,
        reservation: Reservation,
    ) -> int:
        """같은 슬롯에서 이 예약보다 먼저 생성된 대기 수를 셉니다.

        Count waitlist entries of the same slot created before the given entry.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            reservation: 기준 예약 (Reference entry)

        Returns:
            int: 앞선 대기 수 (Number of waiting entries ahead)
        """
        query: Select = (
            select(func.count())
            .select_from(Reservation)
            .where(
                Reservation.id < reservation.id,
                Reservation.date == reservation.date,
                Reservation.time_id == reservation.time_id,
                Reservation.theme_id == reservation.theme_id,
                Reservation.status == ReservationStatus.WAITING.value,
            )
        )
        return (await db.execute(query)).scalar() or 0

    async def exists_by_theme(self, db: AsyncSession, theme_id: int) -> bool:
        return await self.exists(db, {"theme_id": theme_id})

    async def exists_by_time(self, db: AsyncSession, time_id: int) -> bool:
        return await self.exists(db, {"time_id": time_id})


# 싱글턴 인스턴스 — Singleton instance
reservation_repository: ReservationRepository = ReservationRepository()
