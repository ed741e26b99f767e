"""예약 생성 서비스 — 예약/대기 생성 시 슬롯 검증 규칙.

Reservation Create Service — Validation rules applied when creating
reservations and waitlist entries for a (date, time, theme) slot.
"""

from datetime import date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models.member import Member
from roomescape.models.reservation import Reservation, ReservationStatus
from roomescape.models.theme import ReservationTime, Theme
from roomescape.repositories.member_repository import member_repository
from roomescape.repositories.reservation_repository import reservation_repository
from roomescape.repositories.reservation_time_repository import reservation_time_repository
from roomescape.repositories.theme_repository import theme_repository
from roomescape.schemas.reservation import (
    AdminReservationRequest,
    ReservationRequest,
    WaitingRequest,
)
from roomescape.utils.exceptions import BadRequestError, DuplicateError, NotFoundError


class ReservationCreateService:
    """예약 및 예약 대기 생성을 담당하는 서비스.

    Service creating reservations and waitlist entries.

    Rules:
        - 시간/테마/회원은 존재해야 함 (Time, theme and member must exist → 404)
        - 회원 요청은 지난 시각을 예약할 수 없음 (Client requests cannot target the past → 400)
        - 슬롯당 활성 예약은 하나 (One active RESERVATION per slot → 409)
        - 대기는 활성 예약이 있는 슬롯에만 가능 (Waiting needs an active reservation → 400)
        - 회원은 슬롯당 하나의 예약/대기만 가능 (One entry per member per slot → 409)

    The one-reservation-per-slot and one-entry-per-member rules are also
    unique constraints on the reservations table, so concurrent requests
    that pass validation together still end in 409.
    """

    async def _get_time(self, db: AsyncSession, time_id: int) -> ReservationTime:
        reservation_time: ReservationTime | None = await reservation_time_repository.get_by_id(db, time_id)
        if reservation_time is None:
            raise NotFoundError(f"존재하지 않는 예약 시간입니다. 요청 시간 id:{time_id}")
        return reservation_time

    async def _get_theme(self, db: AsyncSession, theme_id: int) -> Theme:
        theme: Theme | None = await theme_repository.get_by_id(db, theme_id)
        if theme is None:
            raise NotFoundError(f"존재하지 않는 테마입니다. 요청 테마 id:{theme_id}")
        return theme

    async def _get_member(self, db: AsyncSession, member_id: int) -> Member:
        member: Member | None = await member_repository.get_by_id(db, member_id)
        if member is None:
            raise NotFoundError(f"존재하지 않는 회원입니다. 요청 회원 id:{member_id}")
        return member

    def validate_not_past(self, reservation_date: date, reservation_time: ReservationTime) -> None:
        """지난 날짜/시간에 대한 요청을 거절합니다.

        Reject requests for a slot that has already started (server local time).
        """
        requested: datetime = datetime.combine(reservation_date, reservation_time.start_at)
        if requested < datetime.now():
            raise BadRequestError(
                f"지난 시간에는 예약할 수 없습니다. 요청 일시:{requested.isoformat(sep=' ', timespec='minutes')}"
            )

    async def _validate_slot_available(
        self,
        db: AsyncSession,
        reservation_date: date,
        time_id: int,
        theme_id: int,
    ) -> None:
        """슬롯에 활성 예약이 이미 있으면 거절합니다."""
        reserved: bool = await reservation_repository.exists_by_slot_and_status(
            db, reservation_date, time_id, theme_id, ReservationStatus.RESERVATION
        )
        if reserved:
            raise DuplicateError("이미 예약된 시간입니다. (The slot is already reserved)")

    async def _create(
        self,
        db: AsyncSession,
        reservation_date: date,
        time_id: int,
        theme_id: int,
        member_id: int,
        status: ReservationStatus,
    ) -> Reservation:
        try:
            reservation: Reservation = await reservation_repository.create(
                db,
                {
                    "date": reservation_date,
                    "time_id": time_id,
                    "theme_id": theme_id,
                    "member_id": member_id,
                    "status": status.value,
                },
            )
        except IntegrityError as exc:
            # 동시 요청이 검증을 함께 통과한 경우 DB 유니크 제약이 막음
            # Concurrent requests that both passed validation hit the unique constraints
            if status == ReservationStatus.RESERVATION:
                raise DuplicateError("이미 예약된 시간입니다. (The slot is already reserved)") from exc
            raise DuplicateError("이미 예약 또는 대기 중인 시간입니다. (Already reserved or waiting for this slot)") from exc
        # 관계까지 로드된 인스턴스를 반환 — Return with time/theme/member loaded
        return await reservation_repository.get_detail(db, reservation.id)

    async def save_reservation_by_client(
        self,
        db: AsyncSession,
        member_id: int,
        data: ReservationRequest,
    ) -> Reservation:
        """회원 요청으로 예약을 생성합니다. 결제는 호출자가 이어서 처리합니다.

        Create a RESERVATION for the logged-in member. Payment is confirmed
        by the caller afterwards, inside the same transaction.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member_id: 로그인 회원 ID (Logged-in member id)
            data: 예약 요청 (Reservation request)

        Returns:
            Reservation: 생성된 예약 (Created reservation)

        Raises:
            NotFoundError: 시간/테마/회원이 없을 때 (Missing time, theme or member)
            BadRequestError: 지난 시각일 때 (Slot in the past)
            DuplicateError: 이미 예약된 슬롯일 때 (Slot already reserved)
        """
        reservation_time: ReservationTime = await self._get_time(db, data.time_id)
        await self._get_theme(db, data.theme_id)
        await self._get_member(db, member_id)
        self.validate_not_past(data.date, reservation_time)
        await self._validate_slot_available(db, data.date, data.time_id, data.theme_id)

        return await self._create(
            db, data.date, data.time_id, data.theme_id, member_id, ReservationStatus.RESERVATION
        )

    async def save_waiting_by_client(
        self,
        db: AsyncSession,
        member_id: int,
        data: WaitingRequest,
    ) -> Reservation:
        """회원 요청으로 예약 대기를 생성합니다.

        Create a WAITING entry for the logged-in member.

        Raises:
            NotFoundError: 시간/테마/회원이 없을 때 (Missing time, theme or member)
            BadRequestError: 지난 시각이거나 대기할 예약이 없을 때
                             (Slot in the past, or nothing to wait for)
            DuplicateError: 회원이 이미 슬롯에 예약/대기 중일 때
                            (Member already holds an entry for the slot)
        """
        reservation_time: ReservationTime = await self._get_time(db, data.time_id)
        await self._get_theme(db, data.theme_id)
        await self._get_member(db, member_id)
        self.validate_not_past(data.date, reservation_time)

        reserved: bool = await reservation_repository.exists_by_slot_and_status(
            db, data.date, data.time_id, data.theme_id, ReservationStatus.RESERVATION
        )
        if not reserved:
            raise BadRequestError("대기할 예약이 없습니다. 바로 예약해 주세요. (Nothing to wait for; reserve directly)")

        already: bool = await reservation_repository.exists_by_slot_and_member(
            db, data.date, data.time_id, data.theme_id, member_id
        )
        if already:
            raise DuplicateError("이미 예약 또는 대기 중인 시간입니다. (Already reserved or waiting for this slot)")

        return await self._create(
            db, data.date, data.time_id, data.theme_id, member_id, ReservationStatus.WAITING
        )

    async def save_reservation_by_admin(
        self,
        db: AsyncSession,
        data: AdminReservationRequest,
    ) -> Reservation:
        """관리자 요청으로 특정 회원의 예약을 결제 없이 생성합니다.

        Create a RESERVATION for any member without payment.
        Admins may record past slots; the one-active-reservation rule still holds.
        """
        await self._get_time(db, data.time_id)
        await self._get_theme(db, data.theme_id)
        await self._get_member(db, data.member_id)
        await self._validate_slot_available(db, data.date, data.time_id, data.theme_id)

        return await self._create(
            db, data.date, data.time_id, data.theme_id, data.member_id, ReservationStatus.RESERVATION
        )


# 싱글턴 인스턴스 — Singleton instance
reservation_create_service: ReservationCreateService = ReservationCreateService()
