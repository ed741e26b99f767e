"""예약 서비스 — 예약 생애주기 및 대기 승격 비즈니스 로직.

Reservation Service — Reservation lifecycle and waitlist promotion.
Orchestrates creation (with payment), cancellation with archiving and
promotion of the earliest waiting entry, payment approval for promoted
entries, and history queries.

Transactions are committed by the API layer after a service call returns;
an exception before that leaves every change of the request uncommitted.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models.member import Member
from roomescape.models.reservation import CanceledReservation, Reservation, ReservationStatus
from roomescape.repositories.canceled_reservation_repository import canceled_reservation_repository
from roomescape.repositories.reservation_repository import reservation_repository
from roomescape.schemas.auth import MemberResponse
from roomescape.schemas.payment import PaymentRequest
from roomescape.schemas.reservation import (
    AdminReservationRequest,
    CanceledReservationResponse,
    MyReservationResponse,
    ReservationCriteriaRequest,
    ReservationInformRequest,
    ReservationInformResponse,
    ReservationRequest,
    ReservationResponse,
    WaitingRequest,
)
from roomescape.schemas.theme import ReservationTimeResponse, ThemeResponse
from roomescape.services.payment_service import payment_service
from roomescape.services.reservation_create_service import reservation_create_service
from roomescape.utils.exceptions import BadRequestError, DuplicateError, ForbiddenError, NotFoundError


class ReservationService:
    """예약 관련 비즈니스 로직을 처리하는 서비스.

    Service handling reservation business logic.
    A slot holds at most one RESERVATION; WAITING entries of the slot are
    promoted in creation order when the active reservation is canceled.
    """

    def _to_response(self, reservation: Reservation) -> ReservationResponse:
        """예약 모델을 응답 스키마로 변환합니다. 시간/테마/회원이 로드되어 있어야 합니다.

        Convert a Reservation (with time, theme and member loaded) to a response.
        """
        return ReservationResponse(
            id=reservation.id,
            date=reservation.date,
            time=ReservationTimeResponse(id=reservation.time.id, start_at=reservation.time.start_at),
            theme=ThemeResponse(
                id=reservation.theme.id,
                name=reservation.theme.name,
                description=reservation.theme.description,
                thumbnail=reservation.theme.thumbnail,
            ),
            member=MemberResponse(
                id=reservation.member.id,
                name=reservation.member.name,
                email=reservation.member.email,
                role=reservation.member.role,
            ),
            status=ReservationStatus(reservation.status),
        )

    def _to_canceled_response(self, canceled: CanceledReservation) -> CanceledReservationResponse:
        return CanceledReservationResponse(
            id=canceled.id,
            reservation_id=canceled.reservation_id,
            date=canceled.date,
            theme_name=canceled.theme.name,
            start_at=canceled.time.start_at,
            member_name=canceled.member.name,
            status=ReservationStatus(canceled.status),
            payment_key=canceled.payment_key,
            amount=canceled.amount,
            canceled_at=canceled.canceled_at,
        )

    async def _get_or_404(self, db: AsyncSession, reservation_id: int) -> Reservation:
        reservation: Reservation | None = await reservation_repository.get_detail(db, reservation_id)
        if reservation is None:
            raise NotFoundError(f"존재하지 않는 예약입니다. 요청 예약 id:{reservation_id}")
        return reservation

    def _check_owner(self, reservation: Reservation, member: Member) -> None:
        """본인 예약인지 확인합니다. 관리자는 모든 예약에 접근할 수 있습니다."""
        if not member.is_admin and reservation.member_id != member.id:
            raise ForbiddenError("본인의 예약만 처리할 수 있습니다. (Not your reservation)")

    # --- 생성 (Creation) ---

    async def save_reservation_with_payment_by_client(
        self,
        db: AsyncSession,
        member: Member,
        data: ReservationRequest,
    ) -> ReservationResponse:
        """결제를 포함해 예약을 생성합니다.

        Create a reservation for the logged-in member and confirm its payment.
        A payment failure propagates and the reservation is never committed.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member: 로그인 회원 (Logged-in member)
            data: 예약 및 결제 요청 (Reservation and payment request)

        Returns:
            ReservationResponse: 생성된 예약 (Created reservation)

        Raises:
            PaymentError: 결제 승인 실패 (Payment confirmation failed)
        """
        reservation: Reservation = await reservation_create_service.save_reservation_by_client(
            db, member.id, data
        )
        payment_request = PaymentRequest(
            order_id=data.order_id,
            amount=data.amount,
            payment_key=data.payment_key,
        )
        await payment_service.pay(payment_request, reservation)
        await db.flush()
        return self._to_response(reservation)

    async def save_waiting_by_client(
        self,
        db: AsyncSession,
        member: Member,
        data: WaitingRequest,
    ) -> ReservationResponse:
        """예약 대기를 생성합니다.

        Create a waitlist entry for the logged-in member.
        """
        reservation: Reservation = await reservation_create_service.save_waiting_by_client(
            db, member.id, data
        )
        return self._to_response(reservation)

    async def save_reservation_by_admin(
        self,
        db: AsyncSession,
        data: AdminReservationRequest,
    ) -> ReservationResponse:
        """관리자가 회원의 예약을 생성합니다 (결제 없음).

        Create a reservation on behalf of a member, without payment.
        """
        reservation: Reservation = await reservation_create_service.save_reservation_by_admin(db, data)
        return self._to_response(reservation)

    # --- 취소 및 승격 (Cancellation and promotion) ---

    async def delete_by_id(self, db: AsyncSession, reservation_id: int) -> None:
        """예약 또는 대기를 취소합니다.

        Cancel a reservation or waitlist entry: delete it, archive a copy,
        and if an active RESERVATION was canceled while the slot has WAITING
        entries, promote the earliest one to RESERVATION.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            reservation_id: 예약 ID (Reservation id)

        Raises:
            NotFoundError: 예약이 존재하지 않을 때 (Reservation not found)
        """
        reservation: Reservation | None = await reservation_repository.get_by_id(db, reservation_id)
        if reservation is None:
            raise NotFoundError(f"존재하지 않는 예약입니다. 요청 예약 id:{reservation_id}")

        archived: CanceledReservation = reservation.canceled()
        await reservation_repository.delete(db, reservation.id)
        await canceled_reservation_repository.save(db, archived)
        await self._update_waiting_to_reservation(db, reservation)

    async def cancel_by_member(
        self,
        db: AsyncSession,
        member: Member,
        reservation_id: int,
    ) -> None:
        """회원이 본인의 예약 또는 대기를 취소합니다.

        Cancel the member's own reservation or waitlist entry.

        Raises:
            NotFoundError: 예약이 존재하지 않을 때 (Reservation not found)
            ForbiddenError: 다른 회원의 예약일 때 (Another member's reservation)
        """
        reservation: Reservation = await self._get_or_404(db, reservation_id)
        self._check_owner(reservation, member)
        await self.delete_by_id(db, reservation_id)

    async def _update_waiting_to_reservation(self, db: AsyncSession, reservation: Reservation) -> None:
        if not await self._is_waiting_updatable_to_reservation(db, reservation):
            return

        waiting: Reservation | None = await reservation_repository.find_first_by_slot_and_status(
            db, reservation.date, reservation.time_id, reservation.theme_id, ReservationStatus.WAITING
        )
        if waiting is not None:
            waiting.change_payment_waiting()
            await db.flush()

    async def _is_waiting_updatable_to_reservation(self, db: AsyncSession, reservation: Reservation) -> bool:
        """활성 예약이 취소되었고 같은 슬롯에 대기가 있는지 확인합니다."""
        if reservation.status != ReservationStatus.RESERVATION:
            return False
        return await reservation_repository.exists_by_slot_and_status(
            db, reservation.date, reservation.time_id, reservation.theme_id, ReservationStatus.WAITING
        )

    # --- 결제 승인 (Payment approval) ---

    async def approve_payment_waiting(
        self,
        db: AsyncSession,
        member: Member,
        reservation_id: int,
        data: ReservationInformRequest,
    ) -> ReservationResponse:
        """승격된 예약의 결제를 승인합니다.

        Approve payment for a promoted reservation: mark it RESERVATION and
        confirm the payment with the gateway.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            member: 로그인 회원 (Logged-in member)
            reservation_id: 예약 ID (Reservation id)
            data: 결제 정보 (Payment information)

        Returns:
            ReservationResponse: 결제된 예약 (Paid reservation)

        Raises:
            NotFoundError: 예약이 존재하지 않을 때 (Reservation not found)
            ForbiddenError: 다른 회원의 예약일 때 (Another member's reservation)
            BadRequestError: 이미 지난 시간이거나, 다른 예약이 슬롯을 점유 중인 대기일 때
                             (Slot already started, or still waiting behind an active reservation)
            DuplicateError: 이미 결제되었거나 동시 요청이 슬롯을 먼저 점유했을 때
                            (Already paid, or a concurrent request claimed the slot first)
            PaymentError: 결제 승인 실패 (Payment confirmation failed)
        """
        reservation: Reservation = await self._get_or_404(db, reservation_id)
        self._check_owner(reservation, member)

        if reservation.payment_key is not None:
            raise DuplicateError("이미 결제된 예약입니다. (Reservation already paid)")
        reservation_create_service.validate_not_past(reservation.date, reservation.time)
        if reservation.status == ReservationStatus.WAITING:
            slot_taken: bool = await reservation_repository.exists_by_slot_and_status(
                db, reservation.date, reservation.time_id, reservation.theme_id, ReservationStatus.RESERVATION
            )
            if slot_taken:
                raise BadRequestError("아직 예약 대기 중입니다. (Still waiting for the slot)")

        # 결제 전에 슬롯을 점유 — Claim the slot before the gateway is called
        reservation.status = ReservationStatus.RESERVATION.value
        try:
            await db.flush()
        except IntegrityError as exc:
            raise DuplicateError("이미 예약된 시간입니다. (The slot is already reserved)") from exc

        payment_request = PaymentRequest(
            order_id=data.order_id,
            amount=data.amount,
            payment_key=data.payment_key,
        )
        await payment_service.pay(payment_request, reservation)
        await db.flush()
        return self._to_response(reservation)

    # --- 조회 (Queries) ---

    async def find_all_by_status(
        self,
        db: AsyncSession,
        status: ReservationStatus,
    ) -> list[ReservationResponse]:
        """상태별 예약 목록을 조회합니다."""
        reservations: list[Reservation] = await reservation_repository.get_all_by_status(db, status)
        return [self._to_response(r) for r in reservations]

    async def find_by_criteria(
        self,
        db: AsyncSession,
        criteria: ReservationCriteriaRequest,
    ) -> list[ReservationResponse]:
        """테마/회원/기간 조건으로 예약을 검색합니다.

        Search reservations by optional theme, member and inclusive date range.
        """
        reservations: list[Reservation] = await reservation_repository.find_by_criteria(
            db,
            theme_id=criteria.theme_id,
            member_id=criteria.member_id,
            date_from=criteria.date_from,
            date_to=criteria.date_to,
        )
        return [self._to_response(r) for r in reservations]

    async def find_my_reservations(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> list[MyReservationResponse]:
        """회원의 예약 및 대기 목록을 결제 정보, 대기 순번과 함께 조회합니다.

        List a member's reservations and waitlist entries with payment
        metadata and the number of waiting entries ahead of each.
        """
        reservations: list[Reservation] = await reservation_repository.find_by_member(db, member_id)
        return [
            MyReservationResponse(
                reservation_id=r.id,
                theme=r.theme.name,
                date=r.date,
                time=r.time.start_at,
                status=ReservationStatus(r.status),
                payment_key=r.payment_key,
                amount=r.amount,
                waiting_order=await self.get_waiting_order(db, r),
                payment_pending=r.is_payment_pending,
            )
            for r in reservations
        ]

    async def get_waiting_order(self, db: AsyncSession, reservation: Reservation) -> int:
        """대기 순번 — 같은 슬롯에서 앞선 대기 수. 예약은 0.

        Waiting order: WAITING entries of the same slot created earlier.
        RESERVATION entries are not in the queue and get 0.
        """
        if reservation.status != ReservationStatus.WAITING:
            return 0
        return await reservation_repository.count_waiting_ahead(db, reservation)

    async def find_by_id(
        self,
        db: AsyncSession,
        reservation_id: int,
        member: Member | None = None,
    ) -> ReservationInformResponse:
        """결제 페이지용 예약 정보를 조회합니다. member가 주어지면 본인 예약만 허용.

        Retrieve reservation information for the payment page.
        When a member is given, only their own reservation is returned.

        Raises:
            NotFoundError: 예약이 존재하지 않을 때 (Reservation not found)
            ForbiddenError: 다른 회원의 예약일 때 (Another member's reservation)
        """
        reservation: Reservation = await self._get_or_404(db, reservation_id)
        if member is not None:
            self._check_owner(reservation, member)
        return ReservationInformResponse(
            id=reservation.id,
            date=reservation.date,
            theme_name=reservation.theme.name,
            start_at=reservation.time.start_at,
            member_name=reservation.member.name,
            status=ReservationStatus(reservation.status),
        )

    async def find_all_canceled_reservation(self, db: AsyncSession) -> list[CanceledReservationResponse]:
        """취소된 예약 기록 전체를 조회합니다."""
        canceled: list[CanceledReservation] = await canceled_reservation_repository.get_all_with_details(db)
        return [self._to_canceled_response(c) for c in canceled]


# 싱글턴 인스턴스 — Singleton instance
reservation_service: ReservationService = ReservationService()
