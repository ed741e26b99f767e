"""앱 예약 라우터 — 회원의 예약, 대기, 결제, 취소 엔드포인트.

App Reservation Router — Member-facing reservation endpoints.
Members book with payment, join waitlists, pay for promoted
reservations, view their history, and cancel their own entries.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api.deps import get_current_member
from roomescape.database import get_db
from roomescape.models.member import Member
from roomescape.schemas.reservation import (
    MyReservationResponse,
    ReservationInformRequest,
    ReservationInformResponse,
    ReservationRequest,
    ReservationResponse,
    WaitingRequest,
)
from roomescape.services.reservation_service import reservation_service

router: APIRouter = APIRouter()


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    data: ReservationRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> ReservationResponse:
    """결제와 함께 예약을 생성합니다. 결제 실패 시 예약은 저장되지 않습니다.

    Create a reservation and confirm its payment. Nothing is committed
    when payment confirmation fails.
    """
    result: ReservationResponse = await reservation_service.save_reservation_with_payment_by_client(
        db, current_member, data
    )
    await db.commit()
    return result


@router.post("/waiting", response_model=ReservationResponse, status_code=201)
async def create_waiting(
    data: WaitingRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> ReservationResponse:
    """예약 대기를 생성합니다."""
    result: ReservationResponse = await reservation_service.save_waiting_by_client(
        db, current_member, data
    )
    await db.commit()
    return result


@router.get("/mine", response_model=list[MyReservationResponse])
async def list_my_reservations(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> list[MyReservationResponse]:
    """내 예약 및 대기 목록을 대기 순번과 함께 조회합니다.

    List my reservations and waitlist entries with waiting order.
    """
    return await reservation_service.find_my_reservations(db, current_member.id)


@router.get("/{reservation_id}", response_model=ReservationInformResponse)
async def get_reservation(
    reservation_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> ReservationInformResponse:
    """결제 페이지용 예약 정보를 조회합니다. 본인 예약만 가능."""
    return await reservation_service.find_by_id(db, reservation_id, current_member)


@router.post("/{reservation_id}/payment", response_model=ReservationResponse)
async def approve_payment(
    reservation_id: int,
    data: ReservationInformRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> ReservationResponse:
    """대기에서 승격된 예약의 결제를 승인합니다.

    Approve payment for a reservation promoted from the waitlist.
    """
    result: ReservationResponse = await reservation_service.approve_payment_waiting(
        db, current_member, reservation_id, data
    )
    await db.commit()
    return result


@router.delete("/{reservation_id}", status_code=204)
async def cancel_reservation(
    reservation_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> None:
    """본인의 예약 또는 대기를 취소합니다. 예약 취소 시 첫 번째 대기가 승격됩니다.

    Cancel my reservation or waitlist entry. Canceling a reservation
    promotes the earliest waiting entry of the slot.
    """
    await reservation_service.cancel_by_member(db, current_member, reservation_id)
    await db.commit()
