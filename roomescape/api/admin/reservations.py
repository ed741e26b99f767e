"""관리자 예약 라우터 — 예약 생성, 상태별/조건별 조회, 취소, 취소 기록.

Admin Reservation Router — Reservation management for admins.
Admins create reservations for members, list by status or criteria,
cancel any entry, and browse canceled records.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api.deps import require_admin
from roomescape.database import get_db
from roomescape.models.member import Member
from roomescape.models.reservation import ReservationStatus
from roomescape.schemas.reservation import (
    AdminReservationRequest,
    CanceledReservationResponse,
    ReservationCriteriaRequest,
    ReservationResponse,
)
from roomescape.services.reservation_service import reservation_service

router: APIRouter = APIRouter()


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    data: AdminReservationRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
) -> ReservationResponse:
    """회원의 예약을 결제 없이 생성합니다."""
    result: ReservationResponse = await reservation_service.save_reservation_by_admin(db, data)
    await db.commit()
    return result


@router.get("", response_model=list[ReservationResponse])
async def list_reservations(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
    status: ReservationStatus = ReservationStatus.RESERVATION,
) -> list[ReservationResponse]:
    """상태별 예약 목록을 조회합니다. 기본값은 RESERVATION.

    List reservations by status (RESERVATION by default, WAITING for the waitlist).
    """
    return await reservation_service.find_all_by_status(db, status)


@router.get("/search", response_model=list[ReservationResponse])
async def search_reservations(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
    theme_id: Annotated[int | None, Query()] = None,
    member_id: Annotated[int | None, Query()] = None,
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
) -> list[ReservationResponse]:
    """테마/회원/기간 조건으로 예약을 검색합니다.

    Search reservations by theme, member and inclusive date range.
    """
    criteria = ReservationCriteriaRequest(
        theme_id=theme_id,
        member_id=member_id,
        date_from=date_from,
        date_to=date_to,
    )
    return await reservation_service.find_by_criteria(db, criteria)


@router.get("/canceled", response_model=list[CanceledReservationResponse])
async def list_canceled_reservations(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
) -> list[CanceledReservationResponse]:
    """취소된 예약 기록을 조회합니다."""
    return await reservation_service.find_all_canceled_reservation(db)


@router.delete("/{reservation_id}", status_code=204)
async def delete_reservation(
    reservation_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
) -> None:
    """예약 또는 대기를 취소합니다. 예약 취소 시 첫 번째 대기가 승격됩니다.

    Cancel any reservation or waitlist entry; canceling a reservation
    promotes the earliest waiting entry of the slot.
    """
    await reservation_service.delete_by_id(db, reservation_id)
    await db.commit()
