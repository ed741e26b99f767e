"""관리자 예약 시간 라우터 — 예약 시간 CRUD 엔드포인트.

Admin Reservation Time Router — Start time creation, listing and deletion.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api.deps import require_admin
from roomescape.database import get_db
from roomescape.models.member import Member
from roomescape.schemas.theme import ReservationTimeCreate, ReservationTimeResponse
from roomescape.services.reservation_time_service import reservation_time_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ReservationTimeResponse])
async def list_times(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
) -> list[ReservationTimeResponse]:
    """예약 시간 목록을 조회합니다."""
    return await reservation_time_service.list_times(db)


@router.post("", response_model=ReservationTimeResponse, status_code=201)
async def create_time(
    data: ReservationTimeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
) -> ReservationTimeResponse:
    """새 예약 시간을 생성합니다."""
    result: ReservationTimeResponse = await reservation_time_service.create_time(db, data)
    await db.commit()
    return result


@router.delete("/{time_id}", status_code=204)
async def delete_time(
    time_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
) -> None:
    """예약 시간을 삭제합니다. 예약 기록이 있으면 409."""
    await reservation_time_service.delete_time(db, time_id)
    await db.commit()
