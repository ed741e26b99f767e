"""앱 카탈로그 라우터 — 예약 화면용 테마/시간 조회.

App Catalog Router — Read-only theme and time listings for the booking screen.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api.deps import get_current_member
from roomescape.database import get_db
from roomescape.models.member import Member
from roomescape.schemas.theme import ReservationTimeResponse, ThemeResponse
from roomescape.services.reservation_time_service import reservation_time_service
from roomescape.services.theme_service import theme_service

router: APIRouter = APIRouter()


@router.get("/themes", response_model=list[ThemeResponse])
async def list_themes(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> list[ThemeResponse]:
    """테마 목록을 조회합니다."""
    return await theme_service.list_themes(db)


@router.get("/times", response_model=list[ReservationTimeResponse])
async def list_times(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(get_current_member)],
) -> list[ReservationTimeResponse]:
    """예약 시간 목록을 조회합니다."""
    return await reservation_time_service.list_times(db)
