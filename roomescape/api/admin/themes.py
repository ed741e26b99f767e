"""관리자 테마 라우터 — 테마 CRUD 엔드포인트.

Admin Theme Router — Theme creation, listing and deletion.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api.deps import require_admin
from roomescape.database import get_db
from roomescape.models.member import Member
from roomescape.schemas.theme import ThemeCreate, ThemeResponse
from roomescape.services.theme_service import theme_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[ThemeResponse])
async def list_themes(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
) -> list[ThemeResponse]:
    """테마 목록을 조회합니다."""
    return await theme_service.list_themes(db)


@router.post("", response_model=ThemeResponse, status_code=201)
async def create_theme(
    data: ThemeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
) -> ThemeResponse:
    """새 테마를 생성합니다."""
    result: ThemeResponse = await theme_service.create_theme(db, data)
    await db.commit()
    return result


@router.delete("/{theme_id}", status_code=204)
async def delete_theme(
    theme_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_member: Annotated[Member, Depends(require_admin)],
) -> None:
    """테마를 삭제합니다. 예약 기록이 있으면 409."""
    await theme_service.delete_theme(db, theme_id)
    await db.commit()
