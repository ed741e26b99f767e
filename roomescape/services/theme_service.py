"""테마 서비스 — 테마 CRUD 비즈니스 로직.

Theme Service — Business logic for theme creation, listing and deletion.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models.theme import Theme
from roomescape.repositories.canceled_reservation_repository import canceled_reservation_repository
from roomescape.repositories.reservation_repository import reservation_repository
from roomescape.repositories.theme_repository import theme_repository
from roomescape.schemas.theme import ThemeCreate, ThemeResponse
from roomescape.utils.exceptions import DuplicateError, NotFoundError


class ThemeService:
    """테마 관련 비즈니스 로직을 처리하는 서비스.

    Service handling theme business logic.
    """

    def _to_response(self, theme: Theme) -> ThemeResponse:
        return ThemeResponse(
            id=theme.id,
            name=theme.name,
            description=theme.description,
            thumbnail=theme.thumbnail,
        )

    async def list_themes(self, db: AsyncSession) -> list[ThemeResponse]:
        """모든 테마를 조회합니다."""
        themes = await theme_repository.get_all(db)
        return [self._to_response(t) for t in themes]

    async def create_theme(self, db: AsyncSession, data: ThemeCreate) -> ThemeResponse:
        """새 테마를 생성합니다.

        Create a new theme.

        Raises:
            DuplicateError: 같은 이름의 테마가 이미 존재할 때
                            (When a theme with the same name already exists)
        """
        if await theme_repository.exists(db, {"name": data.name}):
            raise DuplicateError(f"이미 존재하는 테마입니다. 테마 이름:{data.name}")

        theme: Theme = await theme_repository.create(db, data.model_dump())
        return self._to_response(theme)

    async def delete_theme(self, db: AsyncSession, theme_id: int) -> None:
        """테마를 삭제합니다. 예약 기록이 남아 있으면 삭제할 수 없습니다.

        Delete a theme that no reservation or canceled record refers to.

        Raises:
            NotFoundError: 테마가 없을 때 (Theme not found)
            DuplicateError: 테마를 참조하는 예약이 있을 때 (Theme still referenced)
        """
        theme: Theme | None = await theme_repository.get_by_id(db, theme_id)
        if theme is None:
            raise NotFoundError(f"존재하지 않는 테마입니다. 요청 테마 id:{theme_id}")

        if await reservation_repository.exists_by_theme(db, theme_id) or await canceled_reservation_repository.exists_by_theme(db, theme_id):
            raise DuplicateError("예약 기록이 있는 테마는 삭제할 수 없습니다. (Theme is referenced by reservations)")

        await theme_repository.delete(db, theme_id)


# 싱글턴 인스턴스 — Singleton instance
theme_service: ThemeService = ThemeService()
