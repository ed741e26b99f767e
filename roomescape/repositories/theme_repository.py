"""테마 레포지토리 — 테마 CRUD 쿼리.

Theme Repository — CRUD queries for room escape themes.
"""

from roomescape.models.theme import Theme
from roomescape.repositories.base import BaseRepository


class ThemeRepository(BaseRepository[Theme]):
    """테마 레포지토리.

    Theme repository; generic CRUD from BaseRepository is sufficient.
    """

    def __init__(self) -> None:
        super().__init__(Theme)


# 싱글턴 인스턴스 — Singleton instance
theme_repository: ThemeRepository = ThemeRepository()
