"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - reservations: 예약 관리 및 취소 기록 (Reservation management and canceled records)
    - themes: 테마 관리 (Theme management)
    - times: 예약 시간 관리 (Reservation time management)
"""

from fastapi import APIRouter

from roomescape.api.admin.reservations import router as reservations_router
from roomescape.api.admin.themes import router as themes_router
from roomescape.api.admin.times import router as times_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(reservations_router, prefix="/reservations", tags=["Admin Reservations"])
admin_router.include_router(themes_router, prefix="/themes", tags=["Admin Themes"])
admin_router.include_router(times_router, prefix="/times", tags=["Admin Times"])
