"""앱 API 라우터 패키지 — 모든 회원용 엔드포인트 통합.

App API Router package — Aggregates all member-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - auth: 회원가입/로그인 (Signup, login, me)
    - catalog: 테마/시간 조회 (Theme and time listings)
    - reservations: 예약, 대기, 결제, 취소 (Reservations, waitlist, payment, cancellation)
"""

from fastapi import APIRouter

from roomescape.api.app.auth import router as auth_router
from roomescape.api.app.catalog import router as catalog_router
from roomescape.api.app.reservations import router as reservations_router

app_router: APIRouter = APIRouter()

app_router.include_router(auth_router, prefix="/auth", tags=["App Auth"])
app_router.include_router(catalog_router, tags=["Catalog"])
app_router.include_router(reservations_router, prefix="/reservations", tags=["App Reservations"])
