"""앱 인증 라우터 — 회원가입, 로그인, 내 정보.

App Auth Router — Member signup, login, and current member info.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.api.deps import get_current_member
from roomescape.database import get_db
from roomescape.models.member import Member
from roomescape.schemas.auth import LoginRequest, MemberResponse, SignupRequest, TokenResponse
from roomescape.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(
    data: SignupRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """회원가입 — USER 역할 회원을 생성하고 토큰을 발급합니다.

    Register a USER member and issue an access token.
    """
    result: TokenResponse = await auth_service.signup(db, data)
    await db.commit()
    return result


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """로그인 — 이메일/비밀번호로 액세스 토큰 발급.

    Issue an access token for valid email and password.
    """
    return await auth_service.login(db, data)


@router.get("/me", response_model=MemberResponse)
async def me(
    current_member: Annotated[Member, Depends(get_current_member)],
) -> MemberResponse:
    """현재 로그인한 회원 정보를 조회합니다."""
    return auth_service.to_member_response(current_member)
