"""FastAPI 의존성 주입 모듈 — 인증 및 권한 검사.

FastAPI dependency injection module — Authentication and authorization.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. member_id_from_token()이 서명, 만료, 토큰 유형을 검증하고 회원 ID를 반환
       (member_id_from_token verifies signature, expiry and type, returns the member id)
    3. 회원 ID로 DB에서 회원을 조회
       (Member is fetched from DB by id)

Authorization:
    require_admin은 ADMIN 역할만 허용 (require_admin allows the ADMIN role only)
"""

from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.database import get_db
from roomescape.models.member import Member
from roomescape.repositories.member_repository import member_repository
from roomescape.utils.jwt import member_id_from_token

# HTTP Bearer 토큰 추출기 — Authorization 헤더에서 JWT 토큰 추출
security: HTTPBearer = HTTPBearer()


async def get_current_member(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Member:
    """JWT 토큰에서 현재 로그인한 회원을 추출합니다.

    Decode JWT from the Authorization header and return the logged-in member.

    Args:
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)
        db: 비동기 DB 세션 (Async database session)

    Returns:
        Member: 인증된 회원 (Authenticated member)

    Raises:
        HTTPException(401): 토큰이 유효하지 않거나 회원이 없음 (Invalid token or unknown member)
    """
    try:
        member_id: int = member_id_from_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    member: Member | None = await member_repository.get_by_id(db, member_id)
    if member is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Member not found")
    return member


async def require_admin(
    current_member: Annotated[Member, Depends(get_current_member)],
) -> Member:
    """관리자 권한을 확인합니다.

    Allow only members with the ADMIN role.

    Raises:
        HTTPException(403): 관리자가 아님 (Not an admin)
    """
    if not current_member.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return current_member
