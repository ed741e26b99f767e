"""회원 액세스 토큰 발급 및 검증 모듈.

Member access token issuing and verification.

JWT Payload Structure:
    {
        "sub": "42",          # 회원 ID (Member id, stringified int)
        "role": "USER",       # 회원 역할 (USER | ADMIN)
        "exp": 1234567890,    # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from roomescape.config import settings

ACCESS_TOKEN_TYPE: str = "access"


def create_access_token(data: dict[str, Any]) -> str:
    """액세스 토큰을 발급합니다.

    Issue an access token; "exp" and "type" are added to the payload.

    Args:
        data: {"sub": str(member.id), "role": member.role}

    Returns:
        str: 인코딩된 JWT (Encoded JWT)
    """
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: dict[str, Any] = {**data, "exp": expire, "type": ACCESS_TOKEN_TYPE}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """서명과 만료를 검증하고 페이로드를 반환합니다.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 (Token expired)
        jwt.InvalidTokenError: 서명 불일치 등 (Bad signature or malformed token)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def member_id_from_token(token: str) -> int:
    """액세스 토큰에서 회원 ID를 꺼냅니다.

    Extract the member id from an access token.

    Raises:
        jwt.InvalidTokenError: 만료, 위조, 액세스 토큰이 아님, sub 누락 또는 정수가 아님
                               (Expired, forged, wrong type, missing or non-integer sub)
    """
    payload: dict[str, Any] = decode_token(token)
    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise jwt.InvalidTokenError("Invalid token type")
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise jwt.InvalidTokenError("Invalid subject") from exc
