"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers member signup, login, token issuance, and member info.
"""

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """회원가입 요청 스키마.

    Member signup request schema. New members always get the USER role.

    Attributes:
        name: 회원 이름 (Display name)
        email: 로그인 이메일 (Login email, unique)
        password: 비밀번호 (Plain text, bcrypt-hashed on the server)
    """

    name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=4)


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema.
    """

    email: str  # 로그인 이메일 (Login email)
    password: str  # 비밀번호 — 평문, 서버에서 bcrypt 해시와 비교 (Compared to bcrypt hash)


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    JWT token issuance response schema returned after login or signup.
    """

    access_token: str
    token_type: str = "bearer"  # 토큰 유형 — 항상 "bearer" (Token type for Authorization header)


class MemberResponse(BaseModel):
    """회원 응답 스키마.

    Member response schema; never exposes the password hash.
    """

    id: int
    name: str
    email: str
    role: str
