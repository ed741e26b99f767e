"""인증 서비스 — 회원가입 및 로그인 비즈니스 로직.

Auth Service — Member signup and login.
Issues JWT access tokens carrying the member id and role.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models.member import ROLE_USER, Member
from roomescape.repositories.member_repository import member_repository
from roomescape.schemas.auth import LoginRequest, MemberResponse, SignupRequest, TokenResponse
from roomescape.utils.exceptions import DuplicateError, UnauthorizedError
from roomescape.utils.jwt import create_access_token
from roomescape.utils.password import hash_password, verify_password


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member authentication.
    """

    def _issue_token(self, member: Member) -> TokenResponse:
        token: str = create_access_token({"sub": str(member.id), "role": member.role})
        return TokenResponse(access_token=token)

    def to_member_response(self, member: Member) -> MemberResponse:
        return MemberResponse(id=member.id, name=member.name, email=member.email, role=member.role)

    async def signup(self, db: AsyncSession, data: SignupRequest) -> TokenResponse:
        """회원가입 후 액세스 토큰을 발급합니다.

        Register a USER member and issue an access token.

        Raises:
            DuplicateError: 이미 가입된 이메일일 때 (Email already registered)
        """
        if await member_repository.get_by_email(db, data.email) is not None:
            raise DuplicateError("이미 가입된 이메일입니다. (Email already registered)")

        member: Member = await member_repository.create(
            db,
            {
                "name": data.name,
                "email": data.email,
                "password_hash": hash_password(data.password),
                "role": ROLE_USER,
            },
        )
        return self._issue_token(member)

    async def login(self, db: AsyncSession, data: LoginRequest) -> TokenResponse:
        """이메일/비밀번호로 로그인합니다.

        Authenticate with email and password.

        Raises:
            UnauthorizedError: 이메일 또는 비밀번호가 틀릴 때 (Invalid credentials)
        """
        member: Member | None = await member_repository.get_by_email(db, data.email)
        if member is None or not verify_password(data.password, member.password_hash):
            raise UnauthorizedError("이메일 또는 비밀번호가 올바르지 않습니다. (Invalid email or password)")
        return self._issue_token(member)


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
