"""회원 비밀번호 해싱 유틸리티.

Member password hashing helpers backed by bcrypt.
The cost factor comes from settings.BCRYPT_ROUNDS.
"""

import bcrypt

from roomescape.config import settings


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시 문자열로 변환합니다."""
    salt: bytes = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """로그인 비밀번호가 저장된 해시와 일치하는지 확인합니다.

    Check a login password against the stored member hash.
    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False
