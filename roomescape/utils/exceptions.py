"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns
so services can raise client-facing errors without repeating status codes.

Usage:
    from roomescape.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("존재하지 않는 예약입니다. 요청 예약 id:3")
    raise DuplicateError("Reservation already exists for this slot")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested reservation, theme, time or member does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when a slot is already reserved, a member already waits for a slot,
    or a catalog entry (theme name, start time, email) already exists.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    403 Forbidden exception.
    Raised when a member touches another member's reservation or a non-admin
    calls an admin endpoint.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    401 Unauthorized exception.
    Raised when authentication is missing, invalid, or expired.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised for business rule violations beyond what Pydantic validation catches
    (e.g. booking a slot in the past, waiting for a slot nobody reserved).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PaymentError(HTTPException):
    """결제 승인 실패 예외 — 결제 게이트웨이 오류를 사용자에게 전달.

    Payment confirmation failure.
    Carries the gateway's status code for client errors (4xx) and
    502 Bad Gateway for gateway outages and transport failures.

    Args:
        detail: 오류 메시지 (Error message from the gateway)
        status_code: HTTP 상태 코드 (Status code, default: 502)
    """

    def __init__(
        self,
        detail: str = "Payment confirmation failed",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
    ) -> None:
        super().__init__(status_code=status_code, detail=detail)
