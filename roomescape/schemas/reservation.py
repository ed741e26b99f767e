"""예약 관련 Pydantic 요청/응답 스키마 정의.

Reservation-related Pydantic request/response schema definitions.
Covers client booking with payment, waitlist requests, admin booking,
criteria search, member history, and canceled records.
"""

from datetime import date, datetime, time

from pydantic import BaseModel, Field

from roomescape.models.reservation import ReservationStatus
from roomescape.schemas.auth import MemberResponse
from roomescape.schemas.theme import ReservationTimeResponse, ThemeResponse


# === 요청 (Requests) ===

class WaitingRequest(BaseModel):
    """예약 대기 요청 스키마.

    Waitlist request schema. The member comes from the access token.

    Attributes:
        date: 예약 날짜 (Reservation date)
        time_id: 예약 시간 ID (Reservation time id)
        theme_id: 테마 ID (Theme id)
    """

    date: date  # 예약 날짜 (Reservation date)
    time_id: int  # 예약 시간 ID (Reservation time id)
    theme_id: int  # 테마 ID (Theme id)


class ReservationRequest(WaitingRequest):
    """결제를 포함한 예약 요청 스키마.

    Client reservation request schema, carrying the payment widget result
    that the server confirms with the payment gateway.

    Attributes:
        payment_key: 결제 키 (Payment key issued by the gateway widget)
        order_id: 주문 ID (Order id generated by the client)
        amount: 결제 금액 (Amount to confirm)
    """

    payment_key: str = Field(min_length=1)  # 결제 키 (Payment key)
    order_id: str = Field(min_length=1)  # 주문 ID (Order id)
    amount: int = Field(gt=0)  # 결제 금액 (Amount in KRW)


class AdminReservationRequest(WaitingRequest):
    """관리자 예약 생성 요청 스키마 — 결제 없이 특정 회원의 예약을 생성.

    Admin reservation request schema; creates a reservation for any member
    without payment.
    """

    member_id: int  # 예약 회원 ID (Member id)


class ReservationInformRequest(BaseModel):
    """대기 승격 예약의 결제 승인 요청 스키마.

    Payment approval request for a promoted (payment-pending) reservation.
    """

    payment_key: str = Field(min_length=1)  # 결제 키 (Payment key)
    order_id: str = Field(min_length=1)  # 주문 ID (Order id)
    amount: int = Field(gt=0)  # 결제 금액 (Amount in KRW)


class ReservationCriteriaRequest(BaseModel):
    """예약 검색 조건 스키마 — 모든 조건은 선택.

    Reservation search criteria; every field is optional and the date
    range is inclusive.
    """

    theme_id: int | None = None
    member_id: int | None = None
    date_from: date | None = None
    date_to: date | None = None


# === 응답 (Responses) ===

class ReservationResponse(BaseModel):
    """예약 응답 스키마.

    Reservation response schema with nested time, theme and member.
    """

    id: int
    date: date
    time: ReservationTimeResponse
    theme: ThemeResponse
    member: MemberResponse
    status: ReservationStatus


class MyReservationResponse(BaseModel):
    """내 예약 응답 스키마 — 결제 정보와 대기 순번 포함.

    Member history entry with payment metadata and waiting order.

    Attributes:
        waiting_order: 앞선 대기 수, 예약이면 0 (Waiting entries ahead; 0 for reservations)
        payment_pending: 승격 후 결제 대기 여부 (Promoted but not yet paid)
    """

    reservation_id: int
    theme: str  # 테마 이름 (Theme name)
    date: date
    time: time  # 시작 시각 (Start time)
    status: ReservationStatus
    payment_key: str | None = None
    amount: int | None = None
    waiting_order: int = 0
    payment_pending: bool = False


class ReservationInformResponse(BaseModel):
    """결제 페이지용 예약 정보 응답 스키마.

    Reservation information shown on the payment page.
    """

    id: int
    date: date
    theme_name: str
    start_at: time
    member_name: str
    status: ReservationStatus


class CanceledReservationResponse(BaseModel):
    """취소 예약 응답 스키마.

    Canceled reservation record response.
    """

    id: int
    reservation_id: int
    date: date
    theme_name: str
    start_at: time
    member_name: str
    status: ReservationStatus
    payment_key: str | None = None
    amount: int | None = None
    canceled_at: datetime
