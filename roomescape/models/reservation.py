"""예약 관련 SQLAlchemy ORM 모델 정의.

Reservation-related SQLAlchemy ORM model definitions.

Tables:
    - reservations: 활성 예약 및 예약 대기 (Active reservations and waitlist entries)
    - canceled_reservations: 취소된 예약 보관 (Append-only archive of canceled entries)
"""

import enum
import datetime as dt
from sqlalchemy import String, DateTime, Date, Integer, ForeignKey, Index, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roomescape.database import Base


class ReservationStatus(str, enum.Enum):
    """예약 상태 — 예약 확정과 대기를 구분.

    RESERVATION: 슬롯을 점유한 예약 (Holds the slot)
    WAITING: 슬롯이 비기를 기다리는 대기 (Waits for the slot to free up)
    """

    RESERVATION = "RESERVATION"
    WAITING = "WAITING"


class Reservation(Base):
    """예약 모델 — 날짜+시간+테마 슬롯에 대한 예약 또는 대기.

    Reservation model — A booking or a waitlist entry for a (date, time, theme) slot.

    Status Flow:
        WAITING → RESERVATION (승격: 앞선 예약 취소 시, Promotion on cancellation)
        RESERVATION without payment_key → paid RESERVATION (결제 승인, Payment approval)

    Waitlist entries of one slot are ordered by id, which grows with creation order.

    Attributes:
        id: 고유 식별자, 생성 순서 (Auto-increment identifier, creation order)
        date: 예약 날짜 (Reservation date)
        time_id: 예약 시간 FK (Reservation time)
        theme_id: 테마 FK (Theme)
        member_id: 회원 FK (Owning member)
        status: RESERVATION | WAITING
        order_id: 결제 주문 ID (Payment order id, optional)
        payment_key: 결제 키 (Payment key, set after confirmation)
        amount: 결제 금액 (Confirmed total amount)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "reservations"
    __table_args__ = (
        Index("ix_reservations_slot_status", "date", "time_id", "theme_id", "status"),
        # 슬롯당 활성 예약은 하나 — One RESERVATION per slot, enforced by the database
        Index(
            "uq_reservations_active_slot",
            "date", "time_id", "theme_id",
            unique=True,
            postgresql_where=text("status = 'RESERVATION'"),
            sqlite_where=text("status = 'RESERVATION'"),
        ),
        # 회원은 슬롯당 하나의 예약 또는 대기 — One entry per member per slot
        UniqueConstraint("date", "time_id", "theme_id", "member_id", name="uq_reservation_slot_member"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time_id: Mapped[int] = mapped_column(Integer, ForeignKey("reservation_times.id"), nullable=False)
    theme_id: Mapped[int] = mapped_column(Integer, ForeignKey("themes.id"), nullable=False)
    member_id: Mapped[int] = mapped_column(Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    # 결제 정보 — 결제 승인 후 채워짐 (Filled in after payment confirmation)
    order_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    payment_key: Mapped[str | None] = mapped_column(String(200), nullable=True)
    amount: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))

    time = relationship("ReservationTime")
    theme = relationship("Theme")
    member = relationship("Member", back_populates="reservations")

    @property
    def is_payment_pending(self) -> bool:
        """승격되었지만 아직 결제되지 않은 예약인지 여부."""
        return self.status == ReservationStatus.RESERVATION and self.payment_key is None

    def change_payment_waiting(self) -> None:
        """대기를 예약으로 승격합니다. 결제 정보는 승인 시점에 채워집니다."""
        self.status = ReservationStatus.RESERVATION.value

    def confirm_payment(self, order_id: str, payment_key: str, amount: int) -> None:
        self.order_id = order_id
        self.payment_key = payment_key
        self.amount = amount

    def canceled(self) -> "CanceledReservation":
        """취소 보관용 복사본을 생성합니다.

        Build the archival copy stored when this reservation is canceled.
        """
        return CanceledReservation(
            reservation_id=self.id,
            date=self.date,
            time_id=self.time_id,
            theme_id=self.theme_id,
            member_id=self.member_id,
            status=self.status,
            order_id=self.order_id,
            payment_key=self.payment_key,
            amount=self.amount,
        )


class CanceledReservation(Base):
    """취소된 예약 모델 — 취소 시점의 예약 사본 (추가 전용).

    Canceled reservation model — Append-only archival copy of a reservation
    taken at cancellation time.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        reservation_id: 원래 예약 ID (Id of the deleted reservation)
        status: 취소 시점의 상태 (Status at cancellation)
        canceled_at: 취소 일시 UTC (Cancellation timestamp)
    """

    __tablename__ = "canceled_reservations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    reservation_id: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time_id: Mapped[int] = mapped_column(Integer, ForeignKey("reservation_times.id"), nullable=False)
    theme_id: Mapped[int] = mapped_column(Integer, ForeignKey("themes.id"), nullable=False)
    member_id: Mapped[int] = mapped_column(Integer, ForeignKey("members.id"), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    order_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    payment_key: Mapped[str | None] = mapped_column(String(200), nullable=True)
    amount: Mapped[int | None] = mapped_column(Integer, nullable=True)
    canceled_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))

    time = relationship("ReservationTime")
    theme = relationship("Theme")
    member = relationship("Member")
