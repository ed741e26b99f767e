"""모델 스키마 테스트 — 예약 테이블 제약 조건과 취소 기록 보존.

Model schema tests — Unique constraints on the reservations table and
the canceled-reservation archive surviving member removal.
"""

from datetime import date, timedelta

import pytest
from sqlalchemy import Index, UniqueConstraint
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models.reservation import CanceledReservation, Reservation, ReservationStatus


def _reservation(member, theme, reservation_time, on: date, status: ReservationStatus) -> Reservation:
    return Reservation(
        date=on,
        time_id=reservation_time.id,
        theme_id=theme.id,
        member_id=member.id,
        status=status.value,
    )


class TestReservationConstraints:
    """예약 테이블 유니크 제약 테스트."""

    def test_active_slot_index_is_partial(self):
        """슬롯 유니크 인덱스는 RESERVATION 상태에만 적용."""
        index = next(
            i for i in Reservation.__table__.indexes
            if isinstance(i, Index) and i.name == "uq_reservations_active_slot"
        )
        assert index.unique
        assert [c.name for c in index.columns] == ["date", "time_id", "theme_id"]
        assert "RESERVATION" in str(index.dialect_options["postgresql"]["where"])
        assert "RESERVATION" in str(index.dialect_options["sqlite"]["where"])

    def test_member_slot_unique_constraint(self):
        """회원-슬롯 유니크 제약 존재."""
        constraint = next(
            c for c in Reservation.__table__.constraints
            if isinstance(c, UniqueConstraint) and c.name == "uq_reservation_slot_member"
        )
        assert [c.name for c in constraint.columns] == ["date", "time_id", "theme_id", "member_id"]

    async def test_second_active_reservation_rejected(
        self, db: AsyncSession, user_member, other_member, theme, reservation_time, tomorrow
    ):
        """같은 슬롯에 두 번째 RESERVATION 저장 시 IntegrityError."""
        db.add(_reservation(user_member, theme, reservation_time, tomorrow, ReservationStatus.RESERVATION))
        await db.commit()

        db.add(_reservation(other_member, theme, reservation_time, tomorrow, ReservationStatus.RESERVATION))
        with pytest.raises(IntegrityError):
            await db.commit()
        await db.rollback()

    async def test_waiting_entries_share_slot(
        self, db: AsyncSession, user_member, other_member, third_member, theme, reservation_time, tomorrow
    ):
        """WAITING 항목은 같은 슬롯에 여러 개 저장 가능."""
        db.add(_reservation(user_member, theme, reservation_time, tomorrow, ReservationStatus.RESERVATION))
        db.add(_reservation(other_member, theme, reservation_time, tomorrow, ReservationStatus.WAITING))
        db.add(_reservation(third_member, theme, reservation_time, tomorrow, ReservationStatus.WAITING))
        await db.commit()

    async def test_member_entry_per_slot_rejected(
        self, db: AsyncSession, user_member, other_member, theme, reservation_time, tomorrow
    ):
        """같은 회원이 같은 슬롯에 두 번째 항목 저장 시 IntegrityError."""
        db.add(_reservation(user_member, theme, reservation_time, tomorrow, ReservationStatus.RESERVATION))
        db.add(_reservation(other_member, theme, reservation_time, tomorrow, ReservationStatus.WAITING))
        await db.commit()

        db.add(_reservation(other_member, theme, reservation_time, tomorrow, ReservationStatus.WAITING))
        with pytest.raises(IntegrityError):
            await db.commit()
        await db.rollback()

    async def test_same_member_other_day_allowed(
        self, db: AsyncSession, user_member, theme, reservation_time, tomorrow
    ):
        """다른 날짜라면 같은 회원도 저장 가능."""
        db.add(_reservation(user_member, theme, reservation_time, tomorrow, ReservationStatus.RESERVATION))
        db.add(_reservation(
            user_member, theme, reservation_time, tomorrow + timedelta(days=1), ReservationStatus.RESERVATION
        ))
        await db.commit()


class TestCanceledReservationArchive:
    """취소 기록 보존 테스트."""

    def test_member_fk_does_not_cascade(self):
        """취소 기록의 회원 FK는 회원 삭제 시 기록을 지우지 않음."""
        fks = list(CanceledReservation.__table__.c.member_id.foreign_keys)
        assert len(fks) == 1
        assert fks[0].column.table.name == "members"
        assert fks[0].ondelete is None

    def test_active_reservation_follows_member(self):
        """활성 예약은 회원 삭제 시 함께 삭제."""
        fks = list(Reservation.__table__.c.member_id.foreign_keys)
        assert fks[0].ondelete == "CASCADE"
