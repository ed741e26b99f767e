"""init_roomescape_schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 10:00:00.000000

방탈출 예약 스키마 생성: members, themes, reservation_times, reservations, canceled_reservations.
Create the room escape reservation schema.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # members — 회원 (USER | ADMIN)
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='USER'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # themes — 방탈출 테마
    op.create_table(
        'themes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('thumbnail', sa.String(1024), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # reservation_times — 예약 가능 시작 시각
    op.create_table(
        'reservation_times',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('start_at', sa.Time(), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # reservations — 예약 및 예약 대기 (slot = date + time + theme)
    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time_id', sa.Integer(), sa.ForeignKey('reservation_times.id'), nullable=False),
        sa.Column('theme_id', sa.Integer(), sa.ForeignKey('themes.id'), nullable=False),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('order_id', sa.String(64), nullable=True),
        sa.Column('payment_key', sa.String(200), nullable=True),
        sa.Column('amount', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        # 회원은 슬롯당 하나의 예약 또는 대기 — One entry per member per slot
        sa.UniqueConstraint('date', 'time_id', 'theme_id', 'member_id', name='uq_reservation_slot_member'),
    )
    # 슬롯 + 상태 조회 인덱스 — Slot/status lookups for promotion and waiting order
    op.create_index('ix_reservations_slot_status', 'reservations', ['date', 'time_id', 'theme_id', 'status'])
    # 슬롯당 활성 예약은 하나 — One RESERVATION per slot (partial unique index)
    op.create_index(
        'uq_reservations_active_slot',
        'reservations',
        ['date', 'time_id', 'theme_id'],
        unique=True,
        postgresql_where=sa.text("status = 'RESERVATION'"),
        sqlite_where=sa.text("status = 'RESERVATION'"),
    )

    # canceled_reservations — 취소된 예약 보관 (append-only)
    op.create_table(
        'canceled_reservations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('reservation_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time_id', sa.Integer(), sa.ForeignKey('reservation_times.id'), nullable=False),
        sa.Column('theme_id', sa.Integer(), sa.ForeignKey('themes.id'), nullable=False),
        sa.Column('member_id', sa.Integer(), sa.ForeignKey('members.id'), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('order_id', sa.String(64), nullable=True),
        sa.Column('payment_key', sa.String(200), nullable=True),
        sa.Column('amount', sa.Integer(), nullable=True),
        sa.Column('canceled_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table('canceled_reservations')
    op.drop_index('uq_reservations_active_slot', table_name='reservations')
    op.drop_index('ix_reservations_slot_status', table_name='reservations')
    op.drop_table('reservations')
    op.drop_table('reservation_times')
    op.drop_table('themes')
    op.drop_table('members')
