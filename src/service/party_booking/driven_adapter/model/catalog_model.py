from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    SmallInteger,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class RoomModel(Base):
    __tablename__ = 'room'

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('tenant.id', ondelete='CASCADE'), index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    max_occupancy: Mapped[int] = mapped_column(Integer, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class PackageModel(Base):
    __tablename__ = 'package'

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('tenant.id', ondelete='CASCADE'), index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    base_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    base_party_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    extra_guest_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class PackageRoomEligibilityModel(Base):
    __tablename__ = 'package_room_eligibility'

    package_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('package.id', ondelete='CASCADE'), primary_key=True
    )
    room_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('room.id', ondelete='CASCADE'), primary_key=True
    )
    tenant_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('tenant.id', ondelete='CASCADE'), index=True
    )


class SlotTemplateModel(Base):
    __tablename__ = 'slot_template'
    __table_args__ = (
        UniqueConstraint('tenant_id', 'day_of_week', name='uq_slot_template_tenant_day'),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('tenant.id', ondelete='CASCADE'), nullable=False
    )
    day_of_week: Mapped[int] = mapped_column(SmallInteger, nullable=False)  # 0 = Sunday
    start_times: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class BlackoutModel(Base):
    __tablename__ = 'blackout'

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('tenant.id', ondelete='CASCADE'), index=True
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
