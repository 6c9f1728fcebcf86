from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class TenantModel(Base):
    __tablename__ = 'tenant'

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default='UTC')
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default='USD')
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class TenantPolicyModel(Base):
    __tablename__ = 'tenant_policy'

    tenant_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('tenant.id', ondelete='CASCADE'), primary_key=True
    )
    hold_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    buffer_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    default_duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    deposit_percent: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
