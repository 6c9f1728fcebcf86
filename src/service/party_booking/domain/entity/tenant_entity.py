from typing import Optional
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import attrs

from src.platform.logging.loguru_io import Logger


@attrs.define
class Tenant:
    id: UUID
    slug: str
    name: str
    timezone: str = 'UTC'
    currency: str = 'USD'
    active: bool = True

    @property
    def zone(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            Logger.base.warning(f'Unknown timezone {self.timezone!r} for tenant {self.slug}, using UTC')
            return ZoneInfo('UTC')


@attrs.frozen
class PolicyOverrides:
    """A tenant's stored policy row; None means "use the platform default"."""

    hold_minutes: Optional[int] = None
    buffer_minutes: Optional[int] = None
    default_duration_minutes: Optional[int] = None
    deposit_percent: Optional[int] = None


@attrs.frozen
class Policy:
    hold_minutes: int
    buffer_minutes: int
    default_duration_minutes: int
    deposit_percent: int

    def merged_with(self, overrides: Optional[PolicyOverrides]) -> 'Policy':
        if overrides is None:
            return self
        return attrs.evolve(
            self,
            **{
                field.name: value
                for field in attrs.fields(PolicyOverrides)
                if (value := getattr(overrides, field.name)) is not None
            },
        )
