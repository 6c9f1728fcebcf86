"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.party_booking.driven_adapter.model.catalog_model import (
    BlackoutModel,
    PackageModel,
    PackageRoomEligibilityModel,
    RoomModel,
    SlotTemplateModel,
)
from src.service.party_booking.driven_adapter.model.reservation_model import (
    BookingHoldModel,
    BookingModel,
    CustomerModel,
)
from src.service.party_booking.driven_adapter.model.tenant_model import (
    TenantModel,
    TenantPolicyModel,
)

__all__ = [
    'BlackoutModel',
    'BookingHoldModel',
    'BookingModel',
    'CustomerModel',
    'PackageModel',
    'PackageRoomEligibilityModel',
    'RoomModel',
    'SlotTemplateModel',
    'TenantModel',
    'TenantPolicyModel',
]
