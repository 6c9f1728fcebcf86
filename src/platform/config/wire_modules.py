"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.party_booking.app.command import (
    commit_booking_use_case,
    create_hold_use_case,
    extend_hold_use_case,
    release_hold_use_case,
    update_booking_status_to_cancelled_use_case,
    update_booking_status_to_confirmed_use_case,
)
from src.service.party_booking.app.query import get_booking_use_case, list_availability_use_case


WIRE_MODULES: list[ModuleType] = [
    create_hold_use_case,
    extend_hold_use_case,
    release_hold_use_case,
    commit_booking_use_case,
    update_booking_status_to_confirmed_use_case,
    update_booking_status_to_cancelled_use_case,
    get_booking_use_case,
    list_availability_use_case,
]
