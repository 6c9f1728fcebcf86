"""
Request errors raised by the party booking service.

Each error carries a stable `code` rendered next to `detail` in the HTTP body,
so clients can branch on it without parsing messages.
"""

from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError


# Not found (404)


class TenantNotFoundError(NotFoundError):
    code = 'TENANT_NOT_FOUND'

    def __init__(self, message: str = 'Tenant not found') -> None:
        super().__init__(message)


class TenantInactiveError(NotFoundError):
    code = 'TENANT_INACTIVE'

    def __init__(self, message: str = 'Tenant is not active') -> None:
        super().__init__(message)


class RoomNotFoundError(NotFoundError):
    code = 'ROOM_NOT_FOUND'

    def __init__(self, message: str = 'Room not found') -> None:
        super().__init__(message)


class HoldNotFoundError(NotFoundError):
    code = 'HOLD_NOT_FOUND'

    def __init__(self, message: str = 'Hold not found or expired') -> None:
        super().__init__(message)


class PackageNotFoundError(NotFoundError):
    code = 'PACKAGE_NOT_FOUND'

    def __init__(self, message: str = 'Package not found') -> None:
        super().__init__(message)


class BookingNotFoundError(NotFoundError):
    code = 'BOOKING_NOT_FOUND'

    def __init__(self, message: str = 'Booking not found') -> None:
        super().__init__(message)


# Conflict (409)


class SlotUnavailableError(ConflictError):
    code = 'SLOT_UNAVAILABLE'

    def __init__(self, message: str = 'Time slot is no longer available') -> None:
        super().__init__(message)


class SlotTemporarilyHeldError(ConflictError):
    code = 'SLOT_TEMPORARILY_HELD'

    def __init__(self, message: str = 'Time slot is temporarily held by another customer') -> None:
        super().__init__(message)


class CapacityExceededError(ConflictError):
    code = 'CAPACITY_EXCEEDED'

    def __init__(self, message: str = 'Party size exceeds room capacity') -> None:
        super().__init__(message)


class HoldExpiredError(ConflictError):
    code = 'HOLD_EXPIRED'

    def __init__(self, message: str = 'Hold has expired') -> None:
        super().__init__(message)


class CannotExtendFurtherError(ConflictError):
    code = 'CANNOT_EXTEND_FURTHER'

    def __init__(self, message: str = 'Hold cannot be extended any further') -> None:
        super().__init__(message)


class InvalidBookingTransitionError(ConflictError):
    code = 'INVALID_BOOKING_TRANSITION'


# Validation / policy (400)


class InvalidWindowError(DomainError):
    code = 'INVALID_WINDOW'

    def __init__(self, message: str = 'Start time must be before end time') -> None:
        super().__init__(message, 400)


class InvalidPackageError(DomainError):
    code = 'INVALID_PACKAGE'

    def __init__(self, message: str = 'Package is not available') -> None:
        super().__init__(message, 400)


class RoomNotEligibleForPackageError(DomainError):
    code = 'ROOM_NOT_ELIGIBLE_FOR_PACKAGE'

    def __init__(self, message: str = 'Room is not eligible for the selected package') -> None:
        super().__init__(message, 400)
