"""Application layer interfaces (Ports)"""

from src.service.party_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.party_booking.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.party_booking.app.interface.i_customer_directory import ICustomerDirectory
from src.service.party_booking.app.interface.i_hold_command_repo import IHoldCommandRepo
from src.service.party_booking.app.interface.i_tenant_directory import ITenantDirectory

__all__ = [
    'IBookingCommandRepo',
    'ICatalogQueryRepo',
    'ICustomerDirectory',
    'IHoldCommandRepo',
    'ITenantDirectory',
]
