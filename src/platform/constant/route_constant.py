# API Route Constants

API_BASE = '/api'

# Availability routes
AVAILABILITY_BASE = f'{API_BASE}/availability'

# Hold routes
HOLD_BASE = f'{API_BASE}/hold'
HOLD_CREATE = HOLD_BASE
HOLD_EXTEND = f'{HOLD_BASE}/{{hold_id}}/extend'
HOLD_RELEASE = f'{HOLD_BASE}/{{hold_id}}'

# Booking routes
BOOKING_BASE = f'{API_BASE}/booking'
BOOKING_COMMIT = BOOKING_BASE
BOOKING_GET = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_CONFIRM = f'{BOOKING_BASE}/{{booking_id}}/confirm'
BOOKING_CANCEL = f'{BOOKING_BASE}/{{booking_id}}/cancel'
