from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Party Booking Core Metrics Collector

    Tracks hold/commit outcomes by result code, so contention on popular rooms
    shows up as a rising SLOT_TEMPORARILY_HELD rate.
    """

    def __init__(self):
        # ========== Hold Metrics ==========
        self.hold_requests = Counter(
            'hold_requests_total',
            'Hold operations by outcome',
            ['operation', 'result'],  # operation: create/extend/release
        )

        self.hold_create_duration = Histogram(
            'hold_create_duration_seconds',
            'createHold processing time',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.holds_swept = Counter(
            'holds_swept_total',
            'Expired holds deleted by the background sweeper',
        )

        # ========== Booking Metrics ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Booking operations by outcome',
            ['operation', 'result'],  # operation: commit/confirm/cancel
        )

        self.booking_commit_duration = Histogram(
            'booking_commit_duration_seconds',
            'commit processing time',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        # ========== Availability Metrics ==========
        self.availability_requests = Counter(
            'availability_requests_total',
            'listAvailability calls by outcome',
            ['result'],
        )

    def record_hold(self, *, operation: str, result: str, duration: float = 0):
        self.hold_requests.labels(operation=operation, result=result).inc()
        if operation == 'create' and duration:
            self.hold_create_duration.observe(duration)

    def record_booking(self, *, operation: str, result: str, duration: float = 0):
        self.booking_requests.labels(operation=operation, result=result).inc()
        if operation == 'commit' and duration:
            self.booking_commit_duration.observe(duration)

    def record_availability(self, *, result: str):
        self.availability_requests.labels(result=result).inc()

    def record_sweep(self, *, deleted: int):
        if deleted:
            self.holds_swept.inc(deleted)


metrics = BookingMetrics()
