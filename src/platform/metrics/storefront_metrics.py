from prometheus_client import Counter, Histogram


class StorefrontMetrics:
    """
    Storefront business metrics exposed at /metrics

    Tracks booking outcomes (including lost seat races), cancellations,
    outbox delivery results and search latency.
    """

    def __init__(self) -> None:
        # ========== Booking Workflow ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Booking attempts by outcome',
            ['result'],  # result: confirmed/conflict/rejected
        )

        self.booked_seats = Counter(
            'booked_seats_total',
            'Seats moved to unavailable by confirmed bookings',
            ['event_id'],
        )

        self.booking_duration = Histogram(
            'booking_transaction_duration_seconds',
            'Booking transaction duration',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

        # ========== Cancellation Workflow ==========
        self.cancellation_requests = Counter(
            'cancellation_requests_total',
            'Cancellation attempts by outcome',
            ['result'],  # result: cancelled/refused/conflict
        )

        # ========== Outbox ==========
        self.outbox_deliveries = Counter(
            'outbox_deliveries_total',
            'Outbox delivery attempts',
            ['kind', 'result'],  # kind: email/realtime, result: delivered/retry/dead
        )

        # ========== Search ==========
        self.search_duration = Histogram(
            'event_search_duration_seconds',
            'In-memory filter pipeline duration',
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, event_id: int = 0, seats: int = 0) -> None:
        self.booking_requests.labels(result=result).inc()
        if seats:
            self.booked_seats.labels(event_id=str(event_id)).inc(seats)

    def record_cancellation(self, *, result: str) -> None:
        self.cancellation_requests.labels(result=result).inc()

    def record_outbox_delivery(self, *, kind: str, result: str) -> None:
        self.outbox_deliveries.labels(kind=kind, result=result).inc()


# Global metrics instance
metrics = StorefrontMetrics()
