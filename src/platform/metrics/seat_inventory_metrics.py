from prometheus_client import Counter, Gauge, Histogram


class SeatInventoryMetrics:
    """
    Seat Inventory Core Metrics Collector

    Tracks hold/commit/release outcomes, the expiry sweeper and the
    seat-count reconciler.
    """

    def __init__(self):
        # ========== Seat Hold Metrics ==========
        self.seat_reservation_requests = Counter(
            'seat_reservation_requests_total',
            'Total seat reservation requests',
            ['result'],  # result: success/conflict/error
        )

        self.seat_reservation_duration = Histogram(
            'seat_reservation_duration_seconds',
            'Seat reservation processing time',
            buckets=[0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0],
        )

        self.seats_held = Counter('seats_held_total', 'Seats placed on hold')

        self.expired_holds_swept = Counter(
            'seat_reservation_expired_swept_total', 'Expired holds deleted by the sweeper'
        )

        # ========== Booking Metrics ==========
        self.booking_commits = Counter(
            'booking_commits_total',
            'Booking commit attempts',
            ['result'],  # result: success/conflict/window_closed/error
        )

        self.booking_commit_duration = Histogram(
            'booking_commit_duration_seconds',
            'Booking commit processing time',
            buckets=[0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0, 10.0],
        )

        self.booking_releases = Counter(
            'booking_releases_total',
            'Bookings moved to a seat-releasing status',
            ['status', 'result'],  # result: applied/noop
        )

        # ========== Reconciliation Metrics ==========
        self.seat_count_syncs = Counter(
            'seat_count_sync_total',
            'Schedules processed by the seat count reconciler',
            ['result'],  # result: unchanged/corrected/error
        )

        self.seat_count_anomalies = Counter(
            'seat_count_anomalies_total', 'Anomalies found while reconciling', ['kind']
        )

        # Only schedules that have not started yet keep a series
        self.seats_available = Gauge(
            'schedule_seats_available', 'Cached seats_available per schedule', ['schedule_id']
        )
        self._tracked_schedules: set[int] = set()

    # ========== Helper Methods ==========

    def record_seat_reservation(self, *, result: str, seat_count: int, duration: float):
        self.seat_reservation_requests.labels(result=result).inc()
        self.seat_reservation_duration.observe(duration)
        if result == 'success':
            self.seats_held.inc(seat_count)

    def record_booking_commit(self, *, result: str, duration: float):
        self.booking_commits.labels(result=result).inc()
        self.booking_commit_duration.observe(duration)

    def record_booking_release(self, *, status: str, applied: bool):
        self.booking_releases.labels(status=status, result='applied' if applied else 'noop').inc()

    def record_expired_sweep(self, *, deleted: int):
        if deleted:
            self.expired_holds_swept.inc(deleted)

    def record_seat_count_sync(self, *, result: str, anomaly_kinds: list[str]):
        self.seat_count_syncs.labels(result=result).inc()
        for kind in anomaly_kinds:
            self.seat_count_anomalies.labels(kind=kind).inc()

    def record_seats_available(
        self, *, schedule_id: int, seats_available: int, started: bool = False
    ):
        if started:
            self.forget_schedule(schedule_id=schedule_id)
            return
        self.seats_available.labels(schedule_id=str(schedule_id)).set(seats_available)
        self._tracked_schedules.add(schedule_id)

    def forget_schedule(self, *, schedule_id: int):
        if schedule_id in self._tracked_schedules:
            self.seats_available.remove(str(schedule_id))
            self._tracked_schedules.discard(schedule_id)


# Global metrics instance
metrics = SeatInventoryMetrics()
