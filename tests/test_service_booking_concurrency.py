"""
Concurrent admissions for overlapping ranges on one vehicle: at most one may end
up confirmed, however the threads interleave.
"""

import threading

from rental_booking.exceptions import ConflictError
from rental_booking.services.booking_service import BookingService


class SlowCheckStore:
    """Wraps a real store and widens the window between conflict check and insert."""

    def __init__(self, store, barrier_parties):
        self._store = store
        self._barrier = threading.Barrier(barrier_parties, timeout=0.5)

    def find_conflicting(self, *args, **kwargs):
        hit = self._store.find_conflicting(*args, **kwargs)
        try:
            # without the vehicle lock every thread would pass this point together
            self._barrier.wait()
        except threading.BrokenBarrierError:
            pass
        return hit

    def __getattr__(self, name):
        return getattr(self._store, name)


def _race(service, vehicle_id, ranges):
    results, errors = [], []
    start = threading.Event()

    def worker(i, s, e):
        start.wait()
        try:
            results.append(service.admit_user(f"u{i}", vehicle_id, s, e))
        except ConflictError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(i, s, e)) for i, (s, e) in enumerate(ranges)]
    for t in threads:
        t.start()
    start.set()
    for t in threads:
        t.join(timeout=10)
    return results, errors


def test_concurrent_overlapping_admissions_confirm_only_one(store, vehicle_id):
    ranges = [("2030-06-01", "2030-06-05")] * 8
    service = BookingService(SlowCheckStore(store, len(ranges)))

    results, errors = _race(service, vehicle_id, ranges)

    assert len(results) == 1
    assert len(errors) == len(ranges) - 1
    confirmed = [b for b in store.bookings.values() if b["status"] == "confirmed"]
    assert len(confirmed) == 1


def test_concurrent_partially_overlapping_ranges(store, vehicle_id):
    ranges = [
        ("2030-06-01", "2030-06-04"),
        ("2030-06-03", "2030-06-05"),
        ("2030-06-02", "2030-06-06"),
        ("2030-06-04", "2030-06-07"),
    ]
    service = BookingService(SlowCheckStore(store, len(ranges)))

    results, errors = _race(service, vehicle_id, ranges)

    assert len(results) + len(errors) == len(ranges)
    confirmed = sorted((b.start_date, b.end_date) for b in results)
    for (s1, e1), (s2, e2) in zip(confirmed, confirmed[1:]):
        assert e1 <= s2


def test_different_vehicles_do_not_block_each_other(store, vehicle_id):
    from conftest import seed_vehicle

    other = seed_vehicle(store, brand="Honda", model="Civic")
    service = BookingService(store)
    out = []

    def worker(vid):
        out.append(service.admit_user("u1", vid, "2030-06-01", "2030-06-05"))

    threads = [threading.Thread(target=worker, args=(vid,)) for vid in (vehicle_id, other)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    assert len(out) == 2
