"""
Tests for the in-memory booking store.
"""

import threading
from datetime import date

from models import Booking
from store import BookingStore, TransitionOutcome


def _booking(booking_id="b-1", hotel_name="Grand Hyatt", status="PENDING") -> Booking:
    return Booking(
        id=booking_id,
        hotel_name=hotel_name,
        guest_name="Alice Smith",
        check_in_date=date(2026, 7, 1),
        check_out_date=date(2026, 7, 5),
        status=status,
    )


class TestPutAndGet:
    def test_put_then_get(self, store):
        store.put("b-1", _booking())
        assert store.get("b-1") == _booking()

    def test_get_missing_returns_none(self, store):
        assert store.get("nope") is None

    def test_put_overwrites(self, store):
        store.put("b-1", _booking())
        store.put("b-1", _booking(hotel_name="Hilton"))
        assert store.get("b-1").hotel_name == "Hilton"
        assert store.count() == 1

    def test_returned_records_are_copies(self, store):
        store.put("b-1", _booking())
        fetched = store.get("b-1")
        fetched.hotel_name = "Changed"
        assert store.get("b-1").hotel_name == "Grand Hyatt"

    def test_caller_object_not_shared_with_store(self, store):
        original = _booking()
        store.put("b-1", original)
        original.guest_name = "Mallory"
        assert store.get("b-1").guest_name == "Alice Smith"


class TestScans:
    def test_list_all(self, store):
        store.put("b-1", _booking("b-1"))
        store.put("b-2", _booking("b-2", hotel_name="Hilton"))
        assert {b.id for b in store.list_all()} == {"b-1", "b-2"}

    def test_list_all_empty(self, store):
        assert store.list_all() == []

    def test_find_by_hotel_name_is_case_insensitive(self, store):
        store.put("b-1", _booking("b-1", hotel_name="Grand Hyatt"))
        store.put("b-2", _booking("b-2", hotel_name="Grand Plaza"))
        store.put("b-3", _booking("b-3", hotel_name="Hilton"))
        names = sorted(b.hotel_name for b in store.find_by_hotel_name_contains("GRAND"))
        assert names == ["Grand Hyatt", "Grand Plaza"]

    def test_find_by_hotel_name_no_match(self, store):
        store.put("b-1", _booking())
        assert store.find_by_hotel_name_contains("zzz") == []


class TestMutation:
    def test_update_in_place_keeps_id(self, store):
        store.put("b-1", _booking())
        updated = store.update_in_place("b-1", {"id": "other", "guest_name": "Bob"})
        assert updated.id == "b-1"
        assert updated.guest_name == "Bob"
        assert store.get("other") is None

    def test_update_in_place_missing(self, store):
        assert store.update_in_place("nope", {"guest_name": "Bob"}) is None

    def test_transition_status(self, store):
        store.put("b-1", _booking())
        assert store.transition_status("b-1", "CANCELLED") is TransitionOutcome.CHANGED
        assert store.get("b-1").status == "CANCELLED"

    def test_transition_to_current_status_is_unchanged(self, store):
        store.put("b-1", _booking(status="cancelled"))
        assert store.transition_status("b-1", "CANCELLED") is TransitionOutcome.UNCHANGED
        assert store.get("b-1").status == "cancelled"

    def test_transition_missing(self, store):
        assert store.transition_status("nope", "CANCELLED") is TransitionOutcome.NOT_FOUND

    def test_remove(self, store):
        store.put("b-1", _booking())
        assert store.remove("b-1") is True
        assert store.remove("b-1") is False
        assert store.get("b-1") is None


class TestConcurrency:
    def test_concurrent_puts_on_distinct_keys(self):
        store = BookingStore()

        def writer(start):
            for i in range(start, start + 200):
                store.put(f"b-{i}", _booking(f"b-{i}"))

        threads = [threading.Thread(target=writer, args=(n * 200,)) for n in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert store.count() == 1000

    def test_readers_never_see_partial_update(self):
        store = BookingStore()
        store.put("b-1", _booking(hotel_name="A", status="PENDING"))
        seen = []
        stop = threading.Event()

        def writer():
            for i in range(500):
                if i % 2:
                    fields = {"hotel_name": "A", "status": "PENDING"}
                else:
                    fields = {"hotel_name": "B", "status": "CONFIRMED"}
                store.update_in_place("b-1", fields)
            stop.set()

        def reader():
            while not stop.is_set():
                b = store.get("b-1")
                seen.append((b.hotel_name, b.status))

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert set(seen) <= {("A", "PENDING"), ("B", "CONFIRMED")}
