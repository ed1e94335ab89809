"""
In-memory booking store.

A single lock guards the id -> Booking map. Readers always receive copies taken
under the lock, so a reader racing a writer on the same id sees either the
old or the new record, never a half-applied update. Scans lock once per
call and give no snapshot guarantee across separate calls.
"""
import threading
from enum import Enum
from typing import Any, Dict, List, Optional

from models import Booking


class TransitionOutcome(str, Enum):
    """Result of a status transition."""
    NOT_FOUND = "not_found"
    UNCHANGED = "unchanged"
    CHANGED = "changed"


class BookingStore:
    """Thread-safe mapping from booking id to booking record."""

    def __init__(self):
        self._bookings: Dict[str, Booking] = {}
        self._lock = threading.Lock()

    def put(self, booking_id: str, booking: Booking) -> Booking:
        """Insert or overwrite the record at booking_id."""
        stored = booking.model_copy()
        with self._lock:
            self._bookings[booking_id] = stored
            return stored.model_copy()

    def get(self, booking_id: str) -> Optional[Booking]:
        with self._lock:
            booking = self._bookings.get(booking_id)
            return booking.model_copy() if booking else None

    def list_all(self) -> List[Booking]:
        with self._lock:
            return [b.model_copy() for b in self._bookings.values()]

    def find_by_hotel_name_contains(self, substring: str) -> List[Booking]:
        """Case-insensitive substring match on hotel name."""
        needle = substring.lower()
        with self._lock:
            return [
                b.model_copy()
                for b in self._bookings.values()
                if needle in b.hotel_name.lower()
            ]

    def update_in_place(self, booking_id: str, fields: Dict[str, Any]) -> Optional[Booking]:
        """Assign fields onto the stored record. The record keeps its identity."""
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                return None
            for name, value in fields.items():
                if name == "id":
                    continue
                setattr(booking, name, value)
            return booking.model_copy()

    def transition_status(self, booking_id: str, status: str) -> TransitionOutcome:
        """Move a record to status unless it is already there (case-insensitive)."""
        with self._lock:
            booking = self._bookings.get(booking_id)
            if booking is None:
                return TransitionOutcome.NOT_FOUND
            if booking.status.upper() == status.upper():
                return TransitionOutcome.UNCHANGED
            booking.status = status
            return TransitionOutcome.CHANGED

    def remove(self, booking_id: str) -> bool:
        with self._lock:
            return self._bookings.pop(booking_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._bookings)
