"""
Booking lifecycle rules layered on top of the booking store.

Every operation validates its input before touching the store. Failures are
returned as ``Err(ValidationError)``; "not found" is a normal ``Ok`` value
(``None`` or ``False``).
"""
import logging
from datetime import date
from typing import Callable, List, Optional

from data import generate_booking_id
from models import Booking, BookingInput, BookingStatus
from result import Ok, Result, invalid
from store import BookingStore, TransitionOutcome

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("hotel_name", "guest_name", "check_in_date", "check_out_date")


def _is_blank(value) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _normalize_status(status: Optional[str]) -> Optional[str]:
    """Upper-case a known status; None for blank input. Raises ValueError otherwise."""
    if _is_blank(status):
        return None
    return BookingStatus(status.strip().upper()).value


class BookingLifecycle:
    """Validated entry point for every booking operation."""

    def __init__(self, store: BookingStore, today: Callable[[], date] = date.today):
        self.store = store
        self._today = today

    def _check_details(self, details: Optional[BookingInput], action: str) -> Optional[Result]:
        if details is None:
            return invalid(f"Booking details cannot be null or empty{action}.")
        for field in REQUIRED_FIELDS:
            if _is_blank(getattr(details, field)):
                return invalid(f"Booking details cannot be null or empty{action}.", field)
        if details.check_in_date > details.check_out_date:
            return invalid(
                f"Check-in date cannot be after check-out date{action}.", "check_in_date"
            )
        try:
            _normalize_status(details.status)
        except ValueError:
            valid = ", ".join(s.value for s in BookingStatus)
            return invalid(f"Invalid status. Must be one of: {valid}", "status")
        return None

    def create_booking(self, details: Optional[BookingInput]) -> Result[Booking]:
        """Validate and store a new booking; assigns id and PENDING status when absent."""
        failure = self._check_details(details, "")
        if failure is not None:
            return failure
        if details.check_in_date < self._today():
            return invalid("Check-in date cannot be in the past.", "check_in_date")

        booking_id = details.id if not _is_blank(details.id) else generate_booking_id()
        booking = Booking(
            id=booking_id,
            hotel_name=details.hotel_name,
            guest_name=details.guest_name,
            check_in_date=details.check_in_date,
            check_out_date=details.check_out_date,
            status=_normalize_status(details.status) or BookingStatus.PENDING.value,
        )
        stored = self.store.put(booking_id, booking)
        logger.info(f"Booking created successfully: {booking_id}")
        return Ok(stored)

    def get_booking_by_id(self, booking_id: Optional[str]) -> Result[Optional[Booking]]:
        """Look up a booking; Ok(None) when it does not exist."""
        if _is_blank(booking_id):
            return invalid("Booking ID cannot be null or empty.", "id")
        logger.debug(f"Attempting to retrieve booking by ID: {booking_id}")
        return Ok(self.store.get(booking_id))

    def list_all_bookings(self) -> List[Booking]:
        """Return every stored booking."""
        logger.debug("Attempting to retrieve all bookings.")
        return self.store.list_all()

    def search_by_hotel_name(self, query: Optional[str]) -> Result[List[Booking]]:
        """Case-insensitive substring search on hotel name."""
        if _is_blank(query):
            return invalid("Hotel name for search cannot be null or empty.", "hotel_name")
        logger.debug(f"Searching for bookings with hotel name containing: {query}")
        return Ok(self.store.find_by_hotel_name_contains(query))

    def update_booking(
        self, booking_id: Optional[str], details: Optional[BookingInput]
    ) -> Result[Optional[Booking]]:
        """
        Overwrite the mutable fields of an existing booking.

        Unlike create, a check-in date in the past is accepted here. The
        existence check and the write are separate store calls, so a
        concurrent update of the same id may land between them; the last
        write wins.
        """
        if _is_blank(booking_id):
            return invalid("Booking ID cannot be null or empty for update.", "id")
        failure = self._check_details(details, " for update")
        if failure is not None:
            return failure

        existing = self.store.get(booking_id)
        if existing is None:
            logger.warning(f"Booking with ID {booking_id} not found for update.")
            return Ok(None)

        # Status is overwritten as given, including out of CANCELLED.
        status = _normalize_status(details.status) or existing.status
        updated = self.store.update_in_place(booking_id, {
            "hotel_name": details.hotel_name,
            "guest_name": details.guest_name,
            "check_in_date": details.check_in_date,
            "check_out_date": details.check_out_date,
            "status": status,
        })
        if updated is not None:
            logger.info(f"Booking updated successfully for ID: {booking_id}")
        return Ok(updated)

    def cancel_booking(self, booking_id: Optional[str]) -> Result[bool]:
        """
        Set status to CANCELLED.

        Returns Ok(False) both when the booking does not exist and when it is
        already cancelled.
        """
        if _is_blank(booking_id):
            return invalid("Booking ID cannot be null or empty for cancellation.", "id")
        outcome = self.store.transition_status(booking_id, BookingStatus.CANCELLED.value)
        if outcome is TransitionOutcome.NOT_FOUND:
            logger.warning(f"Booking with ID {booking_id} not found for cancellation.")
            return Ok(False)
        if outcome is TransitionOutcome.UNCHANGED:
            logger.info(f"Booking with ID {booking_id} is already cancelled.")
            return Ok(False)
        logger.info(f"Booking cancelled successfully for ID: {booking_id}")
        return Ok(True)

    def delete_booking(self, booking_id: Optional[str]) -> Result[bool]:
        """Remove a booking; Ok(False) when it does not exist."""
        if _is_blank(booking_id):
            return invalid("Booking ID cannot be null or empty for deletion.", "id")
        if self.store.remove(booking_id):
            logger.info(f"Booking deleted successfully for ID: {booking_id}")
            return Ok(True)
        logger.warning(f"Booking with ID {booking_id} not found for deletion.")
        return Ok(False)
