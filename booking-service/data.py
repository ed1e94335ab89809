from datetime import date, timedelta
from typing import Callable, List
import uuid

from dateutil.relativedelta import relativedelta

from models import Booking, BookingStatus


def sample_bookings(today: Callable[[], date] = date.today) -> List[Booking]:
    """Sample bookings with dates relative to today."""
    now = today()
    in_one_month = now + relativedelta(months=1)
    in_two_months = now + relativedelta(months=2)
    return [
        Booking(
            id=generate_booking_id(),
            hotel_name="Grand Hyatt",
            guest_name="Alice Smith",
            check_in_date=now + timedelta(days=5),
            check_out_date=now + timedelta(days=10),
            status=BookingStatus.CONFIRMED.value,
        ),
        Booking(
            id=generate_booking_id(),
            hotel_name="Hilton Garden Inn",
            guest_name="Bob Johnson",
            check_in_date=in_one_month,
            check_out_date=in_one_month + timedelta(days=3),
            status=BookingStatus.PENDING.value,
        ),
        Booking(
            id=generate_booking_id(),
            hotel_name="Marriott Marquis",
            guest_name="Charlie Brown",
            check_in_date=in_two_months,
            check_out_date=in_two_months + timedelta(days=7),
            status=BookingStatus.CONFIRMED.value,
        ),
        Booking(
            id=generate_booking_id(),
            hotel_name="Grand Hotel & Casino",
            guest_name="David Lee",
            check_in_date=now + timedelta(days=15),
            check_out_date=now + timedelta(days=20),
            status=BookingStatus.PENDING.value,
        ),
    ]


def generate_booking_id():
    """Generate a unique booking ID."""
    return str(uuid.uuid4())
