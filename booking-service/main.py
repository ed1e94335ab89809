import logging
import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from telemetry import setup_telemetry
from models import Booking, BookingInput, HealthResponse
from data import sample_bookings
from lifecycle import BookingLifecycle
from result import Err, Result
from store import BookingStore
from flipt_service import flipt_service

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)
analytics_logger = logging.getLogger("booking_service.analytics")

# Create FastAPI app
app = FastAPI(
    title="Booking Service API",
    description="Hotel booking records: create, look up, search, update and cancel",
    version=settings.service_version,
    docs_url="/",
    redoc_url=None,
)

# Setup CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup OpenTelemetry
tracer, meter = setup_telemetry(app)

# Create custom metrics
booking_counter = meter.create_counter(
    name="bookings_created_total",
    description="Total number of bookings created",
    unit="1",
)

cancellation_counter = meter.create_counter(
    name="booking_cancellations_total",
    description="Total number of booking cancellations",
    unit="1",
)

validation_failure_counter = meter.create_counter(
    name="booking_validation_failures_total",
    description="Total number of requests rejected by booking validation",
    unit="1",
)


def seed_sample_data(store: BookingStore) -> int:
    """Load the sample bookings into the store."""
    bookings = sample_bookings()
    for booking in bookings:
        store.put(booking.id, booking)
    logger.info(f"In-memory booking store initialized with {len(bookings)} sample bookings.")
    return len(bookings)


# In-memory bookings storage
booking_store = BookingStore()
if settings.seed_sample_bookings and flipt_service.is_sample_data_enabled():
    seed_sample_data(booking_store)

booking_lifecycle = BookingLifecycle(booking_store)


def get_lifecycle() -> BookingLifecycle:
    """Lifecycle dependency for the routes."""
    return booking_lifecycle


def unwrap(result: Result, action: str):
    """Return the Ok value or raise a 400 for a validation failure."""
    if isinstance(result, Err):
        validation_failure_counter.add(1, {"action": action})
        logger.warning(f"{action} rejected: {result.error.message}")
        raise HTTPException(status_code=400, detail=result.error.message)
    return result.value


@app.middleware("http")
async def request_analytics(request: Request, call_next):
    """Log start and end of every request with a request id and duration."""
    entity_id = request.headers.get("x-entity-id", "anonymous")
    if not flipt_service.is_request_analytics_enabled(entity_id):
        return await call_next(request)

    request_id = str(uuid.uuid4())
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    start = time.perf_counter()
    analytics_logger.info(
        f"[REQ_START] RequestId: {request_id}, Method: {request.method}, Path: {path}"
    )
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = int((time.perf_counter() - start) * 1000)
        analytics_logger.error(
            f"[REQ_END] RequestId: {request_id}, Status: 500, Duration: {duration_ms}ms",
            exc_info=True,
        )
        raise
    duration_ms = int((time.perf_counter() - start) * 1000)
    log = analytics_logger.info if response.status_code < 400 else analytics_logger.warning
    log(
        f"[REQ_END] RequestId: {request_id}, Status: {response.status_code}, "
        f"Duration: {duration_ms}ms"
    )
    response.headers["X-Request-Id"] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are bad input, not 422."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": "Invalid request payload."})


@app.get("/health", response_model=HealthResponse)
async def health(lifecycle: BookingLifecycle = Depends(get_lifecycle)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        bookings=lifecycle.store.count(),
        flipt_connected=flipt_service.client is not None,
    )


@app.post("/bookings", response_model=Booking, status_code=201)
def create_booking(
    booking: BookingInput,
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    """Create a booking. Status defaults to PENDING."""
    with tracer.start_as_current_span("create_booking") as span:
        span.set_attribute("hotel_name", booking.hotel_name or "")
        created = unwrap(lifecycle.create_booking(booking), "Create")
        span.set_attribute("booking_id", created.id)
        booking_counter.add(1, {"status": created.status})
        return created


@app.get("/bookings", response_model=List[Booking])
def get_bookings(lifecycle: BookingLifecycle = Depends(get_lifecycle)):
    """List every booking."""
    with tracer.start_as_current_span("get_bookings") as span:
        bookings = lifecycle.list_all_bookings()
        span.set_attribute("count", len(bookings))
        logger.info(f"Retrieved {len(bookings)} bookings")
        return bookings


@app.get("/bookings/search", response_model=List[Booking])
def search_bookings(
    hotel_name: Optional[str] = Query(None, alias="hotelName", description="Part of the hotel name"),
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    """Case-insensitive search by hotel name. An empty list is not an error."""
    with tracer.start_as_current_span("search_bookings") as span:
        span.set_attribute("hotel_name", hotel_name or "")
        bookings = unwrap(lifecycle.search_by_hotel_name(hotel_name), "Search")
        span.set_attribute("count", len(bookings))
        return bookings


@app.get("/bookings/{booking_id}", response_model=Booking)
def get_booking(
    booking_id: str,
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    """Get a single booking by ID."""
    with tracer.start_as_current_span("get_booking") as span:
        span.set_attribute("booking_id", booking_id)
        booking = unwrap(lifecycle.get_booking_by_id(booking_id), "GetById")
        span.set_attribute("found", booking is not None)
        if booking is None:
            raise HTTPException(status_code=404, detail=f"Booking not found with ID: {booking_id}")
        return booking


@app.put("/bookings/{booking_id}", response_model=Booking)
def update_booking(
    booking_id: str,
    booking: BookingInput,
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    """Replace hotel, guest, dates and status of an existing booking."""
    with tracer.start_as_current_span("update_booking") as span:
        span.set_attribute("booking_id", booking_id)
        updated = unwrap(lifecycle.update_booking(booking_id, booking), "Update")
        if updated is None:
            raise HTTPException(status_code=404, detail=f"Booking not found with ID: {booking_id}")
        span.set_attribute("booking.status", updated.status)
        return updated


@app.delete("/bookings/{booking_id}", status_code=204)
def cancel_booking(
    booking_id: str,
    lifecycle: BookingLifecycle = Depends(get_lifecycle),
):
    """Cancel a booking. Missing and already cancelled bookings both answer 404."""
    with tracer.start_as_current_span("cancel_booking") as span:
        span.set_attribute("booking_id", booking_id)
        cancelled = unwrap(lifecycle.cancel_booking(booking_id), "Cancel")
        span.set_attribute("cancelled", cancelled)
        if not cancelled:
            raise HTTPException(
                status_code=404,
                detail=f"Booking not found or already cancelled with ID: {booking_id}",
            )
        cancellation_counter.add(1)
        return Response(status_code=204)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
