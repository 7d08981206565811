"""Validation Engine - cross-entity business rules checked before writes"""
import logging
from datetime import date
from typing import Callable, NoReturn

from domain.entities import Booking, Review, HotelService, ServiceRequest
from domain.errors import ValidationError
from domain.repositories import HotelStore

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Checks candidate entities against the rest of the store

    Read-only: nothing is cached between calls. An entity's own id is excluded
    from uniqueness and overlap checks, and a new entity has no id.
    """

    def __init__(self, store: HotelStore, today: Callable[[], date] = date.today):
        self.store = store
        self.today = today

    def _reject(self, subject: str, message: str) -> NoReturn:
        logger.info("Rejected %s: %s", subject, message)
        raise ValidationError(message)

    async def validate_booking(self, booking: Booking) -> None:
        """Date order, future start, references, unique code and room overlap"""
        if booking.start_date > booking.end_date:
            self._reject("booking", "start date must be before end date")
        if booking.start_date == booking.end_date:
            self._reject("booking", "start date and end date cannot be the same")
        # Date-only values: a stay starting today has already started
        if booking.start_date <= self.today():
            self._reject("booking", "start date must be in the future")

        if await self.store.customers.find_by_id(booking.customer_id) is None:
            self._reject("booking", "customer does not exist")
        if await self.store.rooms.find_by_id(booking.room_id) is None:
            self._reject("booking", "room does not exist")

        for other in await self.store.bookings.find_all():
            if other.id == booking.id:
                continue
            if other.code == booking.code:
                self._reject("booking", "booking code already exists")
            if other.room_id == booking.room_id and booking.period.overlaps(other.period):
                self._reject("booking", "booking dates overlap with an existing booking for the same room")

    async def validate_review(self, review: Review, is_new: bool) -> None:
        booking = await self.store.bookings.find_by_id(review.booking_id)
        if booking is None:
            self._reject("review", "booking does not exist")
        if review.date < booking.start_date:
            self._reject("review", "review date must be after booking start date")
        # One review per booking, whoever the customer is
        if is_new:
            for other in await self.store.reviews.find_all():
                if other.booking_id == review.booking_id:
                    self._reject("review", "customer has already written a review for this booking")

    async def validate_hotel_service(self, service: HotelService) -> None:
        for other in await self.store.services.find_all():
            if other.type == service.type and other.id != service.id:
                self._reject("hotel service", f"service of type {service.type.value} already exists")

    async def validate_service_request(self, request: ServiceRequest) -> None:
        if request.date <= self.today():
            self._reject("service request", "service request date must be in the future")
        if await self.store.customers.find_by_id(request.customer_id) is None:
            self._reject("service request", "customer does not exist")

        bookings = await self.store.bookings.find_all()
        # Counts every booking in the store, not only this customer's
        if not bookings:
            self._reject("service request", "customer has no bookings")
        for booking in bookings:
            if booking.customer_id == request.customer_id and not booking.period.contains(request.date):
                self._reject("service request", "service request date must be within a booking period")

        if await self.store.services.find_by_id(request.service_id) is None:
            self._reject("service request", "service does not exist")

        for other in await self.store.service_requests.find_all():
            if (other.customer_id == request.customer_id
                    and other.service_id == request.service_id
                    and other.date == request.date
                    and other.id != request.id):
                self._reject("service request", "duplicate service request")
