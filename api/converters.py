"""Presentation Adapter - wire DTOs to domain values and back"""
import re
from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel

from api.schemas import (
    CustomerRequest, CustomerPatchRequest, CustomerResponse,
    RoomRequest, RoomPatchRequest, RoomResponse,
    BookingRequest, BookingPatchRequest, BookingResponse,
    ReviewRequest, ReviewPatchRequest, ReviewResponse,
    HotelServiceRequest, HotelServicePatchRequest, HotelServiceResponse,
    ServiceRequestRequest, ServiceRequestPatchRequest, ServiceRequestResponse,
)
from domain.entities import Customer, Room, Booking, Review, HotelService, ServiceRequest
from domain.errors import FormatError
from domain.patches import (
    CustomerPatch, RoomPatch, BookingPatch, ReviewPatch, HotelServicePatch, ServiceRequestPatch
)

DATE_FORMAT = "%Y-%m-%d"
_DATE_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value: str, field: str) -> date:
    """Parse a YYYY-MM-DD string, raising FormatError otherwise"""
    message = f"{field} must be in YYYY-MM-DD format"
    if not _DATE_SHAPE.match(value):
        raise FormatError(message)
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise FormatError(message) from None


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def _patch_values(request: BaseModel, date_fields: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Explicitly supplied, non-null fields with dates parsed"""
    values = request.model_dump(exclude_unset=True, exclude_none=True)
    for field, label in (date_fields or {}).items():
        if field in values:
            values[field] = parse_date(values[field], label)
    return values


# ============================================================================
# CUSTOMER
# ============================================================================

def customer_from_request(request: CustomerRequest, customer_id: Optional[int] = None) -> Customer:
    return Customer(id=customer_id, **request.model_dump())


def customer_patch_from_request(request: CustomerPatchRequest) -> CustomerPatch:
    return CustomerPatch(**_patch_values(request))


def customer_to_response(customer: Customer) -> CustomerResponse:
    return CustomerResponse(**customer.model_dump())


# ============================================================================
# ROOM
# ============================================================================

def room_from_request(request: RoomRequest, room_id: Optional[int] = None) -> Room:
    return Room(id=room_id, **request.model_dump())


def room_patch_from_request(request: RoomPatchRequest) -> RoomPatch:
    return RoomPatch(**_patch_values(request))


def room_to_response(room: Room) -> RoomResponse:
    return RoomResponse(**room.model_dump())


# ============================================================================
# BOOKING
# ============================================================================

_BOOKING_DATES = {"start_date": "start date", "end_date": "end date"}


def booking_from_request(request: BookingRequest, booking_id: Optional[int] = None) -> Booking:
    return Booking(
        id=booking_id,
        code=request.code,
        customer_id=request.customer_id,
        room_id=request.room_id,
        start_date=parse_date(request.start_date, "start date"),
        end_date=parse_date(request.end_date, "end date"),
    )


def booking_patch_from_request(request: BookingPatchRequest) -> BookingPatch:
    return BookingPatch(**_patch_values(request, _BOOKING_DATES))


def booking_to_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        code=booking.code,
        customer_id=booking.customer_id,
        room_id=booking.room_id,
        start_date=format_date(booking.start_date),
        end_date=format_date(booking.end_date),
    )


# ============================================================================
# REVIEW
# ============================================================================

def review_from_request(request: ReviewRequest, booking_id: Optional[int] = None) -> Review:
    """booking_id from the path wins over the body"""
    return Review(
        booking_id=booking_id if booking_id is not None else request.booking_id,
        comment=request.comment,
        rating=request.rating,
        date=parse_date(request.date, "review date"),
    )


def review_patch_from_request(request: ReviewPatchRequest) -> ReviewPatch:
    return ReviewPatch(**_patch_values(request, {"date": "review date"}))


def review_to_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        booking_id=review.booking_id,
        comment=review.comment,
        rating=review.rating,
        date=format_date(review.date),
    )


# ============================================================================
# HOTEL SERVICE
# ============================================================================

def hotel_service_from_request(request: HotelServiceRequest, service_id: Optional[int] = None) -> HotelService:
    return HotelService(id=service_id, **request.model_dump())


def hotel_service_patch_from_request(request: HotelServicePatchRequest) -> HotelServicePatch:
    return HotelServicePatch(**_patch_values(request))


def hotel_service_to_response(service: HotelService) -> HotelServiceResponse:
    return HotelServiceResponse(**service.model_dump())


# ============================================================================
# SERVICE REQUEST
# ============================================================================

def service_request_from_request(request: ServiceRequestRequest, request_id: Optional[int] = None) -> ServiceRequest:
    return ServiceRequest(
        id=request_id,
        customer_id=request.customer_id,
        service_id=request.service_id,
        date=parse_date(request.date, "service request date"),
    )


def service_request_patch_from_request(request: ServiceRequestPatchRequest) -> ServiceRequestPatch:
    return ServiceRequestPatch(**_patch_values(request, {"date": "service request date"}))


def service_request_to_response(request: ServiceRequest) -> ServiceRequestResponse:
    return ServiceRequestResponse(
        id=request.id,
        customer_id=request.customer_id,
        service_id=request.service_id,
        date=format_date(request.date),
    )
