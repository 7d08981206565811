"""API Schemas - Request and Response DTOs

Dates travel as YYYY-MM-DD strings and are parsed by api.converters.
"""
from pydantic import BaseModel, Field
from typing import Optional

from domain.enums import RoomType, HotelServiceType

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# ============================================================================
# CUSTOMER SCHEMAS
# ============================================================================

class CustomerRequest(BaseModel):
    """Create/replace customer request DTO"""
    cf: str = Field(min_length=1)
    name: str = Field(min_length=1)
    age: int = Field(gt=0)
    email: str = Field(pattern=EMAIL_PATTERN)


class CustomerPatchRequest(BaseModel):
    """Patch customer request DTO"""
    cf: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    age: Optional[int] = Field(None, gt=0)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)


class CustomerResponse(BaseModel):
    """Customer response DTO"""
    id: int
    cf: str
    name: str
    age: int
    email: str


# ============================================================================
# ROOM SCHEMAS
# ============================================================================

class RoomRequest(BaseModel):
    """Create/replace room request DTO"""
    number: int
    type: RoomType
    price: int = Field(gt=0)
    capacity: int = Field(gt=0)


class RoomPatchRequest(BaseModel):
    """Patch room request DTO"""
    number: Optional[int] = None
    type: Optional[RoomType] = None
    price: Optional[int] = Field(None, gt=0)
    capacity: Optional[int] = Field(None, gt=0)


class RoomResponse(BaseModel):
    """Room response DTO"""
    id: int
    number: int
    type: RoomType
    price: int
    capacity: int


# ============================================================================
# BOOKING SCHEMAS
# ============================================================================

class BookingRequest(BaseModel):
    """Create/replace booking request DTO"""
    code: str = Field(min_length=1)
    customer_id: int = Field(gt=0)
    room_id: int = Field(gt=0)
    start_date: str = Field(description="YYYY-MM-DD")
    end_date: str = Field(description="YYYY-MM-DD")


class BookingPatchRequest(BaseModel):
    """Patch booking request DTO"""
    code: Optional[str] = Field(None, min_length=1)
    customer_id: Optional[int] = Field(None, gt=0)
    room_id: Optional[int] = Field(None, gt=0)
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class BookingResponse(BaseModel):
    """Booking response DTO"""
    id: int
    code: str
    customer_id: int
    room_id: int
    start_date: str
    end_date: str


# ============================================================================
# REVIEW SCHEMAS
# ============================================================================

class ReviewRequest(BaseModel):
    """Create/replace review request DTO"""
    booking_id: int = Field(gt=0)
    comment: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    date: str = Field(description="YYYY-MM-DD")


class ReviewPatchRequest(BaseModel):
    """Patch review request DTO"""
    booking_id: Optional[int] = Field(None, gt=0)
    comment: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    date: Optional[str] = None


class ReviewResponse(BaseModel):
    """Review response DTO"""
    booking_id: int
    comment: str
    rating: int
    date: str


# ============================================================================
# HOTEL SERVICE SCHEMAS
# ============================================================================

class HotelServiceRequest(BaseModel):
    """Create/replace hotel service request DTO"""
    type: HotelServiceType
    description: str = Field(min_length=1)
    duration: int = Field(ge=1, description="Minutes")


class HotelServicePatchRequest(BaseModel):
    """Patch hotel service request DTO"""
    type: Optional[HotelServiceType] = None
    description: Optional[str] = Field(None, min_length=1)
    duration: Optional[int] = Field(None, ge=1)


class HotelServiceResponse(BaseModel):
    """Hotel service response DTO"""
    id: int
    type: HotelServiceType
    description: str
    duration: int


# ============================================================================
# SERVICE REQUEST SCHEMAS
# ============================================================================

class ServiceRequestRequest(BaseModel):
    """Create/replace service request DTO"""
    customer_id: int = Field(gt=0)
    service_id: int = Field(gt=0)
    date: str = Field(description="YYYY-MM-DD")


class ServiceRequestPatchRequest(BaseModel):
    """Patch service request DTO"""
    customer_id: Optional[int] = Field(None, gt=0)
    service_id: Optional[int] = Field(None, gt=0)
    date: Optional[str] = None


class ServiceRequestResponse(BaseModel):
    """Service request response DTO"""
    id: int
    customer_id: int
    service_id: int
    date: str
