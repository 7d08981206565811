"""Domain Entities"""
from pydantic import BaseModel
import datetime
from typing import ClassVar, Optional

from domain.enums import RoomType, HotelServiceType
from domain.value_objects import DateRange


class Entity(BaseModel):
    """Base for stored rows; ID_FIELD names the attribute the store keys on"""

    ID_FIELD: ClassVar[str] = "id"

    @property
    def identity(self) -> Optional[int]:
        return getattr(self, self.ID_FIELD)

    def with_identity(self, entity_id: int) -> "Entity":
        """Copy of this entity carrying the given key"""
        return self.model_copy(update={self.ID_FIELD: entity_id})

    class Config:
        from_attributes = True


class Customer(Entity):
    """Hotel guest"""

    id: Optional[int] = None
    cf: str
    name: str
    age: int
    email: str


class Room(Entity):
    """Bookable room"""

    id: Optional[int] = None
    number: int
    type: RoomType
    price: int
    capacity: int


class Booking(Entity):
    """A customer's stay in a room over [start_date, end_date)"""

    id: Optional[int] = None
    code: str
    customer_id: int
    room_id: int
    start_date: datetime.date
    end_date: datetime.date

    @property
    def period(self) -> DateRange:
        return DateRange(start=self.start_date, end=self.end_date)


class Review(Entity):
    """Review of a booking, one per booking"""

    ID_FIELD: ClassVar[str] = "booking_id"

    booking_id: int
    comment: str
    rating: int
    date: datetime.date


class HotelService(Entity):
    """Service offered by the hotel, duration in minutes"""

    id: Optional[int] = None
    type: HotelServiceType
    description: str
    duration: int


class ServiceRequest(Entity):
    """A customer asking for a hotel service on a given day"""

    id: Optional[int] = None
    customer_id: int
    service_id: int
    date: datetime.date
