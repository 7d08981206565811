"""Domain Patches - sparse updates carrying only explicitly supplied fields"""
from pydantic import BaseModel
import datetime
from typing import Any, ClassVar, Dict, Optional

from domain.entities import Entity
from domain.enums import RoomType, HotelServiceType


class EntityPatch(BaseModel):
    """Base for partial updates

    COLUMNS maps every patchable field to its storage column. A field counts as
    present when it was supplied and is not null; falsy values such as 0 or ""
    are still present.
    """

    COLUMNS: ClassVar[Dict[str, str]] = {}

    def present_fields(self) -> Dict[str, Any]:
        """Supplied fields, in COLUMNS order"""
        present = {}
        for field in self.COLUMNS:
            value = getattr(self, field)
            if field in self.model_fields_set and value is not None:
                present[field] = value
        return present

    def present_columns(self) -> Dict[str, Any]:
        """Supplied fields keyed by column name"""
        return {self.COLUMNS[field]: value for field, value in self.present_fields().items()}

    def is_empty(self) -> bool:
        return not self.present_fields()

    def apply_to(self, entity: Entity) -> Entity:
        """Copy of entity with the supplied fields replaced"""
        return entity.model_copy(update=self.present_fields())


class CustomerPatch(EntityPatch):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "cf": "cf",
        "name": "customer_name",
        "age": "age",
        "email": "email",
    }

    cf: Optional[str] = None
    name: Optional[str] = None
    age: Optional[int] = None
    email: Optional[str] = None


class RoomPatch(EntityPatch):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "number": "room_number",
        "type": "room_type",
        "price": "price",
        "capacity": "capacity",
    }

    number: Optional[int] = None
    type: Optional[RoomType] = None
    price: Optional[int] = None
    capacity: Optional[int] = None


class BookingPatch(EntityPatch):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "code": "code",
        "customer_id": "customer_id",
        "room_id": "room_id",
        "start_date": "start_date",
        "end_date": "end_date",
    }

    code: Optional[str] = None
    customer_id: Optional[int] = None
    room_id: Optional[int] = None
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None


class ReviewPatch(EntityPatch):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "booking_id": "booking_id",
        "comment": "review_comment",
        "rating": "rating",
        "date": "review_date",
    }

    booking_id: Optional[int] = None
    comment: Optional[str] = None
    rating: Optional[int] = None
    date: Optional[datetime.date] = None


class HotelServicePatch(EntityPatch):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "type": "service_type",
        "description": "description",
        "duration": "duration",
    }

    type: Optional[HotelServiceType] = None
    description: Optional[str] = None
    duration: Optional[int] = None


class ServiceRequestPatch(EntityPatch):
    COLUMNS: ClassVar[Dict[str, str]] = {
        "customer_id": "customer_id",
        "service_id": "service_id",
        "date": "service_date",
    }

    customer_id: Optional[int] = None
    service_id: Optional[int] = None
    date: Optional[datetime.date] = None
