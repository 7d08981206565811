"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from domain.entities import Entity, Customer, Room, Booking, Review, HotelService, ServiceRequest
from domain.patches import (
    EntityPatch, CustomerPatch, RoomPatch, BookingPatch, ReviewPatch,
    HotelServicePatch, ServiceRequestPatch
)

E = TypeVar("E", bound=Entity)
P = TypeVar("P", bound=EntityPatch)


class Repository(ABC, Generic[E, P]):
    """Repository interface shared by every entity table

    Missing rows are reported as None, 0 or False; callers decide whether that
    is an error.
    """

    @abstractmethod
    async def save(self, entity: E) -> E:
        """Insert entity, generating its id when it has none"""
        pass

    @abstractmethod
    async def find_by_id(self, entity_id: int) -> Optional[E]:
        """Find entity by ID"""
        pass

    @abstractmethod
    async def find_all(self) -> List[E]:
        """Find all entities"""
        pass

    @abstractmethod
    async def update(self, entity: E) -> Optional[E]:
        """Replace every field of an existing row, None when there is no row"""
        pass

    @abstractmethod
    async def patch(self, entity_id: int, patch: P) -> int:
        """Apply the present fields of patch, returning rows affected"""
        pass

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        """Delete entity"""
        pass


class CustomerRepository(Repository[Customer, CustomerPatch]):
    """Repository interface for Customer"""


class RoomRepository(Repository[Room, RoomPatch]):
    """Repository interface for Room"""


class BookingRepository(Repository[Booking, BookingPatch]):
    """Repository interface for Booking"""


class ReviewRepository(Repository[Review, ReviewPatch]):
    """Repository interface for Review, keyed by booking_id"""


class HotelServiceRepository(Repository[HotelService, HotelServicePatch]):
    """Repository interface for HotelService"""


class ServiceRequestRepository(Repository[ServiceRequest, ServiceRequestPatch]):
    """Repository interface for ServiceRequest"""


@dataclass
class HotelStore:
    """The six repositories backing the API"""

    customers: CustomerRepository
    rooms: RoomRepository
    bookings: BookingRepository
    reviews: ReviewRepository
    services: HotelServiceRepository
    service_requests: ServiceRequestRepository
