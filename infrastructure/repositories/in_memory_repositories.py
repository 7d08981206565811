"""In-Memory Repository Implementations"""
from typing import Dict, List, Optional, Tuple

from domain.repositories import (
    CustomerRepository, RoomRepository, BookingRepository, ReviewRepository,
    HotelServiceRepository, ServiceRequestRepository, HotelStore
)
from domain.entities import Entity
from domain.errors import ValidationError
from domain.patches import EntityPatch


class InMemoryRepository:
    """Dict-backed storage shared by the in-memory repositories"""

    table = "entity"

    def __init__(self):
        self._storage: Dict[int, Entity] = {}
        self._next_id = 1
        # (repository, field) pairs whose rows reference this table
        self._dependents: List[Tuple["InMemoryRepository", str]] = []

    def cascade_to(self, repository: "InMemoryRepository", field: str) -> None:
        """Delete rows of repository whose field points at a deleted row"""
        self._dependents.append((repository, field))

    async def save(self, entity: Entity) -> Entity:
        """Save entity to memory"""
        if entity.identity is None:
            entity = entity.with_identity(self._next_id)
        elif entity.identity in self._storage:
            raise ValidationError(f"{self.table} {entity.identity} already exists")
        self._next_id = max(self._next_id, entity.identity + 1)
        self._storage[entity.identity] = entity
        return entity

    async def find_by_id(self, entity_id: int) -> Optional[Entity]:
        """Find entity by ID"""
        return self._storage.get(entity_id)

    async def find_all(self) -> List[Entity]:
        """Find all entities"""
        return list(self._storage.values())

    async def update(self, entity: Entity) -> Optional[Entity]:
        """Update entity"""
        if entity.identity not in self._storage:
            return None
        self._storage[entity.identity] = entity
        return entity

    async def patch(self, entity_id: int, patch: EntityPatch) -> int:
        """Apply present patch fields; the key itself may change"""
        current = self._storage.get(entity_id)
        if current is None:
            return 0
        patched = patch.apply_to(current)
        if patched.identity != entity_id and patched.identity in self._storage:
            raise ValidationError(f"{self.table} {patched.identity} already exists")
        del self._storage[entity_id]
        self._storage[patched.identity] = patched
        return 1

    async def delete(self, entity_id: int) -> bool:
        """Delete entity and the rows referencing it"""
        if entity_id not in self._storage:
            return False
        del self._storage[entity_id]
        for repository, field in self._dependents:
            for row in list(repository._storage.values()):
                if getattr(row, field) == entity_id:
                    await repository.delete(row.identity)
        return True


class InMemoryCustomerRepository(InMemoryRepository, CustomerRepository):
    """In-memory implementation of CustomerRepository"""

    table = "customer"


class InMemoryRoomRepository(InMemoryRepository, RoomRepository):
    """In-memory implementation of RoomRepository"""

    table = "room"


class InMemoryBookingRepository(InMemoryRepository, BookingRepository):
    """In-memory implementation of BookingRepository"""

    table = "booking"


class InMemoryReviewRepository(InMemoryRepository, ReviewRepository):
    """In-memory implementation of ReviewRepository"""

    table = "review"


class InMemoryHotelServiceRepository(InMemoryRepository, HotelServiceRepository):
    """In-memory implementation of HotelServiceRepository"""

    table = "hotel_service"


class InMemoryServiceRequestRepository(InMemoryRepository, ServiceRequestRepository):
    """In-memory implementation of ServiceRequestRepository"""

    table = "service_request"


def build_in_memory_store() -> HotelStore:
    """Six repositories wired with the same delete cascades as the SQL schema"""
    customers = InMemoryCustomerRepository()
    rooms = InMemoryRoomRepository()
    bookings = InMemoryBookingRepository()
    reviews = InMemoryReviewRepository()
    services = InMemoryHotelServiceRepository()
    service_requests = InMemoryServiceRequestRepository()

    customers.cascade_to(bookings, "customer_id")
    customers.cascade_to(service_requests, "customer_id")
    rooms.cascade_to(bookings, "room_id")
    bookings.cascade_to(reviews, "booking_id")
    services.cascade_to(service_requests, "service_id")

    return HotelStore(
        customers=customers,
        rooms=rooms,
        bookings=bookings,
        reviews=reviews,
        services=services,
        service_requests=service_requests,
    )
