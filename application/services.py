"""Application Services - Business use cases"""
import logging
from typing import Generic, List, Tuple, TypeVar

from application.validation import ValidationEngine
from domain.entities import Entity, Customer, Room, Booking, Review, HotelService, ServiceRequest
from domain.enums import UpsertOutcome
from domain.errors import EmptyPatchError, NotFoundError
from domain.patches import (
    EntityPatch, CustomerPatch, RoomPatch, BookingPatch, ReviewPatch,
    HotelServicePatch, ServiceRequestPatch
)
from domain.repositories import Repository

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)
P = TypeVar("P", bound=EntityPatch)


class EntityService(Generic[E, P]):
    """CRUD use cases over one repository

    Missing rows are raised as NotFoundError.
    """

    entity_name = "entity"

    def __init__(self, repository: Repository):
        self.repository = repository

    def _not_found(self, entity_id: int) -> NotFoundError:
        return NotFoundError(f"{self.entity_name} {entity_id} not found")

    async def get_all(self) -> List[E]:
        return await self.repository.find_all()

    async def get(self, entity_id: int) -> E:
        entity = await self.repository.find_by_id(entity_id)
        if entity is None:
            raise self._not_found(entity_id)
        return entity

    async def create(self, entity: E) -> E:
        created = await self.repository.save(entity)
        logger.info("Created %s %s", self.entity_name, created.identity)
        return created

    async def update(self, entity: E) -> E:
        """Full replace of an existing row"""
        updated = await self.repository.update(entity)
        if updated is None:
            raise self._not_found(entity.identity)
        logger.info("Updated %s %s", self.entity_name, entity.identity)
        return updated

    async def patch(self, entity_id: int, patch: P) -> None:
        if patch.is_empty():
            raise EmptyPatchError()
        affected = await self.repository.patch(entity_id, patch)
        if affected == 0:
            raise self._not_found(entity_id)
        logger.info("Patched %s %s: %s", self.entity_name, entity_id, ", ".join(patch.present_fields()))

    async def delete(self, entity_id: int) -> None:
        if not await self.repository.delete(entity_id):
            raise self._not_found(entity_id)
        logger.info("Deleted %s %s", self.entity_name, entity_id)


class ValidatedEntityService(EntityService[E, P]):
    """Entity service whose writes pass the validation engine first

    PUT is an upsert: the candidate is validated, then created under the
    caller's id when absent or fully replaced when present.
    """

    def __init__(self, repository: Repository, validator: ValidationEngine):
        super().__init__(repository)
        self.validator = validator

    async def _validate(self, entity: E, is_new: bool) -> None:
        raise NotImplementedError

    async def create(self, entity: E) -> E:
        await self._validate(entity, is_new=True)
        return await super().create(entity)

    async def upsert(self, entity: E) -> Tuple[E, UpsertOutcome]:
        await self._validate(entity, is_new=False)
        existing = await self.repository.find_by_id(entity.identity)
        if existing is None:
            created = await self.repository.save(entity)
            logger.info("Upsert created %s %s", self.entity_name, created.identity)
            return created, UpsertOutcome.CREATED
        # Full update, not a merge with the stored row
        updated = await self.repository.update(entity)
        if updated is None:
            raise self._not_found(entity.identity)
        logger.info("Upsert updated %s %s", self.entity_name, entity.identity)
        return updated, UpsertOutcome.UPDATED

    async def patch(self, entity_id: int, patch: P) -> None:
        """Validate the patched entity, then write only the patched fields"""
        if patch.is_empty():
            raise EmptyPatchError()
        current = await self.get(entity_id)
        await self._validate(patch.apply_to(current), is_new=False)
        await super().patch(entity_id, patch)


class CustomerService(EntityService[Customer, CustomerPatch]):
    """Service for Customer use cases"""

    entity_name = "customer"


class RoomService(EntityService[Room, RoomPatch]):
    """Service for Room use cases"""

    entity_name = "room"


class BookingService(ValidatedEntityService[Booking, BookingPatch]):
    """Service for Booking use cases"""

    entity_name = "booking"

    async def _validate(self, entity: Booking, is_new: bool) -> None:
        await self.validator.validate_booking(entity)


class ReviewService(ValidatedEntityService[Review, ReviewPatch]):
    """Service for Review use cases, keyed by booking id"""

    entity_name = "review"

    async def _validate(self, entity: Review, is_new: bool) -> None:
        await self.validator.validate_review(entity, is_new)


class HotelServiceService(ValidatedEntityService[HotelService, HotelServicePatch]):
    """Service for HotelService use cases"""

    entity_name = "hotel service"

    async def _validate(self, entity: HotelService, is_new: bool) -> None:
        await self.validator.validate_hotel_service(entity)


class ServiceRequestService(ValidatedEntityService[ServiceRequest, ServiceRequestPatch]):
    """Service for ServiceRequest use cases"""

    entity_name = "service request"

    async def _validate(self, entity: ServiceRequest, is_new: bool) -> None:
        await self.validator.validate_service_request(entity)
