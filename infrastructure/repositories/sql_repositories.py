"""SQL Repository Implementations (SQLAlchemy async Core)"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Type

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from domain.entities import Entity, Customer, Room, Booking, Review, HotelService, ServiceRequest
from domain.errors import InfrastructureError, ValidationError
from domain.patches import (
    EntityPatch, CustomerPatch, RoomPatch, BookingPatch, ReviewPatch,
    HotelServicePatch, ServiceRequestPatch
)
from domain.repositories import (
    CustomerRepository, RoomRepository, BookingRepository, ReviewRepository,
    HotelServiceRepository, ServiceRequestRepository, HotelStore
)
from infrastructure.database import (
    customer_table, room_table, booking_table, review_table,
    hotel_service_table, service_request_table
)
from infrastructure.repositories.patch_builder import (
    build_patch_statement, build_sequence_sync_statement, column_value
)

logger = logging.getLogger(__name__)


class SqlRepository:
    """Table-backed storage shared by the SQL repositories

    columns maps every entity field, the key included, to its column. Each
    call runs in its own transaction.
    """

    table: Table
    entity_type: Type[Entity]
    columns: Dict[str, str]
    sequenced = True

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    @property
    def id_column(self) -> str:
        return self.columns[self.entity_type.ID_FIELD]

    @asynccontextmanager
    async def _begin(self) -> AsyncIterator[AsyncConnection]:
        try:
            async with self._engine.begin() as conn:
                yield conn
        except IntegrityError as e:
            raise ValidationError(f"{self.table.name} conflicts with an existing row") from e
        except (SQLAlchemyError, OSError) as e:
            raise InfrastructureError(f"{self.table.name} store is unavailable") from e

    def _to_row(self, entity: Entity) -> Dict[str, Any]:
        return {column: column_value(getattr(entity, field)) for field, column in self.columns.items()}

    def _from_row(self, row) -> Entity:
        mapping = row._mapping
        return self.entity_type(**{field: mapping[column] for field, column in self.columns.items()})

    async def save(self, entity: Entity) -> Entity:
        values = self._to_row(entity)
        if entity.identity is None:
            del values[self.id_column]
        async with self._begin() as conn:
            result = await conn.execute(insert(self.table).values(values))
            entity_id = result.inserted_primary_key[0]
            # An explicit key leaves the PostgreSQL sequence behind the table
            if entity.identity is not None and self.sequenced and conn.dialect.name == "postgresql":
                await conn.execute(build_sequence_sync_statement(self.table, self.id_column))
        return entity.with_identity(entity_id)

    async def find_by_id(self, entity_id: int) -> Optional[Entity]:
        statement = select(self.table).where(self.table.c[self.id_column] == entity_id)
        async with self._begin() as conn:
            row = (await conn.execute(statement)).first()
        return self._from_row(row) if row is not None else None

    async def find_all(self) -> List[Entity]:
        statement = select(self.table).order_by(self.table.c[self.id_column])
        async with self._begin() as conn:
            rows = (await conn.execute(statement)).all()
        return [self._from_row(row) for row in rows]

    async def update(self, entity: Entity) -> Optional[Entity]:
        values = self._to_row(entity)
        del values[self.id_column]
        statement = (
            update(self.table)
            .where(self.table.c[self.id_column] == entity.identity)
            .values(values)
        )
        async with self._begin() as conn:
            result = await conn.execute(statement)
        return entity if result.rowcount else None

    async def patch(self, entity_id: int, patch: EntityPatch) -> int:
        statement = build_patch_statement(self.table, self.id_column, entity_id, patch)
        async with self._begin() as conn:
            result = await conn.execute(statement)
        logger.debug("Patched %s %s: %d row(s)", self.table.name, entity_id, result.rowcount)
        return result.rowcount

    async def delete(self, entity_id: int) -> bool:
        statement = delete(self.table).where(self.table.c[self.id_column] == entity_id)
        async with self._begin() as conn:
            result = await conn.execute(statement)
        return result.rowcount > 0


class SqlCustomerRepository(SqlRepository, CustomerRepository):
    table = customer_table
    entity_type = Customer
    columns = {"id": "id", **CustomerPatch.COLUMNS}


class SqlRoomRepository(SqlRepository, RoomRepository):
    table = room_table
    entity_type = Room
    columns = {"id": "id", **RoomPatch.COLUMNS}


class SqlBookingRepository(SqlRepository, BookingRepository):
    table = booking_table
    entity_type = Booking
    columns = {"id": "id", **BookingPatch.COLUMNS}


class SqlReviewRepository(SqlRepository, ReviewRepository):
    table = review_table
    entity_type = Review
    columns = dict(ReviewPatch.COLUMNS)
    sequenced = False


class SqlHotelServiceRepository(SqlRepository, HotelServiceRepository):
    table = hotel_service_table
    entity_type = HotelService
    columns = {"id": "id", **HotelServicePatch.COLUMNS}


class SqlServiceRequestRepository(SqlRepository, ServiceRequestRepository):
    table = service_request_table
    entity_type = ServiceRequest
    columns = {"id": "id", **ServiceRequestPatch.COLUMNS}


def build_sql_store(engine: AsyncEngine) -> HotelStore:
    return HotelStore(
        customers=SqlCustomerRepository(engine),
        rooms=SqlRoomRepository(engine),
        bookings=SqlBookingRepository(engine),
        reviews=SqlReviewRepository(engine),
        services=SqlHotelServiceRepository(engine),
        service_requests=SqlServiceRequestRepository(engine),
    )
