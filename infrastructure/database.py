"""Relational schema and async engine"""
from sqlalchemy import (
    Column, Date, ForeignKey, Integer, MetaData, String, Table, UniqueConstraint, event
)
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

metadata = MetaData()

customer_table = Table(
    "customer", metadata,
    Column("id", Integer, primary_key=True),
    Column("cf", String, nullable=False),
    Column("customer_name", String, nullable=False),
    Column("age", Integer, nullable=False),
    Column("email", String, nullable=False),
)

room_table = Table(
    "room", metadata,
    Column("id", Integer, primary_key=True),
    Column("room_number", Integer, nullable=False),
    Column("room_type", String, nullable=False),
    Column("price", Integer, nullable=False),
    Column("capacity", Integer, nullable=False),
)

booking_table = Table(
    "booking", metadata,
    Column("id", Integer, primary_key=True),
    Column("code", String, nullable=False),
    Column("customer_id", Integer, ForeignKey("customer.id", ondelete="CASCADE"), nullable=False),
    Column("room_id", Integer, ForeignKey("room.id", ondelete="CASCADE"), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    # Backstop for the code check, which reads before it writes
    UniqueConstraint("code", name="uq_booking_code"),
)

review_table = Table(
    "review", metadata,
    Column("booking_id", Integer, ForeignKey("booking.id", ondelete="CASCADE"),
           primary_key=True, autoincrement=False),
    Column("review_comment", String, nullable=False),
    Column("rating", Integer, nullable=False),
    Column("review_date", Date, nullable=False),
)

hotel_service_table = Table(
    "hotel_service", metadata,
    Column("id", Integer, primary_key=True),
    Column("service_type", String, nullable=False),
    Column("description", String, nullable=False),
    Column("duration", Integer, nullable=False),
    UniqueConstraint("service_type", name="uq_hotel_service_type"),
)

service_request_table = Table(
    "service_request", metadata,
    Column("id", Integer, primary_key=True),
    Column("customer_id", Integer, ForeignKey("customer.id", ondelete="CASCADE"), nullable=False),
    Column("service_id", Integer, ForeignKey("hotel_service.id", ondelete="CASCADE"), nullable=False),
    Column("service_date", Date, nullable=False),
)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    engine = create_async_engine(database_url, echo=echo, future=True, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        # This creates the tables if they don't exist
        await conn.run_sync(metadata.create_all)
