"""Partial-update and sequence statement construction"""
from enum import Enum
from typing import Any

from sqlalchemy import Table, func, select, update
from sqlalchemy.sql.expression import Select, Update

from domain.errors import EmptyPatchError
from domain.patches import EntityPatch


def column_value(value: Any) -> Any:
    """Enums are stored by value"""
    return value.value if isinstance(value, Enum) else value


def build_patch_statement(table: Table, id_column: str, entity_id: int, patch: EntityPatch) -> Update:
    """UPDATE touching exactly the columns present in patch, keyed by id

    Raises EmptyPatchError when no field is present, so a SET clause is never
    left empty.
    """
    values = {column: column_value(value) for column, value in patch.present_columns().items()}
    if not values:
        raise EmptyPatchError()
    return (
        update(table)
        .where(table.c[id_column] == entity_id)
        .values(values)
    )


def build_sequence_sync_statement(table: Table, id_column: str) -> Select:
    """PostgreSQL: move the id sequence up to the largest stored key"""
    column = table.c[id_column]
    return select(
        func.setval(
            func.pg_get_serial_sequence(table.name, id_column),
            select(func.max(column)).scalar_subquery(),
        )
    )
