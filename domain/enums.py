"""Domain Enums"""
from enum import Enum


class RoomType(str, Enum):
    BASIC = "basic"
    SUITE = "suite"


class HotelServiceType(str, Enum):
    CLEANING = "cleaning"
    ROOM_SERVICE = "room_service"
    MASSAGE = "massage"


class UpsertOutcome(str, Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    FORMAT = "FORMAT"
    NOT_FOUND = "NOT_FOUND"
    INFRASTRUCTURE = "INFRASTRUCTURE"
