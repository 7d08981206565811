"""Domain Value Objects"""
from pydantic import BaseModel
from datetime import date


class DateRange(BaseModel):
    """Value Object for a booked period

    Ordering is not enforced here: the validation engine reports inverted or
    empty ranges with its own messages.
    """
    start: date
    end: date

    def overlaps(self, other: "DateRange") -> bool:
        """Half-open intersection test"""
        return self.start < other.end and self.end > other.start

    def contains(self, day: date) -> bool:
        """Inclusive on both ends"""
        return self.start <= day <= self.end

    class Config:
        frozen = True
