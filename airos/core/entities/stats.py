"""Read-only aggregate rows returned by store statistics queries."""

from pydantic import BaseModel


class StatusCount(BaseModel):
    status: str
    count: int


class DailyTotals(BaseModel):
    day: str  # YYYY-MM-DD
    count: int
    revenue: float


class CategoryCount(BaseModel):
    name: str
    value: int


class RatingCount(BaseModel):
    rating: int
    count: int
