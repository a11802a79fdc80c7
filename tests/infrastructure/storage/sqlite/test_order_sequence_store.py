"""Tests for the per-day order number counter."""

import asyncio
from datetime import date

import pytest

from airos.core.services import SequenceGenerator
from airos.infrastructure.storage.sqlite.sequence_store import SQLiteSequenceStore


@pytest.fixture
def generator(sqlite_db) -> SequenceGenerator:
    return SequenceGenerator(SQLiteSequenceStore(), prefix="ORD")


class TestSequenceStore:
    async def test_three_in_a_row(self, generator):
        day = date(2024, 5, 1)
        numbers = [await generator.next(day) for _ in range(3)]
        assert numbers == ["ORD-20240501-001", "ORD-20240501-002", "ORD-20240501-003"]

    async def test_resets_per_day(self, generator):
        await generator.next(date(2024, 5, 1))
        await generator.next(date(2024, 5, 1))
        assert await generator.next(date(2024, 5, 2)) == "ORD-20240502-001"
        assert await generator.next(date(2024, 5, 1)) == "ORD-20240501-003"

    async def test_concurrent_callers_get_distinct_numbers(self, generator):
        numbers = await asyncio.gather(*(generator.next(date(2024, 6, 1)) for _ in range(6)))
        assert len(set(numbers)) == 6
        assert sorted(numbers)[-1] == "ORD-20240601-006"
