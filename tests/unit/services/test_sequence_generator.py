"""Tests for SequenceGenerator."""

from datetime import date
from unittest.mock import AsyncMock

from airos.core.services import SequenceGenerator


class TestSequenceGenerator:
    async def test_formats_order_number(self):
        store = AsyncMock()
        store.next_value.side_effect = [1, 2, 3]
        generator = SequenceGenerator(store)

        numbers = [await generator.next(date(2024, 5, 1)) for _ in range(3)]

        assert numbers == ["ORD-20240501-001", "ORD-20240501-002", "ORD-20240501-003"]
        store.next_value.assert_awaited_with(date(2024, 5, 1))

    def test_wide_values_are_not_truncated(self):
        generator = SequenceGenerator(AsyncMock(), prefix="PO")
        assert generator.format(date(2024, 12, 31), 1234) == "PO-20241231-1234"
