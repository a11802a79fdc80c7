"""Human-readable order numbers with per-day numbering."""

from datetime import date

from airos.config import get_logger
from airos.core.interfaces.order_store import ISequenceStore

logger = get_logger(__name__)


class SequenceGenerator:
    """
    Mints order numbers of the form ``ORD-YYYYMMDD-NNN``.

    NNN comes from a per-day counter advanced atomically by the store, so
    concurrent order creation on the same day never reuses a number.
    """

    def __init__(self, sequence_store: ISequenceStore, prefix: str = "ORD") -> None:
        self._sequence_store = sequence_store
        self._prefix = prefix

    async def next(self, for_date: date) -> str:
        value = await self._sequence_store.next_value(for_date)
        order_number = self.format(for_date, value)
        logger.debug("order_number_issued", order_number=order_number)
        return order_number

    def format(self, for_date: date, value: int) -> str:
        return f"{self._prefix}-{for_date:%Y%m%d}-{value:03d}"
