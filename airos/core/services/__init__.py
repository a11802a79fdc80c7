"""
Core business logic services.

Layer-pure services that depend only on:
- airos/core/entities/*
- airos/core/interfaces/*
- airos/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from airos.core.services.inventory_ledger import InventoryLedger
from airos.core.services.order_assembler import OrderAssembler, ReservationLog
from airos.core.services.order_lifecycle import TRANSITIONS, OrderLifecycle, parse_status
from airos.core.services.sequence_generator import SequenceGenerator

__all__ = [
    # Stock
    "InventoryLedger",
    # Order assembly
    "OrderAssembler",
    "ReservationLog",
    # Lifecycle
    "OrderLifecycle",
    "TRANSITIONS",
    "parse_status",
    # Numbering
    "SequenceGenerator",
]
