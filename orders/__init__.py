"""
Purpose: Package entry + stable exports.
What it does:

Marks orders as a Python package.

Re-exports the public API so other modules can do:

from orders import Order, OrderStatus, estimate_delivery_time

Should not contain business logic.
"""
from .models import (
    Order,
    OrderStatus,
    MembershipTier,
    DeliveryEstimate,
    PRE_DISPATCH_STATUSES,
    TERMINAL_STATUSES,
)
from .delivery_time import DeliveryTimeEstimator, TierTiming, DEFAULT_TIER_TIMINGS, estimate_delivery_time
from .store import OrderStore, InMemoryOrderStore

__all__ = ["Order",
           "OrderStatus",
             "MembershipTier",
               "DeliveryEstimate",
               "PRE_DISPATCH_STATUSES",
               "TERMINAL_STATUSES",
               "DeliveryTimeEstimator",
               "TierTiming",
               "DEFAULT_TIER_TIMINGS",
               "estimate_delivery_time",
               "OrderStore",
               "InMemoryOrderStore",
               ]
