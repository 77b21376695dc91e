#Expose the order lifecycle pieces:
#Hold decisions written back onto orders (holding in / out)
#Dispatch, delivery and cancellation transitions

from .state_machines.order_state import (
    OrderStateException,
    apply_hold_decision,
    transition_order_to_confirmed,
    transition_order_to_packed,
    transition_order_to_out_for_delivery,
    transition_order_to_delivered,
    transition_order_to_cancelled,
)

__all__ = [
    "OrderStateException",
    "apply_hold_decision",
    "transition_order_to_confirmed",
    "transition_order_to_packed",
    "transition_order_to_out_for_delivery",
    "transition_order_to_delivered",
    "transition_order_to_cancelled",
]
