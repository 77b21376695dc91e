import logging

from hubs.models import HoldDecision
from orders.models import Order, OrderStatus, PRE_DISPATCH_STATUSES, TERMINAL_STATUSES

logger = logging.getLogger(__name__)


class OrderStateException(Exception):
    """Raised when an invalid state transition is attempted."""
    pass


def transition_order_to_confirmed(order: Order) -> Order:
    if order.status != OrderStatus.PENDING:
        raise OrderStateException(f"Cannot confirm order {order.id} from {order.status.value}")

    order.status = OrderStatus.CONFIRMED
    return order


def transition_order_to_packed(order: Order) -> Order:
    if order.status != OrderStatus.CONFIRMED:
        raise OrderStateException(f"Cannot pack order {order.id} from {order.status.value}")

    order.status = OrderStatus.PACKED
    return order


def apply_hold_decision(order: Order, decision: HoldDecision) -> Order:
    """
    Writes a HoldDecision back onto the order.

    - pre-dispatch + should_hold  -> HOLDING (remembering where it was held from)
    - HOLDING + should_hold       -> stays HOLDING, reason/distance refreshed
    - HOLDING + not should_hold   -> back to the state it was held from
    - anything past dispatch      -> status untouched, only the distance is recorded
    """
    order.hub_distance_km = decision.distance_km

    if order.status == OrderStatus.HOLDING:
        if decision.should_hold:
            order.holding_reason = decision.reason
            return order

        # hub reassignment made the order viable again
        order.status = order.held_from or OrderStatus.CONFIRMED
        order.held_from = None
        order.holding_reason = None
        logger.info(f"Order {order.id} released from holding back to {order.status.value}")
        return order

    if order.status not in PRE_DISPATCH_STATUSES:
        if decision.should_hold:
            logger.warning(
                f"Order {order.id} is {order.status.value}; ignoring hold request ({decision.reason})"
            )
        return order

    if decision.should_hold:
        order.held_from = order.status
        order.status = OrderStatus.HOLDING
        order.holding_reason = decision.reason
        logger.info(f"Order {order.id} moved to holding: {decision.reason}")
    else:
        order.holding_reason = None

    return order


def transition_order_to_out_for_delivery(order: Order) -> Order:
    """
    Dispatch. Only confirmed/packed orders can leave the hub.
    """
    if order.status not in (OrderStatus.CONFIRMED, OrderStatus.PACKED):
        raise OrderStateException(f"Cannot dispatch order {order.id} from {order.status.value}")

    order.status = OrderStatus.OUT_FOR_DELIVERY
    return order


def transition_order_to_delivered(order: Order, reached: bool) -> Order:
    """
    OTP confirmation. The partner must have reached the customer first.
    """
    if order.status != OrderStatus.OUT_FOR_DELIVERY:
        raise OrderStateException(f"Cannot deliver order {order.id} from {order.status.value}")

    if not reached:
        raise OrderStateException(f"Order {order.id} cannot be delivered before the partner has arrived")

    order.status = OrderStatus.DELIVERED
    return order


def transition_order_to_cancelled(order: Order) -> Order:
    if order.status in TERMINAL_STATUSES:
        raise OrderStateException(f"Cannot cancel order {order.id} from {order.status.value}")

    order.status = OrderStatus.CANCELLED
    order.held_from = None
    return order
