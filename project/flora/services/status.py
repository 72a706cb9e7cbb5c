# flora/services/status.py

from datetime import datetime, timezone
from typing import Optional

from flora.errors import InvalidStatusTransition
from flora.schemas.order import Order, OrderStatus

# Допустимые переходы статуса, completed и cancelled конечные
TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(status for status, targets in TRANSITIONS.items() if not targets)


def can_transition(current: OrderStatus | str, target: OrderStatus | str) -> bool:
    return OrderStatus(target) in TRANSITIONS[OrderStatus(current)]


def transition_order(order: Order, target: OrderStatus | str, now: Optional[datetime] = None) -> Order:
    """
    Новый экземпляр заказа в статусе target, исходный заказ не меняется.
    Бросает InvalidStatusTransition, если переход не разрешён.
    """
    target = OrderStatus(target)
    if not can_transition(order.status, target):
        raise InvalidStatusTransition(order.status.value, target.value)

    return order.model_copy(update={
        "status": target,
        "updated_at": now or datetime.now(timezone.utc),
    })
