# flora/services/order.py

import random
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from flora.schemas.order import (
    Customer,
    DeliveryType,
    Order,
    OrderFormData,
    OrderItems,
    OrderStatus,
    Recipient,
)
from flora.services.fees import calculate_delivery_fee
from flora.services.store import OrderStore
from flora.services.validation import parse_budget, parse_calendar_date, validate_order_data
from flora.utils.log import Log

ORDER_NUMBER_PREFIX = "SF"
ORDER_NUMBER_RANDOM_RANGE = 1000


@dataclass
class OrderSubmission:
    """Итог оформления: либо ошибки формы, либо сохранённый заказ."""
    errors: list[str] = field(default_factory=list)
    order: Optional[Order] = None
    record_id: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return not self.errors


# ────────────── Сборка заказа ──────────────
def generate_order_number(now_ms: Optional[int] = None, rand: Optional[int] = None) -> str:
    """
    Номер заказа SF-<миллисекунды>-<0..999>.
    Уникальность вероятностная: совпадение возможно только в одну миллисекунду.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    if rand is None:
        rand = random.randrange(ORDER_NUMBER_RANDOM_RANGE)
    return f"{ORDER_NUMBER_PREFIX}-{now_ms}-{rand}"


def build_order(
    form: OrderFormData,
    delivery_fee: float,
    *,
    order_number: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Order:
    """
    Собирает запись заказа из проверенной формы и рассчитанной доставки.
    Форма должна пройти validate_order_data до вызова.
    """
    budget = parse_budget(form.budget)
    if budget is None:
        raise ValueError(f"Budget is not a number: {form.budget!r}")

    pickup_delivery_date = parse_calendar_date(form.pickup_delivery_date)
    if pickup_delivery_date is None:
        raise ValueError(f"Pickup/delivery date is not a date: {form.pickup_delivery_date!r}")

    now = now or datetime.now(timezone.utc)
    is_delivery = form.delivery_type is DeliveryType.DELIVERY

    recipient = None
    if is_delivery:
        recipient = Recipient(
            name=form.recipient_name,
            address=form.recipient_address,
            phone=form.recipient_phone,
        )

    return Order(
        order_number=order_number or generate_order_number(),
        order_date=parse_calendar_date(form.order_date),
        pickup_delivery_date=pickup_delivery_date,
        customer=Customer(
            first_name=form.first_name,
            last_name=form.last_name,
            phone=form.phone,
            email=form.email,
        ),
        customer_id=None,
        is_guest_order=True,
        items=OrderItems(
            fresh_arrangement_vase=form.fresh_arrangement_vase,
            cut_flowers_wrapped=form.cut_flowers_wrapped,
            dish_garden_planters=form.dish_garden_planters,
        ),
        occasion=form.occasion,
        budget=budget,
        special_requests=form.special_requests,
        delivery_type=form.delivery_type,
        delivery_time=form.delivery_time,
        recipient=recipient,
        delivery_fee=delivery_fee,
        card_message=form.card_message,
        payment_type=form.payment_type,
        status=OrderStatus.PENDING,
        total_amount=budget + delivery_fee,
        created_at=now,
        updated_at=now,
    )


def form_delivery_fee(form: OrderFormData) -> float:
    return calculate_delivery_fee(form.delivery_type, form.recipient_address)


# ────────────── Сервисы ──────────────
async def create_order_service(form: OrderFormData, store: OrderStore, log: Log) -> OrderSubmission:
    """
    Оформление заказа: проверка, расчёт доставки, сборка и запись в хранилище.
    При ошибках формы хранилище не вызывается. Ошибка записи пробрасывается.
    """
    errors = validate_order_data(form)
    if errors:
        await log.log_warning("order", "Форма заказа не прошла проверку", {"errors": errors})
        return OrderSubmission(errors=errors)

    order = build_order(form, form_delivery_fee(form))

    try:
        record_id = await store.put(order)
    except Exception as e:
        await log.log_error("order", f"Ошибка записи заказа: {str(e)}", {"order_number": order.order_number})
        raise

    await log.log_info("order", "Заказ создан", {
        "id": record_id,
        "order_number": order.order_number,
        "delivery_type": order.delivery_type,
        "total_amount": order.total_amount,
    })
    return OrderSubmission(order=order, record_id=record_id)


async def read_orders_service(store: OrderStore, log: Log, customer_id: Optional[str] = None) -> list[Order]:
    """
    Получение списка заказов, при customer_id только заказы этого клиента.
    """
    try:
        orders = await store.query(customer_id)
    except Exception as e:
        await log.log_error("order", f"Ошибка чтения заказов: {str(e)}", {"customer_id": customer_id})
        raise

    await log.log_info("order", f"{len(orders)} заказов загружено", {"customer_id": customer_id})
    return orders


def check_order_service(form: OrderFormData) -> tuple[list[str], float, Optional[float]]:
    """
    Предварительная проверка формы до отправки: ошибки, доставка и итог.
    Итог считается, только если бюджет - положительное число.
    """
    errors = validate_order_data(form)
    fee = form_delivery_fee(form)
    budget = parse_budget(form.budget)
    total = budget + fee if budget is not None and budget > 0 else None
    return errors, fee, total
