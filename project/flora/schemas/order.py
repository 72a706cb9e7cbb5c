# flora/schemas/order.py

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class DeliveryType(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class OrderStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# ────────────── Базовая схема (camelCase в JSON) ──────────────
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ────────────── Форма заказа (вход) ──────────────
class OrderFormData(CamelModel):
    """
    Данные формы заказа в том виде, в котором их прислал клиент.
    Все текстовые поля необязательные: отсутствие поля равно пустой строке,
    проверку заполненности выполняет validate_order_data.
    """
    # Клиент
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    email: str = ""

    # Заказ
    order_date: str = ""
    pickup_delivery_date: str = ""
    fresh_arrangement_vase: str = ""
    cut_flowers_wrapped: str = ""
    dish_garden_planters: str = ""
    occasion: str = ""
    budget: str = ""
    special_requests: str = ""

    # Доставка
    delivery_type: DeliveryType = DeliveryType.PICKUP
    delivery_time: str = ""

    # Получатель (только для доставки)
    recipient_name: str = ""
    recipient_address: str = ""
    recipient_phone: str = ""

    # Дополнительно
    card_message: str = ""
    payment_type: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def coerce_form_value(cls, value, info):
        if info.field_name == "delivery_type":
            return DeliveryType.PICKUP if value is None else value
        if value is None:
            return ""
        # бюджет из JSON может прийти числом
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


# ────────────── Вложенные записи заказа ──────────────
class Customer(CamelModel):
    first_name: str
    last_name: str
    phone: str
    email: str


class OrderItems(CamelModel):
    fresh_arrangement_vase: str = ""
    cut_flowers_wrapped: str = ""
    dish_garden_planters: str = ""


class Recipient(CamelModel):
    name: str = ""
    address: str = ""
    phone: str = ""


# ────────────── Заказ (хранимая запись) ──────────────
class Order(CamelModel):
    id: Optional[str] = None
    order_number: str
    order_date: Optional[date] = None
    pickup_delivery_date: date
    customer: Customer
    customer_id: Optional[str] = None
    is_guest_order: bool = True
    items: OrderItems
    occasion: str
    budget: float
    special_requests: str = ""
    delivery_type: DeliveryType
    delivery_time: str = ""
    recipient: Optional[Recipient] = None
    delivery_fee: float
    card_message: str = ""
    payment_type: str = ""
    status: OrderStatus = OrderStatus.PENDING
    total_amount: float
    created_at: datetime
    updated_at: datetime


# ────────────── Схемы ответов ──────────────
class OrderCreatedResponse(CamelModel):
    success: bool = True
    order_id: str
    delivery_fee: float
    message: str = "Order created successfully"


class ValidationFailedResponse(CamelModel):
    success: bool = False
    error: str = "Validation failed"
    details: list[str]


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    message: str


class OrderListResponse(CamelModel):
    success: bool = True
    orders: list[Order]
    count: int


class OrderCheckResponse(CamelModel):
    valid: bool
    errors: list[str]
    delivery_fee: float
    estimated_total: Optional[float] = None


class DeliveryFeeResponse(CamelModel):
    delivery_type: DeliveryType
    delivery_fee: float
