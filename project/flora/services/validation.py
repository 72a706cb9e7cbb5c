# flora/services/validation.py

"""
Проверка формы заказа.

Единый набор правил для оформления заказа и для предварительной проверки
формы. Функции чистые: ничего не пишут и не бросают исключений, результат
проверки - список сообщений в порядке правил (пустой список - форма верна).
"""

import math
import re
from datetime import date
from typing import Optional

from flora.schemas.order import DeliveryType, OrderFormData

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[\s\-()]*([0-9][\s\-()]*){10,}$")
NUMBER_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
# YYYY-MM-DD, допускается время и смещение (Z или ±HH:MM) после даты
DATE_PATTERN = re.compile(
    r"^(\d{4}-\d{2}-\d{2})"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)

# Обязательные поля в порядке объявления формы
REQUIRED_FIELDS = (
    ("first_name", "First name is required"),
    ("last_name", "Last name is required"),
    ("phone", "Phone number is required"),
    ("email", "Email is required"),
    ("pickup_delivery_date", "Pickup/delivery date is required"),
    ("occasion", "Occasion is required"),
)

RECIPIENT_FIELDS = (
    ("recipient_name", "Recipient name is required for delivery"),
    ("recipient_address", "Recipient address is required for delivery"),
    ("recipient_phone", "Recipient phone is required for delivery"),
)

ITEM_FIELDS = ("fresh_arrangement_vase", "cut_flowers_wrapped", "dish_garden_planters")

BUDGET_MESSAGE = "Budget must be greater than 0"
EMAIL_MESSAGE = "Please enter a valid email address"
PHONE_MESSAGE = "Please enter a valid phone number"
DATE_INVALID_MESSAGE = "Please enter a valid pickup/delivery date"
DATE_PAST_MESSAGE = "Pickup/delivery date must be today or in the future"
ITEMS_MESSAGE = "Please specify at least one item for your order"


def parse_budget(value: Optional[str]) -> Optional[float]:
    """Число из строки бюджета или None, если это не конечное число."""
    if not value or not NUMBER_PATTERN.match(value):
        return None
    amount = float(value)
    if not math.isfinite(amount):
        return None
    return amount


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """
    Календарная дата из строки формы.
    Принимает YYYY-MM-DD и ISO datetime (берётся только дата),
    другие ISO-формы (20261019, 2026-W42-1) не принимаются.
    """
    if not value:
        return None
    match = DATE_PATTERN.match(value.strip())
    if match is None:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def validate_order_data(form: OrderFormData, today: Optional[date] = None) -> list[str]:
    """
    Проверяет форму заказа по всем правилам сразу, без остановки на первой ошибке.

    :param form: данные формы
    :param today: текущая дата (по умолчанию локальная), сегодняшняя дата допустима
    :return: список сообщений об ошибках
    """
    errors: list[str] = []
    today = today or date.today()

    # Обязательные поля
    for field, message in REQUIRED_FIELDS:
        if not getattr(form, field).strip():
            errors.append(message)

    # Бюджет
    budget = parse_budget(form.budget)
    if budget is None or budget <= 0:
        errors.append(BUDGET_MESSAGE)

    # Email: формат проверяется по значению как есть, без обрезки пробелов
    if form.email.strip() and not EMAIL_PATTERN.fullmatch(form.email):
        errors.append(EMAIL_MESSAGE)

    # Телефон
    if form.phone.strip() and not PHONE_PATTERN.fullmatch(form.phone):
        errors.append(PHONE_MESSAGE)

    # Дата получения
    if form.pickup_delivery_date.strip():
        selected = parse_calendar_date(form.pickup_delivery_date)
        if selected is None:
            errors.append(DATE_INVALID_MESSAGE)
        elif selected < today:
            errors.append(DATE_PAST_MESSAGE)

    # Получатель при доставке
    if form.delivery_type is DeliveryType.DELIVERY:
        for field, message in RECIPIENT_FIELDS:
            if not getattr(form, field).strip():
                errors.append(message)

    # Хотя бы одна позиция
    if not any(getattr(form, field).strip() for field in ITEM_FIELDS):
        errors.append(ITEMS_MESSAGE)

    return errors
