# tests/test_validation.py

from datetime import date, timedelta

import pytest

from flora.schemas.order import OrderFormData
from flora.services.validation import (
    BUDGET_MESSAGE,
    DATE_INVALID_MESSAGE,
    DATE_PAST_MESSAGE,
    EMAIL_MESSAGE,
    ITEMS_MESSAGE,
    PHONE_MESSAGE,
    parse_budget,
    parse_calendar_date,
    validate_order_data,
)

TODAY = date(2026, 10, 19)


def test_valid_form_has_no_errors(make_form):
    form = make_form(pickupDeliveryDate=TODAY.isoformat())
    assert validate_order_data(form, today=TODAY) == []


@pytest.mark.parametrize("field, message", [
    ("firstName", "First name is required"),
    ("lastName", "Last name is required"),
    ("phone", "Phone number is required"),
    ("email", "Email is required"),
    ("pickupDeliveryDate", "Pickup/delivery date is required"),
    ("occasion", "Occasion is required"),
])
def test_missing_required_field(make_form, field, message):
    form = make_form(**{"pickupDeliveryDate": TODAY.isoformat(), field: "   "})
    errors = validate_order_data(form, today=TODAY)
    assert errors == [message]


def test_all_failures_reported_in_rule_order():
    form = OrderFormData(delivery_type="delivery")
    errors = validate_order_data(form, today=TODAY)
    assert errors == [
        "First name is required",
        "Last name is required",
        "Phone number is required",
        "Email is required",
        "Pickup/delivery date is required",
        "Occasion is required",
        BUDGET_MESSAGE,
        "Recipient name is required for delivery",
        "Recipient address is required for delivery",
        "Recipient phone is required for delivery",
        ITEMS_MESSAGE,
    ]


@pytest.mark.parametrize("budget", ["", "0", "-5", "abc", "nan", "inf", "1e400", "12abc", "1_000"])
def test_bad_budget(make_form, budget):
    form = make_form(pickupDeliveryDate=TODAY.isoformat(), budget=budget)
    assert validate_order_data(form, today=TODAY) == [BUDGET_MESSAGE]


@pytest.mark.parametrize("budget", ["0.01", "50", " 75.5 ", ".5", "1e2"])
def test_good_budget(make_form, budget):
    form = make_form(pickupDeliveryDate=TODAY.isoformat(), budget=budget)
    assert validate_order_data(form, today=TODAY) == []


def test_numeric_budget_from_json(make_form):
    form = make_form(pickupDeliveryDate=TODAY.isoformat(), budget=40)
    assert form.budget == "40"
    assert validate_order_data(form, today=TODAY) == []


@pytest.mark.parametrize("email", ["jane", "jane@x", "ja ne@x.com", "jane@@x.com", "@x.com"])
def test_bad_email(make_form, email):
    form = make_form(pickupDeliveryDate=TODAY.isoformat(), email=email)
    assert validate_order_data(form, today=TODAY) == [EMAIL_MESSAGE]


@pytest.mark.parametrize("phone", ["12345", "555-CALL-NOW", "555 123 456"])
def test_bad_phone(make_form, phone):
    form = make_form(pickupDeliveryDate=TODAY.isoformat(), phone=phone)
    assert validate_order_data(form, today=TODAY) == [PHONE_MESSAGE]


@pytest.mark.parametrize("phone", ["5551234567", "+1 (555) 123-4567", "(555) 123-4567"])
def test_good_phone(make_form, phone):
    form = make_form(pickupDeliveryDate=TODAY.isoformat(), phone=phone)
    assert validate_order_data(form, today=TODAY) == []


def test_today_is_accepted_and_yesterday_rejected(make_form):
    assert validate_order_data(make_form(pickupDeliveryDate=TODAY.isoformat()), today=TODAY) == []

    yesterday = (TODAY - timedelta(days=1)).isoformat()
    assert validate_order_data(make_form(pickupDeliveryDate=yesterday), today=TODAY) == [DATE_PAST_MESSAGE]


def test_unparseable_date(make_form):
    form = make_form(pickupDeliveryDate="next tuesday")
    assert validate_order_data(form, today=TODAY) == [DATE_INVALID_MESSAGE]


def test_default_today_is_local_date(make_form):
    form = make_form(pickupDeliveryDate=date.today().isoformat())
    assert validate_order_data(form) == []


def test_recipient_fields_only_for_delivery(make_form):
    pickup = make_form(pickupDeliveryDate=TODAY.isoformat(), deliveryType="pickup")
    assert validate_order_data(pickup, today=TODAY) == []

    delivery = make_form(
        pickupDeliveryDate=TODAY.isoformat(),
        deliveryType="delivery",
        recipientName="John",
        recipientAddress="",
        recipientPhone="555-000-1111",
    )
    assert validate_order_data(delivery, today=TODAY) == ["Recipient address is required for delivery"]


def test_at_least_one_item(make_form):
    form = make_form(
        pickupDeliveryDate=TODAY.isoformat(),
        freshArrangementVase=" ",
        cutFlowersWrapped="",
        dishGardenPlanters=None,
    )
    assert validate_order_data(form, today=TODAY) == [ITEMS_MESSAGE]

    form = make_form(pickupDeliveryDate=TODAY.isoformat(), freshArrangementVase="", dishGardenPlanters="succulents")
    assert validate_order_data(form, today=TODAY) == []


def test_parse_helpers():
    assert parse_budget("50.00") == 50.0
    assert parse_budget(None) is None
    assert parse_calendar_date("2026-10-19") == TODAY
    assert parse_calendar_date("2026-10-19T15:30:00") == TODAY
    assert parse_calendar_date("") is None
    assert parse_calendar_date("19/10/2026") is None


@pytest.mark.parametrize("email", [" jane@x.com", "jane@x.com ", " jane@x.com \n"])
def test_padded_email_rejected(make_form, email):
    form = make_form(pickupDeliveryDate=TODAY.isoformat(), email=email)
    assert validate_order_data(form, today=TODAY) == [EMAIL_MESSAGE]


def test_padded_phone_rejected(make_form):
    form = make_form(pickupDeliveryDate=TODAY.isoformat(), phone=" +15551234567")
    assert validate_order_data(form, today=TODAY) == [PHONE_MESSAGE]


@pytest.mark.parametrize("value", [
    "2026-10-19",
    " 2026-10-19 ",
    "2026-10-19T00:00:00Z",
    "2026-10-19T23:59:59.500+03:00",
    "2026-10-19 08:15",
])
def test_accepted_date_forms(value):
    assert parse_calendar_date(value) == TODAY


@pytest.mark.parametrize("value", ["20261019", "2026-W42-1", "2026-293", "2026-13-01", "2026-10-19T25"])
def test_rejected_date_forms(value):
    assert parse_calendar_date(value) is None
