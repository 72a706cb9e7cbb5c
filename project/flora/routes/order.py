# flora/routes/order.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from flora.errors import MalformedInputError
from flora.schemas.order import (
    DeliveryFeeResponse,
    DeliveryType,
    ErrorResponse,
    OrderCheckResponse,
    OrderCreatedResponse,
    OrderFormData,
    OrderListResponse,
    ValidationFailedResponse,
)
from flora.services.fees import calculate_delivery_fee
from flora.services.order import check_order_service, create_order_service, read_orders_service
from flora.services.store import OrderStore
from flora.utils.log import Log

router = APIRouter()

UNKNOWN_ERROR = "Unknown error occurred"


# ────────────── Зависимости ──────────────
def get_order_store(request: Request) -> OrderStore:
    return request.app.state.store


def get_log(request: Request) -> Log:
    return request.app.state.log


async def parse_order_form(request: Request) -> OrderFormData:
    """Разбирает тело запроса в форму заказа, иначе MalformedInputError."""
    try:
        payload = await request.json()
    except ValueError as e:
        raise MalformedInputError(f"Request body is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedInputError("Request body must be a JSON object")

    try:
        return OrderFormData.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
        raise MalformedInputError(f"Invalid order form fields: {fields}") from e


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=error, message=message or UNKNOWN_ERROR)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


# ────────────── CREATE ──────────────
@router.post(
    "",
    response_model=OrderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an order",
    response_description="Order number and delivery fee of the created order",
    responses={
        201: {"description": "Order created"},
        400: {"description": "Validation failed or malformed request"},
        500: {"description": "Order could not be saved"},
    },
)
async def create_order(
    request: Request,
    store: OrderStore = Depends(get_order_store),
    log: Log = Depends(get_log),
):
    try:
        form = await parse_order_form(request)
    except MalformedInputError as e:
        await log.log_warning("order", f"Некорректный запрос на создание заказа: {str(e)}")
        return error_response(status.HTTP_400_BAD_REQUEST, "Malformed request", str(e))

    try:
        submission = await create_order_service(form, store, log)
    except Exception as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create order", str(e))

    if not submission.accepted:
        body = ValidationFailedResponse(details=submission.errors)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(by_alias=True))

    return OrderCreatedResponse(
        order_id=submission.order.order_number,
        delivery_fee=submission.order.delivery_fee,
    )


# ────────────── READ ALL ──────────────
@router.get(
    "",
    response_model=OrderListResponse,
    status_code=status.HTTP_200_OK,
    summary="List orders",
    response_description="Orders, newest first",
    responses={
        200: {"description": "Orders loaded"},
        500: {"description": "Orders could not be loaded"},
    },
)
async def read_orders(
    customer_id: Optional[str] = Query(None, alias="customerId"),
    store: OrderStore = Depends(get_order_store),
    log: Log = Depends(get_log),
):
    try:
        # пустой customerId равен его отсутствию
        orders = await read_orders_service(store, log, customer_id or None)
    except Exception as e:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch orders", str(e))

    return OrderListResponse(orders=orders, count=len(orders))


# ────────────── CHECK ──────────────
@router.post(
    "/validate",
    response_model=OrderCheckResponse,
    status_code=status.HTTP_200_OK,
    summary="Check an order form before submitting",
    responses={
        200: {"description": "Check result with delivery fee and estimated total"},
        400: {"description": "Malformed request"},
    },
)
async def check_order(request: Request, log: Log = Depends(get_log)):
    try:
        form = await parse_order_form(request)
    except MalformedInputError as e:
        await log.log_warning("order", f"Некорректный запрос на проверку формы: {str(e)}")
        return error_response(status.HTTP_400_BAD_REQUEST, "Malformed request", str(e))

    errors, fee, total = check_order_service(form)
    return OrderCheckResponse(valid=not errors, errors=errors, delivery_fee=fee, estimated_total=total)


# ────────────── DELIVERY FEE ──────────────
@router.get(
    "/delivery-fee",
    response_model=DeliveryFeeResponse,
    status_code=status.HTTP_200_OK,
    summary="Delivery fee for a delivery type and address",
)
async def read_delivery_fee(
    delivery_type: DeliveryType = Query(..., alias="deliveryType"),
    address: Optional[str] = Query(None),
):
    return DeliveryFeeResponse(
        delivery_type=delivery_type,
        delivery_fee=calculate_delivery_fee(delivery_type, address),
    )
