# flora/services/fees.py

from typing import Optional

from flora.schemas.order import DeliveryType

PICKUP_FEE = 0.0
DEFAULT_DELIVERY_FEE = 15.0     # адрес не указан
STANDARD_DELIVERY_FEE = 15.0    # адрес не попал ни в одну зону
CITY_CENTER_FEE = 10.0
SUBURBS_FEE = 20.0

# Зоны проверяются по порядку, первая совпавшая выигрывает
DELIVERY_ZONES = (
    (("downtown", "city center"), CITY_CENTER_FEE),
    (("suburbs",), SUBURBS_FEE),
)


def calculate_delivery_fee(delivery_type: DeliveryType | str, address: Optional[str] = None) -> float:
    """
    Стоимость доставки по типу получения и адресу получателя.
    Самовывоз бесплатный, для доставки зона ищется подстрокой без учёта регистра.
    """
    if DeliveryType(delivery_type) is DeliveryType.PICKUP:
        return PICKUP_FEE

    if not address or not address.strip():
        return DEFAULT_DELIVERY_FEE

    lower_address = address.lower()
    for keywords, fee in DELIVERY_ZONES:
        if any(keyword in lower_address for keyword in keywords):
            return fee

    return STANDARD_DELIVERY_FEE
