# foodcart/domain/pricing.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from foodcart.domain.schemas import Cart, CartItem, CartSummary
from foodcart.utils.settings import (
    DELIVERY_FEE,
    FREE_DELIVERY_THRESHOLD,
    MONEY_UNIT,
    TAX_RATE,
)

ZERO = Decimal("0")


def item_count(items: Iterable[CartItem]) -> int:
    return sum(i.quantity for i in items)


def line_total(item: CartItem) -> Decimal:
    if item.total_price is not None:
        return item.total_price
    if item.food is None:
        return ZERO
    return item.food.price * item.quantity


def subtotal(items: Iterable[CartItem]) -> Decimal:
    return sum((line_total(i) for i in items), ZERO)


def delivery_fee(
    amount: Decimal,
    threshold: Decimal = FREE_DELIVERY_THRESHOLD,
    fee: Decimal = DELIVERY_FEE,
) -> Decimal:
    """Darmowa dostawa od progu, ponizej stala oplata."""
    return ZERO if amount >= threshold else fee


def amount_to_free_delivery(amount: Decimal, threshold: Decimal = FREE_DELIVERY_THRESHOLD) -> Decimal:
    return max(threshold - amount, ZERO)


def _smallest_unit(unit: str) -> Decimal:
    if unit == "cents":
        return Decimal("1")
    if unit == "decimal":
        return Decimal("0.01")
    raise ValueError(f"Unknown money unit: {unit}")


def summarize(
    cart: Cart,
    threshold: Decimal = FREE_DELIVERY_THRESHOLD,
    fee: Decimal = DELIVERY_FEE,
    tax_rate: Decimal = TAX_RATE,
    unit: str = MONEY_UNIT,
) -> CartSummary:
    """
    Podsumowanie koszyka do wyswietlenia.
    Tylko na ekran - prawdziwy total liczy backend przy zamowieniu.
    Pusty koszyk nie ma oplaty za dostawe.
    Podatek zaokraglony do najmniejszej jednostki (cent albo 0.01).
    """
    sub = subtotal(cart.items)
    delivery = delivery_fee(sub, threshold, fee) if cart.items else ZERO
    tax = (sub * tax_rate).quantize(_smallest_unit(unit), rounding=ROUND_HALF_UP)

    return CartSummary(
        item_count=item_count(cart.items),
        subtotal=sub,
        delivery_fee=delivery,
        tax=tax,
        total=sub + delivery + tax,
        amount_to_free_delivery=amount_to_free_delivery(sub, threshold),
    )


def format_amount(amount: Decimal, unit: str = MONEY_UNIT) -> str:
    if unit == "cents":
        value = Decimal(amount) / 100
    elif unit == "decimal":
        value = Decimal(amount)
    else:
        raise ValueError(f"Unknown money unit: {unit}")

    return f"${value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"
