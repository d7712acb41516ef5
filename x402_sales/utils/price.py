"""Price string parsing."""
from decimal import Decimal, InvalidOperation

CURRENCY_PREFIX = "$"


def parse_price(price: str) -> Decimal:
    """
    Parse a currency-prefixed price such as ``"$0.001"``.

    Args:
        price: Price string

    Returns:
        Decimal amount without the currency marker

    Raises:
        ValueError: If the prefix is missing or the amount is not a finite number
    """
    if not isinstance(price, str) or not price.startswith(CURRENCY_PREFIX):
        raise ValueError("price must start with $")

    raw = price[len(CURRENCY_PREFIX):].strip()
    try:
        amount = Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError("price must contain a valid number") from exc

    if not amount.is_finite():
        raise ValueError("price must contain a valid number")

    return amount

