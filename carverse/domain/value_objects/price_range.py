"""Price range value object."""

from dataclasses import dataclass
from typing import Optional

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def _group_indian(digits: str) -> str:
    """Group an integer digit string the Indian way (12,34,567)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_amount(amount: float, currency: str = "INR") -> str:
    """
    Format a money amount with currency symbol and Indian digit grouping.

    Args:
        amount: Amount in currency units
        currency: ISO currency code

    Returns:
        Formatted amount, e.g. "₹12,34,567"
    """
    sign = "-" if amount < 0 else ""
    rounded = round(abs(float(amount)), 2)
    whole = int(rounded)
    fraction = f"{rounded - whole:.2f}"[2:].rstrip("0")
    text = _group_indian(str(whole))
    if fraction:
        text = f"{text}.{fraction}"
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    return f"{sign}{symbol}{text}"


@dataclass(frozen=True)
class PriceRange:
    """Closed price interval [minimum, maximum]; either bound may be absent."""

    minimum: Optional[float] = None
    maximum: Optional[float] = None
    currency: str = "INR"

    def display(self) -> Optional[str]:
        """
        Render the range for display.

        Returns:
            Single amount when bounds are equal or only one exists,
            "a - b" when both exist and differ, None when neither exists
        """
        if self.minimum is not None and self.maximum is not None:
            if self.minimum == self.maximum:
                return format_amount(self.minimum, self.currency)
            return (
                f"{format_amount(self.minimum, self.currency)} - "
                f"{format_amount(self.maximum, self.currency)}"
            )
        if self.minimum is not None:
            return format_amount(self.minimum, self.currency)
        if self.maximum is not None:
            return format_amount(self.maximum, self.currency)
        return None
