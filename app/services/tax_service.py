"""
VAT calculation and money helpers.

All arithmetic uses ``Decimal`` with half-up rounding to two places, in a
context wide enough to keep every digit of the amounts involved.
"""

import re
from decimal import ROUND_HALF_UP, Context, Decimal, localcontext

VAT_RATE = Decimal("0.15")
CENTS = Decimal("0.01")
ZERO = Decimal("0")

# Plain decimal text only: no exponents, NaN or Infinity.
_AMOUNT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")
_NON_PRICE = re.compile(r"[^0-9.]")
_NON_DIGIT = re.compile(r"[^0-9]")
_NON_PHONE = re.compile(r"[^0-9+\-\s]")


def money_context(*values: Decimal):
    """Local decimal context with enough precision for *values* and their cents."""
    magnitude = max((abs(value.adjusted()) for value in values), default=0)
    return localcontext(Context(prec=max(28, magnitude + 8)))


def round2(value: Decimal) -> Decimal:
    with money_context(value):
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_amount(text) -> Decimal:
    """Parse a money string, treating anything unparseable as zero."""
    text = str(text).strip()
    if not _AMOUNT.fullmatch(text):
        return ZERO
    return Decimal(text)


def sanitize_price(text: str) -> str:
    """Keep digits and the first decimal point; drop everything else."""
    cleaned = _NON_PRICE.sub("", text or "")
    head, dot, tail = cleaned.partition(".")
    return head + dot + tail.replace(".", "")


def sanitize_digits(text: str) -> str:
    return _NON_DIGIT.sub("", text or "")


def sanitize_phone(text: str) -> str:
    return _NON_PHONE.sub("", text or "")


def calculate_vat(selling_price: str, rate: Decimal = VAT_RATE) -> tuple[str, str]:
    """Return ``(vat_amount, total_price)`` as two-decimal strings.

    Empty or non-numeric prices count as zero.
    """
    price = parse_amount(sanitize_price(selling_price))
    with money_context(price, rate):
        vat = round2(price * rate)
        total = round2(price + vat)
    return f"{vat:.2f}", f"{total:.2f}"


def adjust_price(selling_price: str, delta: Decimal) -> str:
    """Shift a price by *delta*; results at or below zero become ``0.00``."""
    price = parse_amount(sanitize_price(selling_price))
    with money_context(price, delta):
        adjusted = price + delta
    if adjusted <= 0:
        return "0.00"
    return f"{round2(adjusted):.2f}"


def format_currency(amount) -> str:
    """Format like the en-ZA locale: ``120 000,00``."""
    value = round2(amount if isinstance(amount, Decimal) else parse_amount(amount))
    return f"{value:,.2f}".replace(",", " ").replace(".", ",")
