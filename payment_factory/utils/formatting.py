"""
Display formatting helpers
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

# en-US display symbols; unknown codes are rendered as "<CODE> 1,234.56"
CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "MXN": "MX$",
    "BRL": "R$",
    "HKD": "HK$",
    "CNY": "CN¥",
    "INR": "₹",
    "PHP": "₱",
    "NGN": "NGN ",
    "COP": "COP ",
    "USDC": "USDC ",
}


def format_amount(amount: Union[Decimal, float, int, str], currency: str) -> str:
    """Format an amount with two decimals, thousands separators and a currency symbol."""
    try:
        value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Invalid amount: {amount!r}") from exc

    code = (currency or "").strip().upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"
