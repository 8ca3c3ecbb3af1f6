"""Text formatting shared by the sequencer and the assembler."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from ledgerview.models.ledger import MonthStats
from ledgerview.search.predicate import amount_text

TWO_PLACES = Decimal("0.01")


def format_date(value: date) -> str:
    """DD/MM/YYYY from the date's own calendar fields."""
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def two_decimals(amount: Decimal) -> str:
    rounded = amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = abs(rounded)
    return str(rounded)


def format_stats(stats: MonthStats) -> tuple[str, str]:
    """("+X.XX", "-Y.YY") labels of a month header."""
    return f"+{two_decimals(stats.amount_plus)}", two_decimals(stats.amount_minus)


def format_balance_amount(amount: Decimal, currency_symbol: str) -> str:
    return f"{amount_text(amount)} {currency_symbol}"
