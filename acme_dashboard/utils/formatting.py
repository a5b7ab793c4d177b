"""Display helpers shared by templates and the dashboard data layer."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

CENTS = Decimal("0.01")


def cents_to_dollars(cents: Optional[int]) -> Decimal:
    """Convert stored cents back to a dollar amount."""
    return (Decimal(cents or 0) / 100).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(cents: Optional[int]) -> str:
    """Render a cents value as US dollars, e.g. ``$1,234.56``."""
    dollars = cents_to_dollars(cents)
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def format_date(value: Union[date, datetime, str, None]) -> str:
    """Render a date like ``Oct 19, 2026``."""
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return f"{value:%b} {value.day}, {value:%Y}"


def status_badge_class(status: str) -> str:
    """Bootstrap badge class for an invoice status."""
    return {"paid": "bg-success", "pending": "bg-secondary"}.get(status, "bg-light")


def generate_y_axis(revenue) -> tuple[list[str], int]:
    """Return y-axis labels and the top value for the revenue chart.

    The top of the axis is the highest monthly revenue rounded up to the
    next thousand.
    """
    highest = max((r.revenue for r in revenue), default=0)
    top_label = -(-highest // 1000) * 1000
    labels = [f"${i // 1000}K" for i in range(top_label, -1, -1000)]
    return labels, top_label
