from datetime import date, datetime
from decimal import Decimal

from acme_dashboard.models import Revenue
from acme_dashboard.utils.formatting import (
    cents_to_dollars,
    format_currency,
    format_date,
    generate_y_axis,
    status_badge_class,
)


def test_format_currency():
    assert format_currency(1999) == "$19.99"
    assert format_currency(123456) == "$1,234.56"
    assert format_currency(0) == "$0.00"
    assert format_currency(None) == "$0.00"
    assert format_currency(-500) == "-$5.00"


def test_cents_to_dollars_round_trip():
    assert cents_to_dollars(1999) == Decimal("19.99")
    assert cents_to_dollars(500) == Decimal("5.00")


def test_format_date():
    assert format_date(date(2026, 10, 19)) == "Oct 19, 2026"
    assert format_date("2023-06-05") == "Jun 5, 2023"
    assert format_date(datetime(2024, 3, 9, 14, 30)) == "Mar 9, 2024"
    assert format_date(None) == ""


def test_status_badge_class():
    assert status_badge_class("paid") == "bg-success"
    assert status_badge_class("pending") == "bg-secondary"


def test_generate_y_axis_rounds_up_to_thousands():
    revenue = [Revenue(month="Jan", revenue=2000), Revenue(month="Dec", revenue=4800)]
    labels, top = generate_y_axis(revenue)
    assert top == 5000
    assert labels == ["$5K", "$4K", "$3K", "$2K", "$1K", "$0K"]


def test_generate_y_axis_without_revenue():
    assert generate_y_axis([]) == (["$0K"], 0)
