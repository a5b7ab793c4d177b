from datetime import date
from decimal import Decimal

from acme_dashboard import db
from acme_dashboard.models import Revenue
from acme_dashboard.services.dashboard_data import (
    ITEMS_PER_PAGE,
    fetch_card_data,
    fetch_customers,
    fetch_filtered_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    fetch_revenue,
)


def test_card_data_totals(app, make_invoice):
    make_invoice(customer_id="c1", amount=1999, status="paid")
    make_invoice(customer_id="c1", amount=1, status="paid")
    make_invoice(customer_id="c2", amount=150000, status="pending")

    cards = fetch_card_data()

    assert cards == {
        "number_of_customers": 2,
        "number_of_invoices": 3,
        "total_paid_invoices": "$20.00",
        "total_pending_invoices": "$1,500.00",
    }


def test_card_data_with_empty_store(app):
    cards = fetch_card_data()
    assert cards["number_of_invoices"] == 0
    assert cards["total_paid_invoices"] == "$0.00"


def test_latest_invoices_are_newest_first(app, make_invoice):
    for day in range(1, 8):
        make_invoice(amount=day * 100, when=date(2024, 3, day))

    latest = fetch_latest_invoices()

    assert len(latest) == 5
    assert [row["amount"] for row in latest] == [
        "$7.00", "$6.00", "$5.00", "$4.00", "$3.00"
    ]
    assert latest[0]["name"] == "Lee Robinson"


def test_filtered_invoices_match_customer_and_status(app, make_invoice):
    make_invoice(customer_id="c1", status="paid")
    make_invoice(customer_id="c2", status="pending")

    assert [r["name"] for r in fetch_filtered_invoices("amy", 1)] == ["Amy Burns"]
    assert [r["email"] for r in fetch_filtered_invoices("ROBINSON.com", 1)] == [
        "lee@robinson.com"
    ]
    assert [r["status"] for r in fetch_filtered_invoices("paid", 1)] == ["paid"]
    assert len(fetch_filtered_invoices("", 1)) == 2
    assert fetch_filtered_invoices("nobody", 1) == []


def test_filtered_invoices_match_amount_and_date(app, make_invoice):
    make_invoice(amount=54246, when=date(2023, 7, 16))
    make_invoice(amount=666, when=date(2023, 6, 27))

    assert [r["amount"] for r in fetch_filtered_invoices("5424", 1)] == [54246]
    assert [r["date"] for r in fetch_filtered_invoices("2023-06", 1)] == [
        date(2023, 6, 27)
    ]


def test_filtered_invoices_paginate(app, make_invoice):
    for day in range(1, ITEMS_PER_PAGE + 3):
        make_invoice(when=date(2024, 5, day))

    first = fetch_filtered_invoices("", 1)
    second = fetch_filtered_invoices("", 2)

    assert len(first) == ITEMS_PER_PAGE
    assert len(second) == 2
    assert first[0]["date"] == date(2024, 5, ITEMS_PER_PAGE + 2)
    assert not {r["id"] for r in first} & {r["id"] for r in second}
    assert fetch_invoices_pages("") == 2
    assert fetch_invoices_pages("amy") == 0


def test_invoice_by_id_returns_dollars(app, make_invoice):
    invoice_id = make_invoice(amount=1999, status="pending")
    invoice = fetch_invoice_by_id(invoice_id)
    assert invoice["amount"] == Decimal("19.99")
    assert invoice["customer_id"] == "c1"
    assert fetch_invoice_by_id("missing") is None


def test_customers_sorted_by_name(app, customers):
    assert [c.name for c in fetch_customers()] == ["Amy Burns", "Lee Robinson"]


def test_filtered_customers_include_totals(app, make_invoice):
    make_invoice(customer_id="c1", amount=1000, status="paid")
    make_invoice(customer_id="c1", amount=250, status="pending")

    rows = {row["name"]: row for row in fetch_filtered_customers()}

    assert rows["Lee Robinson"]["total_invoices"] == 2
    assert rows["Lee Robinson"]["total_paid"] == "$10.00"
    assert rows["Lee Robinson"]["total_pending"] == "$2.50"
    assert rows["Amy Burns"]["total_invoices"] == 0
    assert rows["Amy Burns"]["total_paid"] == "$0.00"
    assert [r["name"] for r in fetch_filtered_customers("burns")] == ["Amy Burns"]


def test_revenue_in_calendar_order(app):
    db.session.add_all(
        [Revenue(month="Mar", revenue=3), Revenue(month="Jan", revenue=1), Revenue(month="Feb", revenue=2)]
    )
    db.session.commit()
    assert [r.month for r in fetch_revenue()] == ["Jan", "Feb", "Mar"]
