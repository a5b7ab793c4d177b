"""Queries backing the dashboard overview, invoice list and customer pages."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from sqlalchemy import String, case, cast, func, or_

from acme_dashboard import db
from acme_dashboard.models import Customer, Invoice, Revenue
from acme_dashboard.utils.formatting import cents_to_dollars, format_currency
from acme_dashboard.utils.view_cache import INVOICES_PATH, get_view_cache

ITEMS_PER_PAGE = 6
MONTH_ORDER = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _coalesce_scalar(query) -> int:
    """Return an integer scalar result or ``0`` when ``None``."""

    return int(query.scalar() or 0)


def fetch_revenue() -> List[Revenue]:
    """Return monthly revenue in calendar order."""

    rows = Revenue.query.all()
    position = {month: index for index, month in enumerate(MONTH_ORDER)}
    return sorted(rows, key=lambda r: position.get(r.month, len(MONTH_ORDER)))


def fetch_latest_invoices(limit: int = 5) -> List[Dict[str, Any]]:
    """Return the newest invoices with their customer details."""

    rows = (
        db.session.query(Invoice, Customer)
        .join(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(limit)
        .all()
    )
    return [
        {
            "id": invoice.id,
            "name": customer.name,
            "email": customer.email,
            "image_url": customer.image_url,
            "amount": format_currency(invoice.amount),
        }
        for invoice, customer in rows
    ]


def fetch_card_data() -> Dict[str, Any]:
    """Return the headline numbers shown on the overview cards."""

    number_of_invoices = _coalesce_scalar(db.session.query(func.count(Invoice.id)))
    number_of_customers = _coalesce_scalar(
        db.session.query(func.count(Customer.id))
    )
    paid = _coalesce_scalar(
        db.session.query(func.sum(Invoice.amount)).filter(Invoice.status == "paid")
    )
    pending = _coalesce_scalar(
        db.session.query(func.sum(Invoice.amount)).filter(
            Invoice.status == "pending"
        )
    )
    return {
        "number_of_customers": number_of_customers,
        "number_of_invoices": number_of_invoices,
        "total_paid_invoices": format_currency(paid),
        "total_pending_invoices": format_currency(pending),
    }


def _invoice_search(query: str):
    pattern = f"%{query}%"
    return (
        db.session.query(Invoice, Customer)
        .join(Customer, Invoice.customer_id == Customer.id)
        .filter(
            or_(
                Customer.name.ilike(pattern),
                Customer.email.ilike(pattern),
                cast(Invoice.amount, String).ilike(pattern),
                cast(Invoice.date, String).ilike(pattern),
                Invoice.status.ilike(pattern),
            )
        )
    )


def _load_filtered_invoices(query: str, current_page: int) -> List[Dict[str, Any]]:
    offset = (max(current_page, 1) - 1) * ITEMS_PER_PAGE
    rows = (
        _invoice_search(query)
        .order_by(Invoice.date.desc(), Invoice.id)
        .limit(ITEMS_PER_PAGE)
        .offset(offset)
        .all()
    )
    return [
        {
            "id": invoice.id,
            "amount": invoice.amount,
            "date": invoice.date,
            "status": invoice.status,
            "name": customer.name,
            "email": customer.email,
            "image_url": customer.image_url,
        }
        for invoice, customer in rows
    ]


def fetch_filtered_invoices(query: str, current_page: int) -> List[Dict[str, Any]]:
    """Return one page of invoices matching ``query``, newest first.

    Results are cached under the invoice list path until an invoice
    mutation invalidates it.
    """

    return get_view_cache().get_or_load(
        INVOICES_PATH,
        ("rows", query, current_page),
        lambda: _load_filtered_invoices(query, current_page),
    )


def fetch_invoices_pages(query: str) -> int:
    """Return the number of list pages needed for ``query``."""

    def _count() -> int:
        total = _invoice_search(query).count()
        return math.ceil(total / ITEMS_PER_PAGE)

    return get_view_cache().get_or_load(INVOICES_PATH, ("pages", query), _count)


def fetch_invoice_by_id(invoice_id: str) -> Optional[Dict[str, Any]]:
    """Return an invoice ready to prefill the edit form, amount in dollars."""

    invoice = db.session.get(Invoice, invoice_id)
    if invoice is None:
        return None
    return {
        "id": invoice.id,
        "customer_id": invoice.customer_id,
        "amount": cents_to_dollars(invoice.amount),
        "status": invoice.status,
        "date": invoice.date,
    }


def fetch_customers() -> List[Customer]:
    return Customer.query.order_by(Customer.name.asc()).all()


def fetch_filtered_customers(query: str = "") -> List[Dict[str, Any]]:
    """Return customers matching ``query`` with invoice totals."""

    pattern = f"%{query}%"
    total_pending = func.sum(
        case((Invoice.status == "pending", Invoice.amount), else_=0)
    )
    total_paid = func.sum(case((Invoice.status == "paid", Invoice.amount), else_=0))
    rows = (
        db.session.query(
            Customer,
            func.count(Invoice.id),
            total_pending,
            total_paid,
        )
        .outerjoin(Invoice, Invoice.customer_id == Customer.id)
        .filter(or_(Customer.name.ilike(pattern), Customer.email.ilike(pattern)))
        .group_by(Customer.id)
        .order_by(Customer.name.asc())
        .all()
    )
    return [
        {
            "id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "image_url": customer.image_url,
            "total_invoices": invoice_count,
            "total_pending": format_currency(pending or 0),
            "total_paid": format_currency(paid or 0),
        }
        for customer, invoice_count, pending, paid in rows
    ]
