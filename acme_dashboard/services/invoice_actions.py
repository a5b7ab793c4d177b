"""Create, update and delete invoices submitted from dashboard forms.

Each action validates the raw submission, issues exactly one statement
against the database and, only once that statement has committed, marks
the cached invoice list as stale. Create and update finish by returning a
:class:`Redirect` for the caller to follow; delete returns an
:class:`ActionState` to display in place.

Expected problems never raise out of these functions. Field errors and
database failures both come back as an :class:`ActionState`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from flask import current_app
from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError

from acme_dashboard import db
from acme_dashboard.models import INVOICE_STATUSES, Invoice, generate_id
from acme_dashboard.utils.view_cache import INVOICES_PATH, revalidate_path

CUSTOMER_ERROR = "Please select a customer."
AMOUNT_ERROR = "Please enter an amount greater than $0."
STATUS_ERROR = "Please select an invoice status."
DELETED_MESSAGE = "Deleted Invoice."

CENTS = Decimal("0.01")
# Largest value a SQLite INTEGER column holds.
MAX_CENTS = 2**63 - 1

# The sqlite3 driver raises OverflowError itself and SQLAlchemy does not wrap it.
STORE_ERRORS = (SQLAlchemyError, OverflowError)


@dataclass(frozen=True)
class InvoiceFields:
    customer_id: str
    amount: Decimal
    status: str


@dataclass(frozen=True)
class ValidationResult:
    success: bool
    data: Optional[InvoiceFields] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class ActionState:
    """What a form should show after an action that did not navigate away."""

    message: Optional[str] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class Redirect:
    target: str


ActionResult = Union[ActionState, Redirect]


# ----------------------------------------------------------------------
# Field validation


def _clean_customer_id(raw: Any) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    return value or None


def _clean_amount(raw: Any) -> Optional[Decimal]:
    """Coerce a submitted dollar amount, or ``None`` if it is not > $0."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = Decimal(str(raw).strip())
        if not value.is_finite():
            return None
        value = value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return None
    if value <= 0 or value * 100 > MAX_CENTS:
        return None
    return value


def _clean_status(raw: Any) -> Optional[str]:
    if raw in INVOICE_STATUSES:
        return raw
    return None


_FIELDS = (
    ("customer_id", _clean_customer_id, CUSTOMER_ERROR),
    ("amount", _clean_amount, AMOUNT_ERROR),
    ("status", _clean_status, STATUS_ERROR),
)


def validate_invoice_fields(form_data: Mapping[str, Any]) -> ValidationResult:
    """Check the editable invoice fields of a raw form submission.

    ``id`` and ``date`` are never read from the submission. Every failing
    field is reported at once; passing fields do not appear in ``errors``.
    """
    cleaned: Dict[str, Any] = {}
    errors: Dict[str, List[str]] = {}
    for name, clean, message in _FIELDS:
        value = clean(form_data.get(name))
        if value is None:
            errors[name] = [message]
        else:
            cleaned[name] = value

    if errors:
        return ValidationResult(success=False, errors=errors)
    return ValidationResult(success=True, data=InvoiceFields(**cleaned))


def to_cents(amount: Decimal) -> int:
    """Convert dollars to whole cents, rounding half up."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# ----------------------------------------------------------------------
# Store


class InvoiceStore:
    """Runs single invoice statements through the Flask-SQLAlchemy session.

    Failures are rolled back and logged here, then re-raised for the caller
    to turn into a user-facing message.
    """

    def __init__(self, session=None) -> None:
        self.session = session if session is not None else db.session

    def _run(self, statement) -> None:
        try:
            self.session.execute(statement)
            self.session.commit()
        except STORE_ERRORS:
            self.session.rollback()
            current_app.logger.exception("Invoice statement failed")
            raise

    def insert(self, invoice_id: str, customer_id: str, amount: int, status: str, created: date) -> None:
        self._run(
            insert(Invoice).values(
                id=invoice_id,
                customer_id=customer_id,
                amount=amount,
                status=status,
                date=created,
            )
        )

    def update(self, invoice_id: str, customer_id: str, amount: int, status: str) -> None:
        self._run(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(customer_id=customer_id, amount=amount, status=status)
        )

    def delete(self, invoice_id: str) -> None:
        self._run(delete(Invoice).where(Invoice.id == invoice_id))


def _invalidator(cache) -> Callable[[str], None]:
    if cache is None:
        return revalidate_path
    return cache.invalidate


# ----------------------------------------------------------------------
# Actions


def create_invoice(
    form_data: Mapping[str, Any],
    *,
    store: Optional[InvoiceStore] = None,
    cache=None,
    today: Optional[Callable[[], date]] = None,
) -> ActionResult:
    """Validate and insert a new invoice."""
    validated = validate_invoice_fields(form_data)
    if not validated.success:
        return ActionState(
            errors=validated.errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    fields = validated.data
    amount_in_cents = to_cents(fields.amount)
    created = (today or date.today)()
    store = store or InvoiceStore()

    try:
        store.insert(
            generate_id(), fields.customer_id, amount_in_cents, fields.status, created
        )
    except STORE_ERRORS:
        return ActionState(message="Database Error: Failed to Create Invoice.")

    _invalidator(cache)(INVOICES_PATH)
    return Redirect(INVOICES_PATH)


def update_invoice(
    invoice_id: str,
    form_data: Mapping[str, Any],
    *,
    store: Optional[InvoiceStore] = None,
    cache=None,
) -> ActionResult:
    """Validate and apply edits to the invoice ``invoice_id``.

    An id that matches no row is not reported as an error.
    """
    validated = validate_invoice_fields(form_data)
    if not validated.success:
        return ActionState(
            errors=validated.errors,
            message="Missing Fields. Failed to Update Invoice.",
        )

    fields = validated.data
    amount_in_cents = to_cents(fields.amount)
    store = store or InvoiceStore()

    try:
        store.update(invoice_id, fields.customer_id, amount_in_cents, fields.status)
    except STORE_ERRORS:
        return ActionState(message="Database Error: Failed to Update Invoice.")

    _invalidator(cache)(INVOICES_PATH)
    return Redirect(INVOICES_PATH)


def delete_invoice(
    invoice_id: str,
    *,
    store: Optional[InvoiceStore] = None,
    cache=None,
) -> ActionState:
    """Remove the invoice ``invoice_id`` if it exists."""
    store = store or InvoiceStore()
    try:
        store.delete(invoice_id)
    except STORE_ERRORS:
        return ActionState(message="Database Error: Failed to Delete Invoice.")

    _invalidator(cache)(INVOICES_PATH)
    return ActionState(message=DELETED_MESSAGE)
