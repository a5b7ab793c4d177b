from flask import (
    Blueprint,
    abort,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import login_required

from acme_dashboard.forms import DeleteForm, InvoiceForm
from acme_dashboard.services.dashboard_data import (
    fetch_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
)
from acme_dashboard.services.invoice_actions import (
    DELETED_MESSAGE,
    ActionState,
    Redirect,
    create_invoice,
    delete_invoice,
    update_invoice,
)
from acme_dashboard.utils.activity import log_activity
from acme_dashboard.utils.pagination import (
    build_pagination_args,
    generate_pagination,
    get_page,
)

invoice = Blueprint("invoice", __name__, url_prefix="/dashboard/invoices")


@invoice.route("")
@login_required
def view_invoices():
    """List invoices matching the search box, one page at a time."""
    query = request.args.get("query", "").strip()
    page = get_page()
    total_pages = fetch_invoices_pages(query)
    return render_template(
        "invoices/view_invoices.html",
        invoices=fetch_filtered_invoices(query, page),
        query=query,
        page=page,
        total_pages=total_pages,
        pages=generate_pagination(page, total_pages),
        pagination_args=build_pagination_args(),
        delete_form=DeleteForm(),
    )


def _render_form(form, state, title, status=200):
    return (
        render_template(
            "invoices/invoice_form_page.html",
            form=form,
            state=state,
            title=title,
        ),
        status,
    )


@invoice.route("/create", methods=["GET", "POST"])
@login_required
def create():
    """Create an invoice."""
    form = InvoiceForm()
    form.load_customer_choices(fetch_customers())
    state = ActionState()

    if request.method == "POST":
        result = create_invoice(request.form)
        if isinstance(result, Redirect):
            customer_id = request.form.get("customer_id")
            log_activity(f"Created invoice for customer {customer_id}")
            current_app.logger.info("Invoice created for customer %s", customer_id)
            flash("Invoice created successfully!", "success")
            return redirect(result.target)
        state = result
        form.apply_errors(state.errors)

    return _render_form(form, state, "Create Invoice")


@invoice.route("/<invoice_id>/edit", methods=["GET", "POST"])
@login_required
def edit(invoice_id):
    """Edit an invoice's customer, amount and status."""
    form = InvoiceForm()
    form.load_customer_choices(fetch_customers())
    state = ActionState()

    if request.method == "POST":
        result = update_invoice(invoice_id, request.form)
        if isinstance(result, Redirect):
            log_activity(f"Updated invoice {invoice_id}")
            current_app.logger.info("Invoice %s updated", invoice_id)
            flash("Invoice updated successfully!", "success")
            return redirect(result.target)
        state = result
        form.apply_errors(state.errors)
    else:
        existing = fetch_invoice_by_id(invoice_id)
        if existing is None:
            abort(404)
        form.customer_id.data = existing["customer_id"]
        form.amount.data = f"{existing['amount']:.2f}"
        form.status.data = existing["status"]

    return _render_form(form, state, "Edit Invoice")


@invoice.route("/<invoice_id>/delete", methods=["POST"])
@login_required
def delete(invoice_id):
    """Delete an invoice."""
    form = DeleteForm()
    if not form.validate_on_submit():
        abort(400)
    result = delete_invoice(invoice_id)
    if result.message == DELETED_MESSAGE:
        log_activity(f"Deleted invoice {invoice_id}")
        current_app.logger.info("Invoice %s deleted", invoice_id)
        flash(result.message, "success")
    else:
        flash(result.message, "danger")
    return redirect(url_for("invoice.view_invoices", **build_pagination_args()))
