from flask import Blueprint, render_template, request
from flask_login import login_required

from acme_dashboard.services.dashboard_data import (
    fetch_card_data,
    fetch_filtered_customers,
    fetch_latest_invoices,
    fetch_revenue,
)
from acme_dashboard.utils.formatting import generate_y_axis

dashboard = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@dashboard.route("")
@login_required
def overview():
    """Render the overview cards, revenue chart and latest invoices."""
    revenue = fetch_revenue()
    y_axis_labels, top_label = generate_y_axis(revenue)
    return render_template(
        "dashboard/overview.html",
        cards=fetch_card_data(),
        revenue=revenue,
        y_axis_labels=y_axis_labels,
        top_label=top_label,
        latest_invoices=fetch_latest_invoices(),
    )


@dashboard.route("/customers")
@login_required
def view_customers():
    """List customers with their invoice totals."""
    query = request.args.get("query", "")
    return render_template(
        "customers/view_customers.html",
        customers=fetch_filtered_customers(query),
        query=query,
    )
