from flask_wtf import FlaskForm
from wtforms import (
    PasswordField,
    RadioField,
    SelectField,
    StringField,
    SubmitField,
)
from wtforms.validators import DataRequired, Email

from acme_dashboard.models import INVOICE_STATUSES


class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])
    submit = SubmitField("Log in")


class InvoiceForm(FlaskForm):
    """Renders the invoice fields.

    Submissions are checked by
    :func:`acme_dashboard.services.invoice_actions.validate_invoice_fields`
    rather than by WTForms validators; its error map is copied onto the
    fields with :meth:`apply_errors`.
    """

    customer_id = SelectField("Choose customer", validate_choice=False)
    amount = StringField("Choose an amount")
    status = RadioField(
        "Set the invoice status",
        choices=[(status, status.capitalize()) for status in INVOICE_STATUSES],
        validate_choice=False,
    )
    submit = SubmitField("Save Invoice")

    def load_customer_choices(self, customers) -> None:
        self.customer_id.choices = [("", "Select a customer")] + [
            (c.id, c.name) for c in customers
        ]

    def apply_errors(self, errors) -> None:
        for name, messages in errors.items():
            field = getattr(self, name, None)
            if field is not None:
                field.errors = list(messages)


class DeleteForm(FlaskForm):
    """Simple form used for CSRF protection on delete actions."""

    submit = SubmitField("Delete")
