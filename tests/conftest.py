from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import generate_password_hash

from acme_dashboard import create_admin_user, create_app, db
from acme_dashboard.models import Customer, Invoice, User
from tests.utils import login


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "testsecret")
    monkeypatch.setenv("ADMIN_EMAIL", "admin@example.com")
    monkeypatch.setenv("ADMIN_PASS", "adminpass")
    monkeypatch.setenv("RATELIMIT_ENABLED", "0")
    # Each test gets its own SQLite file
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "dashboard.db"))

    app = create_app(["--demo"])
    app.config.update({"TESTING": True, "WTF_CSRF_ENABLED": False})

    with app.app_context():
        db.create_all()
        create_admin_user()

        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def customers(app):
    """Two customers, returned as a name -> id mapping."""
    rows = [
        Customer(id="c1", name="Lee Robinson", email="lee@robinson.com"),
        Customer(id="c2", name="Amy Burns", email="amy@burns.com"),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return {row.name: row.id for row in rows}


@pytest.fixture
def make_invoice(app, customers):
    """Insert an invoice directly, bypassing the mutation pipeline."""

    def _make(customer_id="c1", amount=1000, status="pending", when=None):
        invoice = Invoice(
            customer_id=customer_id,
            amount=amount,
            status=status,
            date=when or date(2024, 1, 15),
        )
        db.session.add(invoice)
        db.session.commit()
        return invoice.id

    return _make


@pytest.fixture
def user(app):
    account = User(
        email="user@nextmail.com",
        name="User",
        password=generate_password_hash("123456"),
        active=True,
    )
    db.session.add(account)
    db.session.commit()
    return account.email


@pytest.fixture
def logged_in_client(client, user):
    login(client, user, "123456")
    return client
