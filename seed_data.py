from datetime import date

from acme_dashboard import create_app, create_admin_user, db
from acme_dashboard.models import Customer, Invoice, Revenue

CUSTOMERS = [
    ("d6e15727-9fe1-4961-8c5b-ea44a9bd81aa", "Evil Rabbit", "evil@rabbit.com", "/customers/evil-rabbit.png"),
    ("3958dc9e-712f-4377-85e9-fec4b6a6442a", "Delba de Oliveira", "delba@oliveira.com", "/customers/delba-de-oliveira.png"),
    ("3958dc9e-742f-4377-85e9-fec4b6a6442a", "Lee Robinson", "lee@robinson.com", "/customers/lee-robinson.png"),
    ("76d65c26-f784-44a2-ac19-586678f7c2f2", "Michael Novotny", "michael@novotny.com", "/customers/michael-novotny.png"),
    ("CC27C14A-0ACF-4F4A-A6C9-D45682C144B9", "Amy Burns", "amy@burns.com", "/customers/amy-burns.png"),
    ("13D07535-C59E-4157-A011-F8D2EF4E0CBB", "Balazs Orban", "balazs@orban.com", "/customers/balazs-orban.png"),
]

# (customer index, amount in cents, status, date)
INVOICES = [
    (0, 15795, "pending", "2022-12-06"),
    (1, 20348, "pending", "2022-11-14"),
    (4, 3040, "paid", "2022-10-29"),
    (3, 44800, "paid", "2023-09-10"),
    (5, 34577, "pending", "2023-08-05"),
    (2, 54246, "pending", "2023-07-16"),
    (0, 666, "pending", "2023-06-27"),
    (3, 32545, "paid", "2023-06-09"),
    (4, 1250, "paid", "2023-06-17"),
    (5, 8546, "paid", "2023-06-07"),
    (1, 500, "paid", "2023-08-19"),
    (5, 8945, "paid", "2023-06-03"),
    (2, 1000, "paid", "2022-06-05"),
]

REVENUE = [
    ("Jan", 2000), ("Feb", 1800), ("Mar", 2200), ("Apr", 2500),
    ("May", 2300), ("Jun", 3200), ("Jul", 3500), ("Aug", 3700),
    ("Sep", 2500), ("Oct", 2800), ("Nov", 3000), ("Dec", 4800),
]


def seed_initial_data() -> None:
    """Seed the database with an admin user and placeholder dashboard data."""
    app = create_app([])
    with app.app_context():
        create_admin_user()

        for customer_id, name, email, image_url in CUSTOMERS:
            if db.session.get(Customer, customer_id) is None:
                db.session.add(
                    Customer(id=customer_id, name=name, email=email, image_url=image_url)
                )
        db.session.flush()

        if Invoice.query.count() == 0:
            for index, amount, status, created in INVOICES:
                db.session.add(
                    Invoice(
                        customer_id=CUSTOMERS[index][0],
                        amount=amount,
                        status=status,
                        date=date.fromisoformat(created),
                    )
                )

        for month, revenue in REVENUE:
            row = db.session.get(Revenue, month)
            if row is None:
                db.session.add(Revenue(month=month, revenue=revenue))
            else:
                row.revenue = revenue

        db.session.commit()
        print("Admin user, customers, invoices and revenue seeded.")


if __name__ == "__main__":
    seed_initial_data()
