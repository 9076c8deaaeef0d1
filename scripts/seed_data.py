"""
Deterministic test-data generator.

Produces:
  - 5 sellers
  - 20 products across 4 categories
  - 400 purchase records spread over Oct 2025 - Jan 2026
    - 1 to 4 line items per receipt
    - discounts of 0 / 5 / 10 / 15 %
    - 60 customers
"""

import random
from datetime import date, timedelta
from decimal import Decimal

from sales_report import config
from sales_report.models import Product, PurchaseItem, PurchaseRecord, Seller
from sales_report.store import DataStore

START = date(2025, 10, 1)
END   = date(2026, 1, 31)

N_RECORDS   = 400
N_CUSTOMERS = 60
DISCOUNTS   = (0, 5, 10, 15)

CATEGORIES = ("Hand tools", "Garden", "Kitchen", "Lighting")


def _rand_date(rng: random.Random, lo: date = START, hi: date = END) -> date:
    return lo + timedelta(days=rng.randint(0, (hi - lo).days))


def seed(store: DataStore, seed_value: int = config.SEED) -> None:
    rng = random.Random(seed_value)

    # ── sellers ──────────────────────────────────────────────────────────────
    sellers = [
        Seller(id="seller_1", first_name="Alexey",  last_name="Petrov",   start_date="2023-03-01", position="Senior Seller"),
        Seller(id="seller_2", first_name="Ivan",    last_name="Smirnov",  start_date="2023-07-15", position="Seller"),
        Seller(id="seller_3", first_name="Maria",   last_name="Ivanova",  start_date="2024-01-10", position="Seller"),
        Seller(id="seller_4", first_name="Olga",    last_name="Kuznetsova", start_date="2024-05-20", position="Junior Seller"),
        Seller(id="seller_5", first_name="Dmitry",  last_name="Volkov",   start_date="2024-09-02", position="Trainee"),
    ]
    for s in sellers:
        store.add_seller(s)

    # ── products ─────────────────────────────────────────────────────────────
    products = []
    for n in range(1, 21):
        purchase_price = Decimal(rng.randint(500, 8_000)) / 100
        # retail markup between 20 % and 80 %
        sale_price = (purchase_price * Decimal(rng.randint(120, 180)) / 100).quantize(Decimal("0.01"))
        products.append(Product(
            sku=f"SKU_{n:03d}",
            name=f"Product {n}",
            category=CATEGORIES[n % len(CATEGORIES)],
            purchase_price=purchase_price,
            sale_price=sale_price,
        ))
    for p in products:
        store.add_product(p)

    # ── purchase records ─────────────────────────────────────────────────────
    # later sellers sell less often so the ranking is not flat
    weights = [5, 4, 3, 2, 1]
    for n in range(1, N_RECORDS + 1):
        seller = rng.choices(sellers, weights=weights)[0]
        items = []
        for product in rng.sample(products, rng.randint(1, 4)):
            items.append(PurchaseItem(
                sku=product.sku,
                quantity=rng.randint(1, 5),
                sale_price=product.sale_price,
                discount=Decimal(rng.choice(DISCOUNTS)),
            ))

        total_amount = sum((i.sale_price * i.quantity for i in items), Decimal("0"))
        total_discount = sum(
            (i.sale_price * i.quantity * i.discount / 100 for i in items), Decimal("0")
        ).quantize(Decimal("0.01"))

        store.add_purchase_record(PurchaseRecord(
            receipt_id=f"receipt_{n}",
            seller_id=seller.id,
            customer_id=f"customer_{rng.randint(1, N_CUSTOMERS)}",
            date=_rand_date(rng),
            total_amount=total_amount,
            total_discount=total_discount,
            items=items,
        ))
