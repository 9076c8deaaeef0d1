"""
Sales report engine: joins purchase records against sellers and products,
ranks sellers by profit and formats the per-seller report.
"""

import logging
from decimal import Decimal

from sales_report import config
from sales_report.models import (
    Product,
    PurchaseRecord,
    SalesData,
    Seller,
    SellerAccumulator,
    SellerReport,
    SellerStatistics,
    TopProduct,
)
from sales_report.money import as_decimal, round_money
from sales_report.strategies import AnalysisOptions, BonusStrategy, RevenueStrategy
from sales_report.validation import validate

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


def _key(value) -> str:
    # ids from different sources may be 1 or "1"; both name the same seller
    return str(value)


def month_key(record: PurchaseRecord) -> str:
    return f"{record.date.year:04d}-{record.date.month:02d}"


# ── 1. Indexes ───────────────────────────────────────────────────────────────

def build_accumulators(sellers: list[Seller]) -> list[SellerAccumulator]:
    """One accumulator per seller, in seller-input order."""
    return [SellerAccumulator.for_seller(s) for s in sellers]


def index_sellers(accumulators: list[SellerAccumulator]) -> dict[str, SellerAccumulator]:
    # a repeated id resolves to its last occurrence
    return {_key(s.id): s for s in accumulators}


def index_products(products: list[Product]) -> dict[str, Product]:
    return {p.sku: p for p in products}


# ── 2. Join pass ─────────────────────────────────────────────────────────────

def fold_purchases(
    seller_index: dict[str, SellerAccumulator],
    product_index: dict[str, Product],
    records: list[PurchaseRecord],
    calculate_revenue: RevenueStrategy,
) -> None:
    skipped_records = 0
    skipped_items = 0

    for record in records:
        seller = seller_index.get(_key(record.seller_id))
        if seller is None:
            logger.warning("Seller with id %s not found, skipping purchase record", record.seller_id)
            skipped_records += 1
            continue

        seller.total_sales += 1
        seller.total_amount += record.total_amount
        seller.total_discount += record.total_discount
        if record.customer_id is not None:
            seller.register_customer(record.customer_id)

        bucket = month_key(record)
        seller.transactions_by_month[bucket] = seller.transactions_by_month.get(bucket, 0) + 1

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                logger.warning("Product with SKU %s not found, skipping line item", item.sku)
                skipped_items += 1
                continue

            quantity = item.quantity if item.quantity is not None else _ZERO
            seller.unique_products.add(item.sku)
            seller.total_items_sold += quantity
            seller.products_sold[item.sku] = seller.products_sold.get(item.sku, _ZERO) + quantity

            cost = product.purchase_price * quantity
            line_revenue = as_decimal(calculate_revenue(item, product))

            seller.profit += line_revenue - cost
            seller.revenue += line_revenue

    logger.debug(
        "Folded %d purchase records (%d skipped records, %d skipped items)",
        len(records),
        skipped_records,
        skipped_items,
    )


# ── 3. Ranking & bonus ───────────────────────────────────────────────────────

def rank_sellers(
    accumulators: list[SellerAccumulator],
    calculate_bonus: BonusStrategy,
) -> list[SellerAccumulator]:
    # sorted() is stable: equal profits keep seller-input order
    ranked = sorted(accumulators, key=lambda s: s.profit, reverse=True)
    total = len(ranked)
    for rank, seller in enumerate(ranked, start=1):
        bonus = calculate_bonus(rank, total, seller.model_copy(deep=True))
        seller.rank = rank
        seller.bonus = as_decimal(bonus)
    return ranked


# ── 4. Top products ──────────────────────────────────────────────────────────

def select_top_products(
    products_sold: dict[str, Decimal],
    limit: int = config.TOP_PRODUCTS_LIMIT,
) -> list[TopProduct]:
    ordered = sorted(products_sold.items(), key=lambda entry: entry[1], reverse=True)
    return [TopProduct(sku=sku, quantity=quantity) for sku, quantity in ordered[:limit]]


# ── 5. Formatting ────────────────────────────────────────────────────────────

def format_report(seller: SellerAccumulator) -> SellerReport:
    return SellerReport(
        seller_id=seller.id,
        name=seller.name,
        revenue=round_money(seller.revenue),
        profit=round_money(seller.profit),
        sales_count=seller.total_sales,
        top_products=seller.top_products or [],
        bonus=round_money(seller.bonus if seller.bonus is not None else _ZERO),
    )


def format_statistics(seller: SellerAccumulator) -> SellerStatistics:
    return SellerStatistics(
        seller_id=seller.id,
        name=seller.name,
        sales_count=seller.total_sales,
        customer_count=seller.customer_count,
        total_items_sold=seller.total_items_sold,
        unique_products_count=len(seller.unique_products),
        total_amount=round_money(seller.total_amount),
        total_discount=round_money(seller.total_discount),
        revenue=round_money(seller.revenue),
        profit=round_money(seller.profit),
        transactions_by_month=dict(sorted(seller.transactions_by_month.items())),
    )


# ── Entry points ─────────────────────────────────────────────────────────────

def _aggregate(data: SalesData, options: AnalysisOptions) -> list[SellerAccumulator]:
    accumulators = build_accumulators(data.sellers)
    seller_index = index_sellers(accumulators)
    product_index = index_products(data.products)
    fold_purchases(seller_index, product_index, data.purchase_records, options.calculate_revenue)
    return accumulators


def collect_statistics(data, options) -> list[SellerAccumulator]:
    """Validate the inputs and run the join pass only.

    Returns the folded accumulators in seller-input order; no ranking, bonus
    or top-product selection is applied.
    """
    sales_data, strategies = validate(data, options)
    return _aggregate(sales_data, strategies)


def analyze(data, options, *, top_products_limit: int = config.TOP_PRODUCTS_LIMIT) -> list[SellerReport]:
    """Build the per-seller sales report.

    ``data`` holds the ``sellers``, ``products`` and ``purchase_records``
    collections (raw mappings or a SalesData model); ``options`` carries the
    ``calculate_revenue`` and ``calculate_bonus`` strategies. Reports come back
    ordered by profit, highest first.
    """
    sales_data, strategies = validate(data, options)

    accumulators = _aggregate(sales_data, strategies)
    ranked = rank_sellers(accumulators, strategies.calculate_bonus)
    for seller in ranked:
        seller.top_products = select_top_products(seller.products_sold, top_products_limit)

    reports = [format_report(seller) for seller in ranked]
    logger.info(
        "Built sales report for %d sellers from %d purchase records",
        len(reports),
        len(sales_data.purchase_records),
    )
    return reports
