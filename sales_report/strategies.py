"""
Revenue and bonus strategies.

The engine only depends on the two call signatures below; the functions in
this module are the reference implementations used by the API and tests.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, Union

from sales_report.models import Product, PurchaseItem, SellerAccumulator
from sales_report.money import round_money

Number = Union[int, float, Decimal]

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

# share of profit paid out, by ranking tier
BONUS_RATE_FIRST = Decimal("0.15")
BONUS_RATE_PODIUM = Decimal("0.10")  # 2nd and 3rd place
BONUS_RATE_LAST = Decimal("0")
BONUS_RATE_DEFAULT = Decimal("0.05")


class RevenueStrategy(Protocol):
    def __call__(self, item: PurchaseItem, product: Product) -> Number: ...


class BonusStrategy(Protocol):
    def __call__(self, rank: int, total: int, seller: SellerAccumulator) -> Number: ...


@dataclass(frozen=True)
class AnalysisOptions:
    calculate_revenue: RevenueStrategy
    calculate_bonus: BonusStrategy


def calculate_simple_revenue(item: PurchaseItem, product: Product) -> Decimal:
    if item.discount is None or item.sale_price is None or item.quantity is None:
        return _ZERO
    return item.sale_price * item.quantity * (1 - item.discount / _HUNDRED)


def bonus_rate(rank: int, total: int) -> Decimal:
    # Branch order is policy: with one or two sellers the top ranks win over
    # the last-place rule.
    if rank == 1:
        return BONUS_RATE_FIRST
    if rank in (2, 3):
        return BONUS_RATE_PODIUM
    if rank == total:
        return BONUS_RATE_LAST
    return BONUS_RATE_DEFAULT


def calculate_bonus_by_profit(rank: int, total: int, seller: SellerAccumulator) -> Decimal:
    return round_money(seller.profit * bonus_rate(rank, total))


SIMPLE_REVENUE: RevenueStrategy = calculate_simple_revenue
BONUS_BY_PROFIT: BonusStrategy = calculate_bonus_by_profit

DEFAULT_OPTIONS = AnalysisOptions(
    calculate_revenue=SIMPLE_REVENUE,
    calculate_bonus=BONUS_BY_PROFIT,
)
