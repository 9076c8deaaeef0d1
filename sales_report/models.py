from datetime import date as Date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

# Seller ids arrive as numbers or strings depending on the source system.
SellerId = Union[int, str]

_ZERO = Decimal("0")


class Seller(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    id: SellerId
    first_name: str
    last_name: str
    start_date: Optional[str] = None
    position: Optional[str] = None


class Product(BaseModel):
    # SKUs may arrive as numbers; 101 and "101" are the same product
    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    sku: str
    purchase_price: Decimal  # cost basis per unit
    name: Optional[str] = None
    category: Optional[str] = None


class PurchaseItem(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    sku: str
    quantity: Optional[Decimal] = None  # fractional for goods sold by weight
    sale_price: Optional[Decimal] = None
    discount: Optional[Decimal] = None  # percent, e.g. Decimal("5") for 5 %


class PurchaseRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    seller_id: SellerId
    customer_id: Optional[Union[int, str]] = None
    date: Date
    total_amount: Decimal = _ZERO
    total_discount: Decimal = _ZERO
    items: list[PurchaseItem] = []

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_timestamp(cls, value):
        # receipts sometimes carry a full timestamp; only the calendar day matters
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            return datetime.fromisoformat(value).date()
        return value


class SalesData(BaseModel):
    sellers: list[Seller]
    products: list[Product]
    purchase_records: list[PurchaseRecord]


# ── Working state ────────────────────────────────────────────────────────────

class SellerAccumulator(BaseModel):
    # identity, copied from the seller record
    id: SellerId
    first_name: str
    last_name: str
    start_date: Optional[str] = None
    position: Optional[str] = None

    # receipt-level counters
    total_sales: int = 0
    total_amount: Decimal = _ZERO
    total_discount: Decimal = _ZERO
    transactions_by_month: dict[str, int] = {}

    # line-level counters
    revenue: Decimal = _ZERO
    profit: Decimal = _ZERO
    total_items_sold: Decimal = _ZERO
    unique_products: set[str] = set()
    products_sold: dict[str, Decimal] = {}

    # assigned once ranking has run
    rank: Optional[int] = None
    bonus: Optional[Decimal] = None
    top_products: Optional[list["TopProduct"]] = None

    _customers: set = PrivateAttr(default_factory=set)

    @classmethod
    def for_seller(cls, seller: Seller) -> "SellerAccumulator":
        return cls(
            id=seller.id,
            first_name=seller.first_name,
            last_name=seller.last_name,
            start_date=seller.start_date,
            position=seller.position,
        )

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def customer_count(self) -> int:
        return len(self._customers)

    def register_customer(self, customer_id) -> None:
        # 9 and "9" are the same customer
        self._customers.add(str(customer_id))


# ── Response models ──────────────────────────────────────────────────────────

class TopProduct(BaseModel):
    sku: str
    quantity: Decimal


class SellerReport(BaseModel):
    seller_id: SellerId
    name: str
    revenue: Decimal
    profit: Decimal
    sales_count: int
    top_products: list[TopProduct]
    bonus: Decimal


class SellerStatistics(BaseModel):
    seller_id: SellerId
    name: str
    sales_count: int
    customer_count: int
    total_items_sold: Decimal
    unique_products_count: int
    total_amount: Decimal
    total_discount: Decimal
    revenue: Decimal
    profit: Decimal
    transactions_by_month: dict[str, int]


SellerAccumulator.model_rebuild()
