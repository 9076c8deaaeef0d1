"""
Input gate for the analysis engine.

Every check here runs before any aggregation so a bad call never produces a
partial report.
"""

from collections.abc import Mapping

from pydantic import BaseModel, ValidationError

from sales_report.errors import (
    EmptyInputError,
    InvalidOptionsError,
    InvalidStructureError,
    MissingStrategyError,
)
from sales_report.models import Product, PurchaseRecord, SalesData, Seller
from sales_report.strategies import AnalysisOptions

COLLECTIONS: dict[str, type[BaseModel]] = {
    "sellers": Seller,
    "products": Product,
    "purchase_records": PurchaseRecord,
}


def _get_collection(data, name: str):
    if isinstance(data, SalesData):
        return getattr(data, name)
    return data.get(name)


def check_shape(data) -> dict:
    """Structure then emptiness; returns the raw collections by name."""
    if not isinstance(data, (Mapping, SalesData)):
        raise InvalidStructureError("Invalid data structure: expected a mapping of collections")

    collections = {name: _get_collection(data, name) for name in COLLECTIONS}

    for name, value in collections.items():
        if not isinstance(value, (list, tuple)):
            raise InvalidStructureError(f"Invalid data structure: '{name}' must be a list")

    for name, value in collections.items():
        if len(value) == 0:
            raise EmptyInputError(f"Missing required data: '{name}' is empty")

    return collections


def parse_data(data, collections: dict) -> SalesData:
    if isinstance(data, SalesData):
        return data

    parsed = {}
    for name, model in COLLECTIONS.items():
        rows = []
        for index, raw in enumerate(collections[name]):
            try:
                rows.append(model.model_validate(raw))
            except ValidationError as exc:
                raise InvalidStructureError(
                    f"Invalid data structure: {name}[{index}] is malformed "
                    f"({exc.error_count()} error(s))"
                ) from exc
        parsed[name] = rows

    return SalesData.model_construct(**parsed)


def validate_options(options) -> AnalysisOptions:
    if isinstance(options, AnalysisOptions):
        calculate_revenue = options.calculate_revenue
        calculate_bonus = options.calculate_bonus
    elif isinstance(options, Mapping):
        calculate_revenue = options.get("calculate_revenue")
        calculate_bonus = options.get("calculate_bonus")
    else:
        raise InvalidOptionsError("Invalid options: expected a mapping with the two strategies")

    if not callable(calculate_revenue):
        raise MissingStrategyError("calculate_revenue must be callable")
    if not callable(calculate_bonus):
        raise MissingStrategyError("calculate_bonus must be callable")

    return AnalysisOptions(calculate_revenue=calculate_revenue, calculate_bonus=calculate_bonus)


def validate(data, options) -> tuple[SalesData, AnalysisOptions]:
    """Shape, options, then record parsing; raises an AnalysisError subclass on the first failure."""
    collections = check_shape(data)
    strategies = validate_options(options)
    return parse_data(data, collections), strategies
