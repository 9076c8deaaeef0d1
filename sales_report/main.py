import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, HTTPException

from sales_report import config
from sales_report.engine import analyze, collect_statistics, format_statistics
from sales_report.errors import AnalysisError
from sales_report.logging_utils import configure_logging
from sales_report.store import store
from sales_report.strategies import DEFAULT_OPTIONS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(config.LOG_LEVEL)
    # Auto-seed on startup so the service is immediately usable
    if config.SEED_ON_STARTUP and not store.sellers:
        from scripts.seed_data import seed
        seed(store)
        logger.info("Seeded store with %d sellers", len(store.sellers))
    yield


app = FastAPI(
    title=config.APP_TITLE,
    version=config.APP_VERSION,
    description="Per-seller revenue, profit, bonus and top-product report",
    lifespan=lifespan,
)


def _run_report(data) -> list[dict]:
    try:
        reports = analyze(data, DEFAULT_OPTIONS)
    except AnalysisError as exc:
        raise HTTPException(422, {"kind": exc.kind.value, "message": exc.message})
    return [r.model_dump() for r in reports]


# ── Reference data ───────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List all sellers")
def list_sellers():
    return {"sellers": [s.model_dump() for s in store.list_sellers()]}


@app.get("/api/v1/sellers/{seller_id}", summary="Get seller details")
def get_seller(seller_id: str):
    seller = store.get_seller(seller_id)
    if not seller:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    return seller.model_dump()


@app.get("/api/v1/products", summary="List the product catalogue")
def list_products():
    return {"products": [p.model_dump() for p in store.list_products()]}


# ── Reports ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/reports/sales", summary="Sales report over the stored data")
def get_sales_report():
    return {"report": _run_report(store.sales_data())}


@app.post("/api/v1/reports/sales", summary="Sales report over a posted data set")
def post_sales_report(payload: Any = Body(...)):
    return {"report": _run_report(payload)}


@app.get(
    "/api/v1/sellers/{seller_id}/statistics",
    summary="Extended statistics for one seller",
)
def get_seller_statistics(seller_id: str):
    if store.get_seller(seller_id) is None:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    try:
        accumulators = collect_statistics(store.sales_data(), DEFAULT_OPTIONS)
    except AnalysisError as exc:
        raise HTTPException(422, {"kind": exc.kind.value, "message": exc.message})
    seller = next(a for a in accumulators if str(a.id) == seller_id)
    return format_statistics(seller).model_dump()


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed test data")
def reseed():
    from scripts.seed_data import seed
    store.clear()
    seed(store)
    return {
        "status": "seeded",
        "sellers": len(store.sellers),
        "products": len(store.products),
        "purchase_records": len(store.purchase_records),
    }
