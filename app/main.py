import logging
from contextlib import asynccontextmanager
from datetime import date
from http import HTTPStatus
from time import perf_counter
from typing import Any, Optional

from fastapi import Body, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from app.config import day_zone, settings
from app.engine import filter_options
from app.errors import SaleValidationError, SaveFailed
from app.log import configure_logging
from app.models import FieldError, FilterCriteria
from app.service import dashboard, submit_sale
from app.store import store

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # a bad timezone setting stops startup here
    logger.info("date-range filters use calendar days in %s", day_zone())
    if settings.seed_on_startup:
        from scripts.seed_data import seed
        seed(store)
        logger.info("seeded %d demo sales", len(store))
    yield


app = FastAPI(
    title="Sales Tracker",
    version="1.0.0",
    description="Record sales and summarize them per product, customer and date range",
    lifespan=lifespan,
)


@app.exception_handler(SaleValidationError)
async def validation_error_handler(request: Request, exc: SaleValidationError):
    return JSONResponse(
        status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        content={
            "error": "Invalid sale data submitted.",
            "errors": [e.model_dump() for e in exc.errors],
        },
    )


@app.exception_handler(SaveFailed)
async def save_failed_handler(request: Request, exc: SaveFailed):
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


@app.middleware("http")
async def timing(request: Request, call_next):
    start = perf_counter()
    response = await call_next(request)
    duration = perf_counter() - start
    logger.info(
        "[metric:call.duration] %s %s %d - %.3fs",
        request.method,
        request.url.path,
        response.status_code,
        duration,
    )
    return response


# ── Sales ─────────────────────────────────────────────────────────────────────

@app.get("/api/v1/sales", summary="List sales with filters, total and per-product sums")
def list_sales(
    product: Optional[str] = None,
    customer: Optional[str] = None,
    date_from: Optional[date] = Query(default=None, example="2024-06-01"),
    date_to: Optional[date] = Query(default=None, example="2024-06-30"),
):
    criteria = FilterCriteria(
        product=product,
        customer=customer,
        date_from=date_from,
        date_to=date_to,
    )
    result = dashboard(store, criteria, day_zone())
    # money is serialized as strings, like the stored Decimal
    return {
        "sales": [s.model_dump(mode="json") for s in result.view.filtered],
        "total": str(result.view.total),
        "by_product": {name: str(total) for name, total in result.view.by_product.items()},
        "chart": [p.model_dump(mode="json") for p in result.chart],
        "options": result.options.model_dump(),
    }


@app.post("/api/v1/sales", status_code=HTTPStatus.CREATED, summary="Add a sale")
def add_sale(payload: Any = Body(default=None)):
    if not isinstance(payload, dict):
        raise SaleValidationError([FieldError(field="body", message="Expected a JSON object.")])
    sale = submit_sale(payload, store)
    return sale.model_dump(mode="json")


@app.get("/api/v1/sales/options", summary="Distinct products and customers")
def get_options():
    return filter_options(store.list_all()).model_dump()


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed demo data")
def reseed():
    from scripts.seed_data import seed
    store.clear()
    seed(store)
    return {"status": "seeded", "sales": len(store)}


if __name__ == "__main__":  # `python -m app.main`
    from argparse import ArgumentParser

    import uvicorn

    parser = ArgumentParser()
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args()

    settings.update(vars(args))

    if settings.port < 0 or settings.port > 65_535:
        raise SystemExit(f"error: invalid port - {settings.port}")

    uvicorn.run(app, port=settings.port)
