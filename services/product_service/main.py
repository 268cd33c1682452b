"""Product catalog service API built with FastAPI.

This module exposes endpoints to check service health and to create and
read catalog products. Validation is performed with Pydantic models, while
persistence is delegated to the SQLAlchemy-backed repository in
``repo.ProductRepo``.
"""

import uuid, logging
import time
from decimal import Decimal
from typing import List

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field
from pythonjsonlogger import jsonlogger
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from .repo import ProductRepo, init_db, engine

app = FastAPI(title="Product Service")

# logger JSON
logger = logging.getLogger("product")
if not logger.handlers:
    h = logging.StreamHandler()
    h.setFormatter(jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s"))
    logger.addHandler(h)
    logger.setLevel(logging.INFO)

DB_WAIT_SECS = 30

@app.on_event("startup")
def _startup_db():
    # wait briefly until the DB accepts connections
    deadline = time.time() + DB_WAIT_SECS
    while True:
        try:
            with engine.connect() as conn:
                conn.execute(text("select 1"))
            break
        except OperationalError:
            if time.time() > deadline:
                raise
            time.sleep(1)
    init_db()

class ProductRequest(BaseModel):
    """Request body for creating a product.

    Attributes:
        name: Non-empty product name.
        description: Optional free-text description.
        price: Non-negative unit price with at most two decimals.
    """
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    price: Decimal = Field(ge=0, max_digits=19, decimal_places=2)

class ProductResponse(BaseModel):
    """Catalog product as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    price: Decimal

@app.get("/health")
def health():
    """Liveness/health probe endpoint.

    Returns:
        dict: A small JSON payload indicating service health.
    """
    return {"ok": True}

@app.post("/api/product", response_model=ProductResponse, status_code=201)
def create_product(req: ProductRequest):
    """Create a catalog product.

    Args:
        req: Validated product fields.

    Returns:
        ProductResponse: The stored product including its generated id.
    """
    product = ProductRepo().create(name=req.name, description=req.description, price=req.price)
    logger.info("product created", extra={"product_id": product.id})
    return ProductResponse.model_validate(product)

@app.get("/api/product", response_model=List[ProductResponse])
def list_products():
    """Return every catalog product."""
    return [ProductResponse.model_validate(p) for p in ProductRepo().list()]

@app.get("/api/product/{product_id}", response_model=ProductResponse)
def get_product(product_id: str):
    product = ProductRepo().get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="NOT_FOUND")
    return ProductResponse.model_validate(product)

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    # keep it on state for local logs
    request.state.request_id = rid
    try:
        response = await call_next(request)
    finally:
        # minimal structured log
        logger.info("request handled", extra={"request_id": rid, "path": request.url.path, "method": request.method})
    response.headers["X-Request-ID"] = rid
    return response
