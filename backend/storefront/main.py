import logging

from fastapi import FastAPI

from .config import get_settings
from .routers import products

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Storefront Catalog", version="0.1.0")


@app.get("/health")
def healthcheck():
    return {"status": "ok", "env": settings.env}


app.include_router(products.router, prefix="/products", tags=["products"])
