from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.infra.db import engine
from app.infra.models import Base
from app.infra.storage_s3 import S3Storage

from app.api.routers.products import router as products_router
from app.api.routers.health import router as health_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
      - crea/verifica tablas.
      - crea el client S3 (uno por proceso) y lo deja en app.state.

    Shutdown:
      - cierra el client S3 y libera el pool de conexiones.
    """
    logger.info("[startup] creating tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("[startup] tables created/checked")

    app.state.storage = S3Storage.from_settings(settings)
    logger.info("[startup] s3 client ready region=%s", settings.AWS_REGION)
    try:
        yield
    finally:
        app.state.storage.close()
        engine.dispose()
        logger.info("[shutdown] s3 client closed, db pool disposed")


app = FastAPI(title="Products API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("[CORS] allow_origins = %s", settings.allowed_origins)


app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(products_router, prefix="/products", tags=["products"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
