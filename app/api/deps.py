from fastapi import Depends, Request

from app.config import settings
from app.infra.db import get_db
from app.infra.storage_s3 import S3Storage
from app.services.products_service import ProductService

DBSession = Depends(get_db)


def get_storage(request: Request) -> S3Storage:
    # creado en el lifespan de la app (app/main.py)
    return request.app.state.storage


def get_product_service(storage: S3Storage = Depends(get_storage)) -> ProductService:
    return ProductService(storage, bucket_override=settings.AWS_BUCKET_NAME)


ProductSvc = Depends(get_product_service)
