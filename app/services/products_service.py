from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from sqlalchemy.orm import Session

from app.infra.models import ProductORM
from app.infra.storage_s3 import S3Storage
from app.repositories.products import ProductRepository
from app.schemas.products import ProductOut
from app.services.config_service import get_bucket_base_url, resolve_bucket_name

logger = logging.getLogger(__name__)

T = TypeVar("T")

IMAGE_KEY_PREFIX = "imagenes/producto"
DELETED_MESSAGE = "Producto eliminado"


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    product_id: int


Outcome = Union[Found[T], NotFound]


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    data: bytes
    content_type: Optional[str] = None


# helpers
def file_extension(filename: str) -> str:
    # sin punto -> extensión vacía (la key termina en ".")
    _, dot, ext = (filename or "").rpartition(".")
    return ext if dot else ""


def build_image_key(product_id: int, filename: str) -> str:
    return f"{IMAGE_KEY_PREFIX}{product_id}.{file_extension(filename)}"


def full_image_url(bucket_base_url: str, image_path: Optional[str]) -> Optional[str]:
    return f"{bucket_base_url}{image_path}" if image_path else None


def to_product_out(product: ProductORM, bucket_base_url: str) -> ProductOut:
    out = ProductOut.model_validate(product, from_attributes=True)
    out.full_image_url = full_image_url(bucket_base_url, product.image_path)
    return out


class ProductService:
    """
    Orquesta Products (base de datos) e imágenes (S3).

    Las llamadas a S3 no forman parte de la transacción: el orden es
    upload/delete antes del commit y no hay compensación si el commit falla.
    """

    def __init__(
        self,
        storage: S3Storage,
        repo: Optional[ProductRepository] = None,
        bucket_override: Optional[str] = None,
    ):
        self.storage = storage
        self.repo = repo or ProductRepository()
        self.bucket_override = bucket_override

    def _bucket(self, db: Session) -> Optional[str]:
        return resolve_bucket_name(db, self.bucket_override)

    def _upload_image(self, db: Session, product_id: int, image: ImageUpload) -> str:
        key = build_image_key(product_id, image.filename)
        self.storage.upload_bytes(
            bucket=self._bucket(db),
            key=key,
            data=image.data,
            content_type=image.content_type,
        )
        logger.info("imagen subida product_id=%s key=%s", product_id, key)
        return key

    def _delete_image(self, db: Session, key: str) -> None:
        self.storage.delete_object(bucket=self._bucket(db), key=key)
        logger.info("imagen eliminada key=%s", key)

    # ----- Products -----

    def create(
        self,
        db: Session,
        *,
        name: Optional[str],
        description: Optional[str],
        image: Optional[ImageUpload] = None,
    ) -> ProductOut:
        try:
            product = self.repo.create(db, name=name, description=description)

            if image is not None:
                key = self._upload_image(db, product.id, image)
                self.repo.update(db, product, image_path=key)

            db.commit()
        except Exception:
            db.rollback()
            raise

        return to_product_out(product, get_bucket_base_url(db))

    def list_products(self, db: Session) -> list[ProductOut]:
        bucket_url = get_bucket_base_url(db)
        return [to_product_out(p, bucket_url) for p in self.repo.find_all(db)]

    def get(self, db: Session, product_id: int) -> Outcome[ProductOut]:
        product = self.repo.find_by_id(db, product_id)
        if product is None:
            return NotFound(product_id)
        return Found(to_product_out(product, get_bucket_base_url(db)))

    def update(
        self,
        db: Session,
        product_id: int,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        image: Optional[ImageUpload] = None,
    ) -> Outcome[ProductOut]:
        product = self.repo.find_by_id(db, product_id)
        if product is None:
            return NotFound(product_id)

        try:
            image_path = product.image_path

            if image is not None:
                # la imagen anterior se borra antes de subir la nueva; no se revierte
                if image_path:
                    self._delete_image(db, image_path)
                image_path = self._upload_image(db, product.id, image)

            self.repo.update(
                db,
                product,
                name=name,
                description=description,
                image_path=image_path,
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

        return Found(to_product_out(product, get_bucket_base_url(db)))

    def delete(self, db: Session, product_id: int) -> Outcome[str]:
        product = self.repo.find_by_id(db, product_id)
        if product is None:
            return NotFound(product_id)

        try:
            if product.image_path:
                self._delete_image(db, product.image_path)

            self.repo.delete(db, product)
            db.commit()
        except Exception:
            db.rollback()
            raise

        return Found(DELETED_MESSAGE)
