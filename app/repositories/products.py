# app/repositories/products.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.infra.models import ProductORM

_UNSET = object()


class ProductRepository:
    """
    Acceso a datos de Products.

    Ningún método hace commit: la transacción es del llamador.
    """

    def create(self, db: Session, *, name: Optional[str], description: Optional[str]) -> ProductORM:
        product = ProductORM(name=name, description=description)
        db.add(product)
        db.flush()  # asigna id
        return product

    def find_all(self, db: Session) -> list[ProductORM]:
        return list(db.execute(select(ProductORM)).scalars().all())

    def find_by_id(self, db: Session, product_id: int) -> Optional[ProductORM]:
        return db.get(ProductORM, product_id)

    def update(
        self,
        db: Session,
        product: ProductORM,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        image_path=_UNSET,
    ) -> ProductORM:
        if name is not None:
            product.name = name
        if description is not None:
            product.description = description
        if image_path is not _UNSET:
            product.image_path = image_path
        db.flush()
        return product

    def delete(self, db: Session, product: ProductORM) -> None:
        db.delete(product)
        db.flush()
