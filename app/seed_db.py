from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import settings
from app.infra.db import SessionLocal, engine
from app.infra.models import Base, ConfigORM, ProductORM
from app.services.config_service import BUCKET_URL_KEY

DEMO_PRODUCTS = [
    ("Producto 1", "Descripción del producto 1", "imagenes/producto1.jpg"),
    ("Producto 2", "Descripción del producto 2", "imagenes/producto2.jpg"),
    ("Producto 3", "Descripción del producto 3", "imagenes/producto3.jpg"),
]


def seed_config(db: Session, bucket_url: str) -> ConfigORM:
    cfg = db.scalar(select(ConfigORM).where(ConfigORM.key == BUCKET_URL_KEY))
    if not cfg:
        cfg = ConfigORM(key=BUCKET_URL_KEY, value=bucket_url)
        db.add(cfg)
        db.flush()
        print(f"✅ config creada {cfg.key}={cfg.value}")
    else:
        print(f"ℹ️ config ya existe {cfg.key}={cfg.value}")
    return cfg


def seed_products(db: Session) -> list[ProductORM]:
    created = []
    for name, description, image_path in DEMO_PRODUCTS:
        p = db.scalar(select(ProductORM).where(ProductORM.name == name))
        if not p:
            p = ProductORM(name=name, description=description, image_path=image_path)
            db.add(p)
            db.flush()
            print(f"✅ product creado id={p.id} name={p.name}")
        created.append(p)
    return created


def main() -> None:
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_config(db, settings.S3_BUCKET_URL)
        seed_products(db)
        db.commit()
        print("🎉 Seed finalizado!")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
