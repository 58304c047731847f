"""Shared fixtures: in-memory SQLite database and a mocked S3 adapter."""

import os

# Must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("AWS_BUCKET_NAME", None)

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_storage
from app.infra.db import SessionLocal, engine
from app.infra.models import Base, ConfigORM, ProductORM
from app.infra.storage_s3 import S3Storage
from app.main import app
from app.services.config_service import BUCKET_URL_KEY

BUCKET_URL = "https://test-bucket.s3.us-east-2.amazonaws.com/"
BUCKET_NAME = "test-bucket"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def bucket_config(db):
    db.add(ConfigORM(key=BUCKET_URL_KEY, value=BUCKET_URL))
    db.commit()
    return BUCKET_URL


@pytest.fixture
def storage():
    return Mock(spec=S3Storage)


@pytest.fixture
def client(db, storage):
    # no lifespan: the S3 client is replaced by the mock
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_product(db):
    def _make(name="Producto", description="desc", image_path=None, product_id=None):
        product = ProductORM(name=name, description=description, image_path=image_path)
        if product_id is not None:
            product.id = product_id
        db.add(product)
        db.commit()
        return product

    return _make
