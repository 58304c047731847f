from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, UploadFile, File, Form
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.api.deps import DBSession, ProductSvc
from app.schemas.products import ProductOut, MessageOut, ErrorOut
from app.services.products_service import ImageUpload, NotFound, ProductService

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_MESSAGE = "Producto no encontrado"

ERROR_RESPONSES = {
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _parse_id(raw: str) -> Optional[int]:
    # id no numérico -> no existe ese producto (404), sin 422 de validación
    try:
        return int(raw)
    except ValueError:
        return None


async def _read_image(image: Optional[UploadFile]) -> Optional[ImageUpload]:
    if image is None:
        return None
    data = await image.read()
    return ImageUpload(
        filename=image.filename or "",
        data=data,
        content_type=image.content_type,
    )


@router.post("", response_model=ProductOut, status_code=201, responses=ERROR_RESPONSES)
async def create_product(
    db: Session = DBSession,
    service: ProductService = ProductSvc,
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
):
    try:
        upload = await _read_image(image)
        # SQLAlchemy y boto3 bloquean: fuera del event loop
        return await run_in_threadpool(
            service.create, db, name=name, description=description, image=upload
        )
    except Exception:
        logger.exception("Error al crear producto")
        return _error(500, "Error al crear el producto")


@router.get("", response_model=list[ProductOut], responses=ERROR_RESPONSES)
def list_products(db: Session = DBSession, service: ProductService = ProductSvc):
    try:
        return service.list_products(db)
    except Exception:
        logger.exception("Error al obtener productos")
        return _error(500, "Error al obtener productos")


@router.get("/{product_id}", response_model=ProductOut, responses=ERROR_RESPONSES)
def get_product(product_id: str, db: Session = DBSession, service: ProductService = ProductSvc):
    pid = _parse_id(product_id)
    if pid is None:
        return _error(404, NOT_FOUND_MESSAGE)

    try:
        result = service.get(db, pid)
    except Exception:
        logger.exception("Error al obtener producto id=%s", pid)
        return _error(500, "Error al obtener producto")

    if isinstance(result, NotFound):
        return _error(404, NOT_FOUND_MESSAGE)
    return result.value


@router.put("/{product_id}", response_model=ProductOut, responses=ERROR_RESPONSES)
async def update_product(
    product_id: str,
    db: Session = DBSession,
    service: ProductService = ProductSvc,
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
):
    pid = _parse_id(product_id)
    if pid is None:
        return _error(404, NOT_FOUND_MESSAGE)

    try:
        upload = await _read_image(image)
        result = await run_in_threadpool(
            service.update,
            db,
            pid,
            name=name,
            description=description,
            image=upload,
        )
    except Exception:
        logger.exception("Error al actualizar producto id=%s", pid)
        return _error(500, "Error al actualizar producto")

    if isinstance(result, NotFound):
        return _error(404, NOT_FOUND_MESSAGE)
    return result.value


@router.delete("/{product_id}", response_model=MessageOut, responses=ERROR_RESPONSES)
def delete_product(product_id: str, db: Session = DBSession, service: ProductService = ProductSvc):
    pid = _parse_id(product_id)
    if pid is None:
        return _error(404, NOT_FOUND_MESSAGE)

    try:
        result = service.delete(db, pid)
    except Exception:
        logger.exception("Error al eliminar producto id=%s", pid)
        return _error(500, "Error al eliminar producto")

    if isinstance(result, NotFound):
        return _error(404, NOT_FOUND_MESSAGE)
    return MessageOut(message=result.value)
