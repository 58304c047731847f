from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str]
    image_path: Optional[str]
    # nombres camelCase en el JSON, igual que las columnas
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )

    # calculado en lectura: bucket_base_url + image_path
    full_image_url: Optional[str] = None


class MessageOut(BaseModel):
    message: str


class ErrorOut(BaseModel):
    error: str
