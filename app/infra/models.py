from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, DateTime, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# base
class Base(DeclarativeBase):
    pass


# columnas de auditoría con los nombres que ya existen en la base (createdAt/updatedAt)
class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# models
class ProductORM(TimestampMixin, Base):
    __tablename__ = "Products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # KEY del objeto en el bucket, nunca la URL completa
    image_path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class ConfigORM(TimestampMixin, Base):
    __tablename__ = "Configs"
    __table_args__ = (
        UniqueConstraint("key", name="uq_configs_key"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    key: Mapped[str] = mapped_column(String(120), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)
