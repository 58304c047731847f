from __future__ import annotations

import re
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.infra.models import ConfigORM

BUCKET_URL_KEY = "S3_BUCKET_URL"

_BUCKET_FROM_URL = re.compile(r"^https?://([^.]+)\.s3\.")


def get_config_value(db: Session, key: str) -> Optional[str]:
    return db.scalar(select(ConfigORM.value).where(ConfigORM.key == key))


def get_bucket_base_url(db: Session) -> str:
    return get_config_value(db, BUCKET_URL_KEY) or ""


def extract_bucket_name(url: str) -> Optional[str]:
    """
    https://<bucket>.s3.<region>.amazonaws.com/ -> <bucket>

    None si la URL no tiene ese formato.
    """
    m = _BUCKET_FROM_URL.match(url or "")
    return m.group(1) if m else None


def resolve_bucket_name(db: Session, override: Optional[str] = None) -> Optional[str]:
    if override:
        return override
    return extract_bucket_name(get_bucket_base_url(db))
