"""SQLModel StoredFile model for uploaded documents"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, LargeBinary
from sqlmodel import Field, SQLModel


class StoredFile(SQLModel, table=True):
    """Binary upload (e.g. an ID card) referenced by Registration.upload_id"""

    __tablename__ = "stored_files"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    filename: str
    content_type: str = Field(default="application/octet-stream")
    size: int = Field(default=0)
    data: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
    uploaded_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
