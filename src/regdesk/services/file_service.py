"""Stored file service for uploaded documents"""

import logging
import unicodedata
import uuid
from typing import Optional
from urllib.parse import quote

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from regdesk.models.stored_file import StoredFile
from regdesk.services.exceptions import StoredFileNotFoundError, StoreError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
FALLBACK_FILENAME = "download"


def parse_file_id(value: Optional[str]) -> uuid.UUID:
    """Parse a stored file id, raising ValueError when missing or malformed"""
    if not value:
        raise ValueError("Invalid or missing file ID")
    try:
        return uuid.UUID(value.strip())
    except ValueError:
        raise ValueError("Invalid or missing file ID") from None


def content_disposition(filename: str) -> str:
    """
    Attachment header value that survives any filename.

    Header values are sent as Latin-1, so names that are not plain ASCII get
    an ASCII fallback plus an RFC 5987 `filename*` parameter with the UTF-8 name.
    """
    filename = filename or FALLBACK_FILENAME
    decomposed = unicodedata.normalize("NFKD", filename)
    ascii_name = "".join(c for c in decomposed if c.isascii() and c.isprintable())
    if not ascii_name.strip(" .") or ascii_name.startswith("."):
        ascii_name = FALLBACK_FILENAME + ascii_name.strip()
    ascii_name = ascii_name.replace("\\", "\\\\").replace('"', '\\"')

    value = f'attachment; filename="{ascii_name}"'
    if ascii_name != filename:
        value += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return value


class FileService:
    """Service for storing and retrieving uploaded files"""

    def __init__(self, db_session: Session):
        self.db = db_session

    def save_file(
        self, filename: str, data: bytes, content_type: Optional[str] = None
    ) -> StoredFile:
        stored = StoredFile(
            filename=filename or "upload",
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            size=len(data),
            data=data,
        )
        try:
            self.db.add(stored)
            self.db.commit()
            self.db.refresh(stored)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error storing file {filename}: {e}")
            raise StoreError("Failed to store file") from e

        logger.info(f"Stored file {stored.id} ({stored.size} bytes)")
        return stored

    def get_file(self, file_id: uuid.UUID) -> StoredFile:
        try:
            stored = self.db.get(StoredFile, file_id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching file {file_id}: {e}")
            raise StoreError("Failed to fetch file") from e

        if not stored:
            raise StoredFileNotFoundError(file_id)
        return stored
