# app/uploads/service.py
import logging
from typing import List, Optional

from sqlalchemy import select

from app.database import Database
from app.uploads.models import Upload
from app.uploads.schema import UploadCreate, UploadRecord

logger = logging.getLogger(__name__)


class UploadStore:
    def __init__(self, database: Database):
        self.database = database

    def create(self, data: UploadCreate, ip_address: Optional[str] = None) -> UploadRecord:
        with self.database.session() as session:
            upload = Upload(**data.model_dump(), ip_address=ip_address)
            session.add(upload)
            session.flush()
            record = UploadRecord.model_validate(upload)
        logger.info(f"Stored upload {record.id} ({record.file_name}, {record.file_size} bytes)")
        return record

    def list(self) -> List[UploadRecord]:
        with self.database.session() as session:
            rows = session.scalars(
                select(Upload).order_by(Upload.upload_date.desc(), Upload.created_at.desc())
            ).all()
            return [UploadRecord.model_validate(row) for row in rows]
