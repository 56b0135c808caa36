# app/uploads/models.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, BigInteger, DateTime, String

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Upload(Base):
    __tablename__ = "uploads"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    file_name = Column(String(255), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    file_type = Column(String(255), nullable=True)
    upload_date = Column(DateTime(timezone=True), default=_utcnow, index=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    ip_address = Column(String(64), nullable=True)
