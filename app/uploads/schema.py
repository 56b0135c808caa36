# app/uploads/schema.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class UploadCreate(BaseModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    file_size: int = Field(..., ge=0, description="Size in bytes")
    file_type: Optional[str] = Field(default=None, max_length=255, description="MIME type")


class UploadRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    file_name: str
    file_size: int
    file_type: Optional[str] = None
    upload_date: datetime
    created_at: datetime
    ip_address: Optional[str] = None
