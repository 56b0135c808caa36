# app/image_analysis/models.py
from typing import Optional
from pydantic import BaseModel, Field

class ImageRequest(BaseModel):
    imageBase64: Optional[str] = Field(
        default=None, description="Data URL (data:image/png;base64,...) or bare base64"
    )

class ImageResponse(BaseModel):
    extractedText: str
