# app/sentiment_analysis/models.py
from pydantic import BaseModel, Field
from typing import Optional
from config import SentimentConfig

class SentimentRequest(BaseModel):
    text: Optional[str] = None

class SentimentAnalysis(BaseModel):
    sentiment: SentimentConfig.SentimentLabel = Field(
        ..., description="Overall sentiment classification"
    )
    confidence: float = Field(
        ..., ge=0.0, le=1.0, description="Confidence of the sentiment prediction"
    )
    explanation: str = Field(
        ..., min_length=1, description="Reason for the assigned sentiment"
    )

class SentimentErrorResponse(SentimentAnalysis):
    error: str
