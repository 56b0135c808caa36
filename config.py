from pathlib import Path
from dotenv import load_dotenv
import os
from typing import Dict, Literal


BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")

class Settings:
    SENTIMENT_BACKEND: str = os.getenv("SENTIMENT_BACKEND", "classifier").strip().lower()

    HF_API_URL: str = os.getenv("HF_API_URL", "https://api-inference.huggingface.co/models")
    HF_API_TOKEN: str = os.getenv("HF_API_TOKEN", "")
    HF_SENTIMENT_MODEL: str = os.getenv("HF_SENTIMENT_MODEL", "distilbert-base-uncased-finetuned-sst-2-english")
    HF_CAPTION_MODEL: str = os.getenv("HF_CAPTION_MODEL", "nlpconnect/vit-gpt2-image-captioning")

    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
    DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'uploads.db'}")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def validate(self):
        if self.SENTIMENT_BACKEND not in SentimentConfig.BACKENDS:
            raise ValueError(
                f"SENTIMENT_BACKEND must be one of {SentimentConfig.BACKENDS}, got {self.SENTIMENT_BACKEND!r}"
            )
        if self.SENTIMENT_BACKEND == "llm" and not self.GOOGLE_API_KEY:
            raise ValueError("GOOGLE_API_KEY required in .env when SENTIMENT_BACKEND=llm")


class SentimentConfig:
    SentimentLabel = Literal["positive", "negative", "neutral"]
    BACKENDS = ("classifier", "llm")

    # ────────────────────── CLASSIFIER NORMALIZATION ──────────────────────
    NEUTRAL_THRESHOLD = 0.2
    POSITIVE_LABEL = "POSITIVE"
    NEGATIVE_LABEL = "NEGATIVE"
    EXPLANATION_TEMPLATE = "The text expresses a {sentiment} sentiment with {percent}% confidence."

    # ────────────────────── LLM PROMPTS ──────────────────────
    SYSTEM_PROMPT = (
        "You are an expert sentiment analysis system. Analyze the sentiment of the given text "
        "and respond ONLY with a JSON object in this exact format: "
        '{"sentiment": "positive|negative|neutral", "confidence": 0.0-1.0, "explanation": "brief explanation"}. '
        "Do not include any other text or formatting."
    )
    USER_PROMPT = 'Analyze the sentiment of this text: "{text}"'

    FALLBACK: Dict[str, object] = {
        "sentiment": "neutral",
        "confidence": 0,
        "explanation": "An error occurred during analysis",
    }


class ImageConfig:
    NO_CAPTION_TEXT = "Unable to extract meaningful content from the image."


class ErrorMessages:
    TEXT_REQUIRED = "Text is required for analysis"
    IMAGE_REQUIRED = "Image data is required"
    INVALID_IMAGE = "Image data is not valid base64"
    RATE_LIMITED = "Rate limit exceeded. Please try again later."
    MODEL_LOADING = "AI model is loading. Please try again in a moment."
    SERVICE_BUSY = "Service temporarily unavailable. Please try again in a moment."
    SENTIMENT_FAILED = "Failed to analyze sentiment"
    IMAGE_FAILED = "Failed to analyze image"
    PARSE_FAILED = "Could not parse sentiment analysis response"
    UPLOAD_FAILED = "Failed to save upload"
    UPLOAD_LIST_FAILED = "Failed to fetch uploads"
    UNKNOWN = "Unknown error occurred"


class CorsConfig:
    ALLOW_ORIGINS = ["*"]
    ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    ALLOW_HEADERS = ["Content-Type", "Authorization", "X-Client-Info", "Apikey"]


settings = Settings()
