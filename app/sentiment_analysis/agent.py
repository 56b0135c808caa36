# app/sentiment_analysis/agent.py
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from app.huggingface import HuggingFaceClient
from app.llm import GeminiClient
from app.sentiment_analysis.utils import extract_json_from_llm_response, extract_scores, normalize_scores
from config import SentimentConfig, Settings

logger = logging.getLogger(__name__)


class SentimentBackend(ABC):
    name: str

    @abstractmethod
    def analyze(self, text: str) -> Dict[str, Any]:
        """Return a sentiment analysis for ``text`` as a JSON-ready dict."""


class ClassifierSentimentBackend(SentimentBackend):
    """Hosted text classifier returning POSITIVE/NEGATIVE probabilities."""

    name = "classifier"

    def __init__(self, client: HuggingFaceClient):
        self.client = client

    def analyze(self, text: str) -> Dict[str, Any]:
        payload = self.client.classify_text(text)
        logger.debug(f"Classifier response: {payload!r}")
        positive, negative = extract_scores(payload)
        return normalize_scores(positive, negative).model_dump()


class LLMSentimentBackend(SentimentBackend):
    """General-purpose chat model prompted to answer with a JSON object."""

    name = "llm"

    def __init__(self, client: GeminiClient):
        self.client = client

    def analyze(self, text: str) -> Dict[str, Any]:
        prompt = SentimentConfig.USER_PROMPT.format(text=text)
        completion = self.client.generate_text(prompt, system_instruction=SentimentConfig.SYSTEM_PROMPT)
        logger.debug(f"LLM response: {completion}")
        return extract_json_from_llm_response(completion)


def build_sentiment_backend(
    settings: Settings,
    hf_client: Optional[HuggingFaceClient] = None,
    llm_client: Optional[GeminiClient] = None,
) -> SentimentBackend:
    if settings.SENTIMENT_BACKEND == "llm":
        llm_client = llm_client or GeminiClient(
            api_key=settings.GOOGLE_API_KEY,
            model_name=settings.GEMINI_MODEL,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
        )
        return LLMSentimentBackend(llm_client)

    if hf_client is None:
        raise ValueError("A Hugging Face client is required for the classifier backend")
    return ClassifierSentimentBackend(hf_client)
