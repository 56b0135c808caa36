# app/llm.py
from typing import Optional
import logging

from google import generativeai as genai
from google.api_core import exceptions as google_exceptions

from app.errors import UpstreamFailure, UpstreamUnavailable

logger = logging.getLogger(__name__)


class GeminiClient:
    """Chat-completion client for Gemini, built once at startup."""

    def __init__(self, api_key: str, model_name: str, timeout: Optional[float] = None, temperature: float = 0.2):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.timeout = timeout
        self.temperature = temperature

    def generate_text(self, prompt: str, system_instruction: Optional[str] = None) -> str:
        model = genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=system_instruction,
        )
        request_options = {"timeout": self.timeout} if self.timeout else None

        try:
            response = model.generate_content(
                prompt,
                generation_config=genai.GenerationConfig(temperature=self.temperature),
                request_options=request_options,
            )
        except google_exceptions.ResourceExhausted as e:
            logger.error(f"Gemini rate limit hit: {e}")
            raise UpstreamUnavailable("Gemini rate limit exceeded", status_code=429) from e
        except google_exceptions.ServiceUnavailable as e:
            logger.error(f"Gemini unavailable: {e}")
            raise UpstreamUnavailable("Gemini temporarily unavailable", status_code=503) from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini API error: {e}")
            raise UpstreamFailure(f"Gemini request failed: {e}") from e

        return response.text.strip()
