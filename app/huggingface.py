# app/huggingface.py
import logging
from typing import Any, Optional

import requests

from app.errors import UpstreamFailure, UpstreamUnavailable

logger = logging.getLogger(__name__)

BUSY_STATUSES = {429, 503}


class HuggingFaceClient:
    """Thin client for the Hugging Face hosted inference API.

    One session is created per client and shared for the lifetime of the
    process. Every call is a single POST with no retries.
    """

    def __init__(
        self,
        base_url: str,
        sentiment_model: str,
        caption_model: str,
        api_token: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.sentiment_model = sentiment_model
        self.caption_model = caption_model
        self.timeout = timeout
        self.session = session or requests.Session()
        if api_token:
            self.session.headers["Authorization"] = f"Bearer {api_token}"

    def _model_url(self, model: str) -> str:
        return f"{self.base_url}/{model}"

    def _post(self, model: str, **kwargs) -> Any:
        url = self._model_url(model)
        try:
            response = self.session.post(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Hugging Face request to {model} failed: {e}")
            raise UpstreamFailure(f"Could not reach inference service: {e}") from e

        if not response.ok:
            logger.error(f"Hugging Face API error: {response.status_code} {response.text}")
            if response.status_code in BUSY_STATUSES:
                raise UpstreamUnavailable(
                    f"Inference service busy ({response.status_code})",
                    status_code=response.status_code,
                )
            raise UpstreamFailure(f"Inference service returned {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamFailure("Inference service returned invalid JSON") from e

    def classify_text(self, text: str) -> Any:
        return self._post(self.sentiment_model, json={"inputs": text})

    def caption_image(self, image_bytes: bytes) -> Any:
        return self._post(
            self.caption_model,
            data=image_bytes,
            headers={"Content-Type": "application/octet-stream"},
        )

    def close(self):
        self.session.close()
