import pytest

from app.sentiment_analysis.agent import (
    ClassifierSentimentBackend,
    LLMSentimentBackend,
    build_sentiment_backend,
)
from config import Settings
from tests.fakes import FakeGeminiClient, FakeHuggingFaceClient


def make_settings(**overrides):
    settings = Settings()
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def test_classifier_backend_selected_by_default():
    hf = FakeHuggingFaceClient()
    backend = build_sentiment_backend(make_settings(SENTIMENT_BACKEND="classifier"), hf_client=hf)
    assert isinstance(backend, ClassifierSentimentBackend)
    assert backend.client is hf


def test_llm_backend_selected_by_configuration():
    gemini = FakeGeminiClient()
    backend = build_sentiment_backend(
        make_settings(SENTIMENT_BACKEND="llm", GOOGLE_API_KEY="key"), llm_client=gemini
    )
    assert isinstance(backend, LLMSentimentBackend)
    assert backend.client is gemini


def test_classifier_backend_needs_a_client():
    with pytest.raises(ValueError):
        build_sentiment_backend(make_settings(SENTIMENT_BACKEND="classifier"))


def test_settings_reject_unknown_backend():
    with pytest.raises(ValueError):
        make_settings(SENTIMENT_BACKEND="magic").validate()


def test_settings_require_google_key_for_llm():
    with pytest.raises(ValueError):
        make_settings(SENTIMENT_BACKEND="llm", GOOGLE_API_KEY=None).validate()
    make_settings(SENTIMENT_BACKEND="llm", GOOGLE_API_KEY="key").validate()


def test_classifier_backend_normalizes_scores():
    hf = FakeHuggingFaceClient(
        classify_payload=[[{"label": "NEGATIVE", "score": 0.52}, {"label": "POSITIVE", "score": 0.48}]]
    )
    assert ClassifierSentimentBackend(hf).analyze("so-so") == {
        "sentiment": "neutral",
        "confidence": 0.96,
        "explanation": "The text expresses a neutral sentiment with 96% confidence.",
    }
