import pytest
from fastapi.testclient import TestClient

from app.database import Database
from app.sentiment_analysis.agent import ClassifierSentimentBackend, LLMSentimentBackend
from config import Settings
from main import create_app
from tests.fakes import FakeGeminiClient, FakeHuggingFaceClient

POSITIVE_PAYLOAD = [[{"label": "POSITIVE", "score": 0.95}, {"label": "NEGATIVE", "score": 0.05}]]


@pytest.fixture
def hf_client():
    return FakeHuggingFaceClient(classify_payload=POSITIVE_PAYLOAD)


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def make_client(hf_client, database):
    """Build a TestClient around injected fakes."""
    clients = []

    def _make(backend=None, hf=None):
        hf = hf or hf_client
        app = create_app(
            settings=Settings(),
            sentiment_backend=backend or ClassifierSentimentBackend(hf),
            hf_client=hf,
            database=database,
        )
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def llm_client_factory(make_client):
    def _make(completion="", error=None):
        gemini = FakeGeminiClient(completion=completion, error=error)
        return make_client(backend=LLMSentimentBackend(gemini)), gemini

    return _make
