# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
import uvicorn

from app.database import Database
from app.errors import ValidationError, error_response
from app.huggingface import HuggingFaceClient
from app.image_analysis import router as image_router
from app.sentiment_analysis import router as sentiment_router
from app.sentiment_analysis.agent import SentimentBackend, build_sentiment_backend
from app.uploads.views import router as uploads_router
from config import CorsConfig, Settings, settings as default_settings

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ", ".join(CorsConfig.ALLOW_METHODS),
    "Access-Control-Allow-Headers": ", ".join(CorsConfig.ALLOW_HEADERS),
}


def create_app(
    settings: Settings = default_settings,
    sentiment_backend: Optional[SentimentBackend] = None,
    hf_client: Optional[HuggingFaceClient] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    settings.validate()

    hf_client = hf_client or HuggingFaceClient(
        base_url=settings.HF_API_URL,
        sentiment_model=settings.HF_SENTIMENT_MODEL,
        caption_model=settings.HF_CAPTION_MODEL,
        api_token=settings.HF_API_TOKEN,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    )
    sentiment_backend = sentiment_backend or build_sentiment_backend(settings, hf_client=hf_client)
    database = database or Database(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        logger.info(f"Sentiment backend: {sentiment_backend.name}")
        yield
        hf_client.close()
        database.dispose()

    app = FastAPI(title="Sentiment Lens", docs_url="/docs", lifespan=lifespan)
    app.state.settings = settings
    app.state.hf_client = hf_client
    app.state.sentiment_backend = sentiment_backend
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CorsConfig.ALLOW_ORIGINS,
        allow_methods=CorsConfig.ALLOW_METHODS,
        allow_headers=CorsConfig.ALLOW_HEADERS,
    )

    # outermost: every OPTIONS, preflight or not, is answered with 200
    @app.middleware("http")
    async def answer_options(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
        return error_response(ValidationError.status_code, message)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "sentiment_backend": sentiment_backend.name}

    app.include_router(sentiment_router)
    app.include_router(sentiment_router, prefix="/api", include_in_schema=False)
    app.include_router(image_router)
    app.include_router(image_router, prefix="/api", include_in_schema=False)
    app.include_router(uploads_router)

    return app


logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
