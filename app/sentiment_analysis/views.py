# app/sentiment_analysis/views.py
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from .models import SentimentAnalysis, SentimentErrorResponse, SentimentRequest
from app.dependencies import get_sentiment_backend
from app.errors import AnalysisError, UpstreamFailure, UpstreamUnavailable, ValidationError, error_response
from app.sentiment_analysis.agent import SentimentBackend
from config import ErrorMessages, SentimentConfig

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Sentiment Analysis"])


def _busy_message(status_code: int) -> str:
    return ErrorMessages.RATE_LIMITED if status_code == 429 else ErrorMessages.MODEL_LOADING


@router.post(
    "/analyze-sentiment",
    response_model=SentimentAnalysis,
    responses={500: {"model": SentimentErrorResponse}},
)
def analyze_sentiment(req: SentimentRequest, backend: SentimentBackend = Depends(get_sentiment_backend)):
    text = (req.text or "").strip()
    if not text:
        return error_response(ValidationError.status_code, ErrorMessages.TEXT_REQUIRED)

    logger.info(f"Analyzing sentiment for text of length {len(text)} with {backend.name} backend")

    try:
        analysis = backend.analyze(text)
        response = JSONResponse(content=analysis)
    except UpstreamUnavailable as e:
        return error_response(e.status_code, _busy_message(e.status_code))
    except UpstreamFailure as e:
        logger.error(f"Sentiment upstream failure: {e.message}")
        return error_response(e.status_code, ErrorMessages.SENTIMENT_FAILED, SentimentConfig.FALLBACK)
    except AnalysisError as e:
        logger.error(f"Sentiment analysis failed: {e.message}")
        return error_response(e.status_code, e.message, SentimentConfig.FALLBACK)
    except Exception as e:
        logger.exception("Error in analyze-sentiment")
        return error_response(500, str(e) or ErrorMessages.UNKNOWN, SentimentConfig.FALLBACK)

    logger.info(f"Successfully analyzed sentiment: {analysis}")
    return response
