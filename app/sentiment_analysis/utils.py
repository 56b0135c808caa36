# app/sentiment_analysis/utils.py
import json
import re
import logging
import math
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.errors import ParseError, UpstreamFailure
from app.sentiment_analysis.models import SentimentAnalysis
from config import ErrorMessages, SentimentConfig

logger = logging.getLogger(__name__)

FENCED_BLOCK = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL)
OPEN_BRACE = re.compile(r"\{")


def _reject_constant(name: str):
    # NaN and Infinity cannot be sent back as JSON
    raise ValueError(f"Non-finite number {name} in model output")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Non-finite number {literal} in model output")
    return value


_decoder = json.JSONDecoder(parse_constant=_reject_constant, parse_float=_finite_float)


def _as_decimal(value: Optional[float]) -> Decimal:
    # repr-based conversion keeps 0.6 - 0.4 == 0.2 exact
    return Decimal(str(float(value or 0)))


# ────────────────────── CLASSIFIER PATH ──────────────────────

def normalize_scores(positive_score: Optional[float], negative_score: Optional[float]) -> SentimentAnalysis:
    """Map a positive/negative score pair onto positive, negative or neutral.

    Scores closer than ``NEUTRAL_THRESHOLD`` are neutral, and the closeness
    itself is the confidence. Otherwise the larger score wins and is used as
    the confidence.
    """
    positive = _as_decimal(positive_score)
    negative = _as_decimal(negative_score)
    diff = abs(positive - negative)

    if diff < _as_decimal(SentimentConfig.NEUTRAL_THRESHOLD):
        sentiment, confidence = "neutral", float(1 - diff)
    elif positive > negative:
        sentiment, confidence = "positive", float(positive)
    else:
        sentiment, confidence = "negative", float(negative)

    percent = math.floor(confidence * 100 + 0.5)
    return SentimentAnalysis(
        sentiment=sentiment,
        confidence=round(confidence, 2),
        explanation=SentimentConfig.EXPLANATION_TEMPLATE.format(sentiment=sentiment, percent=percent),
    )


def extract_scores(payload: Any) -> Tuple[float, float]:
    """Pull (positive, negative) scores out of a text-classification response.

    Accepts both ``[[{label, score}, ...]]`` and ``[{label, score}, ...]``.
    """
    results = payload[0] if isinstance(payload, list) and payload and isinstance(payload[0], list) else payload
    if not isinstance(results, list) or not results or not all(isinstance(r, dict) for r in results):
        logger.error(f"Unexpected classifier payload: {payload!r}")
        raise UpstreamFailure("Unexpected response from sentiment model")

    scores: Dict[str, float] = {}
    for item in results:
        label = str(item.get("label", "")).upper()
        if label in (SentimentConfig.POSITIVE_LABEL, SentimentConfig.NEGATIVE_LABEL) and label not in scores:
            scores[label] = float(item.get("score") or 0)

    return scores.get(SentimentConfig.POSITIVE_LABEL, 0.0), scores.get(SentimentConfig.NEGATIVE_LABEL, 0.0)


# ────────────────────── LLM PATH ──────────────────────

def _parse_whole(text: str) -> Optional[Dict]:
    return _decoder.decode(text)


def _parse_fenced_block(text: str) -> Optional[Dict]:
    match = FENCED_BLOCK.search(text)
    if not match:
        return None
    return _decoder.decode(match.group(1))


def _parse_sentiment_object(text: str) -> Optional[Dict]:
    for brace in OPEN_BRACE.finditer(text):
        try:
            obj, _ = _decoder.raw_decode(text, brace.start())
        except ValueError:
            continue
        if isinstance(obj, dict) and "sentiment" in obj:
            return obj
    return None


PARSE_STRATEGIES: List[Callable[[str], Optional[Dict]]] = [
    _parse_whole,
    _parse_fenced_block,
    _parse_sentiment_object,
]


def extract_json_from_llm_response(text: str) -> Dict[str, Any]:
    """Recover the JSON object a chat model was asked to return.

    Strategies run in order and the first one yielding an object wins.
    The recovered object is returned as-is, without schema checks.
    """
    if text:
        for strategy in PARSE_STRATEGIES:
            try:
                result = strategy(text)
            except ValueError:
                continue
            if isinstance(result, dict):
                return result

    raise ParseError(ErrorMessages.PARSE_FAILED)
