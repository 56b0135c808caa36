# app/errors.py
from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse


class AnalysisError(Exception):
    """Base error for everything the gateway handlers know how to answer."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AnalysisError):
    status_code = 400


class UpstreamUnavailable(AnalysisError):
    """Upstream answered 429 or 503; the status is passed through."""

    status_code = 503


class UpstreamFailure(AnalysisError):
    status_code = 500


class ParseError(AnalysisError):
    status_code = 500


def error_response(status_code: int, message: str, extra: Optional[Dict[str, Any]] = None) -> JSONResponse:
    body: Dict[str, Any] = {"error": message}
    if extra:
        body.update(extra)
    return JSONResponse(status_code=status_code, content=body)
