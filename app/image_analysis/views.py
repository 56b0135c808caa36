# app/image_analysis/views.py
import logging
from fastapi import APIRouter, Depends

from .models import ImageRequest, ImageResponse
from .utils import decode_image_payload, extract_caption
from app.dependencies import get_hf_client
from app.errors import AnalysisError, UpstreamFailure, UpstreamUnavailable, ValidationError, error_response
from app.huggingface import HuggingFaceClient
from config import ErrorMessages

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Image Analysis"])


@router.post("/analyze-image", response_model=ImageResponse)
def analyze_image(req: ImageRequest, client: HuggingFaceClient = Depends(get_hf_client)):
    if not req.imageBase64:
        return error_response(ValidationError.status_code, ErrorMessages.IMAGE_REQUIRED)

    logger.info("Analyzing image...")

    try:
        image_bytes = decode_image_payload(req.imageBase64)
        payload = client.caption_image(image_bytes)
    except UpstreamUnavailable as e:
        return error_response(e.status_code, ErrorMessages.SERVICE_BUSY)
    except UpstreamFailure as e:
        logger.error(f"Image upstream failure: {e.message}")
        return error_response(e.status_code, ErrorMessages.IMAGE_FAILED)
    except AnalysisError as e:
        return error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception("Error in analyze-image")
        return error_response(500, str(e) or ErrorMessages.UNKNOWN)

    logger.debug(f"Captioning response: {payload!r}")
    logger.info("Successfully analyzed image")
    return ImageResponse(extractedText=extract_caption(payload))
