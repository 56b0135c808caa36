# app/image_analysis/utils.py
import base64
import binascii
import re
from typing import Any

from app.errors import ValidationError
from config import ErrorMessages, ImageConfig

DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")
WHITESPACE = re.compile(r"\s+")


def strip_data_url(image_base64: str) -> str:
    return DATA_URL_PREFIX.sub("", image_base64, count=1)


def decode_image_payload(image_base64: str) -> bytes:
    """Turn a data URL or bare base64 string into raw image bytes."""
    data = WHITESPACE.sub("", strip_data_url(image_base64))
    try:
        image_bytes = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(ErrorMessages.INVALID_IMAGE) from e
    if not image_bytes:
        raise ValidationError(ErrorMessages.IMAGE_REQUIRED)
    return image_bytes


def extract_caption(payload: Any) -> str:
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        caption = payload[0].get("generated_text")
        if isinstance(caption, str) and caption.strip():
            return caption
    return ImageConfig.NO_CAPTION_TEXT
