import base64

import pytest

from app.errors import UpstreamFailure, UpstreamUnavailable, ValidationError
from app.image_analysis.utils import decode_image_payload, extract_caption, strip_data_url
from tests.fakes import FakeHuggingFaceClient

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"
PNG_B64 = base64.b64encode(PNG_BYTES).decode()


def test_strip_data_url_prefix():
    assert strip_data_url(f"data:image/png;base64,{PNG_B64}") == PNG_B64
    assert strip_data_url(f"data:image/jpeg;base64,{PNG_B64}") == PNG_B64
    assert strip_data_url(PNG_B64) == PNG_B64


def test_decode_accepts_data_url_and_bare_base64():
    assert decode_image_payload(f"data:image/webp;base64,{PNG_B64}") == PNG_BYTES
    assert decode_image_payload(PNG_B64) == PNG_BYTES


def test_decode_rejects_garbage():
    with pytest.raises(ValidationError):
        decode_image_payload("data:image/png;base64,***not base64***")


def test_extract_caption_falls_back_when_missing():
    assert extract_caption([{"generated_text": "a dog on a beach"}]) == "a dog on a beach"
    assert extract_caption([]) == "Unable to extract meaningful content from the image."
    assert extract_caption([{"generated_text": ""}]) == "Unable to extract meaningful content from the image."
    assert extract_caption({"error": "x"}) == "Unable to extract meaningful content from the image."


def test_caption_is_returned_as_extracted_text(make_client):
    hf = FakeHuggingFaceClient(caption_payload=[{"generated_text": "a cat sitting on a laptop"}])
    response = make_client(hf=hf).post(
        "/analyze-image", json={"imageBase64": f"data:image/png;base64,{PNG_B64}"}
    )

    assert response.status_code == 200
    assert response.json() == {"extractedText": "a cat sitting on a laptop"}
    assert hf.captioned == [PNG_BYTES]


def test_api_prefixed_image_route(make_client):
    hf = FakeHuggingFaceClient(caption_payload=[{"generated_text": "a tree"}])
    response = make_client(hf=hf).post("/api/analyze-image", json={"imageBase64": PNG_B64})
    assert response.json() == {"extractedText": "a tree"}


@pytest.mark.parametrize("body", [{}, {"imageBase64": ""}])
def test_missing_image_is_rejected(client, hf_client, body):
    response = client.post("/analyze-image", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Image data is required"}
    assert hf_client.captioned == []


def test_invalid_base64_is_a_client_error(client, hf_client):
    response = client.post("/analyze-image", json={"imageBase64": "%%%"})

    assert response.status_code == 400
    assert hf_client.captioned == []


@pytest.mark.parametrize("status_code", [429, 503])
def test_busy_upstream_is_passed_through(make_client, status_code):
    hf = FakeHuggingFaceClient(error=UpstreamUnavailable("busy", status_code=status_code))
    response = make_client(hf=hf).post("/analyze-image", json={"imageBase64": PNG_B64})

    assert response.status_code == status_code
    assert response.json() == {"error": "Service temporarily unavailable. Please try again in a moment."}


def test_other_upstream_failure_is_500(make_client):
    hf = FakeHuggingFaceClient(error=UpstreamFailure("Inference service returned 400"))
    response = make_client(hf=hf).post("/analyze-image", json={"imageBase64": PNG_B64})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to analyze image"}
