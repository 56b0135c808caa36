# app/dependencies.py
from fastapi import Request

from app.uploads.service import UploadStore

# Clients are built once by main.create_app and live on app.state.


def get_sentiment_backend(request: Request):
    return request.app.state.sentiment_backend


def get_hf_client(request: Request):
    return request.app.state.hf_client


def get_upload_store(request: Request) -> UploadStore:
    return UploadStore(request.app.state.database)
