"""HTTP compartilhado (httpx) para os adapters externos."""

from app.infra.http.client import HttpClient, HttpClientConfig, HttpError

__all__ = ["HttpClient", "HttpClientConfig", "HttpError"]
