from __future__ import annotations
import os
import httpx
from .base import AnalysisProvider


class HttpAnalysisProvider(AnalysisProvider):
    """Talks to the AI analysis microservice over HTTP."""

    def __init__(self, base_url: str | None = None, timeout_s: float | None = None):
        self.base_url = (
            base_url or os.getenv("AI_BACKEND_URL", "http://localhost:8000")
        ).strip().rstrip("/")
        self.timeout_s = timeout_s or float(os.getenv("AI_TIMEOUT_S", "30"))

    def analyze(self, *, text: str, user_id: str) -> str:
        url = f"{self.base_url}/api/analyze"
        payload = {"text": text, "userId": user_id}

        with httpx.Client(timeout=self.timeout_s) as client:
            r = client.post(url, json=payload)
            r.raise_for_status()
            return r.text

    def labels(self) -> str:
        with httpx.Client(timeout=self.timeout_s) as client:
            r = client.get(f"{self.base_url}/api/labels")
            r.raise_for_status()
            return r.text
