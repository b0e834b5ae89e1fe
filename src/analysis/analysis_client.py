import json
import logging
import os
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from analysis.providers.base import AnalysisProvider
from analysis.providers.http_provider import HttpAnalysisProvider
from analysis.providers.mock_provider import MockAnalysisProvider
from analysis.schemas import AnalysisResult
from smartnote_ai.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


def provider_from_env() -> AnalysisProvider:
    if os.getenv("AI_PROVIDER", "http").strip().lower() == "mock":
        return MockAnalysisProvider()
    return HttpAnalysisProvider()


class AnalysisClient:
    """Typed boundary around the AI analysis service.

    Anything that is not a well-formed response, including transport errors,
    surfaces as UpstreamUnavailable.
    """

    def __init__(self, provider: Optional[AnalysisProvider] = None):
        self.provider = provider or provider_from_env()

    def analyze(self, text: str, user_id: str) -> AnalysisResult:
        try:
            raw = self.provider.analyze(text=text, user_id=user_id)
        except httpx.HTTPError as e:
            logger.error(f"AI analysis request failed: {e}")
            raise UpstreamUnavailable(f"AI service unavailable: {e}") from e

        data = self._parse_json(raw)
        try:
            return AnalysisResult.model_validate(data)
        except ValidationError as e:
            logger.error(f"AI analysis returned an unexpected shape: {e}")
            raise UpstreamUnavailable("AI service returned a malformed response") from e

    def labels(self) -> Any:
        try:
            raw = self.provider.labels()
        except httpx.HTTPError as e:
            logger.error(f"AI labels request failed: {e}")
            raise UpstreamUnavailable(f"AI service unavailable: {e}") from e
        return self._parse_json(raw)

    @staticmethod
    def _parse_json(raw: str) -> Any:
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError) as e:
            logger.error(f"AI service returned invalid JSON: {str(raw)[:80]}")
            raise UpstreamUnavailable("AI service returned invalid JSON") from e
