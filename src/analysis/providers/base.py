from __future__ import annotations
from abc import ABC, abstractmethod


class AnalysisProvider(ABC):
    @abstractmethod
    def analyze(self, *, text: str, user_id: str) -> str:
        """
        Must return the analysis response body as TEXT (AnalysisClient parses/validates it).
        """
        raise NotImplementedError

    @abstractmethod
    def labels(self) -> str:
        raise NotImplementedError
