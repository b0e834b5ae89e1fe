from __future__ import annotations
from typing import List, Optional, Union
from pydantic import AliasChoices, Field

from smartnote_ai.models import CamelModel, TaskDraft


class AnalyzedTask(TaskDraft):
    """A task draft as returned by analyze-note; minutes go out as estimatedTimeMinutes."""

    estimated_minutes: Optional[int] = Field(
        None,
        ge=0,
        validation_alias=AliasChoices(
            "estimatedMinutes",
            "estimatedTimeMinutes",
            "estimated_minutes",
            "estimated_time_minutes",
        ),
        serialization_alias="estimatedTimeMinutes",
    )


class AnalysisMetadata(CamelModel):
    projects_discovered: Union[List[str], int] = Field(default_factory=list)
    topics_discovered: Union[List[str], int] = Field(default_factory=list)
    tokens_used: int = 0


class AnalysisResult(CamelModel):
    tasks: List[AnalyzedTask] = Field(default_factory=list)
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)
    processing_time_ms: float = 0
