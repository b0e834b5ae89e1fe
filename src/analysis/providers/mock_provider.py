from __future__ import annotations
import json
from .base import AnalysisProvider

URGENT_WORDS = ("gấp", "khẩn", "urgent", "asap")


class MockAnalysisProvider(AnalysisProvider):
    def analyze(self, *, text: str, user_id: str) -> str:
        """
        Returns one dummy task per non-empty line of the text.
        A line of the form "Project: task" suggests that project.
        """
        tasks = []
        for line in text.splitlines():
            line = line.strip(" -*\t")
            if not line:
                continue

            project = None
            if ":" in line:
                project, line = (part.strip() for part in line.split(":", 1))
                if not line:
                    continue

            lower_line = line.lower()
            priority = "Medium"
            if any(w in lower_line for w in URGENT_WORDS):
                priority = "High"

            tasks.append({
                "taskText": line,
                "priority": priority,
                "estimatedTimeMinutes": 30,
                "suggestedProject": project,
                "suggestedTopic": None,
            })

        return json.dumps({
            "tasks": tasks,
            "metadata": {
                "projectsDiscovered": sorted({t["suggestedProject"] for t in tasks if t["suggestedProject"]}),
                "topicsDiscovered": [],
                "tokensUsed": 0,
            },
            "processingTimeMs": 0,
        }, ensure_ascii=False)

    def labels(self) -> str:
        return json.dumps({
            "priorities": ["Low", "Medium", "High"],
            "topics": [],
        })
