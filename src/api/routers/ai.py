import asyncio
import logging
import time
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field

from analysis.analysis_client import AnalysisClient
from api.dependencies import get_analysis_client, get_current_user_id, get_entity_store
from api.metrics import (
    ENTITIES_AUTO_CREATED_TOTAL,
    REQUEST_LATENCY_SECONDS,
    REQUESTS_TOTAL,
    TASK_IMPORT_FAILURES_TOTAL,
    TASKS_IMPORTED_TOTAL,
    UPSTREAM_ERRORS_TOTAL,
)
from importing.name_resolver import resolve
from importing.task_import import TaskImporter
from mapping.priority_mapper import map_priority
from smartnote_ai.errors import UpstreamUnavailable
from smartnote_ai.models import CamelModel, ImportResult, TaskDraft
from storage.entity_store import EntityStore

router = APIRouter(prefix="/ai", dependencies=[Depends(get_current_user_id)])
logger = logging.getLogger(__name__)


class CreateTasksIn(CamelModel):
    tasks: List[TaskDraft] = Field(default_factory=list)
    note_id: Optional[str] = None
    auto_create_projects_and_topics: bool = True


class AnalyzeNoteIn(CamelModel):
    text: str = ""
    note_id: Optional[str] = None


class SuggestMappingIn(CamelModel):
    task_text: str = ""


def _observe(endpoint: str, status: str, start: float) -> None:
    # Prometheus counters (best-effort)
    try:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)
    except Exception:
        pass


async def _analyze(client: AnalysisClient, text: str, user_id: str):
    try:
        return await asyncio.to_thread(client.analyze, text, user_id)
    except UpstreamUnavailable:
        UPSTREAM_ERRORS_TOTAL.inc()
        raise


@router.post("/create-tasks", status_code=201, response_model=ImportResult)
async def create_tasks(
    payload: CreateTasksIn,
    user_id: str = Depends(get_current_user_id),
    store: EntityStore = Depends(get_entity_store),
) -> ImportResult:
    """Persist AI-suggested tasks, creating missing projects and topics."""
    start = time.time()
    logger.info(f"Creating {len(payload.tasks)} tasks from AI for {user_id}")

    importer = TaskImporter(store)
    result = await importer.import_tasks(
        payload.tasks,
        owner_id=user_id,
        source_note_id=payload.note_id,
        auto_create=payload.auto_create_projects_and_topics,
    )

    summary = result.summary
    try:
        TASKS_IMPORTED_TOTAL.inc(summary.tasks_created)
        TASK_IMPORT_FAILURES_TOTAL.inc(summary.tasks_failed)
        ENTITIES_AUTO_CREATED_TOTAL.labels(kind="project").inc(summary.projects_created)
        ENTITIES_AUTO_CREATED_TOTAL.labels(kind="category").inc(summary.categories_created)
    except Exception:
        pass
    _observe("/ai/create-tasks", "partial" if summary.tasks_failed else "created", start)

    return result


@router.post("/analyze-note")
async def analyze_note(
    payload: AnalyzeNoteIn,
    user_id: str = Depends(get_current_user_id),
    client: AnalysisClient = Depends(get_analysis_client),
) -> dict:
    """Ask the AI service for task suggestions for a piece of note text.

    The suggestions are only returned. Notes are stored outside this service,
    so nothing is written back to the note (no aiSuggestions field is saved);
    clients pass the tasks they keep to /ai/create-tasks.
    """
    start = time.time()
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="text must not be empty")

    result = await _analyze(client, payload.text, user_id)
    logger.info(f"AI analysis for {user_id} suggested {len(result.tasks)} tasks")
    _observe("/ai/analyze-note", "ok", start)

    return {"noteId": payload.note_id, **result.model_dump(by_alias=True)}


@router.post("/suggest-mapping")
async def suggest_mapping(
    payload: SuggestMappingIn,
    user_id: str = Depends(get_current_user_id),
    store: EntityStore = Depends(get_entity_store),
    client: AnalysisClient = Depends(get_analysis_client),
) -> dict:
    """Match the AI's project/topic suggestion for one task against the caller's data."""
    if not payload.task_text.strip():
        raise HTTPException(status_code=400, detail="taskText must not be empty")

    result = await _analyze(client, payload.task_text, user_id)
    if not result.tasks:
        return {
            "suggestedProject": None,
            "suggestedCategory": None,
            "suggestedPriority": None,
        }

    draft = result.tasks[0]
    projects, categories = await asyncio.gather(
        store.find_projects_by_owner(user_id),
        store.find_categories_by_owner(user_id),
    )
    project = resolve(draft.suggested_project, projects)
    category = resolve(draft.suggested_topic, categories)

    return {
        "suggestedProject": {
            "name": draft.suggested_project,
            "existing": project.model_dump(by_alias=True, mode="json") if project else None,
        },
        "suggestedCategory": {
            "name": draft.suggested_topic,
            "existing": category.model_dump(by_alias=True, mode="json") if category else None,
        },
        "suggestedPriority": {
            "value": draft.priority,
            "mapped": map_priority(draft.priority),
        },
    }


@router.get("/labels")
async def get_labels(client: AnalysisClient = Depends(get_analysis_client)) -> Any:
    """Label catalogue of the AI service."""
    try:
        return await asyncio.to_thread(client.labels)
    except UpstreamUnavailable:
        UPSTREAM_ERRORS_TOTAL.inc()
        raise
