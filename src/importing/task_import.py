from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from importing.lookup_cache import LookupCache
from importing.materializer import (
    MaterializationContext,
    materialize_category,
    materialize_project,
)
from mapping.priority_mapper import map_priority
from smartnote_ai.errors import DraftValidationError, InternalError, SmartNoteError
from smartnote_ai.models import (
    EntityRef,
    ImportFailure,
    ImportResult,
    ImportSummary,
    Task,
    TaskCreate,
    TaskDraft,
)
from storage.entity_store import EntityStore

logger = logging.getLogger(__name__)

# Returned to clients in place of unexpected store or driver errors
TASK_FAILED_MESSAGE = "Task could not be saved"


class TaskImporter:
    """Turns AI task drafts into persisted tasks for one owner.

    Drafts are processed one at a time, in input order. A draft that fails is
    reported in the summary and the remaining drafts are still imported;
    nothing already written is rolled back.
    """

    def __init__(self, store: EntityStore, rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng or random.Random()

    async def import_tasks(
        self,
        drafts: Sequence[TaskDraft],
        owner_id: str,
        source_note_id: Optional[str] = None,
        auto_create: bool = True,
    ) -> ImportResult:
        if not drafts:
            raise DraftValidationError("tasks must be a non-empty list")
        if not owner_id:
            raise DraftValidationError("owner id is required")

        logger.info(
            f"Importing {len(drafts)} drafts for {owner_id} (auto_create={auto_create})"
        )

        cache = await LookupCache.load(self.store, owner_id)
        ctx = MaterializationContext(owner_id=owner_id, cache=cache, rng=self.rng)

        tasks = []
        failures = []
        for index, draft in enumerate(drafts):
            try:
                task = await self._import_one(draft, ctx, source_note_id, auto_create)
            except SmartNoteError as e:
                logger.warning(f"Draft {index} ('{draft.task_text[:30]}') failed: {e}")
                error = str(e)
            except Exception:
                logger.exception(f"Draft {index} ('{draft.task_text[:30]}') failed")
                error = TASK_FAILED_MESSAGE
            else:
                tasks.append(task)
                continue
            failures.append(ImportFailure(index=index, task_text=draft.task_text, error=error))

        if failures and not tasks:
            raise InternalError(
                f"None of the {len(drafts)} tasks could be created: {failures[0].error}"
            )

        summary = ImportSummary(
            tasks_created=len(tasks),
            tasks_failed=len(failures),
            projects_created=len(ctx.created_projects),
            categories_created=len(ctx.created_categories),
            new_projects=[
                EntityRef(id=p.id, name=p.name) for p in ctx.created_projects.values()
            ],
            new_categories=[
                EntityRef(id=c.id, name=c.name) for c in ctx.created_categories.values()
            ],
            failures=failures,
        )
        logger.info(
            f"Imported {summary.tasks_created} tasks "
            f"({summary.projects_created} new projects, "
            f"{summary.categories_created} new categories, "
            f"{summary.tasks_failed} failed)"
        )
        return ImportResult(tasks=tasks, summary=summary)

    async def _import_one(
        self,
        draft: TaskDraft,
        ctx: MaterializationContext,
        source_note_id: Optional[str],
        auto_create: bool,
    ) -> Task:
        project = await materialize_project(
            self.store, draft.suggested_project, ctx, create=auto_create
        )
        category = await materialize_category(
            self.store, draft.suggested_topic, ctx, create=auto_create
        )

        fields = TaskCreate(
            owner_id=ctx.owner_id,
            title=draft.task_text,
            priority=map_priority(draft.priority),
            project_id=project.id if project else None,
            category_id=category.id if category else None,
            estimated_minutes=draft.estimated_minutes,
            ai_generated=True,
            ai_metadata=draft.raw_labels(),
            source_note_id=source_note_id,
        )
        return await self.store.create_task(fields)
