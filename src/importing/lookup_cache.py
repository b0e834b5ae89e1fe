from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional

from importing.name_resolver import resolve
from smartnote_ai.models import Category, Project
from storage.entity_store import EntityStore

TASK_CATEGORY_TYPES = ("task", "both")


@dataclass
class LookupCache:
    """Snapshot of one owner's projects and task categories for a single request."""

    projects: List[Project] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)

    @classmethod
    async def load(cls, store: EntityStore, owner_id: str) -> "LookupCache":
        projects, categories = await asyncio.gather(
            store.find_projects_by_owner(owner_id),
            store.find_categories_by_owner(owner_id, TASK_CATEGORY_TYPES),
        )
        return cls(projects=list(projects), categories=list(categories))

    def find_project(self, name: Optional[str]) -> Optional[Project]:
        return resolve(name, self.projects)

    def find_category(self, name: Optional[str]) -> Optional[Category]:
        return resolve(name, self.categories)

    def add_project(self, project: Project) -> None:
        self.projects.append(project)

    def add_category(self, category: Category) -> None:
        self.categories.append(category)
