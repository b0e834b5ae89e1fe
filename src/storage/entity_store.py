from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from smartnote_ai.models import (
    Category,
    CategoryCreate,
    Project,
    ProjectCreate,
    Task,
    TaskCreate,
)


class EntityStore(ABC):
    """
    Owner-scoped persistence used by the task import pipeline.

    Every read is filtered by owner id. create_project / create_category must
    raise DuplicateKeyError when the owner already has an entity whose name
    matches ignoring case.
    """

    @abstractmethod
    async def find_projects_by_owner(self, owner_id: str) -> List[Project]:
        raise NotImplementedError

    @abstractmethod
    async def find_categories_by_owner(
        self, owner_id: str, types: Optional[Sequence[str]] = None
    ) -> List[Category]:
        """All categories of the owner, optionally restricted to the given types."""
        raise NotImplementedError

    @abstractmethod
    async def create_project(self, fields: ProjectCreate) -> Project:
        raise NotImplementedError

    @abstractmethod
    async def create_category(self, fields: CategoryCreate) -> Category:
        raise NotImplementedError

    @abstractmethod
    async def update_category_type(
        self, owner_id: str, category_id: str, type: str
    ) -> Optional[Category]:
        """Change an owned category's type. None if the owner has no such category."""
        raise NotImplementedError

    @abstractmethod
    async def create_task(self, fields: TaskCreate) -> Task:
        raise NotImplementedError
