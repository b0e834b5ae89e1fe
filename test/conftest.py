import asyncio
import uuid
from datetime import datetime, timezone

import pytest

from importing.name_resolver import fold_name
from smartnote_ai.errors import DuplicateKeyError
from smartnote_ai.models import Category, Project, Task
from storage.entity_store import EntityStore


class InMemoryEntityStore(EntityStore):
    """EntityStore fake that enforces the (owner, folded name) uniqueness."""

    def __init__(self):
        self.projects = []
        self.categories = []
        self.tasks = []
        self.failing_titles = set()
        self.calls = []

    def _stamp(self) -> dict:
        return {"id": str(uuid.uuid4()), "created_at": datetime.now(timezone.utc)}

    async def find_projects_by_owner(self, owner_id):
        self.calls.append(("find_projects", owner_id))
        return [p for p in self.projects if p.owner_id == owner_id]

    async def find_categories_by_owner(self, owner_id, types=None):
        self.calls.append(("find_categories", owner_id, tuple(types or ())))
        return [
            c for c in self.categories
            if c.owner_id == owner_id and (not types or c.type in types)
        ]

    async def create_project(self, fields):
        self.calls.append(("create_project", fields.name))
        if any(
            p.owner_id == fields.owner_id and fold_name(p.name) == fold_name(fields.name)
            for p in self.projects
        ):
            raise DuplicateKeyError(f"Project '{fields.name}' already exists")
        project = Project(**fields.model_dump(), **self._stamp())
        self.projects.append(project)
        return project

    async def create_category(self, fields):
        self.calls.append(("create_category", fields.name))
        if any(
            c.owner_id == fields.owner_id and fold_name(c.name) == fold_name(fields.name)
            for c in self.categories
        ):
            raise DuplicateKeyError(f"Category '{fields.name}' already exists")
        category = Category(**fields.model_dump(), **self._stamp())
        self.categories.append(category)
        return category

    async def update_category_type(self, owner_id, category_id, type):
        self.calls.append(("update_category_type", category_id, type))
        for i, c in enumerate(self.categories):
            if c.id == category_id and c.owner_id == owner_id:
                self.categories[i] = c.model_copy(update={"type": type})
                return self.categories[i]
        return None

    async def create_task(self, fields):
        self.calls.append(("create_task", fields.title))
        if fields.title in self.failing_titles:
            raise RuntimeError(f"store rejected '{fields.title}'")
        task = Task(**fields.model_dump(), **self._stamp())
        self.tasks.append(task)
        return task

    # Seeding helpers, bypassing the call log
    def add_project(self, owner_id: str, name: str) -> Project:
        project = Project(owner_id=owner_id, name=name, **self._stamp())
        self.projects.append(project)
        return project

    def add_category(self, owner_id: str, name: str, type: str = "both") -> Category:
        category = Category(owner_id=owner_id, name=name, type=type, **self._stamp())
        self.categories.append(category)
        return category


class FakeAnalysisProvider:
    def __init__(self, response_text: str = "{}", labels_text: str = "{}", error=None):
        self._response_text = response_text
        self._labels_text = labels_text
        self._error = error
        self.seen = []

    def analyze(self, *, text: str, user_id: str) -> str:
        self.seen.append((text, user_id))
        if self._error is not None:
            raise self._error
        return self._response_text

    def labels(self) -> str:
        if self._error is not None:
            raise self._error
        return self._labels_text


@pytest.fixture
def store():
    return InMemoryEntityStore()


@pytest.fixture
def run():
    def _run(coro):
        return asyncio.run(coro)
    return _run


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str = "{}", labels_text: str = "{}", error=None):
        return FakeAnalysisProvider(response_text, labels_text, error)
    return _make
