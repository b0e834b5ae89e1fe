"""
Find-or-create of projects and categories named by AI drafts.

All state lives in a MaterializationContext that the import pipeline creates
per request and passes in explicitly. Within one context, names that fold to
the same key always resolve to a single entity.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Optional

from importing.lookup_cache import LookupCache
from importing.name_resolver import fold_name, resolve
from mapping.icon_suggester import suggest_icon
from mapping.palette import pick_color
from smartnote_ai.errors import DuplicateKeyError, InternalError
from smartnote_ai.models import Category, CategoryCreate, Project, ProjectCreate
from storage.entity_store import EntityStore

logger = logging.getLogger(__name__)


@dataclass
class MaterializationContext:
    owner_id: str
    cache: LookupCache
    created_projects: Dict[str, Project] = field(default_factory=dict)
    created_categories: Dict[str, Category] = field(default_factory=dict)
    rng: random.Random = field(default_factory=random.Random)


async def materialize_project(
    store: EntityStore,
    name: Optional[str],
    ctx: MaterializationContext,
    create: bool = True,
) -> Optional[Project]:
    if not name or not name.strip():
        return None

    existing = ctx.cache.find_project(name)
    if existing is not None:
        return existing

    key = fold_name(name)
    if key in ctx.created_projects:
        return ctx.created_projects[key]

    if not create:
        return None

    fields = ProjectCreate(
        owner_id=ctx.owner_id,
        name=name,
        color=pick_color(ctx.rng),
        ai_generated=True,
    )
    try:
        project = await store.create_project(fields)
    except DuplicateKeyError:
        # Another request created the same name after our snapshot was taken.
        project = resolve(name, await store.find_projects_by_owner(ctx.owner_id))
        if project is None:
            raise InternalError(f"Could not create or find project '{name}'")
        logger.warning(
            f"Project '{name}' was created concurrently for {ctx.owner_id}, reusing it"
        )
        ctx.cache.add_project(project)
        return project

    logger.info(f"Created project '{project.name}' ({project.id}) for {ctx.owner_id}")
    ctx.cache.add_project(project)
    ctx.created_projects[key] = project
    return project


async def materialize_category(
    store: EntityStore,
    name: Optional[str],
    ctx: MaterializationContext,
    create: bool = True,
) -> Optional[Category]:
    if not name or not name.strip():
        return None

    existing = ctx.cache.find_category(name)
    if existing is not None:
        return existing

    key = fold_name(name)
    if key in ctx.created_categories:
        return ctx.created_categories[key]

    if not create:
        return None

    fields = CategoryCreate(
        owner_id=ctx.owner_id,
        name=name,
        color=pick_color(ctx.rng),
        icon=suggest_icon(name),
        type="task",
        ai_generated=True,
    )
    try:
        category = await store.create_category(fields)
    except DuplicateKeyError:
        # The unique index spans every category type, so look beyond task categories.
        category = resolve(name, await store.find_categories_by_owner(ctx.owner_id))
        if category is None:
            raise InternalError(f"Could not create or find category '{name}'")
        if category.type == "note":
            # A note-only category with this name: open it up to tasks as well.
            logger.info(f"Category '{category.name}' ({category.id}) now used for tasks")
            category = await store.update_category_type(ctx.owner_id, category.id, "both")
            if category is None:
                raise InternalError(f"Could not update category '{name}'")
        else:
            logger.warning(
                f"Category '{name}' was created concurrently for {ctx.owner_id}, reusing it"
            )
        ctx.cache.add_category(category)
        return category

    logger.info(f"Created category '{category.name}' ({category.id}) for {ctx.owner_id}")
    ctx.cache.add_category(category)
    ctx.created_categories[key] = category
    return category
