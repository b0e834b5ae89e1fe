"""
PostgreSQL implementation of the EntityStore used by the task importer.

Uniqueness of (owner_id, lower(name)) is enforced by the indexes in schema.sql;
asyncpg's UniqueViolationError is translated to DuplicateKeyError.
"""

import json
import logging
import uuid
from typing import List, Optional, Sequence

import asyncpg

from smartnote_ai.errors import DuplicateKeyError
from smartnote_ai.models import (
    Category,
    CategoryCreate,
    Project,
    ProjectCreate,
    Task,
    TaskCreate,
)
from storage import db
from storage.entity_store import EntityStore

logger = logging.getLogger(__name__)


def _project_from_record(record) -> Project:
    return Project(
        id=str(record["id"]),
        owner_id=record["owner_id"],
        name=record["name"],
        description=record["description"],
        color=record["color"],
        icon=record["icon"],
        status=record["status"],
        start_date=record["start_date"],
        end_date=record["end_date"],
        ai_generated=record["ai_generated"],
        created_at=record["created_at"],
    )


def _category_from_record(record) -> Category:
    return Category(
        id=str(record["id"]),
        owner_id=record["owner_id"],
        name=record["name"],
        color=record["color"],
        icon=record["icon"],
        type=record["type"],
        ai_generated=record["ai_generated"],
        created_at=record["created_at"],
    )


def _task_from_record(record) -> Task:
    return Task(
        id=str(record["id"]),
        owner_id=record["owner_id"],
        title=record["title"],
        description=record["description"],
        priority=record["priority"],
        status=record["status"],
        project_id=str(record["project_id"]) if record["project_id"] else None,
        category_id=str(record["category_id"]) if record["category_id"] else None,
        estimated_minutes=record["estimated_minutes"],
        ai_generated=record["ai_generated"],
        ai_metadata=json.loads(record["ai_metadata"]) if record["ai_metadata"] else {},
        source_note_id=record["source_note_id"],
        created_at=record["created_at"],
    )


class PostgresEntityStore(EntityStore):

    async def find_projects_by_owner(self, owner_id: str) -> List[Project]:
        rows = await db.fetch(
            "SELECT * FROM projects WHERE owner_id = $1 ORDER BY created_at, id",
            owner_id,
        )
        return [_project_from_record(r) for r in rows]

    async def find_categories_by_owner(
        self, owner_id: str, types: Optional[Sequence[str]] = None
    ) -> List[Category]:
        if types:
            rows = await db.fetch(
                """
                SELECT * FROM categories
                WHERE owner_id = $1 AND type = ANY($2::text[])
                ORDER BY created_at, id
                """,
                owner_id,
                list(types),
            )
        else:
            rows = await db.fetch(
                "SELECT * FROM categories WHERE owner_id = $1 ORDER BY created_at, id",
                owner_id,
            )
        return [_category_from_record(r) for r in rows]

    async def create_project(self, fields: ProjectCreate) -> Project:
        query = """
            INSERT INTO projects (
                owner_id, name, description, color, icon,
                status, start_date, end_date, ai_generated
            ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
            RETURNING *
        """
        try:
            record = await db.fetchrow(
                query,
                fields.owner_id,
                fields.name,
                fields.description,
                fields.color,
                fields.icon,
                fields.status,
                fields.start_date,
                fields.end_date,
                fields.ai_generated,
            )
        except asyncpg.UniqueViolationError as e:
            raise DuplicateKeyError(f"Project '{fields.name}' already exists") from e
        return _project_from_record(record)

    async def create_category(self, fields: CategoryCreate) -> Category:
        query = """
            INSERT INTO categories (owner_id, name, color, icon, type, ai_generated)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING *
        """
        try:
            record = await db.fetchrow(
                query,
                fields.owner_id,
                fields.name,
                fields.color,
                fields.icon,
                fields.type,
                fields.ai_generated,
            )
        except asyncpg.UniqueViolationError as e:
            raise DuplicateKeyError(f"Category '{fields.name}' already exists") from e
        return _category_from_record(record)

    async def update_category_type(
        self, owner_id: str, category_id: str, type: str
    ) -> Optional[Category]:
        record = await db.fetchrow(
            """
            UPDATE categories SET type = $3, updated_at = NOW()
            WHERE id = $1 AND owner_id = $2
            RETURNING *
            """,
            uuid.UUID(category_id),
            owner_id,
            type,
        )
        if record is None:
            return None
        return _category_from_record(record)

    async def create_task(self, fields: TaskCreate) -> Task:
        query = """
            INSERT INTO tasks (
                owner_id, title, description, priority, status,
                project_id, category_id, estimated_minutes,
                ai_generated, ai_metadata, source_note_id
            ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10::jsonb, $11)
            RETURNING *
        """
        record = await db.fetchrow(
            query,
            fields.owner_id,
            fields.title,
            fields.description,
            fields.priority,
            fields.status,
            uuid.UUID(fields.project_id) if fields.project_id else None,
            uuid.UUID(fields.category_id) if fields.category_id else None,
            fields.estimated_minutes,
            fields.ai_generated,
            json.dumps(fields.ai_metadata, ensure_ascii=False),
            fields.source_note_id,
        )
        logger.debug(f"Created task {record['id']} for {fields.owner_id}")
        return _task_from_record(record)
