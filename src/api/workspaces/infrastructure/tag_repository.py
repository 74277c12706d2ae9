"""SQLAlchemy implementation of ITagRepository."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from workspaces.domain.aggregates import Tag
from workspaces.domain.value_objects import TagId, TaskId, UserId, WorkspaceId
from workspaces.infrastructure.models import TagModel, TaskTagModel
from workspaces.infrastructure.observability import (
    DefaultTagRepositoryProbe,
    TagRepositoryProbe,
)
from workspaces.ports.exceptions import DuplicateTaskTagError
from workspaces.ports.repositories import ITagRepository


def is_duplicate_task_tag(error: IntegrityError) -> bool:
    """Check whether an IntegrityError came from the task_tags primary key."""
    message = str(error)
    return "pk_task_tags" in message or "UNIQUE constraint failed: task_tags" in message


class TagRepository(ITagRepository):
    """Repository for tags and their task-tag edges."""

    def __init__(
        self,
        session: AsyncSession,
        probe: TagRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultTagRepositoryProbe()

    async def save(self, tag: Tag) -> None:
        """Insert or update a tag."""
        model = await self._session.get(TagModel, tag.id.value)
        if model:
            model.name = tag.name
            model.color = tag.color
        else:
            self._session.add(
                TagModel(
                    id=tag.id.value,
                    workspace_id=tag.workspace_id.value,
                    name=tag.name,
                    color=tag.color,
                    created_by=tag.created_by.value,
                    created_at=tag.created_at,
                )
            )
        await self._session.flush()
        self._probe.tag_saved(tag.id.value, tag.workspace_id.value)

    async def get_by_id(self, tag_id: TagId) -> Tag | None:
        stmt = select(TagModel).where(TagModel.id == tag_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def list_by_workspace(self, workspace_id: WorkspaceId) -> list[Tag]:
        stmt = (
            select(TagModel)
            .where(TagModel.workspace_id == workspace_id.value)
            .order_by(TagModel.name, TagModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def assign(self, task_id: TaskId, tag_id: TagId) -> None:
        """Attach a tag to a task.

        Raises:
            DuplicateTaskTagError: If the tag is already attached
        """
        stmt = insert(TaskTagModel).values(task_id=task_id.value, tag_id=tag_id.value)
        try:
            await self._session.execute(stmt)
        except IntegrityError as e:
            if is_duplicate_task_tag(e):
                self._probe.duplicate_task_tag(task_id.value, tag_id.value)
                raise DuplicateTaskTagError(
                    f"Tag {tag_id.value} is already assigned to task {task_id.value}"
                ) from e
            raise

        self._probe.tag_assigned(task_id.value, tag_id.value)

    async def list_for_task(self, task_id: TaskId) -> list[Tag]:
        stmt = (
            select(TagModel)
            .join(TaskTagModel, TaskTagModel.tag_id == TagModel.id)
            .where(TaskTagModel.task_id == task_id.value)
            .order_by(TagModel.name, TagModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    def _to_domain(self, model: TagModel) -> Tag:
        return Tag(
            id=TagId(value=model.id),
            workspace_id=WorkspaceId(value=model.workspace_id),
            name=model.name,
            color=model.color,
            created_by=UserId(value=model.created_by),
            created_at=model.created_at,
        )
