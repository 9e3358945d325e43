# category_service.py

import logging
from typing import Dict, List, Optional, Set

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from errors import NotFoundError, ServiceError
from models import Category, Post
from schemas import (
    CategoryVo,
    CreateOneCategoryRequest,
    DeleteOneCategoryRequest,
    GetOneCategoryRequest,
    UpdateOneCategoryRequest,
)

logger = logging.getLogger(__name__)


def _parent_or_none(parent_id: Optional[int]) -> Optional[int]:
    # 0 means "no parent"
    return parent_id or None


def _to_vo(category: Category) -> CategoryVo:
    return CategoryVo(
        id=category.id,
        name=category.name,
        description=category.description,
        parent_id=category.parent_id,
    )


async def _get_category(session: AsyncSession, category_id: int) -> Category:
    category = await session.get(Category, category_id)
    if category is None:
        raise NotFoundError(f"category {category_id} not found")
    return category


async def _require_parent(session: AsyncSession, parent_id: int):
    if await session.get(Category, parent_id) is None:
        raise ServiceError(f"parent category {parent_id} does not exist")


async def _commit(session: AsyncSession, action: str):
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Failed to {action}: {e}", exc_info=True)
        raise ServiceError(f"failed to {action}") from e


def _children_map(categories: List[Category]) -> Dict[Optional[int], List[Category]]:
    children: Dict[Optional[int], List[Category]] = {}
    for category in categories:
        children.setdefault(category.parent_id, []).append(category)
    return children


def _descendant_ids(children: Dict[Optional[int], List[Category]], root_id: int) -> Set[int]:
    found: Set[int] = set()
    stack = [root_id]
    while stack:
        current = stack.pop()
        for child in children.get(current, []):
            if child.id not in found:
                found.add(child.id)
                stack.append(child.id)
    return found


async def _all_categories(session: AsyncSession) -> List[Category]:
    result = await session.execute(select(Category).order_by(Category.id))
    return list(result.scalars().all())


async def create_one_category(session: AsyncSession, req: CreateOneCategoryRequest) -> CategoryVo:
    parent_id = _parent_or_none(req.parent_id)
    if parent_id is not None:
        await _require_parent(session, parent_id)

    category = Category(name=req.name, description=req.description, parent_id=parent_id)
    session.add(category)
    await _commit(session, "create category")
    logger.info("Created category %d (%s)", category.id, category.name)
    return _to_vo(category)


async def get_one_category(session: AsyncSession, req: GetOneCategoryRequest) -> CategoryVo:
    category = await _get_category(session, req.id)
    return _to_vo(category)


async def get_category_tree(session: AsyncSession) -> List[CategoryVo]:
    """Return root categories with their descendants nested under ``children``."""
    children = _children_map(await _all_categories(session))

    def build(category: Category) -> CategoryVo:
        vo = _to_vo(category)
        vo.children = [build(child) for child in children.get(category.id, [])]
        return vo

    return [build(root) for root in children.get(None, [])]


async def update_one_category(session: AsyncSession, req: UpdateOneCategoryRequest) -> CategoryVo:
    category = await _get_category(session, req.id)

    parent_id = _parent_or_none(req.parent_id)
    if parent_id is not None:
        if parent_id == category.id:
            raise ServiceError("a category cannot be its own parent")
        await _require_parent(session, parent_id)
        descendants = _descendant_ids(_children_map(await _all_categories(session)), category.id)
        if parent_id in descendants:
            raise ServiceError("a category cannot be moved under its own descendant")

    category.name = req.name
    category.description = req.description
    category.parent_id = parent_id
    await _commit(session, "update category")
    logger.info("Updated category %d", category.id)
    return _to_vo(category)


async def delete_one_category(session: AsyncSession, req: DeleteOneCategoryRequest) -> None:
    """Delete a category and its subtree; posts in it become uncategorized."""
    category = await _get_category(session, req.id)
    ids = _descendant_ids(_children_map(await _all_categories(session)), category.id)
    ids.add(category.id)

    try:
        await session.execute(update(Post).where(Post.category_id.in_(ids)).values(category_id=None))
        await session.execute(delete(Category).where(Category.id.in_(ids)))
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Failed to delete category {category.id}: {e}", exc_info=True)
        raise ServiceError("failed to delete category") from e
    await _commit(session, "delete category")
    logger.info("Deleted categories %s", sorted(ids))
