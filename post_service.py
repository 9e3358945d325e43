# post_service.py

import logging
import math
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import get_settings
from errors import NotFoundError, ServiceError
from models import Category, Post
from schemas import (
    INT64_MAX,
    CreateOnePostRequest,
    DeleteOnePostRequest,
    GetOnePostRequest,
    PostListVo,
    PostVo,
    UpdateOnePostRequest,
)

logger = logging.getLogger(__name__)


async def _get_post(session: AsyncSession, post_id: int) -> Post:
    post = await session.get(Post, post_id)
    if post is None:
        raise NotFoundError(f"post {post_id} not found")
    return post


async def _category_or_none(session: AsyncSession, category_id: Optional[int]) -> Optional[int]:
    # 0 means "uncategorized"
    if not category_id:
        return None
    if await session.get(Category, category_id) is None:
        raise ServiceError(f"category {category_id} does not exist")
    return category_id


async def _commit(session: AsyncSession, post: Optional[Post], action: str):
    try:
        await session.commit()
        if post is not None:
            await session.refresh(post)
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Failed to {action}: {e}", exc_info=True)
        raise ServiceError(f"failed to {action}") from e


async def get_one_post_by_id_or_title(session: AsyncSession, req: GetOnePostRequest) -> PostVo:
    """Look a post up by id, or by title when no id is given."""
    if req.id:
        return PostVo.model_validate(await _get_post(session, req.id))
    if not req.title:
        raise ServiceError("either id or title is required")

    result = await session.execute(
        select(Post).where(Post.title == req.title).order_by(Post.created_at.desc(), Post.id.desc()).limit(1)
    )
    post = result.scalars().first()
    if post is None:
        raise NotFoundError(f"post titled '{req.title}' not found")
    return PostVo.model_validate(post)


async def get_all_posts_with_paging(session: AsyncSession, page: int, page_size: int) -> PostListVo:
    """Return one page of posts, newest first.

    ``page`` is 1-based; values <= 0 mean the first page. ``page_size`` <= 0
    falls back to the configured default and is capped at the maximum.
    """
    settings = get_settings()
    if page <= 0:
        page = 1
    if page_size <= 0:
        page_size = settings.default_page_size
    page_size = min(page_size, settings.max_page_size)
    # Keep the row offset inside SQLite's 64-bit INTEGER
    page = min(page, INT64_MAX // page_size + 1)

    try:
        # Count the total before pagination
        count_result = await session.execute(select(func.count(Post.id)))
        total_count = count_result.scalar_one_or_none() or 0

        paginated_stmt = (
            select(Post)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        result = await session.execute(paginated_stmt)
        posts_on_page = result.scalars().all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to list posts: {e}", exc_info=True)
        raise ServiceError("failed to list posts") from e

    return PostListVo(
        posts=[PostVo.model_validate(post) for post in posts_on_page],
        total_count=total_count,
        total_pages=math.ceil(total_count / page_size),
        page=page,
        page_size=page_size,
    )


async def create_one_post(session: AsyncSession, req: CreateOnePostRequest) -> PostVo:
    post = Post(
        title=req.title,
        image=req.image,
        visibility=req.visibility,
        content=req.content,
        category_id=await _category_or_none(session, req.category_id),
    )
    session.add(post)
    await _commit(session, post, "create post")
    logger.info("Created post %d (%s)", post.id, post.title)
    return PostVo.model_validate(post)


async def update_one_post(session: AsyncSession, req: UpdateOnePostRequest) -> PostVo:
    post = await _get_post(session, req.id)
    post.title = req.title
    post.image = req.image
    post.visibility = req.visibility
    post.content = req.content
    post.category_id = await _category_or_none(session, req.category_id)
    await _commit(session, post, "update post")
    logger.info("Updated post %d", post.id)
    return PostVo.model_validate(post)


async def delete_one_post(session: AsyncSession, req: DeleteOnePostRequest) -> None:
    post = await _get_post(session, req.id)
    await session.delete(post)
    await _commit(session, None, "delete post")
    logger.info("Deleted post %d", req.id)
