# post_routes.py

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

import post_service
from database import get_db
from errors import ServiceError
from responses import bind_and_validate, lookup_failure, service_failure, success
from schemas import (
    INT64_MAX,
    INT64_MIN,
    CreateOnePostRequest,
    DeleteOnePostRequest,
    GetOnePostRequest,
    UpdateOnePostRequest,
)

router = APIRouter(prefix="/post", tags=["post"])

POST_DELETED = "post deleted"


def _int_query(request: Request, name: str) -> int:
    # Absent, malformed or out-of-range values count as 0
    try:
        value = int(request.query_params.get(name, 0))
    except ValueError:
        return 0
    if not INT64_MIN <= value <= INT64_MAX:
        return 0
    return value


@router.get("/getOnePost")
async def get_one_post(request: Request, session: AsyncSession = Depends(get_db)):
    """Get a post by id or title. At least one of the two is required."""
    req, error_response = await bind_and_validate(request, GetOnePostRequest)
    if error_response:
        return error_response

    try:
        post = await post_service.get_one_post_by_id_or_title(session, req)
    except ServiceError as e:
        return lookup_failure(request, e)

    return success(request, post)


@router.get("/getAllPosts")
async def get_all_posts(request: Request, session: AsyncSession = Depends(get_db)):
    """List posts, newest first, paged by the ``page`` and ``pageSize`` query parameters."""
    page = _int_query(request, "page")
    page_size = _int_query(request, "pageSize")

    try:
        posts = await post_service.get_all_posts_with_paging(session, page, page_size)
    except ServiceError as e:
        return service_failure(request, e)

    return success(request, posts)


@router.post("/createOnePost")
async def create_one_post(request: Request, session: AsyncSession = Depends(get_db)):
    req, error_response = await bind_and_validate(request, CreateOnePostRequest)
    if error_response:
        return error_response

    try:
        post = await post_service.create_one_post(session, req)
    except ServiceError as e:
        return service_failure(request, e)

    return success(request, post)


@router.post("/updateOnePost")
async def update_one_post(request: Request, session: AsyncSession = Depends(get_db)):
    req, error_response = await bind_and_validate(request, UpdateOnePostRequest)
    if error_response:
        return error_response

    try:
        post = await post_service.update_one_post(session, req)
    except ServiceError as e:
        return service_failure(request, e)

    return success(request, post)


@router.post("/deleteOnePost")
async def delete_one_post(request: Request, session: AsyncSession = Depends(get_db)):
    req, error_response = await bind_and_validate(request, DeleteOnePostRequest)
    if error_response:
        return error_response

    try:
        await post_service.delete_one_post(session, req)
    except ServiceError as e:
        return service_failure(request, e)

    return success(request, POST_DELETED)
