# category_routes.py

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

import category_service
from database import get_db
from errors import ServiceError
from responses import bind_and_validate, lookup_failure, service_failure, success
from schemas import (
    CreateOneCategoryRequest,
    DeleteOneCategoryRequest,
    GetOneCategoryRequest,
    UpdateOneCategoryRequest,
)

router = APIRouter(prefix="/category", tags=["category"])

CATEGORY_DELETED = "category deleted"


@router.post("/createOneCategory")
async def create_one_category(request: Request, session: AsyncSession = Depends(get_db)):
    """Create a category. ``parent_id`` 0 or absent makes it a root."""
    req, error_response = await bind_and_validate(request, CreateOneCategoryRequest)
    if error_response:
        return error_response

    try:
        category = await category_service.create_one_category(session, req)
    except ServiceError as e:
        return service_failure(request, e)

    return success(request, category)


@router.get("/getOneCategory")
async def get_one_category(request: Request, session: AsyncSession = Depends(get_db)):
    req, error_response = await bind_and_validate(request, GetOneCategoryRequest)
    if error_response:
        return error_response

    try:
        category = await category_service.get_one_category(session, req)
    except ServiceError as e:
        return lookup_failure(request, e)

    return success(request, category)


@router.get("/getCategoryTree")
async def get_category_tree(request: Request, session: AsyncSession = Depends(get_db)):
    try:
        tree = await category_service.get_category_tree(session)
    except ServiceError as e:
        return service_failure(request, e)

    return success(request, tree)


@router.post("/updateOneCategory")
async def update_one_category(request: Request, session: AsyncSession = Depends(get_db)):
    req, error_response = await bind_and_validate(request, UpdateOneCategoryRequest)
    if error_response:
        return error_response

    try:
        category = await category_service.update_one_category(session, req)
    except ServiceError as e:
        return service_failure(request, e)

    return success(request, category)


@router.post("/deleteOneCategory")
async def delete_one_category(request: Request, session: AsyncSession = Depends(get_db)):
    """Delete a category together with its subcategories."""
    req, error_response = await bind_and_validate(request, DeleteOneCategoryRequest)
    if error_response:
        return error_response

    try:
        await category_service.delete_one_category(session, req)
    except ServiceError as e:
        return service_failure(request, e)

    return success(request, CATEGORY_DELETED)
