# validator.py

# One explicit check function per DTO type. A field gets at most one message
# (its first failing rule) and every field is checked.

from typing import Callable, Dict, Optional, Type

from pydantic import BaseModel

from schemas import (
    CreateOneCategoryRequest,
    CreateOnePostRequest,
    DeleteOneCategoryRequest,
    DeleteOnePostRequest,
    GetOneCategoryRequest,
    GetOnePostRequest,
    UpdateOneCategoryRequest,
    UpdateOnePostRequest,
)

MAX_NAME_LENGTH = 225
MAX_TITLE_LENGTH = 225
MAX_DESCRIPTION_LENGTH = 255
MAX_IMAGE_LENGTH = 255

Errors = Dict[str, str]


class _Checker:
    def __init__(self):
        self.errors: Errors = {}

    def _add(self, field: str, message: str):
        self.errors.setdefault(field, message)

    def required(self, field: str, value: str, max_length: int):
        if not value:
            self._add(field, f"{field} is required")
        elif len(value) > max_length:
            self._add(field, f"{field} must be at most {max_length} characters")

    def max_length(self, field: str, value: str, max_length: int):
        if len(value) > max_length:
            self._add(field, f"{field} must be at most {max_length} characters")

    def required_id(self, field: str, value: int):
        if value == 0:
            self._add(field, f"{field} is required")
        elif value < 0:
            self._add(field, f"{field} must be a positive integer")

    def optional_id(self, field: str, value: Optional[int]):
        if value is not None and value < 0:
            self._add(field, f"{field} must not be negative")


def _check_create_category(req: CreateOneCategoryRequest, c: _Checker):
    c.required("name", req.name, MAX_NAME_LENGTH)
    c.max_length("description", req.description, MAX_DESCRIPTION_LENGTH)
    c.optional_id("parent_id", req.parent_id)


def _check_update_category(req: UpdateOneCategoryRequest, c: _Checker):
    c.required_id("id", req.id)
    c.required("name", req.name, MAX_NAME_LENGTH)
    c.max_length("description", req.description, MAX_DESCRIPTION_LENGTH)
    c.optional_id("parent_id", req.parent_id)


def _check_id_only(req, c: _Checker):
    c.required_id("id", req.id)


def _check_get_post(req: GetOnePostRequest, c: _Checker):
    # "id or title" is enforced by post_service.get_one_post_by_id_or_title
    c.optional_id("id", req.id)
    c.max_length("title", req.title, MAX_TITLE_LENGTH)


def _check_post_fields(req: CreateOnePostRequest, c: _Checker):
    c.required("title", req.title, MAX_TITLE_LENGTH)
    c.max_length("image", req.image, MAX_IMAGE_LENGTH)
    c.optional_id("category_id", req.category_id)


def _check_update_post(req: UpdateOnePostRequest, c: _Checker):
    c.required_id("id", req.id)
    _check_post_fields(req, c)


_CHECKS: Dict[Type[BaseModel], Callable[[BaseModel, _Checker], None]] = {
    CreateOneCategoryRequest: _check_create_category,
    GetOneCategoryRequest: _check_id_only,
    UpdateOneCategoryRequest: _check_update_category,
    DeleteOneCategoryRequest: _check_id_only,
    GetOnePostRequest: _check_get_post,
    CreateOnePostRequest: _check_post_fields,
    UpdateOnePostRequest: _check_update_post,
    DeleteOnePostRequest: _check_id_only,
}


def validate(req: BaseModel) -> Optional[Errors]:
    """Return None if ``req`` is valid, otherwise a map of field -> message."""
    check = _CHECKS.get(type(req))
    if check is None:
        raise TypeError(f"no validator registered for {type(req).__name__}")
    checker = _Checker()
    check(req, checker)
    return checker.errors or None
