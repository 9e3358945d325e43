# schemas.py

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Ids are signed 64-bit integers, the range SQLite INTEGER can hold
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1

Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]

# --- Request DTOs ---
# Every field has a zero-value default so binding only fails on values of the
# wrong type. Required fields are checked by validator.py.

class RequestDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value, info: ValidationInfo):
        # An explicit null binds as the field's zero value
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class CreateOneCategoryRequest(RequestDTO):
    name: str = ""
    description: str = ""
    parent_id: Optional[Int64] = None


class GetOneCategoryRequest(RequestDTO):
    id: Int64 = 0


class UpdateOneCategoryRequest(RequestDTO):
    id: Int64 = 0
    name: str = ""
    description: str = ""
    parent_id: Optional[Int64] = None


class DeleteOneCategoryRequest(RequestDTO):
    id: Int64 = 0


class GetOnePostRequest(RequestDTO):
    id: Int64 = 0
    title: str = ""


class CreateOnePostRequest(RequestDTO):
    title: str = ""
    image: str = ""
    visibility: bool = False
    content: str = ""
    category_id: Optional[Int64] = None


class UpdateOnePostRequest(CreateOnePostRequest):
    id: Int64 = 0


class DeleteOnePostRequest(RequestDTO):
    id: Int64 = 0

# --- Response VOs ---

class CategoryVo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    parent_id: Optional[int] = None
    children: List["CategoryVo"] = []


class PostVo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    image: str
    visibility: bool
    content: str
    category_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class PostListVo(BaseModel):
    posts: List[PostVo]
    total_count: int
    total_pages: int
    page: int
    page_size: int
