# binding.py

# GET, DELETE and HEAD requests bind their query string first. A body, when
# present, is decoded according to its content type and merged on top.

import json
import xml.etree.ElementTree as ET
from typing import Any, Dict, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from errors import BindError

D = TypeVar("D", bound=BaseModel)

QUERY_BOUND_METHODS = ("GET", "DELETE", "HEAD")

JSON_TYPES = ("application/json",)
XML_TYPES = ("application/xml", "text/xml")
FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


def _decode_json(body: bytes) -> Dict[str, Any]:
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise BindError(f"invalid JSON body: {e}") from e
    if not isinstance(payload, dict):
        raise BindError("JSON body must be an object")
    return payload


def _decode_xml(body: bytes) -> Dict[str, Any]:
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise BindError(f"invalid XML body: {e}") from e
    return {child.tag: child.text or "" for child in root}


async def _decode_body(request: Request) -> Dict[str, Any]:
    body = await request.body()
    if not body:
        return {}

    media_type = _media_type(request)
    if media_type in JSON_TYPES:
        return _decode_json(body)
    if media_type in XML_TYPES:
        return _decode_xml(body)
    if media_type in FORM_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    raise BindError(f"unsupported media type: {media_type or 'none'}")


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(item) for item in err["loc"])
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


async def bind(request: Request, dto_type: Type[D]) -> D:
    payload: Dict[str, Any] = {}
    if request.method in QUERY_BOUND_METHODS:
        payload.update(request.query_params)
    payload.update(await _decode_body(request))

    try:
        return dto_type.model_validate(payload)
    except ValidationError as e:
        raise BindError(_describe(e)) from e
