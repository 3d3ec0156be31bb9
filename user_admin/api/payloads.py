"""Request body parsing for endpoints that take either JSON or a multipart form."""

import json
from typing import Any, TypeVar

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

from user_admin.schemas.account import AccountCreate, AccountUpdate
from user_admin.services.accounts import photo_data_uri

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
MAX_IMAGE_BYTES = 10 * 1024 * 1024
# The dashboard uploads under "profilePhoto"
PHOTO_FIELDS = ("profilePhoto", "profile_photo")

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def read_photo(upload: UploadFile) -> str | None:
    """Read an uploaded profile photo into a data URI. Empty uploads are ignored."""
    content = await upload.read()
    if not content:
        return None

    if upload.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type. Allowed types: {', '.join(sorted(ALLOWED_IMAGE_TYPES))}",
        )
    if len(content) > MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File too large. Maximum size is 10MB.",
        )
    return photo_data_uri(content, upload.content_type)


async def read_payload(request: Request, schema: type[SchemaT]) -> SchemaT:
    """Validate a JSON or form body against `schema`.

    Validation failures are raised as RequestValidationError so they render the
    same way as FastAPI's own body validation.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        raw: Any = {
            key: value for key, value in form.items() if not isinstance(value, UploadFile)
        }
        for field in PHOTO_FIELDS:
            upload = form.get(field)
            if isinstance(upload, UploadFile):
                photo = await read_photo(upload)
                if photo is not None:
                    raw.pop("profile_photo", None)
                    raw["profilePhoto"] = photo
                break
    else:
        body = await request.body()
        try:
            raw = json.loads(body) if body else {}
        except ValueError:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "Invalid JSON body", "input": None}]
            ) from None

    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from None


async def account_create_payload(request: Request) -> AccountCreate:
    return await read_payload(request, AccountCreate)


async def account_update_payload(request: Request) -> AccountUpdate:
    return await read_payload(request, AccountUpdate)
