"""ImageKit API: thin routes delegating to MediaGatewayService.

GET /auth is public (clients upload directly to the CDN with the returned
signature). POST /upload and DELETE /file/{fileId} require a bearer token.
Missing fields raise ValidationException (rendered as 400 by the
registered handler). Inside each handler, unexpected errors become a
generic 500 so clients never see a stack trace.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Path, Request
from fastapi.responses import JSONResponse

from citaya.api.v1.dependencies import CurrentClaims, MediaGateway
from citaya.core.limiter import limit_delete, limit_upload
from citaya.domain.exceptions import ValidationException
from citaya.domain.media import DEFAULT_UPLOAD_FOLDER
from citaya.schemas.imagekit import (
    AuthParamsData,
    AuthParamsResponse,
    DeleteFileResponse,
    ErrorResponse,
    UploadFileRequest,
    UploadFileResponse,
    UploadResultData,
)

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR = "Internal server error"
FILE_ID_REQUIRED = "fileId is required"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing required fields"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    500: {"model": ErrorResponse, "description": "CDN or internal error"},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.get(
    "/auth",
    response_model=AuthParamsResponse,
    responses={500: _ERROR_RESPONSES[500]},
)
async def get_auth_parameters(gateway: MediaGateway):
    """Signed token/expire/signature plus publicKey and urlEndpoint."""
    try:
        result = gateway.get_authentication_parameters()
        if not result.success or result.data is None:
            return _error(500, result.error or "Failed to generate authentication parameters")
        return AuthParamsResponse(
            data=AuthParamsData(
                **result.data.to_dict(),
                public_key=gateway.public_key,
                url_endpoint=gateway.url_endpoint,
            )
        )
    except Exception:
        logger.exception("Error in get_auth_parameters")
        return _error(500, INTERNAL_ERROR)


@router.post(
    "/upload",
    response_model=UploadFileResponse,
    responses=_ERROR_RESPONSES,
)
@limit_upload
async def upload_file(
    request: Request,
    gateway: MediaGateway,
    _claims: CurrentClaims,
    payload: Annotated[UploadFileRequest | None, Body()] = None,
):
    """Server-side upload (admin/batch). folder defaults to 'logos'."""
    if payload is None or not payload.file or not payload.file_name:
        raise ValidationException("file and fileName are required", field="file")
    try:
        result = await gateway.upload_file(
            payload.file,
            payload.file_name,
            payload.folder or DEFAULT_UPLOAD_FOLDER,
            payload.tags,
        )
        if not result.success or result.data is None:
            return _error(500, result.error or "Failed to upload file")
        return UploadFileResponse(data=UploadResultData.model_validate(result.data.to_dict()))
    except Exception:
        logger.exception("Error in upload_file")
        return _error(500, INTERNAL_ERROR)


@router.delete("/file", include_in_schema=False)
@router.delete("/file/", include_in_schema=False)
async def delete_file_without_id(_claims: CurrentClaims):
    """DELETE without a path segment; fileId only travels in the path."""
    raise ValidationException(FILE_ID_REQUIRED, field="fileId")


@router.delete(
    "/file/{file_id}",
    response_model=DeleteFileResponse,
    responses=_ERROR_RESPONSES,
)
@limit_delete
async def delete_file(
    request: Request,
    gateway: MediaGateway,
    _claims: CurrentClaims,
    file_id: Annotated[str, Path()],
):
    """Delete a CDN object by fileId. A blank fileId is a 400."""
    if not file_id.strip():
        raise ValidationException(FILE_ID_REQUIRED, field="fileId")
    try:
        result = await gateway.delete_file(file_id)
        if not result.success or result.data is None:
            return _error(500, result.error or "Failed to delete file")
        return DeleteFileResponse(message=result.data["message"])
    except Exception:
        logger.exception("Error in delete_file")
        return _error(500, INTERNAL_ERROR)
