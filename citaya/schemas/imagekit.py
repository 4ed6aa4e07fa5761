"""ImageKit proxy API schemas.

JSON uses camelCase (fileName, fileId, ...) to match the CDN and the web
client; Python attributes stay snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Failure envelope shared by all endpoints."""

    success: bool = False
    error: str


class AuthParamsData(_CamelModel):
    """Signed parameters plus what the client needs to upload directly to the CDN."""

    token: str
    expire: int = Field(..., description="Unix timestamp (seconds) after which the signature is rejected")
    signature: str
    public_key: str
    url_endpoint: str


class AuthParamsResponse(BaseModel):
    """Response for GET /imagekit/auth."""

    success: bool = True
    data: AuthParamsData


class UploadFileRequest(_CamelModel):
    """Body for POST /imagekit/upload.

    file and file_name are optional here so that missing values produce the
    endpoint's own 400 message rather than a schema error.
    """

    file: str | None = Field(default=None, description="Base64 content, data URI, or public URL")
    file_name: str | None = None
    folder: str | None = None
    tags: list[str] | None = None


class UploadResultData(_CamelModel):
    """Uploaded object as returned by the CDN."""

    url: str
    file_id: str
    thumbnail_url: str | None = None
    name: str
    file_path: str
    size: int


class UploadFileResponse(BaseModel):
    """Response for POST /imagekit/upload."""

    success: bool = True
    data: UploadResultData


class DeleteFileResponse(BaseModel):
    """Response for DELETE /imagekit/file/{fileId}."""

    success: bool = True
    message: str
