"""Media gateway: the only holder of the CDN private key.

All CDN interaction goes through MediaGatewayService. Every operation
returns an OperationResult; CDN, transport and parsing failures are logged
here and never propagate to callers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from citaya.domain.exceptions import GatewayException
from citaya.domain.media import (
    DEFAULT_UPLOAD_FOLDER,
    AuthParams,
    Credentials,
    ImageTransformation,
    UploadResult,
)
from citaya.domain.results import OperationResult
from citaya.infrastructure.external.imagekit import ImageKitRESTClient

logger = logging.getLogger(__name__)

DELETE_SUCCESS_MESSAGE = "File deleted successfully"


class MediaGatewayService:
    """Wraps ImageKitRESTClient and normalizes every outcome.

    Stateless after construction; safe to share across concurrent requests.
    Built once in the app lifespan and handed to endpoints via Depends().
    """

    def __init__(self, credentials: Credentials, client: ImageKitRESTClient):
        self._credentials = credentials
        self._client = client

    @classmethod
    def create(
        cls,
        credentials: Credentials,
        http: httpx.AsyncClient,
        *,
        upload_api_url: str = "https://upload.imagekit.io/api/v1",
        api_url: str = "https://api.imagekit.io/v1",
    ) -> MediaGatewayService:
        client = ImageKitRESTClient(
            credentials,
            http,
            upload_api_url=upload_api_url,
            api_url=api_url,
        )
        return cls(credentials, client)

    @property
    def public_key(self) -> str:
        return self._credentials.public_key

    @property
    def url_endpoint(self) -> str:
        return self._credentials.url_endpoint

    def get_authentication_parameters(
        self,
        token: str | None = None,
        expire: int | None = None,
    ) -> OperationResult[AuthParams]:
        """Signed token/expire/signature for a direct client upload."""
        try:
            return OperationResult.ok(
                self._client.get_authentication_parameters(token, expire)
            )
        except Exception as e:
            logger.exception("Error generating auth parameters")
            return OperationResult.fail(
                str(e) or "Failed to generate authentication parameters"
            )

    async def upload_file(
        self,
        file: str,
        file_name: str,
        folder: str = DEFAULT_UPLOAD_FOLDER,
        tags: list[str] | None = None,
    ) -> OperationResult[UploadResult]:
        """Server-side upload for admin/batch cases (clients upload directly).

        Args:
            file: Base64 content, data URI, or a public URL the CDN fetches.
            file_name: Desired name; the CDN appends a unique suffix.
            folder: Destination folder.
            tags: Optional tags for organizing assets.
        """
        try:
            payload = await self._client.upload(file, file_name, folder, tags)
            result = UploadResult.from_api(payload)
        except GatewayException as e:
            logger.error(
                "Error uploading file %r to folder %r: %s (status=%s)",
                file_name,
                folder,
                e.message,
                e.status_code,
            )
            return OperationResult.fail(e.message)
        except Exception:
            logger.exception("Error uploading file %r", file_name)
            return OperationResult.fail("Failed to upload file")
        logger.info("Uploaded %s (fileId=%s, %d bytes)", result.file_path, result.file_id, result.size)
        return OperationResult.ok(result)

    async def delete_file(self, file_id: str) -> OperationResult[dict[str, str]]:
        """Delete a stored object by fileId. A missing object is an error result."""
        try:
            await self._client.delete(file_id)
        except GatewayException as e:
            logger.error(
                "Error deleting file %s: %s (status=%s)", file_id, e.message, e.status_code
            )
            return OperationResult.fail(e.message)
        except Exception:
            logger.exception("Error deleting file %s", file_id)
            return OperationResult.fail("Failed to delete file")
        logger.info("Deleted file %s", file_id)
        return OperationResult.ok({"message": DELETE_SUCCESS_MESSAGE})

    def is_valid_url(self, url: Any) -> bool:
        """True iff url starts with the configured URL endpoint."""
        if not isinstance(url, str) or not url:
            return False
        return url.startswith(self._credentials.url_endpoint)

    def build_transformed_url(
        self,
        path: str,
        transform: ImageTransformation | Mapping[str, Any] | None = None,
    ) -> str:
        """Delivery URL with transformation; returns path unchanged on any failure."""
        try:
            if transform is not None and not isinstance(transform, ImageTransformation):
                transform = ImageTransformation.from_mapping(dict(transform))
            return self._client.build_url(path, transform)
        except Exception as e:
            logger.warning("Error generating transformed URL for %r: %s", path, e)
            return path
