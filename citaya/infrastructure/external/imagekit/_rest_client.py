"""Thin ImageKit REST API client (no vendor SDK).

Signing uses HMAC-SHA1 over token + expire, the scheme the CDN verifies for
client-side uploads. Upload and delete go through httpx.AsyncClient with
HTTP basic auth (private key as username, empty password) so calls do not
block the event loop. Errors raise GatewayException; callers decide how to
surface them.
"""

from __future__ import annotations

import hashlib
import hmac
import uuid
from typing import Any
from urllib.parse import quote

import httpx

from citaya.domain.exceptions import GatewayException
from citaya.domain.media import (
    DEFAULT_AUTH_EXPIRE_SECONDS,
    AuthParams,
    Credentials,
    ImageTransformation,
)
from citaya.shared.utils.datetime import unix_now

_TRANSFORM_PREFIX = "tr:"


def sign(private_key: str, token: str, expire: int) -> str:
    """Return hex HMAC-SHA1 of token + expire keyed by the private key."""
    return hmac.new(
        private_key.encode(),
        f"{token}{expire}".encode(),
        hashlib.sha1,
    ).hexdigest()


def _error_message(resp: httpx.Response, fallback: str) -> str:
    """Provider 'message' field when the body is JSON, else fallback."""
    try:
        body = resp.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    return fallback


class ImageKitRESTClient:
    """ImageKit upload/delete/signing/URL helpers bound to one credential set."""

    def __init__(
        self,
        credentials: Credentials,
        http: httpx.AsyncClient,
        *,
        upload_api_url: str = "https://upload.imagekit.io/api/v1",
        api_url: str = "https://api.imagekit.io/v1",
    ):
        self._credentials = credentials
        self._http = http
        self._upload_api_url = upload_api_url.rstrip("/")
        self._api_url = api_url.rstrip("/")

    @property
    def _auth(self) -> httpx.BasicAuth:
        return httpx.BasicAuth(self._credentials.private_key, "")

    def get_authentication_parameters(
        self,
        token: str | None = None,
        expire: int | None = None,
    ) -> AuthParams:
        """Sign a (token, expire) pair for a client-side upload.

        token defaults to a random UUID4; expire defaults to now + 3600s.

        Raises:
            ValueError: If expire is not an int or is not in the future.
        """
        token = token or str(uuid.uuid4())
        now = unix_now()
        if expire is None:
            expire = now + DEFAULT_AUTH_EXPIRE_SECONDS
        if isinstance(expire, bool) or not isinstance(expire, int):
            raise ValueError(f"expire must be a Unix timestamp in seconds, got {expire!r}")
        if expire <= now:
            raise ValueError("expire must be in the future")
        return AuthParams(
            token=token,
            expire=expire,
            signature=sign(self._credentials.private_key, token, expire),
        )

    async def upload(
        self,
        file: str,
        file_name: str,
        folder: str,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        """POST /files/upload (multipart). file is base64, data URI or a URL.

        Always asks the CDN for a unique file name so concurrent uploads with
        the same name do not overwrite each other.
        """
        fields: dict[str, str] = {
            "fileName": file_name,
            "folder": folder,
            "useUniqueFileName": "true",
        }
        if tags:
            fields["tags"] = ",".join(tags)
        # multipart/form-data with file as a plain text part
        files = {"file": (None, file)}
        try:
            resp = await self._http.post(
                f"{self._upload_api_url}/files/upload",
                data=fields,
                files=files,
                auth=self._auth,
            )
        except httpx.HTTPError as e:
            raise GatewayException("upload", f"Failed to upload file: {e!s}") from e
        if resp.status_code not in (200, 201):
            raise GatewayException(
                "upload",
                _error_message(resp, "Failed to upload file"),
                status_code=resp.status_code,
            )
        body = resp.json()
        if not isinstance(body, dict):
            raise GatewayException("upload", "Unexpected upload response")
        return body

    async def delete(self, file_id: str) -> None:
        """DELETE /files/{fileId}. 204 on success; 404 when already gone."""
        try:
            resp = await self._http.delete(
                f"{self._api_url}/files/{quote(file_id, safe='')}",
                auth=self._auth,
            )
        except httpx.HTTPError as e:
            raise GatewayException("delete", f"Failed to delete file: {e!s}") from e
        if resp.status_code not in (200, 204):
            raise GatewayException(
                "delete",
                _error_message(resp, "Failed to delete file"),
                status_code=resp.status_code,
            )

    def build_url(
        self,
        path: str,
        transformation: ImageTransformation | None = None,
    ) -> str:
        """Build a delivery URL for path with an optional transformation.

        Relative paths get a path segment (endpoint/tr:w-400/path). Absolute
        URLs under the endpoint get a ?tr= query parameter.

        Raises:
            ValueError: If path is empty or an absolute URL on a foreign host.
        """
        if not isinstance(path, str) or not path.strip():
            raise ValueError("path is required")
        endpoint = self._credentials.url_endpoint.rstrip("/")
        segment = transformation.to_segment() if transformation else ""
        if path.startswith(("http://", "https://")):
            if not path.startswith(endpoint):
                raise ValueError(f"URL is not served by {endpoint}")
            if not segment:
                return path
            sep = "&" if "?" in path else "?"
            return f"{path}{sep}tr={segment}"
        relative = path.lstrip("/")
        if not segment:
            return f"{endpoint}/{relative}"
        return f"{endpoint}/{_TRANSFORM_PREFIX}{segment}/{relative}"
