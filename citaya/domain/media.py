"""Media domain types: CDN credentials, auth parameters, uploads and transformations.

Plain dataclasses with validation on construction; independent of the CDN
client and of the HTTP layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from citaya.domain.exceptions import ConfigurationException

if TYPE_CHECKING:
    from citaya.core.config import Settings

DEFAULT_UPLOAD_FOLDER = "logos"
DEFAULT_AUTH_EXPIRE_SECONDS = 3600

ALLOWED_IMAGE_FORMATS = frozenset({"jpg", "png", "webp", "avif"})


@dataclass(frozen=True)
class Credentials:
    """CDN credential triple. The private key is excluded from repr."""

    public_key: str
    private_key: str = field(repr=False)
    url_endpoint: str

    def __post_init__(self) -> None:
        missing = [
            name
            for name in ("public_key", "private_key", "url_endpoint")
            if not isinstance(getattr(self, name), str) or not getattr(self, name).strip()
        ]
        if missing:
            raise ConfigurationException(
                f"CDN credentials not configured: {', '.join(missing)}",
                missing=missing,
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> Credentials:
        return cls(
            public_key=settings.cdn_public_key,
            private_key=settings.cdn_private_key.get_secret_value(),
            url_endpoint=settings.cdn_url_endpoint,
        )


@dataclass(frozen=True)
class AuthParams:
    """Short-lived signed parameters for a direct client-to-CDN upload."""

    token: str
    expire: int
    signature: str

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token, "expire": self.expire, "signature": self.signature}


@dataclass(frozen=True)
class UploadResult:
    """Remote object created by an upload. file_id is the handle for deletion."""

    url: str
    file_id: str
    thumbnail_url: str | None
    name: str
    file_path: str
    size: int

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> UploadResult:
        """Build from the CDN's upload response (camelCase keys).

        Raises:
            KeyError: If url, fileId, name or filePath is missing.
        """
        return cls(
            url=payload["url"],
            file_id=payload["fileId"],
            thumbnail_url=payload.get("thumbnailUrl"),
            name=payload["name"],
            file_path=payload["filePath"],
            size=int(payload.get("size") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "fileId": self.file_id,
            "thumbnailUrl": self.thumbnail_url,
            "name": self.name,
            "filePath": self.file_path,
            "size": self.size,
        }


@dataclass(frozen=True)
class ImageTransformation:
    """Recognized image transformation options.

    Validated on construction; raises ValueError for out-of-range values or
    unknown formats.
    """

    width: int | None = None
    height: int | None = None
    quality: int | None = None
    format: str | None = None

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if value is not None and (
                isinstance(value, bool) or not isinstance(value, int) or value <= 0
            ):
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.quality is not None and (
            isinstance(self.quality, bool)
            or not isinstance(self.quality, int)
            or not 1 <= self.quality <= 100
        ):
            raise ValueError(f"quality must be between 1 and 100, got {self.quality!r}")
        if self.format is not None and self.format not in ALLOWED_IMAGE_FORMATS:
            raise ValueError(f"Unsupported format: {self.format!r}")

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> ImageTransformation:
        """Build from a plain dict. Unknown keys raise TypeError."""
        return cls(**raw)

    def to_segment(self) -> str:
        """Comma-joined transformation string, e.g. 'w-400,h-300,q-80,f-webp'."""
        parts: list[str] = []
        if self.width is not None:
            parts.append(f"w-{self.width}")
        if self.height is not None:
            parts.append(f"h-{self.height}")
        if self.quality is not None:
            parts.append(f"q-{self.quality}")
        if self.format is not None:
            parts.append(f"f-{self.format}")
        return ",".join(parts)
