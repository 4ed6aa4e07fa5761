"""Unit tests for MediaGatewayService: every outcome is an OperationResult."""

import httpx
import pytest

from citaya.domain.media import ImageTransformation, UploadResult
from citaya.infrastructure.services import MediaGatewayService
from citaya.shared.utils.datetime import unix_now

ENDPOINT = "https://ik.imagekit.io/citaya"


class TestAuthenticationParameters:
    async def test_success_result(self, gateway: MediaGatewayService) -> None:
        result = gateway.get_authentication_parameters("tok", unix_now() + 60)
        assert result.success is True
        assert result.error is None
        assert result.data.token == "tok"

    async def test_failure_is_error_result_not_exception(self, gateway: MediaGatewayService) -> None:
        result = gateway.get_authentication_parameters("tok", unix_now() - 10)
        assert result.success is False
        assert result.data is None
        assert "future" in result.error

    async def test_exposes_public_key_and_endpoint(self, gateway: MediaGatewayService) -> None:
        assert gateway.public_key == "public_test_key"
        assert gateway.url_endpoint == ENDPOINT


class TestUpload:
    async def test_success_maps_cdn_payload(self, gateway: MediaGatewayService) -> None:
        result = await gateway.upload_file("aGVsbG8=", "logo.png")
        assert result.success is True
        assert isinstance(result.data, UploadResult)
        assert result.data.file_id == "6673f1e0e7f4b0a1c2d3e4f5"
        assert result.data.to_dict()["filePath"] == "/logos/logo_a1B2c3.png"

    async def test_cdn_error_is_error_result(self, gateway: MediaGatewayService, fake_cdn) -> None:
        fake_cdn.upload_status = 403
        fake_cdn.upload_json = {"message": "Your account cannot be authenticated."}
        result = await gateway.upload_file("aGVsbG8=", "logo.png")
        assert result.success is False
        assert result.data is None
        assert result.error == "Your account cannot be authenticated."

    async def test_malformed_cdn_response_is_error_result(
        self, gateway: MediaGatewayService, fake_cdn
    ) -> None:
        fake_cdn.upload_json = {"unexpected": True}
        result = await gateway.upload_file("aGVsbG8=", "logo.png")
        assert result.success is False
        assert result.error == "Failed to upload file"

    async def test_transport_error_is_error_result(
        self, gateway: MediaGatewayService, fake_cdn
    ) -> None:
        fake_cdn.raise_error = httpx.ConnectError("no route to host")
        result = await gateway.upload_file("aGVsbG8=", "logo.png")
        assert result.success is False
        assert "no route to host" in result.error


class TestDelete:
    async def test_success_message(self, gateway: MediaGatewayService) -> None:
        result = await gateway.delete_file("abc")
        assert result.success is True
        assert result.data == {"message": "File deleted successfully"}

    async def test_already_deleted_is_error_result(
        self, gateway: MediaGatewayService, fake_cdn
    ) -> None:
        fake_cdn.delete_status = 404
        fake_cdn.delete_json = {"message": "The requested file does not exist."}
        first = await gateway.delete_file("abc")
        second = await gateway.delete_file("abc")
        assert first == second
        assert first.success is False
        assert first.error == "The requested file does not exist."


class TestIsValidUrl:
    @pytest.mark.parametrize(
        "url",
        [ENDPOINT, f"{ENDPOINT}/logos/a.png", f"{ENDPOINT}/tr:w-100/a.png"],
    )
    async def test_accepts_endpoint_urls(self, gateway: MediaGatewayService, url: str) -> None:
        assert gateway.is_valid_url(url) is True

    @pytest.mark.parametrize(
        "url",
        ["", "https://evil.example.com/a.png", "http://ik.imagekit.io/citaya/a.png", None, 42],
    )
    async def test_rejects_other_values(self, gateway: MediaGatewayService, url) -> None:
        assert gateway.is_valid_url(url) is False


class TestBuildTransformedUrl:
    async def test_with_dataclass(self, gateway: MediaGatewayService) -> None:
        url = gateway.build_transformed_url("/logos/a.png", ImageTransformation(width=200, format="avif"))
        assert url == f"{ENDPOINT}/tr:w-200,f-avif/logos/a.png"

    async def test_with_mapping(self, gateway: MediaGatewayService) -> None:
        url = gateway.build_transformed_url("/logos/a.png", {"height": 50, "quality": 70})
        assert url == f"{ENDPOINT}/tr:h-50,q-70/logos/a.png"

    @pytest.mark.parametrize(
        "transform",
        [
            {"width": -5},
            {"quality": 500},
            {"format": "gif"},
            {"rotation": 90},
            {"width": "wide"},
            ["not", "a", "mapping"],
        ],
    )
    async def test_invalid_transform_returns_path_unchanged(
        self, gateway: MediaGatewayService, transform
    ) -> None:
        assert gateway.build_transformed_url("/logos/a.png", transform) == "/logos/a.png"

    async def test_foreign_url_returns_original(self, gateway: MediaGatewayService) -> None:
        src = "https://cdn.other.com/a.png"
        assert gateway.build_transformed_url(src, {"width": 10}) == src
