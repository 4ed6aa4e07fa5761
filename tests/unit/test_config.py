"""Tests for Settings validation and Credentials."""

import pytest

from citaya.core.config import Settings
from citaya.domain.exceptions import ConfigurationException
from citaya.domain.media import Credentials


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_valid_settings_load() -> None:
    settings = _settings()
    assert settings.cdn_public_key == "public_test_key"
    assert settings.cdn_private_key.get_secret_value() == "private_test_key"
    assert settings.cdn_upload_api_url == "https://upload.imagekit.io/api/v1"


@pytest.mark.parametrize(
    ("field", "env_name"),
    [
        ("cdn_public_key", "CDN_PUBLIC_KEY"),
        ("cdn_private_key", "CDN_PRIVATE_KEY"),
        ("cdn_url_endpoint", "CDN_URL_ENDPOINT"),
    ],
)
def test_missing_cdn_credential_is_fatal(field: str, env_name: str) -> None:
    with pytest.raises(ConfigurationException) as exc_info:
        _settings(**{field: ""})
    assert env_name in exc_info.value.message
    assert exc_info.value.details["missing"] == [env_name]


def test_whitespace_credential_counts_as_missing() -> None:
    with pytest.raises(ConfigurationException):
        _settings(cdn_public_key="   ")


def test_missing_secret_key_is_fatal() -> None:
    with pytest.raises(ConfigurationException, match="SECRET_KEY"):
        _settings(secret_key="")


def test_interval_must_be_positive() -> None:
    with pytest.raises(ConfigurationException):
        _settings(keep_alive_interval_seconds=0)


def test_private_key_not_in_settings_repr() -> None:
    assert "private_test_key" not in repr(_settings())


@pytest.mark.parametrize("mode", ["production", "PRODUCTION", " production "])
def test_is_production(mode: str) -> None:
    assert _settings(deployment_mode=mode).is_production is True


class TestCredentials:
    def test_from_settings(self) -> None:
        creds = Credentials.from_settings(_settings())
        assert creds.public_key == "public_test_key"
        assert creds.private_key == "private_test_key"
        assert creds.url_endpoint == "https://ik.imagekit.io/citaya"

    @pytest.mark.parametrize("blank", ["public_key", "private_key", "url_endpoint"])
    def test_blank_member_rejected(self, blank: str) -> None:
        values = {"public_key": "pub", "private_key": "priv", "url_endpoint": "https://ik.imagekit.io/x"}
        values[blank] = ""
        with pytest.raises(ConfigurationException):
            Credentials(**values)

    def test_private_key_hidden_from_repr(self) -> None:
        creds = Credentials(public_key="pub", private_key="s3cret", url_endpoint="https://ik.imagekit.io/x")
        assert "s3cret" not in repr(creds)
