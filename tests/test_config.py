try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import pytest
from pydantic import ValidationError

from relying_party.core.config import AppSettings, OAuthSettings, _load_env_file


def _oauth_settings(**overrides) -> OAuthSettings:
    values = {
        "RP_OAUTH_CLIENT_ID": "client",
        "RP_OAUTH_CLIENT_SECRET": "secret",
        "RP_OAUTH_AUTHORIZATION_ENDPOINT": "https://auth.example.com/authorize",
        "RP_OAUTH_TOKEN_ENDPOINT": "https://auth.example.com/token",
        "RP_OAUTH_REDIRECT_URI": "https://rp.example.com/callback",
    }
    values.update(overrides)
    return OAuthSettings(**values)


def test_scopes_accept_comma_separated_string() -> None:
    settings = _oauth_settings(RP_OAUTH_SCOPES="openid, profile,,email ")

    assert settings.scopes == ("openid", "profile", "email")


def test_scopes_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RP_OAUTH_SCOPES", "read,write")

    assert AppSettings().oauth.scopes == ("read", "write")


def test_to_flow_config_is_frozen() -> None:
    config = _oauth_settings(RP_OAUTH_SCOPES=["openid"]).to_flow_config()

    assert config.client_id == "client"
    assert config.token_endpoint == "https://auth.example.com/token"
    assert config.scopes == ("openid",)
    assert "secret" not in repr(config)
    with pytest.raises(ValidationError):
        config.client_id = "other"


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        _oauth_settings(RP_OAUTH_TOKEN_TIMEOUT=0)


def test_missing_client_id_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RP_OAUTH_CLIENT_ID")

    with pytest.raises(ValidationError):
        AppSettings()


def test_cookie_secure_defaults_to_request_scheme() -> None:
    assert _oauth_settings().cookie_secure is None
    assert _oauth_settings(RP_OAUTH_COOKIE_SECURE="true").cookie_secure is True


def test_env_file_seeds_nested_settings_without_overriding(
    tmp_path, monkeypatch: pytest.MonkeyPatch
) -> None:
    for key in ("RP_LOG_LEVEL", "RP_OAUTH_TOKEN_TIMEOUT"):
        monkeypatch.setenv(key, "placeholder")
        monkeypatch.delenv(key)
    monkeypatch.setenv("RP_OAUTH_CLIENT_ID", "from-environment")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# relying party\n"
        "RP_LOG_LEVEL=debug\n"
        'RP_OAUTH_TOKEN_TIMEOUT="2.5"\n'
        "RP_OAUTH_CLIENT_ID=from-file\n",
        encoding="utf-8",
    )

    _load_env_file(str(env_file))
    settings = AppSettings()

    assert settings.log_level == "debug"
    assert settings.oauth.token_exchange_timeout_seconds == 2.5
    assert settings.oauth.client_id == "from-environment"


@pytest.mark.parametrize("settings_class", [OAuthSettings, AppSettings])
def test_settings_use_model_config(settings_class) -> None:
    assert "Config" not in vars(settings_class)
    assert settings_class.model_config["populate_by_name"] is True
