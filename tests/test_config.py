import pytest

from dayflow.config.loader import ConfigLoader
from dayflow.core.auth import RemoteIdentityProvider, StaticTokenIdentityProvider, create_identity_provider
from dayflow.services.metadata import MetadataFetcher


def test_default_config_created(tmp_path):
    path = tmp_path / "nested" / "config.toml"
    loader = ConfigLoader(str(path))
    config = loader.load()

    assert path.exists()
    assert config["rate_limit"]["max_requests"] == 100
    assert loader.get("database.path") == str(path.parent / "dayflow.db")
    assert loader.get("metadata.max_redirects") == 5
    assert loader.get("missing.key", "fallback") == "fallback"


def test_yaml_config_with_env_placeholders(tmp_path, monkeypatch):
    monkeypatch.setenv("DAYFLOW_TEST_PORT", "9001")
    path = tmp_path / "config.yaml"
    path.write_text(
        "server:\n"
        "  port: ${DAYFLOW_TEST_PORT}\n"
        "  host: ${DAYFLOW_TEST_HOST:127.0.0.1}\n",
        encoding="utf-8",
    )

    loader = ConfigLoader(str(path))
    loader.load()
    assert loader.get("server.port") == 9001
    assert loader.get("server.host") == "127.0.0.1"


def test_set_persists(tmp_path):
    path = tmp_path / "config.toml"
    loader = ConfigLoader(str(path))
    loader.load()
    assert loader.set("rate_limit.max_requests", 7)

    reloaded = ConfigLoader(str(path))
    reloaded.load()
    assert reloaded.get("rate_limit.max_requests") == 7


def test_metadata_fetcher_from_config(config):
    config.set("metadata.max_bytes", 2048)
    fetcher = MetadataFetcher.from_config(config)
    assert fetcher.max_bytes == 2048
    assert fetcher.max_redirects == 5
    assert fetcher.allow_private_hosts is False


def test_identity_provider_selection(config):
    assert isinstance(create_identity_provider(config), StaticTokenIdentityProvider)

    config.set("auth.provider", "remote")
    with pytest.raises(ValueError):
        create_identity_provider(config)

    config.set("auth.url", "https://auth.example.com/user")
    assert isinstance(create_identity_provider(config), RemoteIdentityProvider)

    config.set("auth.provider", "ldap")
    with pytest.raises(ValueError):
        create_identity_provider(config)
