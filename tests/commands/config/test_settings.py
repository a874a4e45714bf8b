import dataclasses

import pytest

from rbexport.commands.config.settings import (
    ExportSettings,
    parse_workspace_list,
    resolve_settings,
    validate_api_key,
)
from rbexport.exceptions import ConfigurationError


def test_defaults_from_empty_environment():
    settings = resolve_settings(api_key="secret-key", environ={})

    assert settings.api_key == "secret-key"
    assert settings.workspaces == ()
    assert settings.output_base == "rebrandly-links.csv"
    assert settings.max_page_size == 25
    assert settings.api_base_url == "https://api.rebrandly.com/v1"


def test_environment_fallbacks():
    environ = {
        "REBRANDLY_API_KEY": "env-key",
        "REBRANDLY_WORKSPACES": " ws1, ,ws2 ,",
        "REBRANDLY_EXPORT_BASE": "env.csv",
        "REBRANDLY_MAX_PAGE_SIZE": "10",
        "REBRANDLY_API_BASE_URL": "https://proxy.test/v1",
    }

    settings = resolve_settings(environ=environ)

    assert settings.api_key == "env-key"
    assert settings.workspaces == ("ws1", "ws2")
    assert settings.output_base == "env.csv"
    assert settings.max_page_size == 10
    assert settings.api_base_url == "https://proxy.test/v1"


def test_arguments_take_priority_over_environment():
    environ = {
        "REBRANDLY_API_KEY": "env-key",
        "REBRANDLY_WORKSPACES": "env-ws",
        "REBRANDLY_EXPORT_BASE": "env.csv",
        "REBRANDLY_MAX_PAGE_SIZE": "10",
    }

    settings = resolve_settings(
        workspaces=["cli-ws"],
        out="cli.csv",
        max_page_size=5,
        api_key="cli-key",
        environ=environ,
    )

    assert settings.api_key == "cli-key"
    assert settings.workspaces == ("cli-ws",)
    assert settings.output_base == "cli.csv"
    assert settings.max_page_size == 5


@pytest.mark.parametrize("api_key", [None, "", "<<apiKey>>"])
def test_missing_or_placeholder_key_rejected(api_key):
    with pytest.raises(ConfigurationError, match="API key"):
        validate_api_key(api_key)


def test_resolve_without_key_fails():
    with pytest.raises(ConfigurationError):
        resolve_settings(environ={})


@pytest.mark.parametrize("page_size", ["abc", "0", "-3"])
def test_invalid_page_size_rejected(page_size):
    with pytest.raises(ConfigurationError):
        resolve_settings(api_key="k", environ={"REBRANDLY_MAX_PAGE_SIZE": page_size})


def test_parse_workspace_list():
    assert parse_workspace_list(None) == []
    assert parse_workspace_list("a,b , c") == ["a", "b", "c"]


def test_settings_are_immutable():
    settings = ExportSettings(api_key="k")

    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.api_key = "other"
