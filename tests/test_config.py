"""Tests for AppSettings and the user .env writer."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import AppSettings, write_user_env_vars


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("CATALOG_D2_GRAPHQL_URL", "https://example.test/graphql")
    monkeypatch.setenv("CATALOG_D2_ENTITY_NAME", "Tag")
    settings = AppSettings()
    assert settings.graphql_url == "https://example.test/graphql"
    assert settings.entity_name == "Tag"


def test_log_level_is_normalized():
    assert AppSettings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        AppSettings(log_level="chatty")


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        AppSettings(http_timeout_seconds=0)


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nCATALOG_D2_AUTH_TOKEN=abc\n", encoding="utf-8")

    write_user_env_vars(
        {"CATALOG_D2_GRAPHQL_URL": "https://example.test/graphql", "CATALOG_D2_AUTH_TOKEN": None},
        env_path=env_path,
    )

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == [
        "CATALOG_D2_AUTH_TOKEN=abc",
        "CATALOG_D2_GRAPHQL_URL=https://example.test/graphql",
    ]
