"""End-to-end CLI tests with the GraphQL stack replaced by an in-memory repository."""

from __future__ import annotations

from contextlib import asynccontextmanager

import pytest
from conftest import FakeCategoryRepository
from typer.testing import CliRunner

from cli import main as cli_main
from core.domain.models import Category
from core.services.list_controller import CategoryListController

runner = CliRunner()


@pytest.fixture
def server(monkeypatch):
    repo = FakeCategoryRepository([Category(node_id="k1", id=1, description="Fruit")])

    @asynccontextmanager
    async def fake_open_controller(settings):
        controller = CategoryListController(repo, entity_name=settings.entity_name)
        try:
            yield controller
        finally:
            await controller.wait_idle()

    monkeypatch.setattr(cli_main, "open_controller", fake_open_controller)
    return repo


def test_list_shows_rows(server):
    result = runner.invoke(cli_main.app, ["list"])
    assert result.exit_code == 0, result.output
    assert "Fruit" in result.output
    assert server.calls == [("load",)]


def test_list_exports_json(server, tmp_path):
    target = tmp_path / "out" / "categories.json"
    result = runner.invoke(cli_main.app, ["list", "--json", str(target)])
    assert result.exit_code == 0, result.output
    assert '"nodeId": "k1"' in target.read_text(encoding="utf-8")


def test_list_empty(server):
    server.server.clear()
    result = runner.invoke(cli_main.app, ["list"])
    assert result.exit_code == 0
    assert "No records found." in result.output


def test_list_error_exits_nonzero(server):
    server.fail["load"] = "server down"
    result = runner.invoke(cli_main.app, ["list"])
    assert result.exit_code == 1
    assert "Error: server down" in result.output


def test_new_creates_then_reloads(server):
    result = runner.invoke(cli_main.app, ["new", "--description", "Veg"])
    assert result.exit_code == 0, result.output
    assert server.calls == [("load",), ("create", {"description": "Veg"}), ("load",)]
    assert "Veg" in result.output


def test_new_rejects_empty_description(server):
    result = runner.invoke(cli_main.app, ["new", "-d", ""])
    assert result.exit_code == 2
    assert server.count("create") == 0


def test_edit_updates_by_node_id(server):
    result = runner.invoke(cli_main.app, ["edit", "1", "-d", "Fruits"])
    assert result.exit_code == 0, result.output
    assert ("update", "k1", {"description": "Fruits"}) in server.calls
    assert "Fruits" in result.output


def test_edit_unknown_id(server):
    result = runner.invoke(cli_main.app, ["edit", "42", "-d", "x"])
    assert result.exit_code == 2
    assert server.count("update") == 0


def test_delete_then_reload(server):
    result = runner.invoke(cli_main.app, ["delete", "1"])
    assert result.exit_code == 0, result.output
    assert server.calls == [("load",), ("delete", "k1"), ("load",)]
    assert "No records found." in result.output


def test_failed_delete_shows_error(server):
    server.fail["delete"] = "still referenced"
    result = runner.invoke(cli_main.app, ["delete", "1"])
    assert result.exit_code == 1
    assert "Error: still referenced" in result.output
    assert server.count("load") == 2


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("n", ("new", None)),
        ("e 3", ("edit", 3)),
        ("delete 7", ("delete", 7)),
        ("d x", ("delete", None)),
        ("  ", ("", None)),
        ("Q", ("quit", None)),
    ],
)
def test_parse_command(raw, expected):
    assert cli_main.parse_command(raw) == expected


def test_new_after_failed_load_sends_nothing(server):
    server.fail["load"] = "server down"
    result = runner.invoke(cli_main.app, ["new", "-d", "Veg"])
    assert result.exit_code == 1
    assert "Error: server down" in result.output
    assert server.count("create") == 0


class TestShell:
    def test_new_then_save_creates_and_reloads(self, server):
        result = runner.invoke(cli_main.app, ["shell"], input="n\nVeg\nsave\nq\n")
        assert result.exit_code == 0, result.output
        assert server.calls == [("load",), ("create", {"description": "Veg"}), ("load",)]
        assert "New Category" in result.output

    def test_empty_description_only_offers_cancel(self, server):
        result = runner.invoke(cli_main.app, ["shell"], input="n\n\nsave\ncancel\nq\n")
        assert result.exit_code == 0, result.output
        assert "[cancel]" in result.output
        assert "[save/cancel]" not in result.output
        assert server.count("create") == 0
        assert server.calls == [("load",)]

    def test_edit_then_cancel_sends_nothing(self, server):
        result = runner.invoke(cli_main.app, ["shell"], input="e 1\nFruits\ncancel\nq\n")
        assert result.exit_code == 0, result.output
        assert "[save/cancel]" in result.output
        assert server.calls == [("load",)]

    def test_edit_then_save_updates(self, server):
        result = runner.invoke(cli_main.app, ["shell"], input="e 1\nFruits\nsave\nq\n")
        assert result.exit_code == 0, result.output
        assert server.calls == [("load",), ("update", "k1", {"description": "Fruits"}), ("load",)]

    def test_delete_then_reload(self, server):
        result = runner.invoke(cli_main.app, ["shell"], input="d 1\nq\n")
        assert result.exit_code == 0, result.output
        assert server.calls == [("load",), ("delete", "k1"), ("load",)]

    def test_row_actions_refused_while_error_shown(self, server):
        server.fail["delete"] = "still referenced"
        result = runner.invoke(cli_main.app, ["shell"], input="d 1\nr\nd 1\ne 1\nq\n")
        assert result.exit_code == 0, result.output
        assert "Error: still referenced" in result.output
        assert "unavailable while an error is shown" in result.output
        assert server.count("delete") == 1
        assert server.count("update") == 0
