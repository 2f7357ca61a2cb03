"""CLI tests."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from agents_manage.cli.main import CONFIG_FILE_NAME, app, find_project_root

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A CLI config pointing at a fake API."""
    path = tmp_path / CONFIG_FILE_NAME
    path.write_text(
        json.dumps(
            {"tenantId": "acme", "projectId": "weather-project", "apiUrl": "http://api.test/"}
        )
    )
    return path


def _response(status_code: int, data: dict, method: str = "GET") -> httpx.Response:
    return httpx.Response(
        status_code, json={"data": data}, request=httpx.Request(method, "http://api.test")
    )


class TestInit:
    """Tests for the init command."""

    def test_non_interactive(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["init", str(tmp_path), "--tenant-id", "acme", "--no-interactive"]
        )

        assert result.exit_code == 0
        config = json.loads((tmp_path / CONFIG_FILE_NAME).read_text())
        assert config == {
            "tenantId": "acme",
            "projectId": "default",
            "apiUrl": "http://localhost:3002",
        }

    def test_non_interactive_requires_tenant(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", str(tmp_path), "--no-interactive"])

        assert result.exit_code == 1
        assert not (tmp_path / CONFIG_FILE_NAME).exists()

    def test_prompts_for_missing_values(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", str(tmp_path)], input="acme\nshop\n\n")

        assert result.exit_code == 0
        config = json.loads((tmp_path / CONFIG_FILE_NAME).read_text())
        assert config["tenantId"] == "acme"
        assert config["projectId"] == "shop"
        assert config["apiUrl"] == "http://localhost:3002"

    def test_keeps_existing_config_unless_confirmed(
        self, tmp_path: Path, config_file: Path
    ) -> None:
        result = runner.invoke(
            app, ["init", str(tmp_path), "--tenant-id", "other"], input="n\n"
        )

        assert result.exit_code == 0
        assert json.loads(config_file.read_text())["tenantId"] == "acme"

    def test_refuses_overwrite_when_not_interactive(
        self, tmp_path: Path, config_file: Path
    ) -> None:
        result = runner.invoke(
            app, ["init", str(tmp_path), "--tenant-id", "other", "--no-interactive"]
        )

        assert result.exit_code == 1

    def test_find_project_root(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_project_root(nested) == tmp_path.resolve()


class TestCreate:
    """Tests for the create command."""

    def test_scaffolds_workspace(self, tmp_path: Path) -> None:
        workspace = tmp_path / "ws"

        result = runner.invoke(app, ["create", str(workspace), "--tenant-id", "acme"])

        assert result.exit_code == 0
        for name in (".env", ".env.example", ".gitignore", "README.md", CONFIG_FILE_NAME):
            assert (workspace / name).exists()
        project = json.loads((workspace / "weather-project" / "project.json").read_text())
        assert project["id"] == "weather-project"
        assert "weather-graph" in project["graphs"]
        assert "DATABASE_URL=sqlite+aiosqlite:///./local.db" in (workspace / ".env").read_text()

    def test_env_example_has_no_values(self, tmp_path: Path) -> None:
        workspace = tmp_path / "ws"

        runner.invoke(app, ["create", str(workspace)])

        for line in (workspace / ".env.example").read_text().splitlines():
            if line and not line.startswith("#"):
                assert line.endswith("=")

    def test_refuses_non_empty_directory(self, tmp_path: Path) -> None:
        (tmp_path / "existing.txt").write_text("keep me")

        result = runner.invoke(app, ["create", str(tmp_path)])

        assert result.exit_code == 1
        assert not (tmp_path / ".env").exists()

    def test_force(self, tmp_path: Path) -> None:
        (tmp_path / "existing.txt").write_text("keep me")

        result = runner.invoke(app, ["create", str(tmp_path), "--force"])

        assert result.exit_code == 0
        assert (tmp_path / "existing.txt").read_text() == "keep me"
        assert (tmp_path / ".env").exists()


class TestPushPull:
    """Tests for the push and pull commands."""

    def test_push_creates(self, tmp_path: Path, config_file: Path) -> None:
        project_file = tmp_path / "project.json"
        project_file.write_text(json.dumps({"name": "Weather", "graphs": {}}))

        with patch(
            "agents_manage.cli.main.httpx.put",
            return_value=_response(201, {"id": "weather-project", "graphs": {}}, "PUT"),
        ) as mock_put:
            result = runner.invoke(
                app, ["push", str(project_file), "--config", str(config_file)]
            )

        assert result.exit_code == 0
        assert "Created project 'weather-project'" in result.output
        url = mock_put.call_args.args[0]
        assert url == "http://api.test/tenants/acme/project-full/weather-project"
        assert mock_put.call_args.kwargs["json"]["id"] == "weather-project"

    def test_push_reports_api_errors(self, tmp_path: Path, config_file: Path) -> None:
        project_file = tmp_path / "project.json"
        project_file.write_text(json.dumps({"id": "weather-project", "name": "Weather"}))
        error = httpx.Response(
            400,
            json={"detail": "Graph ID mismatch"},
            request=httpx.Request("PUT", "http://api.test"),
        )

        with patch("agents_manage.cli.main.httpx.put", return_value=error):
            result = runner.invoke(
                app, ["push", str(project_file), "--config", str(config_file)]
            )

        assert result.exit_code == 1
        assert "Graph ID mismatch" in result.output

    def test_push_without_config(self, tmp_path: Path) -> None:
        project_file = tmp_path / "project.json"
        project_file.write_text("{}")

        result = runner.invoke(
            app, ["push", str(project_file), "--config", str(tmp_path / "missing.json")]
        )

        assert result.exit_code == 1

    def test_pull_writes_project(self, tmp_path: Path, config_file: Path) -> None:
        output = tmp_path / "out" / "project.json"
        data = {"id": "weather-project", "name": "Weather", "graphs": {}}

        with patch(
            "agents_manage.cli.main.httpx.get", return_value=_response(200, data)
        ) as mock_get:
            result = runner.invoke(
                app, ["pull", "--config", str(config_file), "--output", str(output)]
            )

        assert result.exit_code == 0
        assert json.loads(output.read_text()) == data
        assert mock_get.call_args.args[0].endswith("/tenants/acme/project-full/weather-project")

    def test_pull_unreachable(self, tmp_path: Path, config_file: Path) -> None:
        with patch(
            "agents_manage.cli.main.httpx.get", side_effect=httpx.ConnectError("refused")
        ):
            result = runner.invoke(app, ["pull", "--config", str(config_file)])

        assert result.exit_code == 1


def _page(graphs: list[dict], page: int, pages: int) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "data": graphs,
            "pagination": {"page": page, "limit": 100, "total": len(graphs), "pages": pages},
        },
        request=httpx.Request("GET", "http://api.test"),
    )


class TestListGraphs:
    """Tests for the list-graphs command."""

    def test_lists_graphs(self, config_file: Path) -> None:
        graph = {"id": "weather-graph", "name": "Weather", "defaultAgentId": "router"}

        with patch(
            "agents_manage.cli.main.httpx.get", return_value=_page([graph], 1, 1)
        ) as mock_get:
            result = runner.invoke(app, ["list-graphs", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "weather-graph" in result.output
        assert "router" in result.output
        url = mock_get.call_args.args[0]
        assert url == "http://api.test/tenants/acme/projects/weather-project/agent-graphs"
        assert mock_get.call_args.kwargs["params"] == {"page": 1, "limit": 100}

    def test_follows_pages(self, config_file: Path) -> None:
        pages = [
            _page([{"id": "g1", "name": "One"}], 1, 2),
            _page([{"id": "g2", "name": "Two"}], 2, 2),
        ]

        with patch("agents_manage.cli.main.httpx.get", side_effect=pages) as mock_get:
            result = runner.invoke(app, ["list-graphs", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert mock_get.call_count == 2
        assert "g1" in result.output
        assert "g2" in result.output

    def test_empty_project(self, config_file: Path) -> None:
        with patch("agents_manage.cli.main.httpx.get", return_value=_page([], 1, 0)):
            result = runner.invoke(app, ["list-graphs", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "No graphs in project 'weather-project'" in result.output

    def test_unreachable(self, config_file: Path) -> None:
        with patch(
            "agents_manage.cli.main.httpx.get", side_effect=httpx.ConnectError("refused")
        ):
            result = runner.invoke(app, ["list-graphs", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Could not reach" in result.output


class TestConfigCommands:
    """Tests for config get/set/list."""

    def test_get_single_key(self, config_file: Path) -> None:
        result = runner.invoke(app, ["config", "get", "tenantId", "--config", str(config_file)])

        assert result.exit_code == 0
        assert result.output.strip() == "acme"

    def test_get_unknown_key(self, config_file: Path) -> None:
        result = runner.invoke(app, ["config", "get", "secret", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Unknown configuration key: secret" in result.output

    def test_list(self, config_file: Path) -> None:
        result = runner.invoke(app, ["config", "list", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "tenantId" in result.output
        assert "weather-project" in result.output

    def test_get_without_key_lists(self, config_file: Path) -> None:
        result = runner.invoke(app, ["config", "get", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "projectId" in result.output

    def test_set_updates_file(self, config_file: Path) -> None:
        result = runner.invoke(
            app, ["config", "set", "projectId", "shop", "--config", str(config_file)]
        )

        assert result.exit_code == 0
        saved = json.loads(config_file.read_text())
        assert saved["projectId"] == "shop"
        assert saved["tenantId"] == "acme"

    def test_set_creates_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME

        result = runner.invoke(app, ["config", "set", "tenantId", "acme", "--config", str(path)])

        assert result.exit_code == 0
        assert json.loads(path.read_text()) == {
            "tenantId": "acme",
            "projectId": "default",
            "apiUrl": "http://localhost:3002",
        }

    @pytest.mark.parametrize("value", ["not a url", "ftp://api.test"])
    def test_set_rejects_invalid_api_url(self, config_file: Path, value: str) -> None:
        result = runner.invoke(
            app, ["config", "set", "apiUrl", value, "--config", str(config_file)]
        )

        assert result.exit_code == 1
        assert json.loads(config_file.read_text())["apiUrl"] == "http://api.test/"

    def test_set_rejects_unknown_key(self, config_file: Path) -> None:
        result = runner.invoke(app, ["config", "set", "secret", "x", "--config", str(config_file)])

        assert result.exit_code == 1


class TestDatabase:
    """Tests for the db command group."""

    def test_db_init_creates_tables(self, tmp_path: Path) -> None:
        db_path = tmp_path / "agents.db"

        result = runner.invoke(
            app, ["db", "init", "--database-url", f"sqlite+aiosqlite:///{db_path}"]
        )

        assert result.exit_code == 0
        assert db_path.exists()
