"""agents-manage CLI entry point."""

import asyncio
import json
from pathlib import Path
from typing import Any

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..api.config import get_database_settings
from ..api.schemas.common import APIModel
from ..db.session import DatabaseSessionManager
from . import templates

CONFIG_FILE_NAME = "agents.config.json"
PROJECT_ROOT_INDICATORS = (
    "pyproject.toml",
    ".git",
    ".gitignore",
    "setup.cfg",
    "requirements.txt",
)

# Config file keys and the CLIConfig fields they map to
CONFIG_KEYS = {"tenantId": "tenant_id", "projectId": "project_id", "apiUrl": "api_url"}

app = typer.Typer(name="agents-manage", help="Manage multi-tenant agent graphs")
db_app = typer.Typer(help="Database commands")
config_app = typer.Typer(help="Read and change agents.config.json")
app.add_typer(db_app, name="db")
app.add_typer(config_app, name="config")
console = Console()


class CLIConfig(APIModel):
    """Contents of agents.config.json."""

    tenant_id: str
    project_id: str = "default"
    api_url: str = templates.DEFAULT_API_URL


def find_project_root(start: Path) -> Path:
    """Walk up from start to the nearest directory that looks like a project root.

    Falls back to start itself when no indicator file is found.
    """
    start = start.resolve()
    for directory in (start, *start.parents):
        if any((directory / name).exists() for name in PROJECT_ROOT_INDICATORS):
            return directory
    return start


def write_config(path: Path, config: CLIConfig) -> None:
    path.write_text(json.dumps(config.model_dump(by_alias=True), indent=2) + "\n")


def load_config(path: Path) -> CLIConfig:
    """Read agents.config.json, exiting with a message when it is missing or invalid."""
    if not path.exists():
        console.print(
            f"Config file not found: {path}. Run 'agents-manage init' first.", style="red"
        )
        raise typer.Exit(code=1)
    try:
        return CLIConfig.model_validate_json(path.read_text())
    except ValidationError as e:
        console.print(f"Invalid config file {path}: {e}", style="red")
        raise typer.Exit(code=1) from e


def _fail_on_error(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        detail = response.json().get("detail", response.text)
    except ValueError:
        detail = response.text
    console.print(f"Request failed ({response.status_code}): {detail}", style="red")
    raise typer.Exit(code=1)


@app.command()
def init(
    path: Path | None = typer.Argument(None, help="Directory to write the config into"),
    tenant_id: str | None = typer.Option(None, "--tenant-id", help="Tenant identifier"),
    project_id: str | None = typer.Option(None, "--project-id", help="Project identifier"),
    api_url: str | None = typer.Option(None, "--api-url", help="Management API base URL"),
    no_interactive: bool = typer.Option(False, "--no-interactive", help="Never prompt"),
) -> None:
    """Write agents.config.json at the project root."""
    root = path.resolve() if path is not None else find_project_root(Path.cwd())
    root.mkdir(parents=True, exist_ok=True)
    config_path = root / CONFIG_FILE_NAME

    if config_path.exists():
        if no_interactive:
            console.print(f"{config_path} already exists", style="red")
            raise typer.Exit(code=1)
        if not typer.confirm(f"{config_path} already exists. Overwrite?", default=False):
            console.print("Init cancelled", style="yellow")
            raise typer.Exit()

    if no_interactive:
        if not tenant_id:
            console.print("--tenant-id is required with --no-interactive", style="red")
            raise typer.Exit(code=1)
    else:
        tenant_id = tenant_id or typer.prompt("Tenant ID")
        project_id = project_id or typer.prompt("Project ID", default="default")
        api_url = api_url or typer.prompt("Management API URL", default=templates.DEFAULT_API_URL)

    config = CLIConfig(
        tenant_id=tenant_id,
        project_id=project_id or "default",
        api_url=api_url or templates.DEFAULT_API_URL,
    )
    write_config(config_path, config)
    console.print(f"Created {config_path}", style="bold green")


@app.command()
def create(
    directory: Path = typer.Argument(Path("agents-workspace"), help="Workspace directory"),
    project_id: str = typer.Option("weather-project", "--project-id", help="Sample project id"),
    tenant_id: str = typer.Option("default", "--tenant-id", help="Tenant identifier"),
    api_url: str = typer.Option(templates.DEFAULT_API_URL, "--api-url"),
    force: bool = typer.Option(False, "--force", help="Write into a non-empty directory"),
) -> None:
    """Scaffold a workspace containing the sample weather project."""
    if directory.exists() and any(directory.iterdir()) and not force:
        console.print(f"{directory} is not empty, use --force to write into it", style="red")
        raise typer.Exit(code=1)

    project_dir = directory / project_id
    project_dir.mkdir(parents=True, exist_ok=True)

    env_content = templates.env_file()
    files: dict[Path, str] = {
        directory / ".env": env_content,
        directory / ".env.example": templates.env_example(env_content),
        directory / ".gitignore": templates.GITIGNORE,
        directory / "README.md": templates.readme(project_id),
        project_dir / "project.json": json.dumps(templates.weather_project(project_id), indent=2)
        + "\n",
    }
    for file_path, content in files.items():
        file_path.write_text(content)

    write_config(
        directory / CONFIG_FILE_NAME,
        CLIConfig(tenant_id=tenant_id, project_id=project_id, api_url=api_url),
    )

    console.print(f"Created workspace in {directory}", style="bold green")
    console.print(f"  cd {directory}")
    console.print("  agents-manage serve")
    console.print(f"  agents-manage push {project_id}/project.json")


@app.command()
def push(
    project_file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    config: Path = typer.Option(Path(CONFIG_FILE_NAME), "--config", help="CLI config file"),
) -> None:
    """Create or update a full project from a JSON definition."""
    cli_config = load_config(config)
    definition: dict[str, Any] = json.loads(project_file.read_text())
    project_id = definition.get("id") or cli_config.project_id
    definition["id"] = project_id

    base_url = cli_config.api_url.rstrip("/")
    url = f"{base_url}/tenants/{cli_config.tenant_id}/project-full/{project_id}"
    try:
        response = httpx.put(url, json=definition, timeout=30.0)
    except httpx.HTTPError as e:
        console.print(f"Could not reach {cli_config.api_url}: {e}", style="red")
        raise typer.Exit(code=1) from e
    _fail_on_error(response)

    action = "Created" if response.status_code == 201 else "Updated"
    graphs = response.json()["data"].get("graphs") or {}
    console.print(f"{action} project '{project_id}' with {len(graphs)} graph(s)", style="green")


@app.command()
def pull(
    config: Path = typer.Option(Path(CONFIG_FILE_NAME), "--config", help="CLI config file"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Where to write the JSON"),
) -> None:
    """Download the configured full project as JSON."""
    cli_config = load_config(config)
    url = (
        f"{cli_config.api_url.rstrip('/')}/tenants/{cli_config.tenant_id}"
        f"/project-full/{cli_config.project_id}"
    )
    try:
        response = httpx.get(url, timeout=30.0)
    except httpx.HTTPError as e:
        console.print(f"Could not reach {cli_config.api_url}: {e}", style="red")
        raise typer.Exit(code=1) from e
    _fail_on_error(response)

    target = output or Path(cli_config.project_id) / "project.json"
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(response.json()["data"], indent=2) + "\n")
    console.print(f"Wrote {target}", style="green")


@app.command("list-graphs")
def list_graphs(
    config: Path = typer.Option(Path(CONFIG_FILE_NAME), "--config", help="CLI config file"),
) -> None:
    """List the agent graphs of the configured project."""
    cli_config = load_config(config)
    url = (
        f"{cli_config.api_url.rstrip('/')}/tenants/{cli_config.tenant_id}"
        f"/projects/{cli_config.project_id}/agent-graphs"
    )

    graphs: list[dict[str, Any]] = []
    page = 1
    while True:
        try:
            response = httpx.get(url, params={"page": page, "limit": 100}, timeout=30.0)
        except httpx.HTTPError as e:
            console.print(f"Could not reach {cli_config.api_url}: {e}", style="red")
            raise typer.Exit(code=1) from e
        _fail_on_error(response)
        body = response.json()
        graphs.extend(body["data"])
        if page >= body["pagination"]["pages"]:
            break
        page += 1

    if not graphs:
        console.print(f"No graphs in project '{cli_config.project_id}'", style="yellow")
        return

    table = Table(title=f"Graphs in {cli_config.project_id}")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Default agent")
    table.add_column("Updated")
    for graph in graphs:
        table.add_row(
            graph["id"],
            graph["name"],
            graph.get("defaultAgentId") or "-",
            graph.get("updatedAt") or "-",
        )
    console.print(table)


def _check_config_key(key: str) -> str:
    if key not in CONFIG_KEYS:
        console.print(f"Unknown configuration key: {key}", style="red")
        console.print(f"Available keys: {', '.join(CONFIG_KEYS)}")
        raise typer.Exit(code=1)
    return CONFIG_KEYS[key]


def _print_config(path: Path, cli_config: CLIConfig) -> None:
    table = Table(title=str(path))
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in cli_config.model_dump(by_alias=True).items():
        table.add_row(key, value or "(not set)")
    console.print(table)


@config_app.command("get")
def config_get(
    key: str | None = typer.Argument(None, help="tenantId, projectId or apiUrl"),
    config: Path = typer.Option(Path(CONFIG_FILE_NAME), "--config", help="CLI config file"),
) -> None:
    """Print one configuration value, or all of them."""
    cli_config = load_config(config)
    if key is None:
        _print_config(config, cli_config)
        return
    console.print(getattr(cli_config, _check_config_key(key)))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="tenantId, projectId or apiUrl"),
    value: str = typer.Argument(...),
    config: Path = typer.Option(Path(CONFIG_FILE_NAME), "--config", help="CLI config file"),
) -> None:
    """Set a configuration value, creating the config file when needed."""
    field = _check_config_key(key)
    if field == "api_url":
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            console.print(f"Invalid URL: {value}", style="red")
            raise typer.Exit(code=1) from e
        if url.scheme not in ("http", "https") or not url.host:
            console.print(f"Invalid URL: {value}", style="red")
            raise typer.Exit(code=1)

    if config.exists():
        cli_config = load_config(config)
        action = "Updated"
    else:
        cli_config = CLIConfig(tenant_id="")
        action = "Created config file and set"

    write_config(config, cli_config.model_copy(update={field: value}))
    console.print(f"{action} {key} to {value}", style="green")


@config_app.command("list")
def config_list(
    config: Path = typer.Option(Path(CONFIG_FILE_NAME), "--config", help="CLI config file"),
) -> None:
    """Print every configuration value."""
    _print_config(config, load_config(config))


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host"),
    port: int = typer.Option(3002, "--port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the management API."""
    import uvicorn

    uvicorn.run("agents_manage.api.main:app", host=host, port=port, reload=reload)


async def _create_tables(database_url: str) -> None:
    manager = DatabaseSessionManager(database_url)
    try:
        await manager.create_all()
    finally:
        await manager.close()


@db_app.command("init")
def db_init(
    database_url: str | None = typer.Option(None, "--database-url", help="Overrides DATABASE_URL"),
) -> None:
    """Create every table on the configured database."""
    url = database_url or get_database_settings().url
    asyncio.run(_create_tables(url))
    console.print("Database tables created", style="green")


if __name__ == "__main__":
    app()
