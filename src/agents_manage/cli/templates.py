"""Files written by ``agents-manage create``."""

from typing import Any

DEFAULT_API_URL = "http://localhost:3002"
DEFAULT_MODEL = "anthropic/claude-sonnet-4-20250514"

FORECAST_MCP_URL = "https://weather-forecast-mcp.vercel.app/mcp"
GEOCODER_MCP_URL = "https://geocoder-mcp.vercel.app/mcp"


def env_file(
    manage_api_port: int = 3002,
    anthropic_key: str | None = None,
    openai_key: str | None = None,
) -> str:
    """Contents of the workspace ``.env`` file."""
    return f"""# Environment
ENVIRONMENT=development

# Database
DATABASE_URL=sqlite+aiosqlite:///./local.db
DATABASE_CREATE_TABLES=true

# AI Provider Keys
ANTHROPIC_API_KEY={anthropic_key or "your-anthropic-key-here"}
OPENAI_API_KEY={openai_key or "your-openai-key-here"}

# Logging
LOG_LEVEL=DEBUG

# Service Ports
MANAGE_API_PORT={manage_api_port}
"""


def env_example(env_content: str) -> str:
    """Strip every value from a ``.env`` file, keeping comments and keys."""
    lines = []
    for line in env_content.splitlines():
        if line and not line.startswith("#") and "=" in line:
            line = line.split("=", 1)[0] + "="
        lines.append(line)
    return "\n".join(lines) + "\n"


GITIGNORE = """# Python
__pycache__/
*.py[cod]
.venv/
venv/

# Environment
.env
.env.local

# Database
*.db
*.db-journal

# Editors
.idea/
.vscode/
.DS_Store
"""


def readme(project_id: str, manage_api_port: int = 3002) -> str:
    """Contents of the workspace README."""
    return f"""# {project_id}

An agents workspace containing a sample weather graph.

## Layout

- `agents.config.json`: tenant, project and API URL used by the CLI
- `{project_id}/project.json`: full project definition
- `.env`: environment variables for the management API

## Getting started

Start the management API:

```bash
agents-manage serve --port {manage_api_port}
```

Push the project definition:

```bash
agents-manage push {project_id}/project.json
```

Pull it back after editing it elsewhere:

```bash
agents-manage pull --output {project_id}/project.json
```
"""


def weather_project(project_id: str, model: str = DEFAULT_MODEL) -> dict[str, Any]:
    """Full project definition of the sample weather graph.

    A router agent delegates to a forecaster and a geocoder, each of which
    uses one MCP tool.
    """
    return {
        "id": project_id,
        "name": "Weather Project",
        "description": "Sample project answering weather questions",
        "models": {
            "base": {"model": model},
            "structuredOutput": {"model": model},
            "summarizer": {"model": model},
        },
        "stopWhen": {"transferCountIs": 10, "stepCountIs": 50},
        "tools": {
            "forecast-weather": {
                "id": "forecast-weather",
                "name": "Forecast weather",
                "config": {"type": "mcp", "mcp": {"server": {"url": FORECAST_MCP_URL}}},
            },
            "geocode-address": {
                "id": "geocode-address",
                "name": "Geocode address",
                "config": {"type": "mcp", "mcp": {"server": {"url": GEOCODER_MCP_URL}}},
            },
        },
        "graphs": {
            "weather-graph": {
                "id": "weather-graph",
                "name": "Weather graph",
                "description": "Answers questions about the weather anywhere",
                "defaultAgentId": "weather-assistant",
                "agents": {
                    "weather-assistant": {
                        "id": "weather-assistant",
                        "name": "Weather assistant",
                        "description": "Entry point that routes weather questions",
                        "prompt": (
                            "You help users with weather questions. Ask the geocoder agent "
                            "for coordinates of a place, then ask the weather forecaster for "
                            "the forecast at those coordinates."
                        ),
                        "canDelegateTo": ["weather-forecaster", "geocoder-agent"],
                    },
                    "weather-forecaster": {
                        "id": "weather-forecaster",
                        "name": "Weather forecaster",
                        "description": "Returns forecasts for coordinates",
                        "prompt": "You return the weather forecast for the given coordinates.",
                        "canUse": [{"toolId": "forecast-weather"}],
                    },
                    "geocoder-agent": {
                        "id": "geocoder-agent",
                        "name": "Geocoder agent",
                        "description": "Turns addresses into coordinates",
                        "prompt": "You convert addresses and place names into coordinates.",
                        "canUse": [{"toolId": "geocode-address"}],
                    },
                },
            }
        },
    }
