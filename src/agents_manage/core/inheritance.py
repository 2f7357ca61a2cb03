"""Inheritance of model settings and execution limits.

Settings flow downwards: project -> graph -> agent. These helpers work on
the JSON documents stored in the database (camelCase keys).
"""

from typing import Any

MODEL_TYPES = ("base", "structuredOutput", "summarizer")

DEFAULT_TRANSFER_COUNT = 10


def _model_name(models: dict[str, Any] | None, model_type: str) -> str | None:
    return ((models or {}).get(model_type) or {}).get("model")


def _provider_options(models: dict[str, Any] | None, model_type: str) -> Any:
    return ((models or {}).get(model_type) or {}).get("providerOptions")


def cascade_agent_models(
    existing_agent_models: dict[str, Any] | None,
    old_graph_models: dict[str, Any] | None,
    new_graph_models: dict[str, Any] | None,
    requested_agent_models: dict[str, Any] | None,
) -> dict[str, Any] | None:
    """Compute an agent's model settings after its graph's models changed.

    An agent whose current model for a usage equals the old graph model is
    treated as inheriting it. When the graph model name or its provider
    options changed, the agent receives the new graph settings for that usage.

    Args:
        existing_agent_models: Models currently stored on the agent
        old_graph_models: Graph models before the change
        new_graph_models: Graph models after the change
        requested_agent_models: Models the caller wants the agent to have

    Returns:
        Final model settings for the agent
    """
    if not existing_agent_models or not new_graph_models:
        return requested_agent_models

    cascaded = dict(requested_agent_models or {})
    for model_type in MODEL_TYPES:
        agent_model = _model_name(existing_agent_models, model_type)
        old_model = _model_name(old_graph_models, model_type)
        new_settings = new_graph_models.get(model_type)
        if not (agent_model and old_model and new_settings) or agent_model != old_model:
            continue

        changed = new_settings.get("model") != old_model or _provider_options(
            new_graph_models, model_type
        ) != _provider_options(old_graph_models, model_type)
        if changed:
            cascaded[model_type] = new_settings
    return cascaded or requested_agent_models


def inherited_transfer_count(
    graph_stop_when: dict[str, Any] | None,
    project_stop_when: dict[str, Any] | None,
) -> int | None:
    """Resolve a graph's transferCountIs.

    Only applies when the project defines limits: the graph's own value wins,
    then the project's, then DEFAULT_TRANSFER_COUNT.

    Returns:
        The value to use, or None when the project defines no limits
    """
    if not project_stop_when:
        return (graph_stop_when or {}).get("transferCountIs")
    own = (graph_stop_when or {}).get("transferCountIs")
    if own is not None:
        return own
    inherited = project_stop_when.get("transferCountIs")
    return inherited if inherited is not None else DEFAULT_TRANSFER_COUNT


def inherited_step_count(
    agent_stop_when: dict[str, Any] | None,
    project_stop_when: dict[str, Any] | None,
) -> int | None:
    """Resolve an agent's stepCountIs: its own value, else the project's."""
    own = (agent_stop_when or {}).get("stepCountIs")
    if own is not None:
        return own
    return (project_stop_when or {}).get("stepCountIs")
