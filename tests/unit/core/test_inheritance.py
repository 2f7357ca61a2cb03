"""Tests for model and execution limit inheritance."""

from agents_manage.core.inheritance import (
    DEFAULT_TRANSFER_COUNT,
    cascade_agent_models,
    inherited_step_count,
    inherited_transfer_count,
)

OLD_GRAPH = {"base": {"model": "openai/gpt-4o"}, "summarizer": {"model": "openai/gpt-4o-mini"}}
NEW_GRAPH = {
    "base": {"model": "anthropic/claude-sonnet-4"},
    "summarizer": {"model": "openai/gpt-4o-mini"},
}


class TestCascadeAgentModels:
    """Tests for cascade_agent_models."""

    def test_inheriting_agent_gets_new_model(self) -> None:
        """Agent still on the old graph model follows the graph."""
        agent = {"base": {"model": "openai/gpt-4o"}}

        result = cascade_agent_models(agent, OLD_GRAPH, NEW_GRAPH, agent)

        assert result == {"base": {"model": "anthropic/claude-sonnet-4"}}

    def test_custom_agent_model_kept(self) -> None:
        """Agent with its own model is not touched."""
        agent = {"base": {"model": "google/gemini-2.5-pro"}}

        result = cascade_agent_models(agent, OLD_GRAPH, NEW_GRAPH, agent)

        assert result == agent

    def test_provider_options_change_cascades(self) -> None:
        """Changed provider options count as a change even with the same model."""
        old = {"base": {"model": "openai/gpt-4o"}}
        new = {"base": {"model": "openai/gpt-4o", "providerOptions": {"temperature": 0.2}}}
        agent = {"base": {"model": "openai/gpt-4o"}}

        result = cascade_agent_models(agent, old, new, agent)

        assert result == {"base": new["base"]}

    def test_unchanged_usage_not_copied(self) -> None:
        """Usages whose graph settings did not change keep the requested value."""
        agent = {"summarizer": {"model": "openai/gpt-4o-mini"}}

        result = cascade_agent_models(agent, OLD_GRAPH, NEW_GRAPH, agent)

        assert result == agent

    def test_new_agent_uses_requested_models(self) -> None:
        """Without stored agent models the request is used as is."""
        requested = {"base": {"model": "x/y"}}

        assert cascade_agent_models(None, OLD_GRAPH, NEW_GRAPH, requested) == requested

    def test_graph_models_removed(self) -> None:
        """Removing graph models does not touch agents."""
        agent = {"base": {"model": "openai/gpt-4o"}}

        assert cascade_agent_models(agent, OLD_GRAPH, None, agent) == agent


class TestInheritedTransferCount:
    """Tests for inherited_transfer_count."""

    def test_own_value_wins(self) -> None:
        assert inherited_transfer_count({"transferCountIs": 3}, {"transferCountIs": 7}) == 3

    def test_project_value_inherited(self) -> None:
        assert inherited_transfer_count(None, {"transferCountIs": 7}) == 7

    def test_default_when_project_has_other_limits(self) -> None:
        """A project with stopWhen but no transfer count yields the default."""
        assert inherited_transfer_count(None, {"stepCountIs": 20}) == DEFAULT_TRANSFER_COUNT

    def test_no_project_limits(self) -> None:
        """Without project limits nothing is filled in."""
        assert inherited_transfer_count(None, None) is None
        assert inherited_transfer_count({"transferCountIs": 4}, None) == 4


class TestInheritedStepCount:
    """Tests for inherited_step_count."""

    def test_own_value_wins(self) -> None:
        assert inherited_step_count({"stepCountIs": 5}, {"stepCountIs": 50}) == 5

    def test_project_value_inherited(self) -> None:
        assert inherited_step_count({}, {"stepCountIs": 50}) == 50

    def test_nothing_to_inherit(self) -> None:
        assert inherited_step_count(None, {"transferCountIs": 2}) is None
