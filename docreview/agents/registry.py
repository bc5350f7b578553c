"""Ordered, mutable collection of agents for the current document."""

import uuid
from collections.abc import Iterator
from dataclasses import replace
from typing import Any, ClassVar

from docreview.agents.models import Agent, AgentStatus, AgentTemplate
from docreview.providers.model_id import provider_of


class AgentRegistry:
    """Owns the agent list; insertion order is execution and display order."""

    EDITABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"prompt", "model"})

    def __init__(self, default_model: str) -> None:
        self._default_model = default_model
        self._agents: list[Agent] = []

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator[Agent]:
        return iter(list(self._agents))

    @property
    def agents(self) -> list[Agent]:
        """Snapshot copies of the agents, safe to hand to other layers."""
        return [replace(agent) for agent in self._agents]

    def get(self, agent_id: str) -> Agent | None:
        for agent in self._agents:
            if agent.id == agent_id:
                return agent
        return None

    def add(self, template: AgentTemplate) -> Agent:
        agent = Agent(
            id=f"agent-{uuid.uuid4().hex}",
            name=template.name,
            prompt=template.prompt,
            model=template.model or self._default_model,
        )
        self._agents.append(agent)
        return agent

    def update(self, agent_id: str, field: str, value: str) -> None:
        """Change the prompt or model of one agent; unknown ids are ignored.

        Raises:
            ValueError: if field is not an editable field.
        """
        if field not in self.EDITABLE_FIELDS:
            raise ValueError(
                f"Field '{field}' is not editable. Choose from: {sorted(self.EDITABLE_FIELDS)}"
            )
        agent = self.get(agent_id)
        if agent is not None:
            setattr(agent, field, value)

    def remove(self, agent_id: str) -> None:
        self._agents = [agent for agent in self._agents if agent.id != agent_id]

    def clear(self) -> None:
        self._agents = []

    def reset_all(self) -> None:
        """Return every agent to PENDING and drop the previous run's results."""
        for agent in self._agents:
            self._set_state(agent, AgentStatus.PENDING)

    def providers(self) -> list[str]:
        """Distinct provider prefixes referenced by the agents, in order."""
        return list(dict.fromkeys(provider_of(agent.model) for agent in self._agents))

    def mark_running(self, agent_id: str) -> Agent:
        return self._set_state(self._require(agent_id), AgentStatus.RUNNING)

    def mark_success(self, agent_id: str, output: str, output_json: Any) -> Agent:
        return self._set_state(
            self._require(agent_id),
            AgentStatus.SUCCESS,
            output=output,
            output_json=output_json,
        )

    def mark_error(self, agent_id: str, error: str) -> Agent:
        return self._set_state(self._require(agent_id), AgentStatus.ERROR, error=error)

    def _require(self, agent_id: str) -> Agent:
        agent = self.get(agent_id)
        if agent is None:
            raise KeyError(f"Unknown agent id: {agent_id}")
        return agent

    @staticmethod
    def _set_state(
        agent: Agent,
        status: AgentStatus,
        *,
        output: str | None = None,
        error: str | None = None,
        output_json: Any = None,
    ) -> Agent:
        agent.status = status
        agent.output = output
        agent.error = error
        agent.output_json = output_json
        return agent
