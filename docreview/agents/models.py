from dataclasses import dataclass
from enum import Enum
from typing import Any


class AgentStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class AgentTemplate:
    """Blueprint for a new agent; model falls back to the configured default."""

    name: str
    prompt: str
    model: str | None = None


@dataclass
class Agent:
    """One configured step of the workflow and the outcome of its latest run."""

    id: str
    name: str
    prompt: str
    model: str
    status: AgentStatus = AgentStatus.PENDING
    output: str | None = None
    error: str | None = None
    output_json: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "prompt": self.prompt,
            "model": self.model,
            "status": self.status.value,
            "output": self.output,
            "error": self.error,
            "output_json": self.output_json,
        }
