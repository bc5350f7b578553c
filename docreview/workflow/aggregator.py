"""Reduces finished agents to the summary shown after a run."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from docreview.agents.models import Agent, AgentStatus
from docreview.agents.templates import ENTITY_AGENT_NAME, SENTIMENT_AGENT_NAME

_SENTIMENT_BUCKETS = ("positive", "negative", "neutral")


@dataclass(frozen=True)
class SentimentHistogram:
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"positive": self.positive, "negative": self.negative, "neutral": self.neutral}


@dataclass(frozen=True)
class Entity:
    name: str
    type: str


@dataclass(frozen=True)
class AnalysisResult:
    """Sentiment and entity summary; both None means there is nothing to show."""

    sentiment: SentimentHistogram | None = None
    entities: list[Entity] | None = None

    @property
    def has_data(self) -> bool:
        return self.sentiment is not None or bool(self.entities)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sentiment": self.sentiment.to_dict() if self.sentiment else None,
            "entities": (
                [{"name": e.name, "type": e.type} for e in self.entities]
                if self.entities is not None
                else None
            ),
        }


def aggregate(agents: Iterable[Agent]) -> AnalysisResult:
    """Build the summary from the first successful agent of each role."""
    agents = list(agents)
    sentiment_agent = _first_successful(agents, SENTIMENT_AGENT_NAME)
    entity_agent = _first_successful(agents, ENTITY_AGENT_NAME)

    sentiment = _sentiment_from(sentiment_agent.output_json) if sentiment_agent else None
    entities = _entities_from(entity_agent.output_json) if entity_agent else None

    if sentiment is None and not entities:
        return AnalysisResult()
    return AnalysisResult(sentiment=sentiment, entities=entities)


def _first_successful(agents: list[Agent], role_name: str) -> Agent | None:
    wanted = role_name.lower()
    for agent in agents:
        if agent.status is AgentStatus.SUCCESS and agent.name.strip().lower() == wanted:
            return agent
    return None


def _sentiment_from(payload: Any) -> SentimentHistogram | None:
    if not isinstance(payload, dict):
        return None
    label = payload.get("sentiment")
    if not isinstance(label, str) or not label.strip():
        return None
    bucket = label.strip().lower()
    if bucket not in _SENTIMENT_BUCKETS:
        bucket = "neutral"
    return SentimentHistogram(**{bucket: 1})


def _entities_from(payload: Any) -> list[Entity] | None:
    if not isinstance(payload, list):
        return None
    return [
        Entity(name=str(item["name"]), type=str(item["type"]))
        for item in payload
        if isinstance(item, dict) and item.get("name") and item.get("type")
    ]
