from docreview.agents.models import Agent, AgentStatus
from docreview.workflow.aggregator import (
    AnalysisResult,
    Entity,
    SentimentHistogram,
    aggregate,
)


def _agent(
    name: str,
    output_json: object,
    status: AgentStatus = AgentStatus.SUCCESS,
    agent_id: str = "agent-1",
) -> Agent:
    return Agent(
        id=agent_id,
        name=name,
        prompt="p",
        model="example/offline",
        status=status,
        output="raw",
        output_json=output_json,
    )


class TestSentiment:
    def test_positive_label(self) -> None:
        result = aggregate([_agent("Sentiment Analyzer", {"sentiment": "Positive"})])
        assert result.sentiment == SentimentHistogram(positive=1, negative=0, neutral=0)
        assert result.entities is None
        assert result.has_data

    def test_unknown_label_counts_as_neutral(self) -> None:
        result = aggregate([_agent("Sentiment Analyzer", {"sentiment": "Mixed"})])
        assert result.sentiment == SentimentHistogram(neutral=1)

    def test_missing_label_gives_no_sentiment(self) -> None:
        result = aggregate([_agent("Sentiment Analyzer", {"reason": "n/a"})])
        assert result == AnalysisResult()

    def test_failed_agent_is_ignored(self) -> None:
        failed = _agent("Sentiment Analyzer", {"sentiment": "Positive"}, AgentStatus.ERROR)
        assert not aggregate([failed]).has_data

    def test_first_successful_agent_wins(self) -> None:
        agents = [
            _agent("Sentiment Analyzer", {"sentiment": "Negative"}, agent_id="a"),
            _agent("Sentiment Analyzer", {"sentiment": "Positive"}, agent_id="b"),
        ]
        assert aggregate(agents).sentiment == SentimentHistogram(negative=1)

    def test_name_match_ignores_case(self) -> None:
        result = aggregate([_agent("sentiment analyzer ", {"sentiment": "neutral"})])
        assert result.sentiment == SentimentHistogram(neutral=1)


class TestEntities:
    def test_keeps_only_complete_items(self) -> None:
        payload = [{"name": "Acme", "type": "ORG"}, {"name": "x"}, "junk"]
        result = aggregate([_agent("Entity Extractor", payload)])
        assert result.entities == [Entity(name="Acme", type="ORG")]
        assert result.sentiment is None

    def test_non_list_payload_gives_no_entities(self) -> None:
        result = aggregate([_agent("Entity Extractor", {"name": "Acme", "type": "ORG"})])
        assert result == AnalysisResult()

    def test_empty_list_is_no_data(self) -> None:
        assert not aggregate([_agent("Entity Extractor", [])]).has_data


class TestCombined:
    def test_both_roles(self) -> None:
        agents = [
            _agent("Summarizer", {"summary": "x"}, agent_id="a"),
            _agent("Sentiment Analyzer", {"sentiment": "Negative"}, agent_id="b"),
            _agent("Entity Extractor", [{"name": "Paris", "type": "LOCATION"}], agent_id="c"),
        ]
        result = aggregate(agents)
        assert result.to_dict() == {
            "sentiment": {"positive": 0, "negative": 1, "neutral": 0},
            "entities": [{"name": "Paris", "type": "LOCATION"}],
        }

    def test_no_matching_agents(self) -> None:
        result = aggregate([_agent("Summarizer", {"sentiment": "Positive"})])
        assert result == AnalysisResult()
        assert result.to_dict() == {"sentiment": None, "entities": None}
