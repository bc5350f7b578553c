from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docreview.agents.models import Agent, AgentStatus, AgentTemplate
from docreview.agents.registry import AgentRegistry
from docreview.credentials.store import CredentialStore
from docreview.documents.models import Document, DocumentType
from docreview.providers.client_base import BaseCompletionClient
from docreview.providers.exceptions import InvalidCredentialError, ProviderRequestError
from docreview.providers.gateway import CompletionGateway
from docreview.workflow.aggregator import AnalysisResult, SentimentHistogram
from docreview.workflow.exceptions import (
    DocumentNotLoadedError,
    MissingCredentialsError,
    NoAgentsError,
    WorkflowAlreadyRunningError,
)
from docreview.workflow.orchestrator import WorkflowOrchestrator

GEMINI = "gemini/gemini-2.5-flash"
OPENAI = "openai/gpt-4o-mini"


@pytest.fixture
def clients() -> dict[str, MagicMock]:
    return {
        "gemini": MagicMock(spec=BaseCompletionClient),
        "openai": MagicMock(spec=BaseCompletionClient),
    }


@pytest.fixture
def credentials() -> CredentialStore:
    return CredentialStore(defaults={"gemini": "g-key", "openai": "o-key"})


@pytest.fixture
def gateway(clients: dict[str, MagicMock]) -> CompletionGateway:
    builders = {provider: (lambda _cred, c=client: c) for provider, client in clients.items()}
    return CompletionGateway(builders, ocr_model=GEMINI, ocr_prompt="ocr")


@pytest.fixture
def orchestrator(gateway: CompletionGateway, credentials: CredentialStore) -> WorkflowOrchestrator:
    return WorkflowOrchestrator(gateway, credentials)


@pytest.fixture
def document() -> Document:
    return Document(name="notes.txt", type=DocumentType.TXT, content="Quarterly results were strong.")


def _registry(*agents: tuple[str, str]) -> AgentRegistry:
    registry = AgentRegistry(GEMINI)
    for name, model in agents:
        registry.add(AgentTemplate(name=name, prompt=f"{name} instructions", model=model))
    return registry


def _statuses(registry: AgentRegistry) -> list[AgentStatus]:
    return [agent.status for agent in registry]


class TestPreconditions:
    def test_empty_document_refused_before_any_state_change(
        self, orchestrator: WorkflowOrchestrator, clients: dict[str, MagicMock]
    ) -> None:
        registry = _registry(("A", GEMINI))
        with pytest.raises(DocumentNotLoadedError, match="load a document"):
            orchestrator.run(registry, Document.empty())
        assert _statuses(registry) == [AgentStatus.PENDING]
        clients["gemini"].complete.assert_not_called()

    def test_whitespace_document_is_empty(self, orchestrator: WorkflowOrchestrator) -> None:
        blank = Document(name="blank.txt", type=DocumentType.TXT, content="  \n ")
        with pytest.raises(DocumentNotLoadedError):
            orchestrator.run(_registry(("A", GEMINI)), blank)

    def test_no_agents(self, orchestrator: WorkflowOrchestrator, document: Document) -> None:
        with pytest.raises(NoAgentsError):
            orchestrator.run(AgentRegistry(GEMINI), document)

    def test_missing_credential_leaves_all_agents_pending(
        self, gateway: CompletionGateway, document: Document, clients: dict[str, MagicMock]
    ) -> None:
        orchestrator = WorkflowOrchestrator(gateway, CredentialStore(defaults={"gemini": "g"}))
        registry = _registry(("A", GEMINI), ("B", OPENAI))
        with pytest.raises(MissingCredentialsError, match="OpenAI API key is required") as info:
            orchestrator.run(registry, document)
        assert info.value.providers == ["openai"]
        assert _statuses(registry) == [AgentStatus.PENDING, AgentStatus.PENDING]
        clients["gemini"].complete.assert_not_called()

    def test_missing_credentials_listed_together(
        self, gateway: CompletionGateway, document: Document
    ) -> None:
        orchestrator = WorkflowOrchestrator(gateway, CredentialStore())
        registry = _registry(("A", GEMINI), ("B", OPENAI))
        with pytest.raises(MissingCredentialsError, match="Gemini, OpenAI"):
            orchestrator.run(registry, document)

    def test_configures_gateway_from_store(
        self,
        orchestrator: WorkflowOrchestrator,
        gateway: CompletionGateway,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.return_value = "ok"
        assert not gateway.is_configured("gemini")
        orchestrator.run(_registry(("A", GEMINI)), document)
        assert gateway.is_configured("gemini")

    def test_concurrent_run_is_rejected(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.return_value = "ok"
        registry = _registry(("A", GEMINI))
        rejected: list[Exception] = []

        def reenter(agent: Agent) -> None:
            if agent.status is AgentStatus.RUNNING:
                assert orchestrator.is_running
                with pytest.raises(WorkflowAlreadyRunningError) as info:
                    orchestrator.run(registry, document)
                rejected.append(info.value)

        run = orchestrator.run(registry, document, on_agent_update=reenter)
        assert len(rejected) == 1
        assert run.completed
        assert not orchestrator.is_running


class TestRunLoop:
    def test_all_agents_succeed_in_order(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.side_effect = ["first", '```json\n{"k": 1}\n```']
        registry = _registry(("A", GEMINI), ("B", GEMINI))
        run = orchestrator.run(registry, document)
        assert run.completed
        assert run.failed_agent_id is None
        assert [a.status for a in run.agents] == [AgentStatus.SUCCESS, AgentStatus.SUCCESS]
        assert run.agents[0].output == "first"
        assert run.agents[0].output_json is None
        assert run.agents[1].output_json == {"k": 1}

    def test_prompt_contains_document_and_instructions(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.return_value = "ok"
        orchestrator.run(_registry(("A", GEMINI)), document)
        prompt = clients["gemini"].complete.call_args.kwargs["prompt"]
        assert prompt == (
            "DOCUMENT CONTENT:\n---\nQuarterly results were strong.\n---\n\n"
            "TASK:\nA instructions"
        )
        assert clients["gemini"].complete.call_args.kwargs["model"] == "gemini-2.5-flash"

    def test_agents_do_not_see_previous_outputs(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.side_effect = ["UNIQUE-OUTPUT-OF-A", "ok"]
        orchestrator.run(_registry(("A", GEMINI), ("B", GEMINI)), document)
        second_prompt = clients["gemini"].complete.call_args_list[1].kwargs["prompt"]
        assert "UNIQUE-OUTPUT-OF-A" not in second_prompt

    def test_first_error_stops_the_run(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.side_effect = [
            "ok",
            ProviderRequestError("gemini", "HTTP 500: boom"),
            "never",
        ]
        registry = _registry(("A", GEMINI), ("B", GEMINI), ("C", GEMINI))
        run = orchestrator.run(registry, document)
        assert not run.completed
        assert run.failed_agent_id == run.agents[1].id
        assert [a.status for a in run.agents] == [
            AgentStatus.SUCCESS,
            AgentStatus.ERROR,
            AgentStatus.PENDING,
        ]
        assert run.agents[1].error == "Failed to get response from Gemini API: HTTP 500: boom"
        assert clients["gemini"].complete.call_count == 2

    def test_invalid_credential_is_invalidated(
        self,
        orchestrator: WorkflowOrchestrator,
        gateway: CompletionGateway,
        credentials: CredentialStore,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.return_value = "ok"
        clients["openai"].complete.side_effect = InvalidCredentialError("openai")
        registry = _registry(("A", GEMINI), ("B", OPENAI))
        run = orchestrator.run(registry, document)
        assert [a.status for a in run.agents] == [AgentStatus.SUCCESS, AgentStatus.ERROR]
        assert "API key" in (run.agents[1].error or "")
        assert not credentials.is_configured("openai")
        assert not gateway.is_configured("openai")
        assert credentials.is_configured("gemini")

    def test_unknown_provider_fails_the_agent(
        self,
        orchestrator: WorkflowOrchestrator,
        document: Document,
    ) -> None:
        run = orchestrator.run(_registry(("A", "mistral/large")), document)
        assert run.agents[0].status is AgentStatus.ERROR
        assert "Unsupported provider: 'mistral'" in (run.agents[0].error or "")

    def test_rerun_resets_previous_results(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        registry = _registry(("A", GEMINI), ("B", GEMINI))
        clients["gemini"].complete.side_effect = ["one", "two"]
        orchestrator.run(registry, document)
        clients["gemini"].complete.side_effect = [ProviderRequestError("gemini", "down")]
        run = orchestrator.run(registry, document)
        assert run.agents[0].status is AgentStatus.ERROR
        assert run.agents[0].output is None
        assert run.agents[1].status is AgentStatus.PENDING
        assert run.agents[1].output is None

    def test_listener_sees_every_transition(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.side_effect = ["ok", ProviderRequestError("gemini", "x")]
        seen: list[tuple[str, AgentStatus]] = []
        orchestrator.run(
            _registry(("A", GEMINI), ("B", GEMINI)),
            document,
            on_agent_update=lambda agent: seen.append((agent.name, agent.status)),
        )
        assert seen == [
            ("A", AgentStatus.RUNNING),
            ("A", AgentStatus.SUCCESS),
            ("B", AgentStatus.RUNNING),
            ("B", AgentStatus.ERROR),
        ]


class TestResults:
    def test_results_listener_called_with_analysis(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.return_value = '```json\n{"sentiment": "Positive"}\n```'
        received: list[AnalysisResult] = []
        run = orchestrator.run(
            _registry(("Sentiment Analyzer", GEMINI)),
            document,
            on_results=received.append,
        )
        assert run.analysis.sentiment == SentimentHistogram(positive=1)
        assert received == [run.analysis]
        assert orchestrator.last_analysis == run.analysis

    def test_results_listener_not_called_without_data(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.return_value = "plain prose"
        on_results = MagicMock()
        run = orchestrator.run(
            _registry(("Summarizer", GEMINI)), document, on_results=on_results
        )
        on_results.assert_not_called()
        assert not run.analysis.has_data

    def test_partial_run_still_aggregates(
        self,
        orchestrator: WorkflowOrchestrator,
        clients: dict[str, MagicMock],
        document: Document,
    ) -> None:
        clients["gemini"].complete.side_effect = [
            '[{"name": "Acme", "type": "ORG"}]',
            ProviderRequestError("gemini", "x"),
        ]
        run = orchestrator.run(
            _registry(("Entity Extractor", GEMINI), ("Sentiment Analyzer", GEMINI)),
            document,
        )
        assert not run.completed
        assert run.analysis.entities is not None
        assert [e.name for e in run.analysis.entities] == ["Acme"]
        assert run.analysis.sentiment is None


class TestInvalidationPersistence:
    def test_run_completes_when_credential_file_cannot_be_written(
        self,
        gateway: CompletionGateway,
        clients: dict[str, MagicMock],
        document: Document,
        tmp_path: Path,
    ) -> None:
        path = tmp_path / "creds.json"
        credentials = CredentialStore(path=path)
        credentials.set("openai", "user-key")
        path.unlink()
        path.mkdir()
        clients["openai"].complete.side_effect = InvalidCredentialError("openai")

        run = WorkflowOrchestrator(gateway, credentials).run(_registry(("A", OPENAI)), document)

        assert run.agents[0].status is AgentStatus.ERROR
        assert not run.completed
        assert not credentials.is_configured("openai")
        assert not gateway.is_configured("openai")
