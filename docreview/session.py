from pathlib import Path

from docreview.agents.models import Agent, AgentTemplate
from docreview.agents.registry import AgentRegistry
from docreview.config.settings import Settings
from docreview.credentials.store import CredentialStore
from docreview.documents.factory import RasterizerFactory
from docreview.documents.loader import DocumentLoader
from docreview.documents.models import Document
from docreview.logging.logger import Log
from docreview.providers.factory import GatewayFactory
from docreview.providers.gateway import CompletionGateway
from docreview.workflow.aggregator import AnalysisResult
from docreview.workflow.orchestrator import (
    AgentListener,
    ResultsListener,
    WorkflowOrchestrator,
    WorkflowRun,
)


class ReviewSession:
    """One document under review together with its agents.

    Loading a new document or resetting clears the agents and the last
    analysis. Nothing here outlives the process except user credentials.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        gateway: CompletionGateway,
        registry: AgentRegistry,
        loader: DocumentLoader,
        orchestrator: WorkflowOrchestrator,
    ) -> None:
        self._credentials = credentials
        self._gateway = gateway
        self._registry = registry
        self._loader = loader
        self._orchestrator = orchestrator
        self._document = Document.empty()
        self._analysis: AnalysisResult | None = None

    @property
    def document(self) -> Document:
        return self._document

    @property
    def agents(self) -> list[Agent]:
        return self._registry.agents

    @property
    def analysis(self) -> AnalysisResult | None:
        return self._analysis

    def load_document(self, path: Path) -> Document:
        self.reset()
        self._document = self._loader.load(path)
        return self._document

    def set_document(self, document: Document) -> None:
        self.reset()
        self._document = document

    def add_agent(self, template: AgentTemplate) -> Agent:
        return self._registry.add(template)

    def update_agent(self, agent_id: str, field: str, value: str) -> None:
        self._registry.update(agent_id, field, value)

    def remove_agent(self, agent_id: str) -> None:
        self._registry.remove(agent_id)

    def set_credential(self, provider: str, credential: str) -> None:
        """Store a user-entered key and rebuild that provider's client."""
        self._credentials.set(provider, credential)
        if not self._gateway.is_known(provider):
            return
        if self._credentials.is_configured(provider):
            self._gateway.configure(provider, self._credentials.get(provider))
        else:
            self._gateway.deconfigure(provider)

    def run_workflow(
        self,
        on_agent_update: AgentListener | None = None,
        on_results: ResultsListener | None = None,
    ) -> WorkflowRun:
        run = self._orchestrator.run(
            self._registry,
            self._document,
            on_agent_update=on_agent_update,
            on_results=on_results,
        )
        self._analysis = run.analysis if run.analysis.has_data else None
        return run

    def reset(self) -> None:
        self._registry.clear()
        self._analysis = None
        self._document = Document.empty()


def build_session(settings: Settings) -> ReviewSession:
    """Build a ReviewSession with all required adapters."""
    credentials = CredentialStore.from_settings(settings)
    gateway = GatewayFactory.create(settings, credentials)
    registry = AgentRegistry(default_model=settings.default_model)
    loader = DocumentLoader(gateway, credentials, RasterizerFactory.create(settings))
    orchestrator = WorkflowOrchestrator(gateway, credentials)
    Log.info(
        "Review session ready",
        configured=",".join(credentials.configured_providers()) or "none",
    )
    return ReviewSession(
        credentials=credentials,
        gateway=gateway,
        registry=registry,
        loader=loader,
        orchestrator=orchestrator,
    )
