"""Sequential run loop driving every agent through its state machine.

Per agent: PENDING -> RUNNING -> SUCCESS | ERROR. The first ERROR stops the
run; agents after it stay PENDING. Every agent is given the original document
only, never the output of the agents before it.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from docreview.agents.models import Agent
from docreview.agents.registry import AgentRegistry
from docreview.credentials.store import CredentialStore
from docreview.documents.models import Document
from docreview.logging.logger import Log
from docreview.prompts.loader import load_agent_task_template
from docreview.providers.exceptions import InvalidCredentialError, ProviderError
from docreview.providers.gateway import CompletionGateway
from docreview.providers.names import provider_label
from docreview.workflow.aggregator import AnalysisResult, aggregate
from docreview.workflow.exceptions import (
    DocumentNotLoadedError,
    MissingCredentialsError,
    NoAgentsError,
    WorkflowAlreadyRunningError,
)
from docreview.workflow.extractor import extract_json

AgentListener = Callable[[Agent], None]
ResultsListener = Callable[[AnalysisResult], None]


@dataclass
class WorkflowRun:
    """Outcome of one pass over the registry."""

    agents: list[Agent]
    analysis: AnalysisResult
    failed_agent_id: str | None = None

    @property
    def completed(self) -> bool:
        return self.failed_agent_id is None


class WorkflowOrchestrator:
    """Runs the registry's agents one after another against the gateway."""

    def __init__(
        self,
        gateway: CompletionGateway,
        credentials: CredentialStore,
        *,
        task_template_path: Path | None = None,
    ) -> None:
        self._gateway = gateway
        self._credentials = credentials
        self._task_template = load_agent_task_template(task_template_path)
        self._running = False
        self._analysis: AnalysisResult | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def last_analysis(self) -> AnalysisResult | None:
        return self._analysis

    def build_prompt(self, agent_prompt: str, document_content: str) -> str:
        return self._task_template.format(
            document_content=document_content,
            agent_prompt=agent_prompt,
        )

    def run(
        self,
        registry: AgentRegistry,
        document: Document,
        *,
        on_agent_update: AgentListener | None = None,
        on_results: ResultsListener | None = None,
    ) -> WorkflowRun:
        """Execute every agent in order and aggregate the results.

        Raises:
            WorkflowPreconditionError: before any agent state changes, when the
                run cannot start.
        """
        self._check_preconditions(registry, document)
        self._running = True
        try:
            return self._run(registry, document, on_agent_update, on_results)
        finally:
            self._running = False

    def _run(
        self,
        registry: AgentRegistry,
        document: Document,
        on_agent_update: AgentListener | None,
        on_results: ResultsListener | None,
    ) -> WorkflowRun:
        Log.info(f"Starting workflow run: {len(registry)} agents", document=document.name)
        registry.reset_all()
        self._analysis = None

        failed_agent_id: str | None = None
        for agent in registry:
            self._notify(on_agent_update, registry.mark_running(agent.id))
            Log.info(f"Running agent '{agent.name}'", agent_id=agent.id, model=agent.model)
            prompt = self.build_prompt(agent.prompt, document.content)
            try:
                output = self._gateway.complete(agent.model, prompt)
            except ProviderError as exc:
                Log.error(f"Agent '{agent.name}' failed: {exc.message}", agent_id=agent.id)
                self._notify(on_agent_update, registry.mark_error(agent.id, exc.message))
                if isinstance(exc, InvalidCredentialError):
                    self._invalidate(exc.provider)
                failed_agent_id = agent.id
                break
            Log.debug(f"Raw response from '{agent.name}':\n{output}")
            output_json = extract_json(output)
            self._notify(on_agent_update, registry.mark_success(agent.id, output, output_json))
            Log.info(
                f"Agent '{agent.name}' succeeded",
                agent_id=agent.id,
                structured=output_json is not None,
            )

        analysis = aggregate(registry)
        self._analysis = analysis
        Log.info(
            "Workflow run finished",
            completed=failed_agent_id is None,
            has_analysis=analysis.has_data,
        )
        if analysis.has_data and on_results is not None:
            on_results(analysis)
        return WorkflowRun(
            agents=registry.agents,
            analysis=analysis,
            failed_agent_id=failed_agent_id,
        )

    def _check_preconditions(self, registry: AgentRegistry, document: Document) -> None:
        if self._running:
            raise WorkflowAlreadyRunningError()
        if document.is_empty:
            raise DocumentNotLoadedError()
        if len(registry) == 0:
            raise NoAgentsError()

        # Checked over the whole agent set so every missing key is reported at once.
        required = [p for p in registry.providers() if self._gateway.is_known(p)]
        missing = [p for p in required if not self._credentials.is_configured(p)]
        if missing:
            raise MissingCredentialsError(missing, [provider_label(p) for p in missing])

        for provider in required:
            if not self._gateway.is_configured(provider):
                self._gateway.configure(provider, self._credentials.get(provider))

    def _invalidate(self, provider: str) -> None:
        self._gateway.deconfigure(provider)
        self._credentials.invalidate(provider)

    @staticmethod
    def _notify(listener: AgentListener | None, agent: Agent) -> None:
        if listener is not None:
            listener(agent)
