class WorkflowPreconditionError(Exception):
    """Raised before a run starts when it cannot proceed; no state is touched."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class WorkflowAlreadyRunningError(WorkflowPreconditionError):
    def __init__(self) -> None:
        super().__init__("A workflow run is already in progress.")


class NoAgentsError(WorkflowPreconditionError):
    def __init__(self) -> None:
        super().__init__("Add at least one agent before running the workflow.")


class DocumentNotLoadedError(WorkflowPreconditionError):
    def __init__(self) -> None:
        super().__init__("Please load a document before running the workflow.")


class MissingCredentialsError(WorkflowPreconditionError):
    """Lists every provider the agents need that has no credential."""

    def __init__(self, providers: list[str], labels: list[str]) -> None:
        self.providers = providers
        if len(labels) == 1:
            message = f"{labels[0]} API key is required for this workflow."
        else:
            message = f"API keys are required for this workflow: {', '.join(labels)}."
        super().__init__(message)
