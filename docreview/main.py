"""Command-line entry point: review one file with a chain of agents."""

import argparse
import json
import sys
from pathlib import Path

from docreview.agents.models import Agent, AgentTemplate
from docreview.agents.templates import DEFAULT_AGENTS, find_template
from docreview.config.settings import Settings
from docreview.documents.exceptions import DocumentError
from docreview.logging.logger import Log
from docreview.providers.exceptions import ProviderError
from docreview.session import build_session
from docreview.workflow.exceptions import WorkflowPreconditionError

EXIT_OK = 0
EXIT_AGENT_FAILED = 1
EXIT_NOT_STARTED = 2


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docreview",
        description="Run a sequence of prompt-driven agents over a document.",
    )
    parser.add_argument("file", type=Path, help="Text or PDF document to review")
    parser.add_argument(
        "--agent",
        dest="agents",
        action="append",
        metavar="NAME",
        default=None,
        help="Default agent to run (repeatable, in order). All defaults when omitted.",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Model identifier for every agent, e.g. openai/gpt-4o-mini",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Path to write the JSON report instead of printing it",
    )
    return parser.parse_args(argv)


def _select_templates(names: list[str] | None, model: str | None) -> list[AgentTemplate]:
    if names is None:
        templates = list(DEFAULT_AGENTS)
    else:
        templates = []
        for name in names:
            template = find_template(name)
            if template is None:
                known = ", ".join(t.name for t in DEFAULT_AGENTS)
                raise SystemExit(f"Unknown agent '{name}'. Choose from: {known}")
            templates.append(template)
    if model is None:
        return templates
    return [AgentTemplate(name=t.name, prompt=t.prompt, model=model) for t in templates]


def _log_transition(agent: Agent) -> None:
    Log.info(f"[{agent.status.value}] {agent.name}", agent_id=agent.id)


def main(argv: list[str] | None = None) -> int:
    """Entry point: build session -> load document -> add agents -> run."""
    args = _parse_args(argv)
    settings = Settings()
    # stdout carries the report unless it goes to a file.
    Log.configure(settings.log_level, sys.stderr if args.output is None else sys.stdout)
    session = build_session(settings)

    try:
        session.load_document(args.file)
        for template in _select_templates(args.agents, args.model):
            session.add_agent(template)
        run = session.run_workflow(on_agent_update=_log_transition)
    except (WorkflowPreconditionError, ProviderError, DocumentError) as exc:
        Log.error(str(exc))
        return EXIT_NOT_STARTED

    report = {
        "document": {"name": session.document.name, "type": session.document.type.value},
        "completed": run.completed,
        "agents": [agent.to_dict() for agent in run.agents],
        "analysis": run.analysis.to_dict(),
    }
    rendered = json.dumps(report, indent=2, ensure_ascii=False)
    if args.output is not None:
        args.output.write_text(rendered, encoding="utf-8")
        Log.info(f"Report written to {args.output}")
    else:
        sys.stdout.write(rendered + "\n")
    return EXIT_OK if run.completed else EXIT_AGENT_FAILED


if __name__ == "__main__":
    sys.exit(main())
