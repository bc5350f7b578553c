from pathlib import Path

from docreview.prompts.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent


def load_agent_task_template(path: Path | None = None) -> str:
    """Load the template wrapping an agent prompt around the document.

    Args:
        path: Path to the template file.
              Defaults to the bundled agent_task.txt.

    Returns:
        The raw template with {document_content} and {agent_prompt} placeholders.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "agent_task.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load agent task template: {exc}") from exc


def load_ocr_prompt(path: Path | None = None) -> str:
    """Load the instruction sent with every page image for OCR.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "ocr.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise PromptLoadError(f"Failed to load OCR prompt: {exc}") from exc
