from docreview.agents.models import AgentTemplate

SENTIMENT_AGENT_NAME = "Sentiment Analyzer"
ENTITY_AGENT_NAME = "Entity Extractor"

MODEL_OPTIONS: list[tuple[str, str]] = [
    ("gemini/gemini-2.5-flash", "Gemini 2.5 Flash"),
    ("openai/gpt-4o-mini", "OpenAI GPT-4o Mini"),
    ("openai/gpt-4.1-mini", "OpenAI GPT-4.1 Mini"),
]

DEFAULT_AGENTS: list[AgentTemplate] = [
    AgentTemplate(
        name="Summarizer",
        prompt=(
            "Summarize the document in five sentences or fewer. "
            "Focus on its purpose, main claims and conclusions."
        ),
    ),
    AgentTemplate(
        name=SENTIMENT_AGENT_NAME,
        prompt=(
            "Determine the overall sentiment of the document. Respond with a JSON "
            "object in a ```json code block with the keys \"sentiment\" "
            "(one of \"Positive\", \"Negative\", \"Neutral\") and \"reason\" "
            "(one sentence)."
        ),
    ),
    AgentTemplate(
        name=ENTITY_AGENT_NAME,
        prompt=(
            "Extract the named entities mentioned in the document. Respond with a "
            "JSON array in a ```json code block where each item has the keys "
            "\"name\" and \"type\" (PERSON, ORG, LOCATION, DATE or OTHER)."
        ),
    ),
    AgentTemplate(
        name="Key Points",
        prompt=(
            "List the key points of the document as a JSON array of short strings "
            "in a ```json code block."
        ),
    ),
    AgentTemplate(
        name="Risk Reviewer",
        prompt=(
            "Review the document for risks, obligations and open issues. Describe "
            "each finding in one or two sentences, most important first."
        ),
    ),
]


def find_template(name: str) -> AgentTemplate | None:
    """Look up a default template by name, ignoring case and surrounding spaces."""
    wanted = name.strip().lower()
    for template in DEFAULT_AGENTS:
        if template.name.lower() == wanted:
            return template
    return None
