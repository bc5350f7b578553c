"""Best-effort recovery of a JSON value from free-form model output.

The candidate is chosen in a fixed order and the first one found wins:

1. the interior of a fenced code block tagged ``json`` whose closing fence
   starts a line;
2. the first balanced top-level ``{...}`` or ``[...]`` literal in the text;
3. the whole text.

Only the chosen candidate is parsed, as strict JSON: ``NaN`` and
``Infinity`` are rejected. If it does not parse, the result is None; later
candidates are not tried.
"""

import json
import re
from typing import Any

_FENCED_JSON_RE = re.compile(r"```json[^\n]*\n(.*?)\n[ \t]*```", re.IGNORECASE | re.DOTALL)
_OPENERS = {"{": "}", "[": "]"}
_CLOSERS = frozenset(_OPENERS.values())


def extract_json(text: Any) -> Any:
    """Return the JSON value embedded in text, or None if there is none."""
    if not isinstance(text, str) or not text.strip():
        return None
    candidate = _select_candidate(text)
    try:
        return json.loads(candidate, parse_constant=_reject_constant)
    except ValueError:
        return None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _select_candidate(text: str) -> str:
    fenced = _FENCED_JSON_RE.search(text)
    if fenced is not None:
        return fenced.group(1).strip()
    literal = find_balanced_literal(text)
    if literal is not None:
        return literal
    return text.strip()


def find_balanced_literal(text: str) -> str | None:
    """Return the first object or array literal whose brackets balance."""
    for start, char in enumerate(text):
        if char not in _OPENERS:
            continue
        end = _match_closing(text, start)
        if end is not None:
            return text[start : end + 1]
    return None


def _match_closing(text: str, start: int) -> int | None:
    # Brackets inside JSON string literals do not count.
    expected: list[str] = []
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _OPENERS:
            expected.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not expected or expected.pop() != char:
                return None
            if not expected:
                return index
    return None
