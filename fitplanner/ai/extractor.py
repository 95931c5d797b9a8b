"""Pull the generated plan text out of a generateContent response body.

The body is usually well-formed JSON shaped like
``{"candidates":[{"content":{"parts":[{"text": "..."}]}}]}``, but truncated or
reshaped payloads have been seen. Extraction walks an ordered chain of
strategies and the first one that yields text wins:

1. empty body -> ``EMPTY_RESPONSE``
2. ``candidates[0].content.parts[0].text`` (parsed tree, then literal marker)
3. any ``parts[].text`` (parsed tree, then literal marker)
4. any ``"text": "`` value, scanned with backslash escapes honored
5. a ``"text":`` value inside the brace-bounded ``"content":`` object
6. ``FAILED_PREFIX`` + the raw body

It never raises.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable

EMPTY_RESPONSE = "Error: Empty response from API"
FAILED_PREFIX = "Failed to parse response: "
ERROR_PREFIX = "Error extracting content: "

PRIMARY_MARKER = '"candidates": [{"content": {"parts": [{"text": "'
PRIMARY_END = '"}]'
PARTS_MARKER = '"parts": [{"text": "'
PARTS_END = '"}'
TEXT_MARKER = '"text": "'
CONTENT_KEY = '"content":'
TEXT_KEY = '"text":'

_SIMPLE_ESCAPES = {
    "n": "\n",
    '"': '"',
    "\\": "\\",
    "t": "\t",
    "r": "\r",
    "/": "/",
    "b": "\b",
    "f": "\f",
}
_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)


def unescape_json_text(raw: str) -> str:
    """Decode JSON string escapes in one left-to-right pass.

    ``\\\\n`` stays a backslash followed by ``n``; unknown escapes are kept.
    """

    def _sub(match: re.Match[str]) -> str:
        token = match.group(1)
        if len(token) == 5:
            return chr(int(token[1:], 16))
        return _SIMPLE_ESCAPES.get(token, match.group(0))

    return _ESCAPE_RE.sub(_sub, raw)


def _scan_string(text: str, start: int) -> int:
    """Index of the first unescaped quote at or after start, or -1."""
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            return i
    return -1


def _primary_from_tree(doc: Any) -> str | None:
    try:
        text = doc["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def _parts_from_tree(doc: Any) -> str | None:
    try:
        return _find_parts_text(doc)
    except RecursionError:
        return None


def _find_parts_text(node: Any) -> str | None:
    if isinstance(node, dict):
        parts = node.get("parts")
        if isinstance(parts, list):
            for part in parts:
                if isinstance(part, dict) and isinstance(part.get("text"), str):
                    return part["text"]
        children = list(node.values())
    elif isinstance(node, list):
        children = node
    else:
        return None
    for child in children:
        found = _find_parts_text(child)
        if found is not None:
            return found
    return None


def _between(raw: str, marker: str, end_marker: str) -> str | None:
    idx = raw.find(marker)
    if idx == -1:
        return None
    start = idx + len(marker)
    end = raw.find(end_marker, start)
    if end == -1:
        return None
    return unescape_json_text(raw[start:end])


def _primary_marker(raw: str) -> str | None:
    return _between(raw, PRIMARY_MARKER, PRIMARY_END)


def _parts_marker(raw: str) -> str | None:
    return _between(raw, PARTS_MARKER, PARTS_END)


def _any_text_field(raw: str) -> str | None:
    idx = raw.find(TEXT_MARKER)
    if idx == -1:
        return None
    start = idx + len(TEXT_MARKER)
    end = _scan_string(raw, start)
    if end <= start:
        return None
    return unescape_json_text(raw[start:end])


def _content_object(raw: str) -> str | None:
    idx = raw.find(CONTENT_KEY)
    if idx == -1:
        return None
    start = idx + len(CONTENT_KEY)
    depth = 0
    end = -1
    for i in range(start, len(raw)):
        ch = raw[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                end = i
                break
            depth -= 1
    if end == -1:
        return None
    sub = raw[start:end]

    key = sub.find(TEXT_KEY)
    if key == -1:
        return None
    pos = key + len(TEXT_KEY)
    while pos < len(sub) and sub[pos].isspace():
        pos += 1
    if pos >= len(sub) or sub[pos] != '"':
        return None
    close = _scan_string(sub, pos + 1)
    if close == -1:
        return None
    return unescape_json_text(sub[pos + 1 : close])


def extract_plan_text(raw: str | None) -> str:
    if not raw:
        return EMPTY_RESPONSE
    try:
        try:
            doc: Any = json.loads(raw)
        except (ValueError, RecursionError):
            doc = None

        strategies: list[Callable[[], str | None]] = [
            lambda: _primary_from_tree(doc),
            lambda: _primary_marker(raw),
            lambda: _parts_from_tree(doc),
            lambda: _parts_marker(raw),
            lambda: _any_text_field(raw),
            lambda: _content_object(raw),
        ]
        for strategy in strategies:
            text = strategy()
            if text is not None:
                return text
        return FAILED_PREFIX + raw
    except Exception as exc:
        return ERROR_PREFIX + str(exc)
