"""
Response Parser — Recovers a structured payload from free-text model output.

The model is asked for JSON, but replies are free text. Extraction runs a
strictly ordered chain and stops at the first stage that yields a JSON object
holding at least one expected key:

1. json          the whole trimmed response
2. fenced_block  the first ``` fenced code block
3. first_object  the first balanced top-level {...} anywhere in the text
4. scanned_object every non-nested {...} that parses and has an expected key
5. heuristic     labelled summary plus list / sentence / paragraph extraction

The heuristic stage always produces a summary and at least one suggestion.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Iterator, Sequence

from rta.models.llm_models import ParsedResponse

logger = logging.getLogger("rta.llm.parser")

SUMMARY_MAX_CHARS = 500
MAX_HEURISTIC_SUGGESTIONS = 5
GENERIC_SUGGESTION = "Review the reported findings and address errors before warnings"

ANALYSIS_KEYS = ("summary", "suggestions")
SNIPPET_KEYS = ("insights", "suggestions")


class ResponseParseError(ValueError):
    """The response contains nothing that any extraction stage can use."""


_FENCE = re.compile(r"```[ \t]*(?:json|JSON|javascript|js)?[ \t]*\n?(.*?)```", re.DOTALL)
_FLAT_OBJECT = re.compile(r"\{[^{}]*\}")

_SUMMARY_LABEL = re.compile(
    r"^[ \t>#*_]*(?:summary|overview|overall assessment|assessment)[*_]*[ \t]*[:\-][ \t]*(.*)$",
    re.IGNORECASE | re.MULTILINE,
)
_SUGGESTION_ARRAY = re.compile(r"""["']?suggestions["']?\s*[:=]\s*\[(.*?)\]""", re.IGNORECASE | re.DOTALL)
_QUOTED = re.compile(r'"((?:[^"\\]|\\.)+)"|\'((?:[^\'\\]|\\.)+)\'')
_LIST_ITEM = re.compile(r"^[ \t]*(?:[-*•]|\d+[.)])[ \t]+(.+?)[ \t]*$", re.MULTILINE)
_SENTENCE = re.compile(r"[^.!?\n]+[.!?]")
_ADVICE = re.compile(r"\b(?:recommend|suggest|consider|should)\w*\b", re.IGNORECASE)
_HEADING_ONLY = re.compile(r"^[ \t>#*_]*[\w ]{1,40}[*_]*:?[ \t]*$")


# ── stage helpers ──


def _loads_object(text: str, expected: Sequence[str]) -> dict | None:
    """Parse text as JSON; accept only an object containing an expected key."""
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    if isinstance(value, dict) and any(key in value for key in expected):
        return value
    return None


def _balanced_objects(text: str) -> Iterator[str]:
    """Top-level brace-balanced substrings, skipping braces inside JSON strings."""
    depth = 0
    start = -1
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"' and depth > 0:
            in_string = True
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                yield text[start:i + 1]


def _stage_json(text: str, expected: Sequence[str]) -> dict | None:
    return _loads_object(text, expected)


def _stage_fenced_block(text: str, expected: Sequence[str]) -> dict | None:
    match = _FENCE.search(text)
    if match is None:
        return None
    return _loads_object(match.group(1).strip(), expected)


def _stage_first_object(text: str, expected: Sequence[str]) -> dict | None:
    for candidate in _balanced_objects(text):
        return _loads_object(candidate, expected)
    return None


def _stage_scanned_object(text: str, expected: Sequence[str]) -> dict | None:
    for match in _FLAT_OBJECT.finditer(text):
        parsed = _loads_object(match.group(), expected)
        if parsed is not None:
            return parsed
    return None


_JSON_STAGES: tuple[tuple[str, Callable[[str, Sequence[str]], dict | None]], ...] = (
    ("json", _stage_json),
    ("fenced_block", _stage_fenced_block),
    ("first_object", _stage_first_object),
    ("scanned_object", _stage_scanned_object),
)


# ── normalization ──


def truncate_summary(summary: str, limit: int = SUMMARY_MAX_CHARS) -> str:
    summary = " ".join(summary.split())
    if len(summary) <= limit:
        return summary
    return summary[: limit - 3].rstrip() + "..."


def _as_text(item: Any) -> str:
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict):
        for key in ("suggestion", "text", "description", "message", "title"):
            value = item.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        return json.dumps(item)
    return str(item).strip()


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        value = [value]
    if not isinstance(value, list):
        return []
    return [text for text in (_as_text(v) for v in value) if text]


def _from_object(strategy: str, data: dict) -> ParsedResponse:
    summary = data.get("summary")
    return ParsedResponse(
        strategy=strategy,
        summary=truncate_summary(summary) if isinstance(summary, str) else "",
        insights=_as_list(data.get("insights")),
        suggestions=_as_list(data.get("suggestions")),
    )


# ── heuristic stage ──


def _paragraphs(text: str) -> list[str]:
    return [p.strip() for p in re.split(r"\n\s*\n", text) if p.strip()]


def _is_prose(paragraph: str) -> bool:
    first_line = paragraph.splitlines()[0]
    return not _LIST_ITEM.match(first_line) and not _HEADING_ONLY.match(first_line)


def _heuristic_summary(text: str) -> str:
    match = _SUMMARY_LABEL.search(text)
    if match:
        inline = match.group(1).strip(" *_")
        if inline:
            return inline
        rest = _paragraphs(text[match.end():])
        if rest:
            return rest[0]

    for paragraph in _paragraphs(text):
        if _is_prose(paragraph):
            return paragraph
    return text.strip()


def _heuristic_suggestions(text: str) -> list[str]:
    array = _SUGGESTION_ARRAY.search(text)
    if array:
        items = [(a or b).strip() for a, b in _QUOTED.findall(array.group(1))]
        items = [item for item in items if item]
        if items:
            return items

    items = [m.group(1).strip(" *_") for m in _LIST_ITEM.finditer(text)]
    items = [item for item in items if len(item) > 3]
    if items:
        return items

    sentences = [s.strip() for s in _SENTENCE.findall(text) if _ADVICE.search(s)]
    if sentences:
        return sentences[:MAX_HEURISTIC_SUGGESTIONS]

    paragraphs = [p for p in _paragraphs(text) if len(p) >= 40 and _is_prose(p)]
    if paragraphs:
        return paragraphs[:3]

    return [GENERIC_SUGGESTION]


def _stage_heuristic(text: str) -> ParsedResponse:
    summary = truncate_summary(_heuristic_summary(text))
    suggestions = _heuristic_suggestions(text)
    return ParsedResponse(
        strategy="heuristic",
        summary=summary,
        insights=[summary] if summary else [],
        suggestions=suggestions,
    )


def parse_ai_response(
    text: str | None,
    expected_keys: Sequence[str] = ANALYSIS_KEYS,
) -> ParsedResponse:
    """
    Run the extraction chain over one model response.

    Raises:
        ResponseParseError: if the response is empty.
    """
    if text is None or not text.strip():
        raise ResponseParseError("AI service returned an empty response")

    trimmed = text.strip()
    for name, stage in _JSON_STAGES:
        data = stage(trimmed, expected_keys)
        if data is not None:
            logger.debug("AI response parsed with strategy '%s'", name)
            return _from_object(name, data)

    logger.info("AI response had no usable JSON, falling back to text heuristics")
    return _stage_heuristic(trimmed)
