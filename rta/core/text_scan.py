"""
Text Scanning Helpers — Bracket matching and tag extraction without a grammar.

Used by matchers that work on raw text, and as the fallback path for
matchers that prefer a syntax tree. String literals and comments are skipped
so brackets inside them do not unbalance the scan.
"""

from __future__ import annotations

_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")", "]", "}"}
_QUOTES = {"'", '"', "`"}


def _skip_string(text: str, start: int) -> int:
    """Return the index just past the string literal starting at `start`."""
    quote = text[start]
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n" and quote != "`":
            return i
        i += 1
    return len(text)


def _skip_comment(text: str, start: int) -> int:
    """Return the index just past a // or /* */ comment starting at `start`."""
    if text.startswith("//", start):
        end = text.find("\n", start)
        return len(text) if end == -1 else end
    end = text.find("*/", start + 2)
    return len(text) if end == -1 else end + 2


def find_matching(text: str, open_index: int) -> int | None:
    """
    Index of the bracket closing the one at `open_index`.

    Returns None when the bracket is never closed.
    """
    stack = [_PAIRS[text[open_index]]]
    i = open_index + 1
    while i < len(text):
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i)
            continue
        if ch == "/" and text.startswith(("//", "/*"), i):
            i = _skip_comment(text, i)
            continue
        if ch in _PAIRS:
            stack.append(_PAIRS[ch])
        elif ch in _CLOSERS:
            if ch != stack[-1]:
                return None
            stack.pop()
            if not stack:
                return i
        i += 1
    return None


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split on `separator` only where no bracket or string is open."""
    parts: list[str] = []
    depth = 0
    current_start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i)
            continue
        if ch in _PAIRS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == separator and depth == 0:
            parts.append(text[current_start:i])
            current_start = i + 1
        i += 1
    parts.append(text[current_start:])
    return [p.strip() for p in parts if p.strip()]


def call_arguments(text: str, open_paren: int) -> list[str] | None:
    """Top-level arguments of the call whose `(` is at `open_paren`."""
    close = find_matching(text, open_paren)
    if close is None:
        return None
    return split_top_level(text[open_paren + 1:close])


def opening_tag(text: str, lt_index: int) -> str:
    """
    Source of the JSX opening tag starting at `lt_index`, up to its `>`.

    Attribute expressions in braces may contain `>` and are skipped.
    """
    depth = 0
    i = lt_index + 1
    while i < len(text):
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        elif ch == ">" and depth == 0:
            return text[lt_index:i + 1]
        i += 1
    return text[lt_index:]


def is_comment_line(line: str) -> bool:
    stripped = line.lstrip()
    return stripped.startswith(("//", "/*", "*"))


def line_containing(text: str, offset: int) -> str:
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    return text[start:] if end == -1 else text[start:end]
