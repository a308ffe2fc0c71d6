"""
Missing Key Rule — Detects JSX returned from a list `.map()` without a `key` prop.

Uses the tree-sitter tree when available:
  1. find `<expr>.map(callback)` / `.flatMap(callback)` calls
  2. collect the JSX element(s) the callback returns
  3. report every returned element whose opening tag has no `key` attribute

Without a tree, falls back to scanning the callback text for the first JSX
opening tag after `=>`.
"""

from __future__ import annotations

import re

from tree_sitter import Node

from rta.core.context import RuleContext
from rta.core.parser import node_text, walk
from rta.core.text_scan import find_matching, opening_tag
from rta.models.finding_models import Finding


RULE_ID = "react-missing-key"

MESSAGE = "Missing key prop in list rendering"
SUGGESTION = "Add a unique, stable key prop (e.g. key={item.id}) to the element returned from map()"

_LIST_METHODS = {"map", "flatMap"}
_FUNCTION_TYPES = {"arrow_function", "function_expression", "function"}
_JSX_TYPES = {"jsx_element", "jsx_self_closing_element", "jsx_fragment"}

_MAP_CALL = re.compile(r"\.(?:map|flatMap)\s*\(")
_JSX_OPEN = re.compile(r"<>|<(?:[A-Z][\w.]*|[a-z][\w-]*)(?=[\s/>])")
_KEY_ATTRIBUTE = re.compile(r"(?<![\w-])key\s*=")


def check(ctx: RuleContext) -> list[Finding]:
    if not ctx.may_contain_jsx:
        return []
    if ctx.tree is not None:
        return _check_tree(ctx)
    return _check_text(ctx)


# ── tree strategy ──


def _check_tree(ctx: RuleContext) -> list[Finding]:
    findings: list[Finding] = []
    source = ctx.source

    for node in walk(ctx.tree.root_node):
        if node.type != "call_expression":
            continue
        callback = _list_callback(node, source)
        if callback is None:
            continue
        for element in _returned_jsx(callback):
            if not _has_key(element, source):
                findings.append(ctx.finding_at_node(RULE_ID, element, MESSAGE, SUGGESTION))

    return findings


def _list_callback(call: Node, source: bytes) -> Node | None:
    func = call.child_by_field_name("function")
    if func is None or func.type != "member_expression":
        return None
    prop = func.child_by_field_name("property")
    if prop is None or node_text(prop, source) not in _LIST_METHODS:
        return None
    args = call.child_by_field_name("arguments")
    if args is None or not args.named_children:
        return None
    callback = args.named_children[0]
    return callback if callback.type in _FUNCTION_TYPES else None


def _returned_jsx(callback: Node) -> list[Node]:
    body = callback.child_by_field_name("body")
    if body is None:
        return []
    if body.type != "statement_block":
        element = _unwrap(body)
        return [element] if element is not None else []

    elements: list[Node] = []
    for ret in _return_statements(body):
        if ret.named_children:
            element = _unwrap(ret.named_children[0])
            if element is not None:
                elements.append(element)
    return elements


def _return_statements(block: Node) -> list[Node]:
    """Return statements of this function body, not of nested functions."""
    found: list[Node] = []
    stack = list(block.named_children)
    while stack:
        node = stack.pop()
        if node.type == "return_statement":
            found.append(node)
        elif node.type not in _FUNCTION_TYPES and node.type not in (
            "function_declaration",
            "method_definition",
        ):
            stack.extend(node.named_children)
    return found


def _unwrap(node: Node) -> Node | None:
    while node.type == "parenthesized_expression" and node.named_children:
        node = node.named_children[0]
    return node if node.type in _JSX_TYPES else None


def _has_key(element: Node, source: bytes) -> bool:
    if element.type == "jsx_fragment":
        return False
    if element.type == "jsx_element":
        tag = element.child_by_field_name("open_tag") or element.named_children[0]
    else:
        tag = element

    for child in tag.named_children:
        if child.type == "jsx_attribute" and child.named_children:
            if node_text(child.named_children[0], source) == "key":
                return True
        elif child.type == "jsx_expression" and node_text(child, source).startswith("{..."):
            # Spread props may supply the key.
            return True
    return False


# ── text strategy ──


def _check_text(ctx: RuleContext) -> list[Finding]:
    findings: list[Finding] = []
    content = ctx.content

    for match in _MAP_CALL.finditer(content):
        open_paren = match.end() - 1
        close_paren = find_matching(content, open_paren)
        if close_paren is None:
            continue

        arrow = content.find("=>", open_paren, close_paren)
        if arrow == -1:
            continue

        tag_match = _JSX_OPEN.search(content, arrow, close_paren)
        if tag_match is None:
            continue

        tag = opening_tag(content, tag_match.start())
        if tag_match.group() != "<>" and (_KEY_ATTRIBUTE.search(tag) or "{..." in tag):
            continue

        findings.append(ctx.finding_at(RULE_ID, tag_match.start(), MESSAGE, SUGGESTION))

    return findings
