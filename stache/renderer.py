"""
Tree renderer.

Walks a compiled node tree depth first, resolving keys against a context stack
that is local to the render call.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from .context import ContextStack
from .nodes import InvertedSection, Node, Partial, Section, Text, Variable
from .values import ListValue, MapValue, RecordValue

# -----------------------------
# Escaping
# -----------------------------
def html_escape(s: str) -> str:
    # Apostrophes are left alone to keep common HTML source readable.
    return (
        s.replace("&", "&amp;")
         .replace("<", "&lt;")
         .replace(">", "&gt;")
         .replace('"', "&quot;")
    )

# -----------------------------
# Rendering
# -----------------------------
def render_nodes(nodes: Sequence[Node], contexts: Iterable[Any] = ()) -> str:
    """Render ``nodes`` with every root context pushed, the last one innermost."""
    out: List[str] = []
    _render(nodes, ContextStack(contexts), out)
    return "".join(out)


def _render(nodes: Sequence[Node], stack: ContextStack, out: List[str]) -> None:
    for node in nodes:
        if isinstance(node, Text):
            out.append(node.text)
        elif isinstance(node, Variable):
            val = stack.resolve(node.key)
            if val is not None:
                s = val.to_text()
                out.append(html_escape(s) if node.escape else s)
        elif isinstance(node, Section):
            _render_section(node, stack, out)
        elif isinstance(node, InvertedSection):
            val = stack.resolve(node.key)
            if val is None or val.is_falsey():
                _render(node.children, stack, out)
        elif isinstance(node, Partial):
            _render(node.children, stack, out)


def _render_section(node: Section, stack: ContextStack, out: List[str]) -> None:
    val = stack.resolve(node.key)
    if val is None or val.is_falsey():
        return
    if isinstance(val, ListValue):
        for item in val.items():
            with stack.pushed(item):
                _render(node.children, stack, out)
    elif isinstance(val, (MapValue, RecordValue)):
        with stack.pushed(val):
            _render(node.children, stack, out)
    else:
        # truthy scalar: render once in the enclosing context
        _render(node.children, stack, out)
