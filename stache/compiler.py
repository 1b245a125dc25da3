"""
Template compiler.

Compilation runs in two passes over the source:

1. The scanner walks the text left to right, switching between literal text
   and tag bodies, and applies ``{{=a b=}}`` delimiter changes as it meets
   them. Its output is a flat token list (strings for text, ``_Tag`` for tags)
   from which standalone lines have already been trimmed.
2. The tree builder matches section open/close tags with a stack and splices
   compiled partials in place of ``{{> name}}`` tags.

Errors are collected into a list; compilation always runs to the end of the
input so a caller sees every problem at once.
"""
from __future__ import annotations

import logging
import re
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .delimiters import Delimiters
from .errors import (
    CompileError,
    MalformedDelimiterTag,
    MismatchedSectionClose,
    PartialCycle,
    PartialNotFound,
    UnclosedSection,
    UnclosedTag,
)
from .nodes import InvertedSection, Node, Partial, Section, Text, Variable
from .partials import PartialSource, as_loader

logger = logging.getLogger(__name__)

COMMANDS = frozenset("#^/<>=!&")
# Tags that may stand alone on a line and take the line with them
STANDALONE_COMMANDS = frozenset("#^/>=!")

TRIPLE_OPEN = "{{{"
TRIPLE_CLOSE = "}}}"
# A command of "{" marks a triple mustache tag
TRIPLE = "{"

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")
_BLANK_RE = re.compile(r"[ \t]*(?:\r?\n)?")


@dataclass
class _Tag:
    command: str
    key: str
    line: int
    # leading whitespace of a trimmed standalone partial tag
    indent: str = ""


Token = Union[str, _Tag]


def _is_blank(text: str) -> bool:
    return _BLANK_RE.fullmatch(text) is not None


def _indent_lines(text: str, indent: str) -> str:
    return "".join(indent + line for line in _LINE_RE.findall(text))

# -----------------------------
# Scanning
# -----------------------------
class _Scanner:
    """Tokenizes one compile unit, trimming standalone lines on the way."""

    def __init__(self, text: str, errors: List[CompileError], partial: Optional[str] = None):
        self.text = text
        self.errors = errors
        self.partial = partial
        self.delimiters = Delimiters()
        self.tokens: List[Token] = []
        self._line: List[Token] = []
        self._newlines = [m.start() for m in re.finditer("\n", text)]

    def line_of(self, pos: int) -> int:
        return bisect_left(self._newlines, pos) + 1

    def scan(self) -> List[Token]:
        text = self.text
        pos = 0
        while pos < len(text):
            start, triple = self._next_tag(pos)
            if start == -1:
                self._add_text(text[pos:])
                break
            self._add_text(text[pos:start])
            end = self._read_tag(start, triple)
            if end == -1:
                opener = TRIPLE_OPEN if triple else self.delimiters.open
                self.errors.append(UnclosedTag(opener, self.line_of(start), self.partial))
                self._add_text(text[start:])
                break
            pos = end
        self._end_line()
        return self.tokens

    def _next_tag(self, pos: int) -> Tuple[int, bool]:
        start = self.text.find(self.delimiters.open, pos)
        # {{{ is recognized whatever the current delimiters are
        triple = self.text.find(TRIPLE_OPEN, pos)
        if triple != -1 and (start == -1 or triple <= start):
            return triple, True
        return start, False

    def _read_tag(self, start: int, triple: bool) -> int:
        """Consume the tag starting at ``start``; return the offset after it, or -1."""
        text = self.text
        line = self.line_of(start)
        if triple:
            body = start + len(TRIPLE_OPEN)
            end = text.find(TRIPLE_CLOSE, body)
            if end == -1:
                return -1
            self._add_tag(_Tag(TRIPLE, text[body:end].strip(), line))
            return end + len(TRIPLE_CLOSE)

        body = start + len(self.delimiters.open)
        close = self.delimiters.close
        end = text.find(close, body)
        if end == -1:
            return -1

        content = text[body:end].strip()
        command = content[:1] if content[:1] in COMMANDS else ""
        key = content[1:].strip() if command else content
        tag = _Tag(command, key, line)
        if command == "=":
            self._change_delimiters(tag)
        elif command == "<":
            logger.debug(f"Ignoring unsupported tag <{key} on line {line}")
        self._add_tag(tag)
        return end + len(close)

    def _change_delimiters(self, tag: _Tag) -> None:
        pair = Delimiters.parse(tag.key)
        if pair is None:
            self.errors.append(MalformedDelimiterTag(tag.key, tag.line, self.partial))
            return
        self.delimiters.change(*pair)
        logger.debug(f"Delimiters changed to {pair[0]!r} {pair[1]!r} on line {tag.line}")

    # -----------------------------
    # Standalone lines
    # -----------------------------
    def _add_text(self, text: str) -> None:
        for piece in _LINE_RE.findall(text):
            self._line.append(piece)
            if piece.endswith("\n"):
                self._end_line()

    def _add_tag(self, tag: _Tag) -> None:
        self._line.append(tag)

    def _end_line(self) -> None:
        line = self._line
        if not line:
            return
        self._line = []
        tags = [t for t in line if isinstance(t, _Tag)]
        texts = [t for t in line if isinstance(t, str)]
        if len(tags) != 1 or tags[0].command not in STANDALONE_COMMANDS:
            self.tokens.extend(line)
            return
        if not all(_is_blank(t) for t in texts):
            self.tokens.extend(line)
            return
        tag = tags[0]
        if tag.command == ">":
            tag.indent = "".join(t for t in line[:line.index(tag)] if isinstance(t, str))
        self.tokens.append(tag)

# -----------------------------
# Tree building
# -----------------------------
@dataclass
class _Frame:
    tag: Optional[_Tag]
    children: List[Node] = field(default_factory=list)

    def add(self, node: Node) -> None:
        if isinstance(node, Text) and self.children and isinstance(self.children[-1], Text):
            self.children[-1] = Text(self.children[-1].text + node.text)
        else:
            self.children.append(node)


class Compiler:
    """
    Compiles template text into a tuple of nodes.

    ``partials`` is None, a mapping of partial names to template text, or a
    callable returning the text for a name (None when missing).
    """

    def __init__(self, partials: PartialSource = None):
        self.load_partial = as_loader(partials)

    def compile(self, text: str) -> Tuple[Tuple[Node, ...], List[CompileError]]:
        errors: List[CompileError] = []
        nodes = self._compile(text, errors, ())
        logger.debug(f"Compiled template into {len(nodes)} top-level nodes with {len(errors)} error(s)")
        return nodes, errors

    def _compile(self, text: str, errors: List[CompileError], chain: Tuple[str, ...]) -> Tuple[Node, ...]:
        partial = chain[-1] if chain else None
        tokens = _Scanner(text, errors, partial).scan()
        return self._build(tokens, errors, chain)

    def _build(self, tokens: List[Token], errors: List[CompileError], chain: Tuple[str, ...]) -> Tuple[Node, ...]:
        partial = chain[-1] if chain else None
        root = _Frame(None)
        stack: List[_Frame] = [root]

        for tok in tokens:
            if isinstance(tok, str):
                stack[-1].add(Text(tok))
                continue
            cmd = tok.command
            if cmd in ("#", "^"):
                stack.append(_Frame(tok))
            elif cmd == "/":
                if len(stack) == 1:
                    errors.append(MismatchedSectionClose(None, tok.key, tok.line, partial))
                    continue
                frame = stack.pop()
                if frame.tag.key != tok.key:
                    # the branch is dropped
                    errors.append(MismatchedSectionClose(frame.tag.key, tok.key, tok.line, partial))
                    continue
                node_cls = Section if frame.tag.command == "#" else InvertedSection
                stack[-1].add(node_cls(frame.tag.key, tuple(frame.children)))
            elif cmd == ">":
                node = self._include(tok, errors, chain)
                if node is not None:
                    stack[-1].add(node)
            elif cmd in ("=", "!", "<"):
                continue
            elif cmd in ("&", TRIPLE):
                stack[-1].add(Variable(tok.key, escape=False))
            else:
                stack[-1].add(Variable(tok.key))

        for frame in reversed(stack[1:]):
            errors.append(UnclosedSection(frame.tag.key, frame.tag.line, partial))
        return tuple(root.children)

    def _include(self, tag: _Tag, errors: List[CompileError], chain: Tuple[str, ...]) -> Optional[Partial]:
        name = tag.key
        partial = chain[-1] if chain else None
        if name in chain:
            errors.append(PartialCycle(name, chain + (name,), tag.line, partial))
            return None
        source = self.load_partial(name)
        if source is None:
            errors.append(PartialNotFound(name, tag.line, partial))
            return None
        if tag.indent:
            source = _indent_lines(source, tag.indent)
        logger.debug(f"Including partial {name!r}")
        return Partial(name, self._compile(source, errors, chain + (name,)))
