"""
Public entry points: compile once, render many times.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

from .compiler import Compiler
from .errors import CompileError, CompileFailed
from .nodes import Node
from .partials import DirectoryLoader, PartialLoader, PartialSource, as_loader, chain_loaders
from .renderer import render_nodes


@dataclass(frozen=True)
class Template:
    """A compiled template. Immutable, so safe to render from several threads."""

    nodes: Tuple[Node, ...]

    def render(self, *contexts: Any) -> str:
        return render_nodes(self.nodes, contexts)


def compile(text: str, partials: PartialSource = None) -> Tuple[Template, List[CompileError]]:
    """Compile ``text``; returns the template and every error found on the way."""
    nodes, errors = Compiler(partials).compile(text)
    return Template(nodes), errors


def render(text: str, *contexts: Any, partials: PartialSource = None) -> Tuple[str, List[CompileError]]:
    """Compile and render in one step."""
    template, errors = compile(text, partials)
    return template.render(*contexts), errors


class Renderer:
    """
    Renders template text, loading partials from ``template_dir`` and/or a
    ``partials`` mapping (the mapping wins). Raises CompileFailed instead of
    returning errors.
    """

    def __init__(self, template_dir: Optional[Union[str, Path]] = None,
                 partials: Optional[Mapping[str, str]] = None):
        self.template_dir = Path(template_dir) if template_dir is not None else None
        loaders: List[PartialLoader] = []
        if partials is not None:
            loaders.append(as_loader(partials))
        if self.template_dir is not None:
            loaders.append(DirectoryLoader(self.template_dir))
        self._compiler = Compiler(chain_loaders(*loaders))

    def compile(self, template: str) -> Template:
        nodes, errors = self._compiler.compile(template)
        if errors:
            raise CompileFailed(errors)
        return Template(nodes)

    def render(self, template: str, *contexts: Any) -> str:
        return self.compile(template).render(*contexts)
