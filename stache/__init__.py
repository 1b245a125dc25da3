"""
Mustache templates compiled to immutable trees.

Supported:
- Variables: {{name}} (HTML-escaped), {{{name}}} and {{&name}} (unescaped)
- Dotted names: {{person.full_name}}, list indices: {{items.0}}
- Implicit iterator: {{.}}
- Sections: {{#items}} ... {{/items}} (lists/dicts/objects/truthy)
- Inverted sections: {{^items}} ... {{/items}}
- Comments: {{! comment }}
- Delimiter changes: {{=<% %>=}}
- Partials: {{> partial}} (spliced in at compile time)
- Standalone-line trimming for section, comment, partial and delimiter tags
"""
from __future__ import annotations

from .compiler import Compiler
from .context import ContextStack
from .engine import Renderer, Template, compile, render
from .errors import (
    CompileError,
    CompileFailed,
    MalformedDelimiterTag,
    MismatchedSectionClose,
    PartialCycle,
    PartialNotFound,
    UnclosedSection,
    UnclosedTag,
)
from .partials import DirectoryLoader, as_loader, chain_loaders
from .renderer import html_escape
from .values import wrap

__all__ = [
    "Compiler",
    "CompileError",
    "CompileFailed",
    "ContextStack",
    "DirectoryLoader",
    "MalformedDelimiterTag",
    "MismatchedSectionClose",
    "PartialCycle",
    "PartialNotFound",
    "Renderer",
    "Template",
    "UnclosedSection",
    "UnclosedTag",
    "as_loader",
    "chain_loaders",
    "compile",
    "html_escape",
    "render",
    "wrap",
]
