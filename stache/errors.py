"""
Compile errors.

Every error is a ``ValueError`` subclass carrying structured fields, so callers
can branch on the kind without matching message text. The compiler collects
them instead of raising; ``CompileFailed`` bundles a list for callers that want
to stop on the first bad template.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple


class CompileError(ValueError):
    """Base class for problems found while compiling a template."""

    def __init__(self, message: str, line: Optional[int] = None, partial: Optional[str] = None):
        self.line = line
        self.partial = partial
        where = []
        if partial is not None:
            where.append(f"partial {partial!r}")
        if line is not None:
            where.append(f"line {line}")
        if where:
            message = f"{message} ({', '.join(where)})"
        super().__init__(message)


class MismatchedSectionClose(CompileError):
    def __init__(self, expected: Optional[str], found: str, line: Optional[int] = None,
                 partial: Optional[str] = None):
        self.expected = expected
        self.found = found
        if expected is None:
            message = f"Section {found!r} was closed but not opened"
        else:
            message = f"Section {found!r} was closed while {expected!r} is still open"
        super().__init__(message, line, partial)


class UnclosedSection(CompileError):
    def __init__(self, key: str, line: Optional[int] = None, partial: Optional[str] = None):
        self.key = key
        super().__init__(f"Section {key!r} was not closed", line, partial)


class UnclosedTag(CompileError):
    def __init__(self, delimiter: str, line: Optional[int] = None, partial: Optional[str] = None):
        self.delimiter = delimiter
        super().__init__(f"Tag opened with {delimiter!r} was not closed", line, partial)


class PartialNotFound(CompileError):
    def __init__(self, name: str, line: Optional[int] = None, partial: Optional[str] = None):
        self.name = name
        super().__init__(f"Partial {name!r} not found", line, partial)


class PartialCycle(CompileError):
    def __init__(self, name: str, chain: Sequence[str], line: Optional[int] = None,
                 partial: Optional[str] = None):
        self.name = name
        self.chain: Tuple[str, ...] = tuple(chain)
        super().__init__(f"Partial {name!r} includes itself: {' > '.join(self.chain)}", line, partial)


class MalformedDelimiterTag(CompileError):
    def __init__(self, content: str, line: Optional[int] = None, partial: Optional[str] = None):
        self.content = content
        super().__init__(f"Delimiter tag {content!r} must hold exactly two delimiters", line, partial)


class CompileFailed(ValueError):
    """Raised by the fail-fast front ends when compilation reported errors."""

    def __init__(self, errors: List[CompileError]):
        self.errors = list(errors)
        lines = "; ".join(str(e) for e in self.errors)
        super().__init__(f"Template has {len(self.errors)} error(s): {lines}")
