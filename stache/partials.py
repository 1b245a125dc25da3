"""
Partial loaders.

A loader is any callable taking a partial name and returning the partial's
template text, or None when there is no such partial.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

logger = logging.getLogger(__name__)

PartialLoader = Callable[[str], Optional[str]]
PartialSource = Union[None, Mapping, PartialLoader]

DEFAULT_SUFFIXES = (".mustache", ".mustache.html", "")


def _no_partials(name: str) -> Optional[str]:
    return None


def as_loader(partials: PartialSource) -> PartialLoader:
    """Accept None, a name -> text mapping, or a loader callable."""
    if partials is None:
        return _no_partials
    if isinstance(partials, Mapping):
        return partials.get
    if callable(partials):
        return partials
    raise TypeError(f"Unsupported partial source: {type(partials).__name__}")


class DirectoryLoader:
    """Loads ``<directory>/<name><suffix>`` for the first suffix that exists."""

    def __init__(self, directory: Union[str, Path], suffixes: Sequence[str] = DEFAULT_SUFFIXES,
                 encoding: str = "utf-8"):
        self.directory = Path(directory)
        self.suffixes = tuple(suffixes)
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"DirectoryLoader({str(self.directory)!r}, suffixes={self.suffixes!r})"

    def __call__(self, name: str) -> Optional[str]:
        root = self.directory.resolve()
        for suffix in self.suffixes:
            try:
                path = (self.directory / (name + suffix)).resolve()
                found = path.is_file()
            except (OSError, ValueError):
                # e.g. an embedded NUL in the name
                logger.debug(f"Partial name {name!r} is not a valid path")
                return None
            if root != path and root not in path.parents:
                logger.debug(f"Partial {name!r} points outside {root}")
                return None
            if found:
                logger.debug(f"Loaded partial {name!r} from {path}")
                return path.read_text(encoding=self.encoding)
        logger.debug(f"Partial {name!r} not found in {root}")
        return None


def chain_loaders(*loaders: PartialLoader) -> PartialLoader:
    """Try each loader in turn; the first hit wins."""
    def load(name: str) -> Optional[str]:
        for loader in loaders:
            text = loader(name)
            if text is not None:
                return text
        return None
    return load
