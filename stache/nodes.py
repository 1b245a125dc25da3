"""
Compiled template tree.

Nodes are frozen and children are tuples, so a tree returned by the compiler
can be shared between threads and rendered concurrently.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Variable:
    key: str
    escape: bool = True


@dataclass(frozen=True)
class Section:
    key: str
    children: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class InvertedSection:
    key: str
    children: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class Partial:
    name: str
    children: Tuple["Node", ...] = ()


Node = Union[Text, Variable, Section, InvertedSection, Partial]
