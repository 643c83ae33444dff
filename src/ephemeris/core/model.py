from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator

from .properties import PropertyDrawer

Record = dict[str, str]


@dataclass(eq=False)
class Heading:
    title: str
    level: int = 1  # number of leading stars
    properties: PropertyDrawer = field(default_factory=PropertyDrawer)
    body: str = ""  # text after the property drawer, up to the first child
    children: list[Heading] = field(default_factory=list)
    parent: Heading | None = field(default=None, repr=False)

    def add_child(self, child: Heading, index: int | None = None) -> Heading:
        child.parent = self
        if index is None:
            self.children.append(child)
        else:
            self.children.insert(index, child)
        return child

    def walk(self) -> Iterator[Heading]:
        """Yield this heading and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(eq=False)
class OutlineDocument:
    preamble: str = ""  # text before the first heading
    headings: list[Heading] = field(default_factory=list)

    def add_heading(self, heading: Heading, index: int | None = None) -> Heading:
        heading.parent = None
        if index is None:
            self.headings.append(heading)
        else:
            self.headings.insert(index, heading)
        return heading

    def siblings_of(self, heading: Heading) -> list[Heading]:
        """Return the list that owns ``heading`` (parent's children or top level)."""
        return heading.parent.children if heading.parent else self.headings

    def remove(self, heading: Heading) -> None:
        """Remove ``heading`` together with its whole subtree."""
        self.siblings_of(heading).remove(heading)
        heading.parent = None

    def walk(self) -> Iterator[Heading]:
        for heading in self.headings:
            yield from heading.walk()
