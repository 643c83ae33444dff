"""Structural queries over an outline document."""

from .model import Heading, OutlineDocument


def find_by_property(doc: OutlineDocument, key: str, value: str) -> Heading | None:
    """Find the first heading whose property ``key`` equals ``value``."""
    for heading in doc.walk():
        if heading.properties.get(key) == value:
            return heading
    return None


def find_child(children: list[Heading], title: str) -> Heading | None:
    """Find a direct child heading by exact title."""
    for heading in children:
        if heading.title == title:
            return heading
    return None


def find_path(doc: OutlineDocument, path: list[str]) -> Heading | None:
    """
    Resolve an ordered list of heading titles, starting at the top level.

    Returns None if any step along the path is missing.
    """
    children = doc.headings
    heading = None
    for title in path:
        heading = find_child(children, title)
        if heading is None:
            return None
        children = heading.children
    return heading


def ensure_path(doc: OutlineDocument, path: list[str]) -> Heading | None:
    """Resolve ``path``, creating any missing headings at the end of their level."""
    parent: Heading | None = None
    for title in path:
        children = parent.children if parent else doc.headings
        heading = find_child(children, title)
        if heading is None:
            heading = Heading(title=title, level=parent.level + 1 if parent else 1)
            if parent:
                parent.add_child(heading)
            else:
                doc.add_heading(heading)
        parent = heading
    return parent


def has_contents(heading: Heading) -> bool:
    """
    Whether the heading's own region holds anything besides whitespace.

    The region is the property drawer plus the body up to the first child
    heading; children are not part of it.
    """
    return not heading.properties.is_blank() or bool(heading.body.strip())


def outline_path(heading: Heading) -> list[str]:
    """Titles from the top level down to ``heading``."""
    titles = []
    node: Heading | None = heading
    while node is not None:
        titles.append(node.title)
        node = node.parent
    return titles[::-1]
