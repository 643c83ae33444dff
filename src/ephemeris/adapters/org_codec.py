import re

from ..core.model import Heading, OutlineDocument
from ..core.ports import DocumentCodec
from ..core.properties import PropertyDrawer

HEADING_RE = re.compile(r"^(\*+)(?:[ \t]+(.*?))?[ \t]*$")
DRAWER_START_RE = re.compile(r"^[ \t]*:PROPERTIES:[ \t]*$", re.IGNORECASE)
DRAWER_END_RE = re.compile(r"^[ \t]*:END:[ \t]*$", re.IGNORECASE)
PROPERTY_RE = re.compile(r"^[ \t]*:([^:\s]+):(?:[ \t]+(.*?))?[ \t]*$")
LINE_BREAK_RE = re.compile(r"[ \t]*[\r\n]+[ \t]*")


def _read_drawer(lines: list[str], i: int) -> tuple[PropertyDrawer, int] | None:
    """Read a property drawer starting at ``lines[i]``.

    Returns the drawer and the index of the first line after ``:END:``, or
    None when ``lines[i]`` does not open a well-formed drawer.
    """
    if i >= len(lines) or not DRAWER_START_RE.match(lines[i].rstrip("\r\n")):
        return None
    drawer = PropertyDrawer()
    j = i + 1
    while j < len(lines):
        line = lines[j].rstrip("\r\n")
        if DRAWER_END_RE.match(line):
            return drawer, j + 1
        m = PROPERTY_RE.match(line)
        if not m:
            # Not a property line; treat the whole thing as plain body text
            return None
        drawer[m.group(1)] = m.group(2) or ""
        j += 1
    return None


class OrgCodec(DocumentCodec):
    def parse(self, text: str) -> OutlineDocument:
        doc = OutlineDocument()
        lines = text.splitlines(keepends=True)

        # Stack of open headings; a new heading closes every heading at its level or deeper
        stack: list[Heading] = []
        current: Heading | None = None
        body_lines: list[str] = []
        preamble: list[str] = []

        def close_body() -> None:
            if current is not None:
                current.body = "".join(body_lines)
            else:
                doc.preamble = "".join(preamble)

        i = 0
        while i < len(lines):
            ln = lines[i]
            m = HEADING_RE.match(ln.rstrip("\r\n"))
            if not m:
                (body_lines if current is not None else preamble).append(ln)
                i += 1
                continue

            close_body()
            body_lines = []
            heading = Heading(title=m.group(2) or "", level=len(m.group(1)))

            while stack and stack[-1].level >= heading.level:
                stack.pop()
            if stack:
                stack[-1].add_child(heading)
            else:
                doc.add_heading(heading)
            stack.append(heading)
            current = heading
            i += 1

            drawer = _read_drawer(lines, i)
            if drawer is not None:
                heading.properties, i = drawer

        close_body()
        return doc

    def render(self, doc: OutlineDocument) -> str:
        out: list[str] = [doc.preamble]
        if doc.preamble and doc.headings and not doc.preamble.endswith("\n"):
            out.append("\n")
        for heading in doc.walk():
            stars = "*" * heading.level
            out.append(f"{stars} {heading.title}\n" if heading.title else f"{stars}\n")
            if heading.properties:
                out.append(":PROPERTIES:\n")
                for key, value in heading.properties.items():
                    # A drawer line holds one property; fold line breaks into spaces
                    value = LINE_BREAK_RE.sub(" ", value).strip()
                    out.append(f":{key}: {value}\n" if value else f":{key}:\n")
                out.append(":END:\n")
            if heading.body:
                out.append(heading.body)
                if not heading.body.endswith("\n"):
                    out.append("\n")
        return "".join(out)
