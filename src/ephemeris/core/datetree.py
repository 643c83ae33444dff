"""Year/month/day heading tree ("datetree") placement."""

import re
from datetime import date

from ..errors import InputError
from .model import Heading, OutlineDocument
from .outline import has_contents

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
WEEKDAY_NAMES = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
]

ISO_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")
# "2024", "2024-03", "2024-03-05" at the start of a title, followed by space or end
DATE_KEY_RE = re.compile(r"^(\d{4})(?:-(\d{2})(?:-(\d{2}))?)?(?=\s|$)")
_TAGS = r"(?:[ \t]+:\S+:)?[ \t]*$"
# Date headings proper, by key length: a bare year, a named month, a named day
DATE_TITLE_RES = {
    1: re.compile(r"^\d{4}" + _TAGS),
    2: re.compile(r"^\d{4}-\d{2} [^\s()]+" + _TAGS),
    3: re.compile(r"^\d{4}-\d{2}-\d{2} [^\s()]+" + _TAGS),
}
# "<day title> (<uuid>)"
COLLISION_RE = re.compile(r"^\d{4}-\d{2}-\d{2} [^\s()]+ \(.+\)$")

DateKey = tuple[int, ...]


def parse_entry_date(value: str) -> date:
    """
    Extract the calendar date from an ISO-8601 timestamp.

    Only the nominal year/month/day are used; any time or UTC offset is
    ignored, so "2024-03-05T23:30:00-08:00" buckets under 2024-03-05.
    """
    m = ISO_DATE_RE.match(value or "")
    if not m:
        raise InputError(f"Invalid entry date: {value!r}")
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError as e:
        raise InputError(f"Invalid entry date: {value!r} ({e})") from e


def date_key(title: str) -> DateKey | None:
    """Return (year,), (year, month) or (year, month, day) for a date heading title."""
    m = DATE_KEY_RE.match(title)
    if not m:
        return None
    return tuple(int(g) for g in m.groups() if g is not None)


def is_date_heading(title: str, key: DateKey) -> bool:
    """True when ``title`` is the year, month or day heading for ``key``."""
    return date_key(title) == key and bool(DATE_TITLE_RES[len(key)].match(title))


def _ordering_key(title: str, depth: int) -> DateKey | None:
    key = date_key(title)
    if key is None or len(key) != depth:
        return None
    if DATE_TITLE_RES[depth].match(title) or (depth == 3 and COLLISION_RE.match(title)):
        return key
    return None


def year_title(d: date) -> str:
    return f"{d.year:04d}"


def month_title(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d} {MONTH_NAMES[d.month - 1]}"


def day_title(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d} {WEEKDAY_NAMES[d.weekday()]}"


def find_or_create(
    doc: OutlineDocument,
    parent: Heading | None,
    key: DateKey,
    title: str,
) -> tuple[Heading, bool]:
    """
    Find the date heading for ``key`` under ``parent`` or insert it in order.

    Returns the heading and whether it was created.
    """
    children = parent.children if parent else doc.headings

    for child in children:
        if is_date_heading(child.title, key):
            return child, False

    # Insert before the first later date at this level; other headings don't count
    insert_at = len(children)
    for i, child in enumerate(children):
        child_key = _ordering_key(child.title, len(key))
        if child_key is not None and child_key > key:
            insert_at = i
            break

    heading = Heading(title=title, level=parent.level + 1 if parent else 1)
    if parent:
        parent.add_child(heading, insert_at)
    else:
        doc.add_heading(heading, insert_at)
    return heading, True


def add_collision_sibling(doc: OutlineDocument, day: Heading, uuid: str) -> Heading:
    """
    Insert a sibling "<day title> (<uuid>)" after ``day``.

    Earlier collision siblings of the same day are skipped over so same-day
    entries stay together in the order they were imported.
    """
    siblings = doc.siblings_of(day)
    idx = siblings.index(day) + 1
    prefix = f"{day.title} ("
    while idx < len(siblings) and siblings[idx].title.startswith(prefix):
        idx += 1

    sibling = Heading(title=f"{day.title} ({uuid})", level=day.level)
    if day.parent:
        day.parent.add_child(sibling, idx)
    else:
        doc.add_heading(sibling, idx)
    return sibling


def locate_date(
    doc: OutlineDocument,
    d: date,
    uuid: str,
    root: Heading | None = None,
) -> Heading:
    """
    Find or create year -> month -> day headings for ``d``.

    Returns the heading that should receive the entry: the day heading
    itself, or a new same-day sibling when the day is already occupied.
    """
    year, _ = find_or_create(doc, root, (d.year,), year_title(d))
    month, _ = find_or_create(doc, year, (d.year, d.month), month_title(d))
    day, created = find_or_create(doc, month, (d.year, d.month, d.day), day_title(d))

    # A day heading created just now is always empty
    if created:
        return day
    if has_contents(day):
        return add_collision_sibling(doc, day, uuid)
    return day
