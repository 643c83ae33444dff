"""Import Day One entries into an outline document."""

from pathlib import Path

from ..core.datetree import locate_date, parse_entry_date
from ..core.model import Heading, OutlineDocument, Record
from ..core.outline import ensure_path, find_by_property, find_path
from ..errors import AnchorNotFoundError, ConfigurationError
from .models import CONFLICT_POLICIES, ConflictPolicy, ImportContext, ImportResult
from .properties import PropertyExtractor
from .records import read_records
from .text import photo_link, transform_text


def resolve_anchor(
    doc: OutlineDocument,
    root_path: list[str] | None,
    is_new: bool,
) -> Heading | None:
    """
    Resolve the heading the datetree is nested under.

    - No path: the tree lives at the top level (returns None)
    - New document: missing headings along the path are created
    - Existing document: the path must already exist
    """
    if not root_path:
        return None
    if is_new:
        return ensure_path(doc, root_path)
    heading = find_path(doc, root_path)
    if heading is None:
        raise AnchorNotFoundError(root_path)
    return heading


def import_entry(
    doc: OutlineDocument,
    record: Record,
    ctx: ImportContext,
    extractor: PropertyExtractor,
) -> Heading | None:
    """
    Import one record.

    Returns the heading the entry was written to, or None if it was skipped
    because its UUID is already in the document.
    """
    uuid = record["uuid"]

    # Check for conflicts; a document created for this run cannot have any
    if not ctx.is_new:
        existing = find_by_property(doc, extractor.uuid_property, uuid)
        if existing is not None:
            if ctx.on_conflict == "skip":
                ctx.skipped.append(uuid)
                return None
            elif ctx.on_conflict == "replace":
                doc.remove(existing)
                ctx.replaced.append(uuid)
            else:
                raise ConfigurationError(
                    f"Unknown conflict policy {ctx.on_conflict!r} "
                    f"(expected one of: {', '.join(CONFLICT_POLICIES)})"
                )

    heading = locate_date(doc, parse_entry_date(record.get("date", "")), uuid, root=ctx.root)

    body = ""
    if ctx.photo_dir is not None:
        photo = ctx.photo_dir.expanduser() / f"{uuid}.jpg"
        if photo.is_file():
            body += photo_link(photo) + "\n"
    body += transform_text(record.get("text", ""))
    if body and not body.endswith("\n"):
        body += "\n"
    heading.body = body

    for name, value in extractor.extract(record):
        heading.properties[name] = value

    ctx.imported += 1
    return heading


def import_records(
    doc: OutlineDocument,
    records: list[Record],
    ctx: ImportContext,
    extractor: PropertyExtractor | None = None,
) -> ImportContext:
    """Import records strictly in order; a fatal error stops the run where it is."""
    if extractor is None:
        extractor = PropertyExtractor()
    for record in records:
        import_entry(doc, record, ctx, extractor)
    return ctx


def import_csv(
    doc: OutlineDocument,
    csv_path: Path,
    is_new: bool = False,
    on_conflict: ConflictPolicy | str = "skip",
    root_path: list[str] | None = None,
    photo_dir: Path | None = None,
    extractor: PropertyExtractor | None = None,
) -> ImportResult:
    """
    Import a Day One CSV export into ``doc``.

    Args:
        doc: Target document, modified in place
        csv_path: CSV export to read
        is_new: Whether ``doc`` was created for this import
        on_conflict: What to do with UUIDs already in the document (skip, replace)
        root_path: Heading titles to nest the datetree under
        photo_dir: Directory holding ``<uuid>.jpg`` photos
        extractor: Property extractor (default columns and generators if None)

    Returns:
        ImportResult with counts for the completion report

    Raises:
        InputError: CSV unreadable or malformed (before any change to ``doc``)
        AnchorNotFoundError: ``root_path`` missing from an existing document
        ConfigurationError: unknown ``on_conflict`` policy, once a conflict occurs
    """
    records = read_records(csv_path)
    # Reject bad dates up front so malformed input never half-imports
    for record in records:
        parse_entry_date(record.get("date", ""))
    root = resolve_anchor(doc, root_path, is_new)

    ctx = ImportContext(
        is_new=is_new,
        on_conflict=on_conflict,
        root=root,
        photo_dir=photo_dir,
    )
    import_records(doc, records, ctx, extractor)

    return ImportResult(
        source=str(csv_path),
        imported=ctx.imported,
        skipped=ctx.skipped,
        replaced=ctx.replaced,
    )
