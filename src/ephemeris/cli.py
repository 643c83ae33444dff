"""CLI for ephemeris - import Day One journals into an Org datetree."""

import argparse
import json
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .core.model import OutlineDocument
from .core.outline import find_by_property, outline_path
from .dayone.importer import import_csv
from .dayone.models import CONFLICT_POLICIES, ImportResult
from .runtime import build_runtime


def _resolve_options(args: argparse.Namespace, rt: Any) -> dict[str, Any]:
    """Merge CLI flags over config file defaults."""
    cfg = rt.config.import_

    csv_path = Path(args.csv).expanduser() if args.csv else cfg.csv
    if csv_path is None:
        if not sys.stdin.isatty():
            raise ValueError("No CSV file given (pass CSV or set import.csv in ephemeris.toml)")
        answer = input("Day One CSV file: ").strip()
        if not answer:
            raise ValueError("No CSV file given")
        csv_path = Path(answer).expanduser()

    return {
        "csv": csv_path,
        "document": Path(args.document).expanduser() if args.document else cfg.document,
        "photos": Path(args.photos).expanduser() if args.photos else cfg.photos,
        "on_conflict": args.on_conflict or cfg.on_conflict,
        "root": args.root if args.root else list(cfg.root),
    }


def _run_import(rt: Any, opts: dict[str, Any], dry_run: bool = False) -> tuple[ImportResult, OutlineDocument]:
    """Load (or create) the document, import into it and persist it."""
    store = rt.open_store(opts["document"]) if opts["document"] else None
    if store is not None:
        doc, is_new = store.load()
    else:
        doc, is_new = OutlineDocument(), True

    result = import_csv(
        doc,
        opts["csv"],
        is_new=is_new,
        on_conflict=opts["on_conflict"],
        root_path=opts["root"],
        photo_dir=opts["photos"],
        extractor=rt.extractor,
    )

    if store is not None:
        result.document = str(opts["document"])
        if not dry_run:
            store.save(doc)
    return result, doc


def _print_result(args: argparse.Namespace, result: ImportResult, out: Any = None) -> None:
    out = out or sys.stdout
    if args.json:
        print(json.dumps({
            "source": result.source,
            "document": result.document,
            "imported": result.imported,
            "skipped": result.skipped,
            "replaced": result.replaced,
        }), file=out)
        return
    if args.quiet:
        return
    for uuid in result.skipped:
        print(f"Skipped {uuid}: already imported", file=out)
    for uuid in result.replaced:
        print(f"Replaced {uuid}", file=out)
    print(f"Imported {result.imported} entries from {result.source}", file=out)


def cmd_import(args: argparse.Namespace, rt: Any) -> int:
    """Import a CSV export into a document (or stdout)."""
    from .dayone.report import save_report

    opts = _resolve_options(args, rt)
    result, doc = _run_import(rt, opts, dry_run=args.dry_run)

    if opts["document"] is None:
        # New buffer: the document goes to stdout, the report to stderr
        if not args.dry_run:
            sys.stdout.write(rt.codec.render(doc))
        _print_result(args, result, out=sys.stderr)
    else:
        if args.dry_run and not args.quiet:
            print(f"[DRY RUN] Would write: {opts['document']}")
        _print_result(args, result)

    if args.report:
        save_report(result, Path(args.report))
        if not args.quiet and not args.json:
            print(f"Saved report to: {args.report}", file=sys.stderr)

    return 0


def cmd_watch(args: argparse.Namespace, rt: Any) -> int:
    """Re-import a CSV export whenever it changes."""
    from .watch import watch_csv

    opts = _resolve_options(args, rt)
    if opts["document"] is None:
        print("Error: --document is required for watch", file=sys.stderr)
        return 1

    def run_import() -> ImportResult:
        result, _ = _run_import(rt, opts)
        return result

    return watch_csv(
        opts["csv"],
        run_import,
        debounce_ms=args.debounce,
        quiet=args.quiet,
        json_output=args.json,
    )


def cmd_find(args: argparse.Namespace, rt: Any) -> int:
    """Print the outline path of an imported entry."""
    document = Path(args.document).expanduser() if args.document else rt.config.import_.document
    if document is None:
        print("Error: --document is required", file=sys.stderr)
        return 1

    store = rt.open_store(document)
    if not store.storage.exists():
        print(f"Document not found: {document}", file=sys.stderr)
        return 1
    doc, _ = store.load()

    heading = find_by_property(doc, rt.extractor.uuid_property, args.uuid)
    if heading is None:
        if args.json:
            print(json.dumps({"uuid": args.uuid, "path": None}))
        else:
            print(f"Entry {args.uuid} not found", file=sys.stderr)
        return 1

    path = outline_path(heading)
    if args.json:
        print(json.dumps({"uuid": args.uuid, "path": path}))
    else:
        print(" / ".join(path))
    return 0


def _add_import_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("csv", nargs="?", default=None, help="Day One CSV export")
    p.add_argument(
        "--document", "-o", default=None,
        help="Org document to import into (created if missing; default: new buffer on stdout)",
    )
    p.add_argument(
        "--photos", default=None,
        help="Directory holding <uuid>.jpg photos",
    )
    p.add_argument(
        "--on-conflict", choices=list(CONFLICT_POLICIES), default=None,
        help="What to do with entries already in the document (default: skip)",
    )
    p.add_argument(
        "--root", action="append", default=None, metavar="HEADING",
        help="Heading to nest the datetree under; repeat for a deeper path",
    )


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="eph", description="Import Day One journals into an Org datetree"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ephemeris {__version__} (python {platform.python_version()}, platform {sys.platform})",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: cwd/ephemeris.toml)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # import command
    parser_import = subparsers.add_parser("import", help="Import a Day One CSV export")
    _add_import_options(parser_import)
    parser_import.add_argument(
        "--dry-run", action="store_true",
        help="Import without writing the document",
    )
    parser_import.add_argument(
        "--report", default=None,
        help="Save a YAML import report to this path",
    )

    # watch command
    parser_watch = subparsers.add_parser("watch", help="Re-import a CSV export on change")
    _add_import_options(parser_watch)
    parser_watch.add_argument(
        "--debounce", type=int, default=500,
        help="Debounce window in milliseconds (default: 500)",
    )

    # find command
    parser_find = subparsers.add_parser("find", help="Locate an imported entry by UUID")
    parser_find.add_argument("uuid", help="Day One entry UUID")
    parser_find.add_argument("--document", "-o", default=None, help="Org document")

    args = parser.parse_args()

    handlers = {
        "import": cmd_import,
        "watch": cmd_watch,
        "find": cmd_find,
    }
    handler = handlers.get(args.cmd)

    if handler:
        try:
            rt = build_runtime(config_path=args.config)
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
