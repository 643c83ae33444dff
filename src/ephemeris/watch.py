"""Watch mode - re-import a CSV export whenever it changes."""

import json
import signal
import sys
import time
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .dayone.models import ImportResult


class DebounceHandler(FileSystemEventHandler):
    """File system event handler with debouncing, for a single file."""

    def __init__(self, csv_path: Path, on_change: Callable[[], Any], debounce_ms: int = 500):
        super().__init__()
        self.csv_path = csv_path.resolve()
        self.on_change = on_change
        self.debounce_ms = debounce_ms

        self.pending = False
        self.last_event_time = 0.0

    def _matches(self, path: str | bytes) -> bool:
        if isinstance(path, bytes):
            path = path.decode()
        return Path(path).resolve() == self.csv_path

    def _touch(self) -> None:
        self.pending = True
        self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        """Handle file creation."""
        if not event.is_directory and self._matches(event.src_path):
            self._touch()

    def on_modified(self, event: FileSystemEvent) -> None:
        """Handle file modification."""
        if not event.is_directory and self._matches(event.src_path):
            self._touch()

    def on_moved(self, event: FileSystemEvent) -> None:
        """Handle an export written to a temp file and renamed into place."""
        if not event.is_directory and self._matches(event.dest_path):
            self._touch()

    def check_and_flush(self) -> None:
        """Check if debounce period has elapsed and flush if so."""
        if not self.pending:
            return

        elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        """Run the change callback for accumulated events."""
        if not self.pending:
            return
        self.pending = False
        if self.on_change:
            self.on_change()


def watch_csv(
    csv_path: Path,
    run_import: Callable[[], ImportResult],
    debounce_ms: int = 500,
    quiet: bool = False,
    json_output: bool = False,
) -> int:
    """
    Watch a CSV export and re-import it after every change.

    Args:
        csv_path: CSV export to watch
        run_import: Performs one full import run and persists the document
        debounce_ms: Debounce window in milliseconds
        quiet: Suppress output
        json_output: Output JSON events instead of human-readable

    Returns:
        Exit code
    """
    if not csv_path.parent.exists():
        print(f"Error: Directory not found: {csv_path.parent}", file=sys.stderr)
        return 1

    running = True

    def handle_change() -> None:
        """Run one import; errors are reported and watching continues."""
        start_time = time.time()

        try:
            result = run_import()
            duration_ms = int((time.time() - start_time) * 1000)

            if json_output:
                event = {
                    "type": "import",
                    "source": result.source,
                    "imported": result.imported,
                    "skipped": len(result.skipped),
                    "replaced": len(result.replaced),
                    "duration_ms": duration_ms,
                }
                print(json.dumps(event), flush=True)
            elif not quiet:
                print(
                    f"Imported: +{result.imported} ={len(result.skipped)} "
                    f"~{len(result.replaced)} ({duration_ms}ms)",
                    flush=True,
                )
        except Exception as e:
            if json_output:
                error_event = {
                    "type": "error",
                    "message": str(e),
                }
                print(json.dumps(error_event), flush=True)
            else:
                print(f"Error: {e}", file=sys.stderr, flush=True)

    # Set up signal handlers for graceful shutdown
    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False
        if not quiet and not json_output:
            print("\nShutting down...", flush=True)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    handler = DebounceHandler(csv_path, handle_change, debounce_ms)
    observer = Observer()
    observer.schedule(handler, str(csv_path.parent), recursive=False)

    if not quiet and not json_output:
        print(f"Watching {csv_path} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    # Initial run so the document is current before the first change
    if csv_path.exists():
        handle_change()

    observer.start()

    try:
        # Main loop - imports run here, never on the observer thread
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        handler.flush()
        observer.stop()
        observer.join()

    if not quiet and not json_output:
        print("Watch stopped", flush=True)

    return 0
