"""Entry point for the snipqueue CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .export import DragExportProtocol
from .log import enable_debug_logging, logger
from .platform import copy_to_clipboard
from .preferences import PREFS_PATH, load_preferences
from .store import QueueStore


def _print_queue(store: QueueStore) -> None:
    if not len(store):
        print("(queue is empty)")
        return
    for position, item in enumerate(store.items, 1):
        mark = "x" if item.is_used else " "
        print(f"{position:>3}. [{mark}] {item.text}")


def _copy_next(store: QueueStore, use_system_clipboard: bool = True) -> bool:
    """Copy the first Active snippet and mark it Used."""
    nxt = next((item for item in store.items if not item.is_used), None)
    if nxt is None:
        print("No active snippets to copy.", file=sys.stderr)
        return False
    exporter = DragExportProtocol(store)
    try:
        payload = exporter.copy(
            nxt.id,
            lambda text: copy_to_clipboard(text, system=use_system_clipboard),
        )
    finally:
        exporter.close()
    if payload is None:
        print("Could not write to the clipboard.", file=sys.stderr)
        return False
    print(f"Copied: {payload.text}", file=sys.stderr)
    return True


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="snipqueue",
        description="Queue up text snippets, then spend them one at a time",
    )
    parser.add_argument(
        "--store",
        type=Path,
        help="Queue file to use (default: from preferences, ~/.snipqueue/queue.json)",
    )
    parser.add_argument(
        "--prefs",
        type=Path,
        default=PREFS_PATH,
        help="Preferences file (default: ~/.snipqueue/preferences.yaml)",
    )
    parser.add_argument(
        "--add",
        "-a",
        action="append",
        metavar="TEXT",
        help="Add a snippet and exit (repeatable)",
    )
    parser.add_argument(
        "--list",
        "-l",
        action="store_true",
        help="Print the queue and exit",
    )
    parser.add_argument(
        "--copy-next",
        action="store_true",
        help="Copy the newest active snippet to the clipboard, mark it used, and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log diagnostics to stderr",
    )

    args = parser.parse_args(argv)

    if args.debug:
        enable_debug_logging()

    prefs = load_preferences(args.prefs)
    store = QueueStore.open(args.store or prefs.storage.resolve())

    # Headless mode: act on the queue and exit without starting the TUI
    if args.add or args.list or args.copy_next:
        for text in args.add or []:
            if store.add(text) is None:
                print("Skipping empty snippet.", file=sys.stderr)
        ok = (
            _copy_next(store, prefs.export.use_system_clipboard)
            if args.copy_next
            else True
        )
        if args.list:
            _print_queue(store)
        if not ok:
            sys.exit(1)
        return

    try:
        from .app import run_app

        run_app(store, prefs=prefs, prefs_path=args.prefs)
    except (KeyboardInterrupt, SystemExit):
        store.flush()
    except Exception:
        logger.debug("Fatal error in snipqueue", exc_info=True)
        store.flush()
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
