from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from eventscope.api.events import Scope
from eventscope.api.interaction import ResolveMode
from eventscope.runtime.config import load_inspector_config
from eventscope.runtime.logging import setup_inspector_logging, shutdown_inspector_logging
from tools.timeline_inspector.app import CursorRequest, run_app
from tools.timeline_inspector.views.events import EventFilter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="timeline_inspector")
    parser.add_argument("--version", action="store_true", help="Print tool version")
    parser.add_argument("events", type=Path, nargs="?", help="JSON or JSON-lines event file.")
    parser.add_argument("--window-size", type=float, default=None, help="Window size in seconds.")
    parser.add_argument("--threshold", type=float, default=None, help="Overlap threshold in ms.")
    parser.add_argument("--cursor", type=float, default=None, help="Cursor time in epoch ms.")
    parser.add_argument("--tolerance", type=float, default=None, help="Cursor tolerance in ms.")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ResolveMode],
        default=ResolveMode.NEAREST_PER_LANE.value,
        help="Resolver mode for --cursor.",
    )
    parser.add_argument("--freeze", action="store_true", help="Freeze the cursor before querying.")
    parser.add_argument("--tree", action="store_true", help="Print nested hierarchies.")
    parser.add_argument("--node", default=None, help="Print the path and subtree of a node id (e.g. event:4).")
    parser.add_argument("--tab", type=int, default=None, help="Only keep events from this tab.")
    parser.add_argument(
        "--scope",
        choices=["all", *(scope.value for scope in Scope)],
        default="all",
        help="Only keep events with this scope.",
    )
    parser.add_argument("--user", type=int, default=None, help="Only keep events from this user.")
    parser.add_argument("--text", default="", help="Only keep events whose label, action or scope match.")
    parser.add_argument("--json", action="store_true", help="Print a JSON report instead of text.")
    parser.add_argument("--export", type=Path, default=None, help="Write the JSON report to a file.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        print("timeline_inspector v0.1")
        return 0
    if args.events is None:
        parser.error("events file is required")

    setup_inspector_logging()
    config = load_inspector_config()
    if args.window_size is not None:
        config = replace(config, window_size_s=args.window_size)
    if args.threshold is not None:
        config = replace(config, overlap_threshold_ms=args.threshold)

    cursor = None
    if args.cursor is not None:
        default_tolerance = config.freeze_tolerance_ms if args.freeze else config.hover_tolerance_ms
        cursor = CursorRequest(
            cursor_ms=args.cursor,
            tolerance_ms=args.tolerance if args.tolerance is not None else default_tolerance,
            mode=ResolveMode(args.mode),
            freeze=args.freeze,
        )
    try:
        return run_app(
            events_path=args.events,
            config=config,
            cursor=cursor,
            event_filter=EventFilter(tab_id=args.tab, scope=args.scope, user_id=args.user, query=args.text),
            node_id=args.node,
            as_json=args.json,
            show_tree=args.tree,
            export_path=args.export,
        )
    finally:
        shutdown_inspector_logging()


if __name__ == "__main__":
    raise SystemExit(main())
