"""Terminal entrypoint for Mapty."""

from __future__ import annotations

import argparse
from pathlib import Path

from mapty.core.context import MaptyContext
from mapty.logging_config import VALID_LEVELS, configure_logging
from mapty.ui.presenter import summary_line
from mapty.workout.collection import OpaqueEntry
from mapty.workout.storage import FileStorage


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mapty workout log")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) to log and browse workouts",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host bind for --ui-web",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=8090,
        help="Port for --ui-web",
    )
    parser.add_argument("--list", action="store_true", help="Print stored workouts")
    parser.add_argument("--reset", action="store_true", help="Delete all stored workouts")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the workout store (default: ~/.mapty)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=VALID_LEVELS,
        help="Logging level",
    )
    return parser


def run_list(context: MaptyContext) -> int:
    collection = context.load()
    if not len(collection):
        print("No workouts logged yet")
        return 0
    for entry in collection:
        if isinstance(entry, OpaqueEntry):
            print(f"{entry.id or '-'}  <unreadable {entry.kind or 'entry'}: {entry.reason}>")
        else:
            print(summary_line(entry))
    return 0


def run_reset(context: MaptyContext) -> int:
    if not context.reset():
        return 1
    print("Workout store cleared")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.ui_web:
        from mapty.ui.web_app import run_web_ui

        return run_web_ui(data_dir=args.data_dir, host=args.web_host, port=args.web_port)

    context = MaptyContext(FileStorage(args.data_dir))
    if args.reset:
        return run_reset(context)
    if args.list:
        return run_list(context)

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
