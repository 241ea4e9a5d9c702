import sys
import os
import json
import argparse
from rich.console import Console
from .cdb import MalformedDatabaseError, absolutize_search_paths
from .engine import FlagsEngine
from .utils.config import ConfigManager
from .utils.display import display_state

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_MALFORMED = 2


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(description="cdbflags: compiler flags from compile_commands.json")
    parser.add_argument("file", nargs="?", help="C/C++ source or header file to look up")
    parser.add_argument("--start", help="Directory to start the database search from (default: the file's directory)")
    parser.add_argument("--all", action="store_true", help="Show every candidate when the file is compiled more than once")
    parser.add_argument("--absolute", action="store_true", help="Make relative include paths absolute")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--add-project", nargs=2, metavar=("ROOT", "DB"), help="Register a database for a project root")
    parser.add_argument("--remove-project", metavar="ROOT", help="Forget a registered project root")
    return parser


def _state_to_json(state, show_all: bool) -> str:
    candidates = state.candidates if show_all else state.candidates[:1]
    return json.dumps({
        "file": state.queried_path,
        "database": state.database_path,
        "match": state.match_kind,
        "directory": state.matched_directory,
        "candidates": [
            {"directory": state.working_dirs[i], "flags": options}
            for i, options in enumerate(candidates)
        ],
    }, indent=2)


def run(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    console = Console()
    config = ConfigManager()

    if args.add_project:
        root, db = (os.path.abspath(p) for p in args.add_project)
        config.add_project(root, db)
        console.print(f"Registered {db} for {root}")
        return EXIT_FOUND

    if args.remove_project:
        root = os.path.abspath(args.remove_project)
        if not config.remove_project(root):
            console.print(f"[bold red]Error:[/bold red] {root} is not registered")
            return EXIT_NOT_FOUND
        console.print(f"Removed {root}")
        return EXIT_FOUND

    if not args.file:
        console.print("[bold red]Error:[/bold red] No source file specified.")
        console.print("Usage: cdbflags <file> [--start DIR]")
        return EXIT_NOT_FOUND

    engine = FlagsEngine(config)
    try:
        state = engine.query(args.file, args.start)
    except MalformedDatabaseError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return EXIT_MALFORMED
    finally:
        if engine.log_error:
            Console(stderr=True).print(f"[yellow]Warning:[/yellow] {engine.log_error}")

    if args.absolute:
        state.candidates = [
            absolutize_search_paths(options, state.working_dirs[i])
            for i, options in enumerate(state.candidates)
        ]

    if args.json:
        print(_state_to_json(state, args.all))
    else:
        display_state(state, args.all, console)

    return EXIT_FOUND if state.has_flags else EXIT_NOT_FOUND


def main():
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
