"""Dungeon Smith CLI entry point.

Provides subcommands for generating a floorplan to files and for running the
JSON API server. Accepts configuration via flags and environment variables,
with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from dungeonsmith import __version__

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - environment dependent
    _COLOR_ENABLED = False

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_BAD_INPUT = 2


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dungeon Smith

    Generate tabletop dungeon floorplans (SVG map + Markdown guide) from the
    command line, or serve the JSON API. Configuration can be provided via CLI
    flags or environment variables. If both are present, CLI flags take
    precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                          Bind address for the API server (default: 0.0.0.0)
          PORT                          Port for the API server (default: 5000)
          DUNGEONSMITH_DEFAULT_TYPE     Dungeon type when --type is omitted (default: Cave)
          DUNGEONSMITH_DEFAULT_SIZE     Size tier when --size is omitted (default: Medium)
          DUNGEONSMITH_THEMES_FILE      JSON file with extra or overriding themes
          DUNGEONSMITH_LOG_LEVEL        debug | info | warn | error (default: info)
          DUNGEONSMITH_LOG_JSON         Emit JSON log lines when truthy

        Examples:
          # Small cave, reproducible, writes cave.svg and cave.md
          python run.py generate --type Cave --size Small --seed 42 --out cave

          # Also dump the room data and diagnostics
          python run.py generate --type Tomb --out tomb --json

          # Run the API on a custom port
          python run.py serve --port 8080

          # Load variables from .env then generate
          python run.py --env-file .env generate
        """
    )

    parser = argparse.ArgumentParser(
        prog="dungeonsmith",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Dungeon Smith {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and write the SVG map and Markdown guide",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a floorplan and write <out>.svg and <out>.md (and <out>.json with --json)",
    )
    gen_parser.add_argument("--type", dest="dungeon_type", default=None,
                            help="Dungeon type / theme (default: env DUNGEONSMITH_DEFAULT_TYPE or Cave)")
    gen_parser.add_argument("--size", default=None,
                            help="Small, Medium or Large (default: env DUNGEONSMITH_DEFAULT_SIZE or Medium)")
    gen_parser.add_argument("--seed", default=None,
                            help="Integer or any string; strings are hashed (default: random)")
    gen_parser.add_argument("--out", default="dungeon", help="Output path prefix (default: dungeon)")
    gen_parser.add_argument("--json", dest="write_json", action="store_true",
                            help="Also write rooms and diagnostics to <out>.json")
    gen_parser.add_argument("--themes-file", dest="themes_file", default=None,
                            help="JSON themes file (default: env DUNGEONSMITH_THEMES_FILE)")
    gen_parser.add_argument("--door-style", dest="door_style", choices=["line", "gap", "none"], default="line",
                            help="How doors are drawn on the map (default: line)")
    gen_parser.add_argument("--no-grid", dest="show_grid", action="store_false", help="Omit grid lines")
    gen_parser.add_argument("--no-colors", dest="use_colors", action="store_false",
                            help="Do not tint rooms by content type")
    gen_parser.add_argument("--router", choices=["lshaped", "bfs"], default="lshaped",
                            help="Corridor router: two-segment heuristic or obstacle-aware BFS (default: lshaped)")
    gen_parser.set_defaults(command="generate")

    # serve subcommand
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the JSON API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask development server hosting /api/dungeon/*",
    )
    serve_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    serve_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    serve_parser.set_defaults(command="serve")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(list(argv) + ["generate"])
    return args


def _banner(title: str, rows) -> str:
    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    heading = f"{Fore.CYAN}{Style.BRIGHT}{title}{Style.RESET_ALL}" if _COLOR_ENABLED else title
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [divider, f"  {heading}", divider]
    lines.extend(f"  {label(k + ':'):12} {value(v)}" for k, v in rows)
    lines.extend([divider, ""])
    return "\n".join(lines)


def _error(msg: str) -> None:
    prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _COLOR_ENABLED else "[ERROR]"
    print(f"{prefix} {msg}", file=sys.stderr)


def _run_generate(args) -> int:
    from dungeonsmith.dungeon import BreadthFirstRouter, Dungeon, LShapedRouter, UnknownDungeonType
    from dungeonsmith.dungeon.themes import load_themes
    from dungeonsmith.logging_utils import log
    from dungeonsmith.render import MapStyle, render_artifacts
    from dungeonsmith.dungeon.seeds import coerce_seed

    dungeon_type = args.dungeon_type or os.getenv("DUNGEONSMITH_DEFAULT_TYPE", "Cave")
    size = args.size or os.getenv("DUNGEONSMITH_DEFAULT_SIZE", "Medium")
    themes_file = args.themes_file or os.getenv("DUNGEONSMITH_THEMES_FILE")
    try:
        themes = load_themes(themes_file)
    except (OSError, ValueError) as e:
        _error(f"could not load themes: {e}")
        return EXIT_BAD_INPUT
    router = BreadthFirstRouter() if args.router == "bfs" else LShapedRouter()
    try:
        seed = coerce_seed(args.seed)
        style = MapStyle(door_style=args.door_style, show_grid=args.show_grid, use_colors=args.use_colors)
        dungeon = Dungeon(dungeon_type=dungeon_type, size=size, seed=seed, themes=themes, router=router)
    except UnknownDungeonType as e:
        _error(f"{e} (available: {', '.join(themes)})")
        return EXIT_BAD_INPUT
    except ValueError as e:
        _error(str(e))
        return EXIT_BAD_INPUT

    svg, guide = render_artifacts(dungeon, style)
    written = []
    try:
        out_dir = os.path.dirname(args.out)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        with open(f"{args.out}.svg", "w", encoding="utf-8") as f:
            f.write(svg)
        written.append(f"{args.out}.svg")
        with open(f"{args.out}.md", "w", encoding="utf-8") as f:
            f.write(guide)
        written.append(f"{args.out}.md")
        if args.write_json:
            with open(f"{args.out}.json", "w", encoding="utf-8") as f:
                json.dump(dungeon.to_dict(), f, indent=2)
            written.append(f"{args.out}.json")
    except OSError as e:
        _error(f"could not write output: {e}")
        return EXIT_IO_ERROR

    report = dungeon.report
    print(_banner("Dungeon Generated", [
        ("Type", dungeon.dungeon_type),
        ("Size", dungeon.size),
        ("Seed", dungeon.seed),
        ("Rooms", f"{report.rooms_placed}/{report.rooms_requested}"),
        ("Doors", report.doors),
        ("Files", ", ".join(written)),
    ]))
    log.info(event="cli_generate", seed=dungeon.seed, out=args.out, files=len(written))
    return EXIT_OK


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file, override=True)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return _run_generate(args)

    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from dungeonsmith.logging_utils import log
    from dungeonsmith.server import start_server

    print(_banner("Dungeon Smith API", [
        ("Mode", mode.upper()),
        ("Host", host),
        ("Port", port),
        ("Debug", "YES" if debug else "NO"),
    ]))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
