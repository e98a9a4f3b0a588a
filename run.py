"""DungeonForge CLI entry point.

Provides subcommands for generating a layout in the terminal and for running
the HTTP server. Accepts configuration via flags and LAYOUT_* environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import just_fix_windows_console
from dotenv import load_dotenv

from dungeonforge import __version__

just_fix_windows_console()

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - detached streams
    _COLOR_ENABLED = False


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    DungeonForge layout generator

    Generate a procedural dungeon layout in the terminal or serve layouts over
    HTTP. Configuration can be provided via CLI flags or LAYOUT_* environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          LAYOUT_DUNGEON_SIZE  Default dungeon size, e.g. 100,60
          LAYOUT_DIVISIONS     Default division count
          (any LayoutConfig field works as LAYOUT_<FIELD>)

        Examples:
          # Generate and draw a layout for seed 7
          python run.py generate --seed 7 --ascii

          # Endless divisions on a larger map, pruning a quarter of the rooms
          python run.py generate --size 120 80 --endless --subtract 25

          # Run the server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="DungeonForge",
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
        version=f"DungeonForge {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the layout HTTP server",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one layout and print a summary",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed (default: random)")
    gen_parser.add_argument("--start", type=int, nargs=2, metavar=("X", "Y"), default=None, help="Start point")
    gen_parser.add_argument("--size", type=int, nargs=2, metavar=("W", "H"), default=None, help="Dungeon size")
    gen_parser.add_argument("--divisions", type=int, default=None, help="Number of split iterations")
    gen_parser.add_argument("--endless", action="store_true", help="Split until no region can be split")
    gen_parser.add_argument("--min-room", dest="size_constrain", type=int, default=None, help="Minimum room size")
    gen_parser.add_argument("--ratio", dest="acceptable_ratio", type=float, default=None, help="Max aspect ratio")
    gen_parser.add_argument("--subtract", dest="subtracted_percent", type=int, default=None, help="Percent of rooms to prune")
    gen_parser.add_argument("--ascii", action="store_true", help="Print the rasterised map")
    gen_parser.add_argument("--rooms", action="store_true", help="Print room outlines")
    gen_parser.add_argument("--json", action="store_true", help="Print the full layout as JSON")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def build_config(args):
    from dungeonforge.layout import LayoutConfig

    overrides = {}
    if args.start is not None:
        overrides["start_point"] = args.start
    if args.size is not None:
        overrides["dungeon_size"] = args.size
    if args.endless:
        overrides["endless_divisions"] = True
    for key in ("divisions", "size_constrain", "acceptable_ratio", "subtracted_percent"):
        val = getattr(args, key)
        if val is not None:
            overrides[key] = val
    return LayoutConfig.from_mapping(overrides, base=LayoutConfig.from_env())


def _label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def _value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def run_generate(args) -> int:
    from dungeonforge.layout import ConfigError, generate
    from dungeonforge.layout.ascii import render_layout, render_rooms

    try:
        result = generate(args.seed, build_config(args))
    except ConfigError as exc:
        for err in exc.errors:
            print("ERROR:", err, file=sys.stderr)
        return 2
    if args.json:
        print(json.dumps(result.to_dict()))
        return 0
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    m = result.metrics
    lines = [
        divider,
        f"  {_label('Seed:'):12} {_value(result.seed)}",
        f"  {_label('Rooms:'):12} {_value(len(result.rooms))} (pruned {m['rooms_pruned']})",
        f"  {_label('Walls:'):12} {_value(len(result.walls))}",
        f"  {_label('Doors:'):12} {_value(len(result.doors))} (closed {m['doors_pruned']})",
        f"  {_label('Floor:'):12} {_value(len(result.floor_placements))} tiles",
        f"  {_label('Uncovered:'):12} {_value(len(result.uncovered_cells))}",
        f"  {_label('Spawn:'):12} {_value(result.spawn)}",
        divider,
    ]
    print("\n".join(lines))
    if args.rooms:
        print(render_rooms(result))
    if args.ascii:
        print(render_layout(result))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    from dungeonforge.logging_utils import log
    from dungeonforge.server import start_server

    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
