"""Keymaze CLI entry point.

Provides subcommands for running the web API server and for generating a
single maze to the terminal (debug aid: ASCII layout plus generation metrics).
Accepts configuration via flags and environment variables, with optional .env
loading.

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

from keymaze import __version__

_color_init()


def _color_enabled() -> bool:
    # Disable colors if output is not a real terminal (e.g., during pytest capture)
    try:
        return sys.stdout.isatty()
    except Exception:  # pragma: no cover
        return False


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Keymaze

    Serve the maze JSON API or generate a single maze in the terminal.
    Configuration can be provided via CLI flags or environment variables.
    If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          KEYMAZE_ROWS         Default maze rows (default: 10)
          KEYMAZE_COLS         Default maze columns (default: 10)
          KEYMAZE_SEED         Fixed seed for `generate` (default: random)
          KEYMAZE_LOG_LEVEL    debug|info|warn|error for event logs (default: info)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a 12x16 maze with a fixed seed
          python run.py generate --rows 12 --cols 16 --seed 42

          # Same maze as JSON (board snapshot + metrics)
          python run.py generate --seed 42 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="Keymaze",
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
        version=f"Keymaze {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the maze web API server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask maze API server",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one maze and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Carve a maze, place gates and items, then print the layout and metrics.",
    )
    gen_parser.add_argument("--rows", type=int, default=None, help="Maze rows (default: env KEYMAZE_ROWS or 10)")
    gen_parser.add_argument("--cols", type=int, default=None, help="Maze columns (default: env KEYMAZE_COLS or 10)")
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible maze")
    gen_parser.add_argument(
        "--attempts",
        type=int,
        default=None,
        help="Placement attempt budget before falling back to no items (default: 20)",
    )
    gen_parser.add_argument("--no-items", action="store_true", help="Skip gate/item placement")
    gen_parser.add_argument("--json", action="store_true", help="Emit JSON instead of ASCII")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _generate(args) -> int:
    from keymaze.maze import MazeConfig, generate_board

    config = MazeConfig.from_env()
    if args.rows is not None:
        config.rows = args.rows
    if args.cols is not None:
        config.cols = args.cols
    if args.seed is not None:
        config.seed = args.seed
    if args.attempts is not None:
        config.max_placement_attempts = args.attempts
    if args.no_items:
        config.place_items = False
    try:
        result = generate_board(config)
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    if args.json:
        payload = {"seed": result.seed, "metrics": result.metrics, "board": result.board.to_dict(reveal_all=True)}
        print(json.dumps(payload, indent=2))
        return 0
    colored = _color_enabled()
    header = f"Maze {config.rows}x{config.cols} seed={result.seed}"
    print(f"{Fore.CYAN}{Style.BRIGHT}{header}{Style.RESET_ALL}" if colored else header)
    print(result.board.render_ascii())
    m = result.metrics
    summary = (
        f"gates={m['blockers_placed']} items={m['collectibles_placed']} "
        f"attempts={m['placement_attempts']} fallback={m['placement_fallback']} "
        f"runtime_ms={m['runtime_ms']}"
    )
    print(f"{Fore.YELLOW}{summary}{Style.RESET_ALL}" if colored else summary)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from keymaze.logging_utils import log
    from keymaze.server import start_server

    colored = _color_enabled()

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if colored else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if colored else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if colored else "=" * 40
    lines = [
        divider,
        f"  {Fore.CYAN + Style.BRIGHT + 'Keymaze Server' + Style.RESET_ALL if colored else 'Keymaze Server'}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def _console_main() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
