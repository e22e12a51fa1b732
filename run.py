"""Keyrooms CLI entry point.

Generates a layered key-and-lock room map and prints it as box-drawing art
(or JSON), or checks a batch of seeds for structural problems. Accepts
configuration via flags and KEYROOMS_* environment variables, with optional
.env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Keyrooms map generator

    Build a connected grid of rooms grouped into layers, where entering each
    layer needs a key hidden somewhere in an earlier one. Configuration can be
    provided via CLI flags or environment variables. If both are present, CLI
    flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          KEYROOMS_WIDTH       Grid width in rooms (default: 5)
          KEYROOMS_HEIGHT      Grid height in rooms (default: 5)
          KEYROOMS_LAYERS      Keyed layers after the start room (default: 3)
          KEYROOMS_RETRIES     Failed layer attempts tolerated (default: 10)
          KEYROOMS_SEED        Fixed seed for reproducible maps
          KEYROOMS_LOG_LEVEL   debug, info, warn or error (default: info)
          KEYROOMS_LOG_JSON    Emit log records as JSON when set to 1

        Examples:
          # Generate and draw a map with the defaults
          python run.py generate

          # A wider map with more layers and a fixed seed
          python run.py generate --width 8 --height 6 --layers 5 --seed 42

          # Machine-readable output
          python run.py generate --json

          # Check a set of seeds for structural issues
          python run.py check 1 2 3

          # Show per-layer retries and backtracks
          python run.py --log-level debug generate --seed 7
        """
    )

    parser = argparse.ArgumentParser(
        prog="Keyrooms",
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
        "--log-level",
        dest="log_level",
        choices=["debug", "info", "warn", "error"],
        default=None,
        help="Log threshold for this run (default: env KEYROOMS_LOG_LEVEL or info)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Keyrooms {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_shape_flags(sub):
        sub.add_argument("--width", type=int, default=None, help="Grid width (default: env KEYROOMS_WIDTH or 5)")
        sub.add_argument("--height", type=int, default=None, help="Grid height (default: env KEYROOMS_HEIGHT or 5)")
        sub.add_argument(
            "--layers", type=int, default=None, help="Keyed layers after the start room (default: env KEYROOMS_LAYERS or 3)"
        )
        sub.add_argument("--retries", type=int, default=None, help="Retry budget (default: env KEYROOMS_RETRIES or 10)")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate and print one map",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a single map and draw it (or dump it as JSON).",
    )
    add_shape_flags(gen_parser)
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed (default: env KEYROOMS_SEED or random)")
    gen_parser.add_argument("--json", action="store_true", help="Print the map as JSON instead of drawing it")
    gen_parser.add_argument("--no-color", dest="no_color", action="store_true", help="Draw without ANSI colours")
    gen_parser.set_defaults(command="generate")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Validate maps for a list of seeds",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one map per seed and report structural issues as JSON.",
    )
    add_shape_flags(check_parser)
    check_parser.add_argument("seeds", nargs="*", type=int, help="Seeds to check (default: 1..10)")
    check_parser.set_defaults(command="check")

    args = parser.parse_args(argv)
    # If no subcommand provided, default to generate
    if args.command is None:
        args = parser.parse_args(list(argv) + ["generate"])
    return args


def build_config(args: argparse.Namespace):
    from keyrooms.layout.config import GeneratorConfig, apply_env_overrides

    config = apply_env_overrides(GeneratorConfig())
    for attr in ("width", "height", "layers", "retries", "seed"):
        val = getattr(args, attr, None)
        if val is not None:
            setattr(config, attr, val)
    return config.validate()


def _error(msg: str) -> None:
    print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} {msg}" if sys.stderr.isatty() else f"[ERROR] {msg}", file=sys.stderr)


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested, else a default .env when present
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    from keyrooms.layout.debug_checks import run_for_seed
    from keyrooms.layout.errors import GenerationError
    from keyrooms.layout.generator import LayerGenerator
    from keyrooms.logging_utils import log, set_level
    from keyrooms.render import PaletteError, render

    if args.log_level:
        set_level(args.log_level)

    try:
        config = build_config(args)
    except ValueError as exc:
        _error(str(exc))
        return 2

    mode = args.command
    log.info(event="startup", mode=mode, width=config.width, height=config.height, layers=config.layers)

    if mode == "check":
        seeds = args.seeds or list(range(1, 11))
        results = [run_for_seed(seed, config) for seed in seeds]
        print(json.dumps({"results": results}, indent=2))
        return 0 if all(r["ok"] for r in results) else 1

    try:
        room_map = LayerGenerator(config).run()
    except GenerationError as exc:
        _error(exc.message)
        return 1

    if args.json:
        print(json.dumps(room_map.to_dict(), indent=2))
        return 0

    use_color = not args.no_color and sys.stdout.isatty()
    if use_color:
        _color_init()  # pragma: no cover - terminal dependent
    try:
        sys.stdout.write(render(room_map, color=use_color))
    except PaletteError as exc:
        _error(f"{exc} (pass --no-color or use fewer layers)")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
