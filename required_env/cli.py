"""
ABOUTME: Command-line interface for checking required environment variables
ABOUTME: Handles argument parsing, dotenv loading, and reporting of each typed lookup
"""

import argparse
import json
import logging
import math
import sys
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import DEFAULT_READER, required
from .exceptions import ConfigError
from .reader import EnvReader, Lookup

console = Console()


def load_environment(env_path: Path) -> None:
    """Load variables from a dotenv file without overriding the process environment."""
    if not env_path.exists():
        logging.debug(f"No env file at {env_path}, using system environment variables")
        return
    try:
        load_dotenv(env_path, override=False)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Error loading env file {env_path}: {e}") from e
    logging.info(f"Loaded environment from {env_path}")


def parse_spec(spec: str) -> tuple[str, str]:
    """Split a KEY or KEY:kind argument into (key, kind)."""
    key, _, kind = spec.partition(":")
    kind = kind or "string"
    if not key:
        raise argparse.ArgumentTypeError(f"missing key in '{spec}'")
    if kind not in EnvReader.kinds():
        raise argparse.ArgumentTypeError(
            f"unknown kind '{kind}' (choose from {', '.join(EnvReader.kinds())})"
        )
    return key, kind


def format_value(value) -> object:
    """Render a looked-up value as something JSON and the console can show."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if value is None or isinstance(value, (bool, int, float, str, list)):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", "backslashreplace")
    if isinstance(value, timedelta):
        return value.total_seconds()
    if hasattr(value, "geturl"):
        return value.geturl()
    return str(value)


def cli() -> argparse.Namespace:
    """
    Parse and return command-line arguments for the required-env checker.

    Returns:
        argparse.Namespace: Parsed arguments holding the (key, kind) specs to check, the env file, list separator, output and log options.
    """
    p = argparse.ArgumentParser(
        description="Check that required environment variables are set and parse as their expected types"
    )
    p.add_argument(
        "specs",
        nargs="+",
        type=parse_spec,
        metavar="KEY[:KIND]",
        help=f"Variable to check; KIND is one of {', '.join(EnvReader.kinds())} (default: string)",
    )
    p.add_argument(
        "--env-file",
        type=Path,
        default=Path(".env"),
        help="Dotenv file to load before checking (existing variables win)",
    )
    p.add_argument(
        "--sep",
        default=",",
        help="Separator for KIND=strings",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format instead of a rich console table",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"required-env {__version__}",
    )
    return p.parse_args()


def check(reader: EnvReader, specs: list[tuple[str, str]], sep: str = ",") -> list[tuple[str, str, Lookup]]:
    """Run the tagged lookup for every (key, kind) spec."""
    results = []
    for key, kind in specs:
        kwargs = {"sep": sep} if kind == "strings" else {}
        results.append((key, kind, reader.lookup(kind, key, **kwargs)))
    return results


def render_table(results: list[tuple[str, str, Lookup]]) -> None:
    table = Table(title="Required Environment", show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan")
    table.add_column("Kind")
    table.add_column("Status", justify="center")
    table.add_column("Value / Error")

    for key, kind, result in results:
        if result.ok:
            table.add_row(key, kind, "✅", repr(format_value(result.value)))
        else:
            table.add_row(key, kind, "❌", str(result.error), style="red")

    console.print(table)


def render_json(results: list[tuple[str, str, Lookup]]) -> None:
    payload = [
        {
            "key": key,
            "kind": kind,
            "ok": result.ok,
            "value": format_value(result.value) if result.ok else None,
            "error": None if result.ok else str(result.error),
        }
        for key, kind, result in results
    ]
    print(json.dumps(payload, indent=2, allow_nan=False))


def main():
    """
    Execute the main entry point for the required-env checker.

    Parses command-line arguments, configures logging, loads the optional dotenv file, runs a typed lookup for each requested key, and reports the outcome. Exits with status 1 through the fatal check when any key is missing or invalid.
    """
    a = cli()

    logging.basicConfig(
        level=getattr(logging, a.log_level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )

    try:
        load_environment(a.env_file)
        results = check(DEFAULT_READER, a.specs, a.sep)
    except KeyboardInterrupt:
        console.print("\n❌ Interrupted by user")
        sys.exit(1)
    except ConfigError as exc:
        required(exc)

    if a.json:
        render_json(results)
    else:
        render_table(results)

    failed = [key for key, _, result in results if not result.ok]
    if failed:
        required(ConfigError(f"{len(failed)} required environment variable(s) not usable: {', '.join(failed)}"))


if __name__ == "__main__":
    main()
