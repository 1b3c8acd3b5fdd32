"""CLI for running the backup function locally.

Runs one evaluation over a JSON request file, the same envelope a
composition-function host would send.

Usage:
    composition-backup render request.json
    composition-backup render request.json --config backup.toml
    composition-backup render request.json --json > response.json
    composition-backup classify request.json
    composition-backup --verbose render request.json

Commands:
    render    - Evaluate the request and show the resulting desired state
    classify  - Show the resource kinds a backup would include
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from composition_backup.config.loader import load_engine_config
from composition_backup.engine.classifier import classify
from composition_backup.errors import BackupFunctionError
from composition_backup.function import RequestHost, run_function

console = Console()


# ============================================================================
# Helpers
# ============================================================================


def _read_request(path: str | Path) -> dict[str, Any]:
    """Read a JSON request envelope.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON object.
    """
    request_path = Path(path)
    if not request_path.exists():
        raise FileNotFoundError(f"Request file not found: {request_path}")

    try:
        data = json.loads(request_path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {request_path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{request_path.name} must contain a JSON object")
    return data


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


# ============================================================================
# Commands
# ============================================================================


def cmd_render(args: argparse.Namespace) -> int:
    """Evaluate a request file and print the outcome.

    Args:
        args: Parsed arguments with request, config and json.

    Returns:
        0 on success or skip, 1 on fatal result or unreadable input.
    """
    try:
        request = _read_request(args.request)
        config = load_engine_config(args.config) if args.config else None
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    host = RequestHost(request)
    result = run_function(host, config=config)

    if args.json:
        print(json.dumps(host.response, indent=2, sort_keys=True))
        return 0 if result.success else 1

    if not result.success:
        console.print(f"[bold red]x[/bold red] {result.error}")
        return 1

    console.print(f"State: [bold cyan]{result.state.value}[/bold cyan]")
    if result.included_resource_kinds:
        console.print(
            f"  Included kinds: {', '.join(result.included_resource_kinds)}"
        )
    if result.schedule_expression:
        console.print(f"  Schedule: [cyan]{result.schedule_expression}[/cyan]")

    table = Table(title="Desired Resources", show_header=True, header_style="bold")
    table.add_column("Name", style="dim")
    table.add_column("apiVersion")
    table.add_column("Kind")
    for name, entry in sorted(host.response["desired"]["resources"].items()):
        resource = entry.get("resource", {})
        table.add_row(name, resource.get("apiVersion", ""), resource.get("kind", ""))
    console.print(table)

    return 0


def cmd_classify(args: argparse.Namespace) -> int:
    """Print the resource kinds a backup of the request would include.

    Returns:
        0 on success, 1 on unreadable input or classification error.
    """
    try:
        request = _read_request(args.request)
        kinds = classify(RequestHost(request).get_candidate_children())
    except (FileNotFoundError, ValueError, BackupFunctionError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if not kinds:
        console.print("[yellow]No resources eligible for backup.[/yellow]")
        return 0

    for kind in kinds:
        console.print(f"  - {kind}")
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def main() -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        prog="composition-backup",
        description="Decide and synthesize backup declarations for a composite resource",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # render command
    p_render = subparsers.add_parser(
        "render",
        help="Evaluate a request file and show the resulting desired state",
    )
    p_render.add_argument("request", help="Path to JSON request file")
    p_render.add_argument(
        "--config",
        help="Path to TOML engine config (overrides the request's input)",
    )
    p_render.add_argument(
        "--json",
        action="store_true",
        help="Print the full JSON response instead of a summary",
    )
    p_render.set_defaults(func=cmd_render)

    # classify command
    p_classify = subparsers.add_parser(
        "classify",
        help="Show the resource kinds a backup would include",
    )
    p_classify.add_argument("request", help="Path to JSON request file")
    p_classify.set_defaults(func=cmd_classify)

    args = parser.parse_args()
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
