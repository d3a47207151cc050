"""Command line helpers for the Matchday store."""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .app import StoreApp
from .config import MatchdayConfig
from .diagnostics.checklist import run_checklist as checklist_run
from .loaders import load_catalog_from_json, validate_catalog_file
from .validators import validate_app

console = Console()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def run_validate() -> None:
    parser = argparse.ArgumentParser(description="Matchday catalog validator")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--catalog", help="Path to catalog JSON file for validation")
    group.add_argument("--module", help="Python module with register(app) function to validate")
    args = parser.parse_args()

    if args.catalog:
        errors = validate_catalog_file(Path(args.catalog))
        if errors:
            console.print("[bold red]Catalog errors:[/bold red]")
            for err in errors:
                console.print(f"- {err}")
            sys.exit(1)
        console.print("[bold green]Catalog is valid[/bold green]")
        return

    app = StoreApp(MatchdayConfig.from_env())
    _load_module(args.module, app)
    issues = validate_app(app)
    if issues:
        console.print("[bold red]Configuration errors:[/bold red]")
        for issue in issues:
            console.print(f"- {issue}")
        sys.exit(1)
    console.print("[bold green]Store configuration is valid[/bold green]")


def run_checklist() -> None:
    parser = argparse.ArgumentParser(description="Matchday pricing checks")
    parser.add_argument("catalog", help="Path to catalog JSON file")
    args = parser.parse_args()

    app = StoreApp(MatchdayConfig.from_env())
    load_catalog_from_json(app, args.catalog)

    issues = checklist_run(app)
    if not issues:
        console.print("No issues found")
        return
    for issue in issues:
        console.print(f"[{issue.severity.upper()}] {issue.message}", markup=False)
    if any(issue.severity == "error" for issue in issues):
        sys.exit(1)


def run_token() -> None:
    parser = argparse.ArgumentParser(description="Issue a development access token")
    parser.add_argument("player_id", help="Player identifier to embed as token subject")
    args = parser.parse_args()

    app = StoreApp(MatchdayConfig.from_env())
    console.print(app.identity.issue_token(args.player_id), markup=False)


def run_serve() -> None:
    import uvicorn

    from .api import create_app

    parser = argparse.ArgumentParser(description="Serve the Matchday store API")
    parser.add_argument("--catalog", help="Catalog JSON file (defaults to MATCHDAY_CATALOG_PATH)")
    args = parser.parse_args()

    config = MatchdayConfig.from_env()
    configure_logging(config.log_level)
    app = StoreApp(config)
    catalog_path = args.catalog or config.catalog_path
    if catalog_path:
        definition = load_catalog_from_json(app, catalog_path)
        logging.getLogger(__name__).info(
            "Loaded %d catalog entries from %s", len(list(definition.entries())), catalog_path
        )

    uvicorn.run(
        create_app(app),
        host=config.http.host,
        port=config.http.port,
        log_config=None,
    )


def _load_module(path: str, app: StoreApp) -> None:
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    module = importlib.import_module(path)
    if hasattr(module, "register"):
        module.register(app)
    else:
        raise RuntimeError(f"Module {path} does not define register(app).")
