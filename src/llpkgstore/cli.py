"""llpkgstore CLI - generate and verify llpkg directories."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from llpkgstore import __version__
from llpkgstore.actions.installer import detect_profile
from llpkgstore.settings import ToolSettings
from llpkgstore.workflow import run_generate, run_verify

cli = typer.Typer(
    name="llpkgstore",
    help="Generate and verify llcppg binding packages",
    no_args_is_help=True,
)
console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _version_option_callback(value: bool) -> None:
    if value:
        typer.echo(f"llpkgstore {__version__}")
        raise typer.Exit()


@cli.callback()
def _cli_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_option_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    _ = version
    _configure_logging(verbose)


def _resolve_dirs(dirs: list[Path] | None) -> list[Path]:
    if not dirs:
        return [Path.cwd()]
    return [d.resolve() for d in dirs]


@cli.command("generate")
def generate(
    dirs: list[Path] | None = typer.Argument(
        None,
        help="llpkg directories (defaults to current working directory).",
    ),
) -> None:
    """Generate llpkg bindings in place."""
    settings = ToolSettings.from_env()
    detect_profile(Path.cwd())
    failed = False
    for pkg_dir in _resolve_dirs(dirs):
        try:
            run_generate(pkg_dir, settings)
        except (RuntimeError, OSError) as exc:
            logger.error("generate %s failed", pkg_dir)
            console.print(f"[bold red]Error:[/bold red] {exc}")
            failed = True
            continue
        console.print(f"[green]✓ Generated[/green] {pkg_dir}")
    if failed:
        raise typer.Exit(1)


@cli.command("verify")
def verify(
    dirs: list[Path] | None = typer.Argument(
        None,
        help="llpkg directories (defaults to current working directory).",
    ),
) -> None:
    """Regenerate each llpkg in a scratch directory and compare the submitted files."""
    settings = ToolSettings.from_env()
    detect_profile(Path.cwd())
    failed = False
    for pkg_dir in _resolve_dirs(dirs):
        try:
            outcome = run_verify(pkg_dir, settings)
        except (RuntimeError, OSError) as exc:
            logger.error("verify %s failed", pkg_dir)
            console.print(f"[bold red]Error:[/bold red] {exc}")
            failed = True
            continue
        if outcome.is_equal:
            console.print(f"[green]✓ Verified[/green] {pkg_dir}")
            continue
        failed = True
        console.print(f"[bold red]Verification failed:[/bold red] {pkg_dir}")
        console.print(outcome.render(), markup=False, highlight=False)
    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    cli()
