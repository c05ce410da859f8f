"""
Lighthouse pipeline linter CLI.
"""

import logging
import sys
from typing import Optional

import typer

from linter.src.config import get_settings
from linter.src.services.linter import Linter, LintError
from linter.src.services.report import FORMATS, log_results, render_results

logger = logging.getLogger(__name__)

app = typer.Typer(help="Lighthouse trigger and Tekton pipeline utilities.")

@app.callback()
def callback() -> None:
    """Lighthouse trigger and Tekton pipeline utilities."""

@app.command("lint", help="Lints the lighthouse trigger and tekton pipelines.")
def lint(
    dir: str = typer.Option(".", "--dir", "-d", help="The directory to look for the .lighthouse folder."),
    recursive: bool = typer.Option(
        False,
        "--recursive",
        "-r",
        help="Recursively find all '.lighthouse' folders such as if linting a Pipeline Catalog.",
    ),
    out_file: Optional[str] = typer.Option(None, "--out", "-o", help="The file to write the results to."),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        case_sensitive=False,
        help=f"The output format: {', '.join(FORMATS)}.",
    ),
) -> None:
    fmt = (fmt or get_settings().lint_format).lower()
    if fmt not in FORMATS:
        typer.secho(f"Error: unsupported format '{fmt}'", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    linter = Linter(dir=dir, recursive=recursive)
    try:
        tests = linter.run()
    except LintError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    failed = log_results(tests, out_file=out_file, fmt=fmt)
    if not out_file:
        typer.echo(render_results(tests, fmt), nl=False)
    if failed:
        typer.secho(f"{failed} of {len(tests)} files failed lint", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.secho(f"All {len(tests)} files passed lint", fg=typer.colors.GREEN)

def main() -> None:
    # Configure logging
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )
    app()

if __name__ == "__main__":  # pragma: no cover
    main()
