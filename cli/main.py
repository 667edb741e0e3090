"""llms-links CLI: validate the links in every llms.txt file under a directory.

Usage:
    python cli/main.py [ROOT]
    llms-links [ROOT]

Exit status is 0 when every checked link is reachable (or skipped) and 1 when
any link fails, any file cannot be processed, or ROOT cannot be scanned.

Defaults (15 s timeout, 5 checks per file, 2 x CPU files at once, 10 redirects)
can be overridden through environment variables or a `.env` file in the
project root:

    LLMS_LINKS_TIMEOUT            per-request timeout in seconds
    LLMS_LINKS_URL_CONCURRENCY    simultaneous checks per file
    LLMS_LINKS_FILE_CONCURRENCY   simultaneous files
    LLMS_LINKS_MAX_REDIRECTS      redirect hops followed per request
    LLMS_LINKS_SUFFIX             documentation file name suffix
    LLMS_LINKS_USER_AGENT         User-Agent header
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from llms_links.xxx import
# ...` works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import typer

from llms_links.config import settings
from llms_links.models import FilesystemError
from llms_links.report import render_report
from llms_links.runner import exit_code, run_check

app = typer.Typer(
    name="llms-links",
    help="Validate the links in llms.txt documentation files.",
    add_completion=False,
)


@app.command()
def main(
    root: str = typer.Argument(".", help="Directory to scan for llms.txt files."),
) -> None:
    """Check every link under the Resources / Documentation sections.

    Timeout, concurrency and redirect limits come from the LLMS_LINKS_*
    environment variables (or `.env`) when set.
    """
    try:
        report = run_check(root, settings)
    except FilesystemError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    typer.echo(render_report(report))
    raise typer.Exit(code=exit_code(report))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
