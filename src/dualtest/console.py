"""Console output for per-test lines and suite reports."""

from __future__ import annotations

import typer

PASSED = "PASSED"
FAILED = "FAILED"


class Console:
    """Writes report lines to stdout.

    With ``color`` the PASSED/FAILED labels are styled green/red. Click drops
    the styling when stdout is not a terminal, so the plain text stays the
    same for anything reading it. A ``quiet`` console prints nothing.
    """

    def __init__(self, color: bool = False, quiet: bool = False) -> None:
        self.color = color
        self.quiet = quiet

    def echo(self, message: str = "") -> None:
        if not self.quiet:
            typer.echo(message)

    def label(self, passed: bool) -> str:
        text = PASSED if passed else FAILED
        if not self.color:
            return text
        return typer.style(text, fg=typer.colors.GREEN if passed else typer.colors.RED)

    def status(self, passed: bool, name: str) -> None:
        self.echo(f"{self.label(passed)}: {name}")
