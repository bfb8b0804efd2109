"""Output sinks for a generated login url."""

import sys
import webbrowser
from typing import IO, Optional

import pyperclip
import segno
from rich.console import Console

from awsconsole.errors import AWSConsoleError

console = Console()
err_console = Console(stderr=True)

__all__ = ["print_url", "copy_url", "open_url", "render_qr"]

DEFAULT_QR_SIZE = 780


def print_url(url: str) -> None:
    # soft_wrap keeps long urls on a single line
    console.print(url, soft_wrap=True, markup=False, highlight=False)


def copy_url(url: str) -> None:
    """Copy the url to the system clipboard."""
    try:
        pyperclip.copy(url)
    except pyperclip.PyperclipException as e:
        raise AWSConsoleError(f"could not copy login URL to clipboard: {e}") from e

    err_console.print("[green][+][/green] Copied AWS Console login URL to clipboard.")


def open_url(url: str) -> None:
    """Open the url in the default browser, printing it if that fails."""
    try:
        opened = webbrowser.open_new_tab(url)
    except webbrowser.Error as e:
        err_console.print(
            f"[yellow][!] Warning: Could not open browser ({e}). Please copy the URL manually:[/yellow]"
        )
        print_url(url)
        return

    if opened:
        err_console.print("[green][+][/green] Opened AWS Console login URL in browser.")
    else:
        err_console.print(
            "[yellow][!] Warning: Could not automatically open browser. Please copy the URL manually:[/yellow]"
        )
        print_url(url)


def qr_scale(qr, size: int) -> int:
    """Module scale that keeps the rendered code within size pixels."""
    width, _ = qr.symbol_size(scale=1)
    return max(1, size // width)


def render_qr(url: str, size: int = DEFAULT_QR_SIZE, out: Optional[IO] = None) -> None:
    """
    Render the url as a QR code.

    Writes PNG bytes to out (stdout when omitted). An interactive terminal
    gets the code drawn with unicode blocks instead of raw PNG data.
    """
    qr = segno.make_qr(url, error="l")

    if out is None:
        if sys.stdout.isatty():
            qr.terminal(out=sys.stdout, compact=True)
            return
        out = sys.stdout.buffer

    qr.save(out, kind="png", scale=qr_scale(qr, size))
    out.flush()
