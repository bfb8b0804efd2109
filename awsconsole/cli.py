"""CLI interface for aws-console."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from awsconsole import __version__
from awsconsole.aliases import AliasResolver
from awsconsole.errors import AWSConsoleError
from awsconsole.helper import DEFAULT_QR_SIZE, copy_url, open_url, print_url, render_qr
from awsconsole.login import generate_console_url
from awsconsole.utils import logger, parse_duration

DEFAULT_CONFIG_PATH = Path("~/.aws-console.yaml")

app = typer.Typer(
    pretty_exceptions_enable=False,
    help="aws-console - Generate temporary login URLs for the AWS Console",
    add_completion=False,
)

console = Console(stderr=True)

EXAMPLES = """
Examples:

  aws-console                          login url for the default profile

  aws-console production               login url for the "production" profile

  aws sts assume-role ... | aws-console -    login url from aws cli output

  aws-console --browser --location iam       open the IAM console in a browser

  aws-console --qr > qr.png                  save a QR code of the login url
"""


def load_resolver(config_file: Optional[Path]) -> AliasResolver:
    """Alias tables from --config / $AWS_CONSOLE_CONFIG, else ~/.aws-console.yaml if present."""
    if config_file is not None:
        return AliasResolver.from_yaml(config_file)

    default_path = DEFAULT_CONFIG_PATH.expanduser()
    if default_path.exists():
        return AliasResolver.from_yaml(default_path)

    return AliasResolver.default()


def default_user_agent() -> str:
    return f"aws-console/{__version__}"


def _version_callback(value: bool):
    if value:
        typer.echo(f"aws-console {__version__}")
        raise typer.Exit()


def _duration_callback(value: Optional[str]) -> int:
    if value is None:
        return 0
    try:
        return parse_duration(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def print_aliases(resolver: AliasResolver) -> None:
    out = Console()
    for title, table_data in (
        ("Locations", resolver.locations),
        ("Policies", resolver.policies),
    ):
        table = Table(title=title)
        table.add_column("Alias", style="cyan")
        table.add_column("Template")
        for alias in sorted(table_data):
            table.add_row(alias, table_data[alias])
        out.print(table)


@app.command(epilog=EXAMPLES)
def main(
    profile: Optional[str] = typer.Argument(
        None,
        help='AWS CLI profile name, or "-" to read credential JSON from stdin.',
        show_default=False,
    ),
    browser: bool = typer.Option(
        False, "--browser", "-b", help="Open login URL with default browser."
    ),
    clipboard: bool = typer.Option(
        False, "--clipboard", "-c", help="Copy login URL to clipboard."
    ),
    duration: Optional[str] = typer.Option(
        None,
        "--duration",
        "-d",
        help="Session duration (e.g. 3600, 15m, 1h30m). Defaults to the credential lifetime.",
        callback=_duration_callback,
    ),
    location: str = typer.Option(
        "home",
        "--location",
        "-l",
        help="Console page alias or https URL to redirect to after logging in.",
    ),
    name: str = typer.Option(
        "aws-console", "--name", "-n", help="Name used for federated user session."
    ),
    policy: str = typer.Option(
        "admin",
        "--policy",
        "-p",
        help="Policy alias or ARN attached to federated user session.",
    ),
    qr: bool = typer.Option(
        False, "--qr", "-q", help="Render login URL as a QR code (PNG when piped)."
    ),
    qr_size: int = typer.Option(
        DEFAULT_QR_SIZE, "--qr-size", "-s", min=1, help="Width in pixels of QR code."
    ),
    region: Optional[str] = typer.Option(
        None, "--region", "-r", help="Preferred console region when redirecting."
    ),
    user_agent: Optional[str] = typer.Option(
        None, "--user-agent", "-A", help="User agent to use for HTTP requests."
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        envvar="AWS_CONSOLE_CONFIG",
        help="YAML file with additional location and policy aliases.",
        dir_okay=False,
        resolve_path=True,
    ),
    list_aliases: bool = typer.Option(
        False, "--list-aliases", help="Show location and policy aliases and exit."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Generate a temporary login URL for the AWS Console.
    """
    try:
        resolver = load_resolver(config_file)

        if list_aliases:
            print_aliases(resolver)
            return

        url = generate_console_url(
            profile=profile,
            region=region,
            duration=duration,
            location=location,
            policy=policy,
            name=name,
            user_agent=user_agent or default_user_agent(),
            resolver=resolver,
        )

        if qr:
            render_qr(url, qr_size)
        elif browser:
            open_url(url)
        elif clipboard:
            copy_url(url)
        else:
            print_url(url)

    except AWSConsoleError as e:
        logger.debug("Failed to generate login URL", exc_info=True)
        console.print(f"[bold red]aws-console:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1)


def run():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
