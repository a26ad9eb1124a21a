"""Main entry point for mywarrior."""

import typer

from mywarrior_cli import __version__
from mywarrior_cli.commands import add, config, report, track
from mywarrior_cli.utils.typer_helpers import SuggestingGroup
from mywarrior_cli.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="mywarrior",
    cls=SuggestingGroup,
    help="Track pomodori from the terminal and keep a log of every session",
    no_args_is_help=True,
)

console = get_console(highlight=False)


# Add subcommands
app.add_typer(config.app, name="config", help="Configuration management")

# Add top-level commands
app.command("track")(track.track)
app.command("report")(report.report)
app.command("add")(add.add)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]mywarrior[/bold] version [cyan]{__version__}[/cyan]")


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
