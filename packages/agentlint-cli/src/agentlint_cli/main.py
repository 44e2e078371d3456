from __future__ import annotations

import typer

from agentlint_cli.commands.check import check_command

app = typer.Typer(
    name="agentlint",
    help="agentlint: validate agent definition files",
    no_args_is_help=True,
)

app.command("check")(check_command)


@app.command()
def version() -> None:
    """Show the agentlint version."""
    from agentlint_core import __version__
    from rich.console import Console
    Console().print(f"agentlint {__version__}")


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
