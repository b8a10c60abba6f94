"""CLI entry point: install plugins into Claude Code and OpenCode."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape

from .core.config import load_config
from .core.console import console
from .core.log import configure_logging
from .installer import CLIOptions, RegistryError, list_available, run_install
from .tui import ConsoleUI

VERSION = "0.1.0"

COMMANDS = ("install", "list")


def _split_plugins(values: tuple[str, ...]) -> list[str]:
    names: list[str] = []
    for value in values:
        names.extend(n.strip() for n in value.split(",") if n.strip())
    return names


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VERSION, "-v", "--version", prog_name="coding-agent-plugins")
def cli():
    """CLI for managing Claude Code and OpenCode plugins.

    Runs `install` when no command is given.
    """


@cli.command()
@click.option("--all", "-a", "install_all", is_flag=True, help="Install all available plugins")
@click.option(
    "--plugins",
    "-p",
    multiple=True,
    help="Install specific plugins (comma-separated, repeatable)",
)
@click.option("--claude-only", is_flag=True, help="Install for Claude Code only")
@click.option("--opencode-only", is_flag=True, help="Install for OpenCode only")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompts")
@click.option("--dry-run", is_flag=True, help="Preview changes without installing")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding .claude-plugin/marketplace.json and built plugins",
)
@click.option("--verbose", is_flag=True, help="Verbose output")
def install(
    install_all: bool,
    plugins: tuple[str, ...],
    claude_only: bool,
    opencode_only: bool,
    yes: bool,
    dry_run: bool,
    root: Path | None,
    verbose: bool,
):
    """Install plugins (default command)."""
    configure_logging(verbose)
    config = load_config(root=root, verbose=verbose)
    options = CLIOptions(
        all=install_all,
        plugins=_split_plugins(plugins),
        claude_only=claude_only,
        opencode_only=opencode_only,
        yes=yes,
        dry_run=dry_run,
    )
    run = run_install(config, options, ConsoleUI(config.home))
    sys.exit(run.exit_code)


@cli.command("list")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding .claude-plugin/marketplace.json",
)
def list_command(root: Path | None):
    """List plugins available in the marketplace."""
    configure_logging()
    config = load_config(root=root)
    try:
        plugins = list_available(config)
    except RegistryError as e:
        console.print(f"error: {e}", style="bold")
        sys.exit(1)
    if not plugins:
        console.print("no plugins in marketplace", style="dim")
        return
    for p in plugins:
        ver = f"v{p.version}" if p.version else ""
        cat = escape(f"[{p.category}]") if p.category else ""
        console.print(
            f"  [bold]{escape(p.name)}[/bold]  {ver}  {cat}  [dim]{escape(p.description)}[/dim]",
            highlight=False,
        )


def _with_default_command(args: list[str]) -> list[str]:
    """Prepend `install` unless a command or a global flag leads."""
    if args and (args[0] in COMMANDS or args[0] in ("-h", "--help", "-v", "--version")):
        return args
    return ["install", *args]


def main():
    """True entry point: routes bare flags to `install` before click."""
    cli(args=_with_default_command(sys.argv[1:]), prog_name="coding-agent-plugins")


if __name__ == "__main__":
    main()
