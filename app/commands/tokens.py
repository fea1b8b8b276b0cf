"""
Token Catalog Commands

This module provides CLI commands for browsing a generated `_all.scss`
file through the inverse reader, the same view documentation pages use.

Commands:
- tokencat sections: List sections with their group and token counts.
- tokencat section <name>: Show every token of a section, by group.
- tokencat find <variable>: Show one token by exact identifier.
- tokencat prefix <prefix>: Show tokens whose identifier starts with a prefix.
- tokencat theme: Show the active theme selection.
"""

from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.table import Table
import click
from app.commands.base import RichGroup, RichCommand, rich_help
from app.config.settings import appsettings, theme_load
from app.lib.log import LOG
from app.lib.reader import TokenCatalog, catalog_load
from app.models.dataModel import ParsedToken, ThemeConfig, TokenGroup

console: Console = Console()

DEFAULT_ALL_SCSS: Path = Path("build") / appsettings.scss_dir / "_all.scss"


def tokens_table(title: str, tokens: list[ParsedToken]) -> Table:
    """Build a Rich table listing tokens with resolved and raw values."""
    table = Table(title=escape(title), title_justify="left")
    table.add_column("Group", style="yellow")
    table.add_column("Variable", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Raw", style="white")
    for token in tokens:
        table.add_row(
            escape(token.group), token.variable, escape(token.value), escape(token.raw_value)
        )
    return table


@click.group(
    cls=RichGroup,
    short_help="Browse generated tokens",
    help="""
    Token Catalog

    Commands to browse tokens read back from the generated SCSS.
    """,
)
@click.option(
    "--file",
    "scss_file",
    type=click.Path(path_type=Path),
    default=DEFAULT_ALL_SCSS,
    help="Concatenated SCSS file to read",
)
@click.pass_context
def tokens(ctx: click.Context, scss_file: Path) -> None:
    """
    Root group for catalog commands.
    """
    ctx.obj = catalog_load(scss_file)
    LOG(f"Loaded {len(ctx.obj.tokens)} tokens from {scss_file}")


@tokens.command(
    cls=RichCommand,
    short_help="List sections",
    help=rich_help(
        command="sections",
        description="List all sections with their group and token counts.",
        usage="tokencat sections",
        args={},
    ),
)
@click.pass_obj
def sections(catalog: TokenCatalog) -> None:
    if not catalog.sections:
        console.print("[bold red]No tokens found.[/bold red]")
        return

    table = Table(title="Sections", title_justify="left")
    table.add_column("Section", style="cyan")
    table.add_column("Groups", justify="right")
    table.add_column("Tokens", justify="right")
    for name, groups in catalog.sections.items():
        count: int = sum(len(tokens) for tokens in groups.values())
        table.add_row(escape(name), str(len(groups)), str(count))
    console.print(table)


@tokens.command(
    cls=RichCommand,
    short_help="Show a section",
    help=rich_help(
        command="section",
        description="Show every token of a section, grouped.",
        usage="tokencat section <name>",
        args={"<name>": "The section title, e.g. 'Theme'."},
    ),
)
@click.argument("name", type=str)
@click.pass_obj
def section(catalog: TokenCatalog, name: str) -> None:
    groups: list[TokenGroup] = catalog.section(name)
    if not groups:
        console.print(f"[bold red]Section '{escape(name)}' not found.[/bold red]")
        return

    for group in groups:
        console.print(tokens_table(f"{name} / {group.name}", group.tokens))


@tokens.command(
    cls=RichCommand,
    short_help="Find a token",
    help=rich_help(
        command="find",
        description="Show one token by its exact identifier.",
        usage="tokencat find <variable>",
        args={"<variable>": "The identifier, with or without the leading '$'."},
    ),
)
@click.argument("variable", type=str)
@click.pass_obj
def find(catalog: TokenCatalog, variable: str) -> None:
    token: ParsedToken | None = catalog.find(variable)
    if token is None:
        console.print(f"[bold red]Token '{escape(variable)}' not found.[/bold red]")
        return

    console.print(
        f"[bold cyan]{token.variable}:[/bold cyan] {escape(token.value)} "
        f"[dim](raw: {escape(token.raw_value)}, {escape(token.section)} / {escape(token.group)})[/dim]"
    )


@tokens.command(
    cls=RichCommand,
    short_help="Find tokens by prefix",
    help=rich_help(
        command="prefix",
        description="Show all tokens whose identifier starts with a prefix.",
        usage="tokencat prefix <prefix>",
        args={"<prefix>": "The identifier prefix, with or without the leading '$'."},
    ),
)
@click.argument("prefix", type=str)
@click.pass_obj
def prefix(catalog: TokenCatalog, prefix: str) -> None:
    matches: list[ParsedToken] = catalog.prefix(prefix)
    if not matches:
        console.print(f"[bold red]No tokens start with '{escape(prefix)}'.[/bold red]")
        return

    console.print(tokens_table(f"Tokens starting with {prefix}", matches))


@tokens.command(
    cls=RichCommand,
    short_help="Show the theme selection",
    help=rich_help(
        command="theme",
        description="Show the active color, neutral and brand modes.",
        usage="tokencat theme [--theme-file <path>]",
        args={"--theme-file": "Theme JSON file, defaults to the user config dir."},
    ),
)
@click.option("--theme-file", type=click.Path(path_type=Path), default=None)
def theme(theme_file: Path | None) -> None:
    try:
        config: ThemeConfig = theme_load(theme_file)
    except ValueError as e:
        LOG(f"Error loading theme: {e}")
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return

    for field, value in config.model_dump().items():
        console.print(f"[bold cyan]{field}:[/bold cyan] {value}")
