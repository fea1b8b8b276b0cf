"""
Token Build Plugin Main Module.

This module serves as the main entry point for the token build, a ChRIS
plugin that turns a design-token document into SCSS and CSS token files.

Features:
- Reads the token document (default `tokens.json`) from the input directory
- Resolves every token reference, failing on unknown keys and cycles
- Writes alias-preserving SCSS and flattened CSS bundles to the output
  directory, plus `_all.scss` and the `_index.scss` manifest

Usage:
    Run this module as a plugin with an input and an output directory.

Examples:
    Build from ./in/tokens.json into ./out:
        $ tokenbuild in out

    Reproducible output with a fixed timestamp:
        $ tokenbuild --timestamp 2025-01-01T00:00:00.000Z in out
"""

import json
import sys
from argparse import Namespace, ArgumentParser, ArgumentDefaultsHelpFormatter
from pathlib import Path
from typing import Final
from chris_plugin import chris_plugin
from rich.console import Console
from rich.markup import escape
from app.config.settings import appsettings
from app.lib.bundles import document_load, tokens_build
from app.lib.log import LOG
from app.lib.parser import TokenReferenceError
from app.models.dataModel import BuildResult

__version__: Final[str] = "0.1.0"

console: Final[Console] = Console()

parser: Final[ArgumentParser] = ArgumentParser(
    description="Resolve a design-token document into SCSS and CSS token files.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument(
    "--tokens",
    type=str,
    default=appsettings.tokens_file,
    help="Token document inside the input directory",
)
parser.add_argument(
    "--timestamp",
    type=str,
    default=None,
    help="Timestamp embedded in generated headers (defaults to now)",
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def summary_print(result: BuildResult) -> None:
    """Print the written bundles."""
    for bundle in result.bundles:
        console.print(
            f"[bold green]✔[/bold green] [cyan]{bundle.title}[/cyan] "
            f"({bundle.count} tokens) → {bundle.scss.name}, {bundle.css.name}"
        )
    console.print(
        f"[bold green]Token build completed:[/bold green] "
        f"{result.token_count} tokens in {len(result.bundles)} bundles"
    )
    console.print(f"   SCSS (with aliases): {result.all_scss.parent}")
    if result.bundles:
        console.print(f"   CSS (flat values): {result.bundles[0].css.parent}")


def build_run(options: Namespace, inputdir: Path, outputdir: Path) -> int:
    """Run one build and report the outcome.

    Args:
        options: Parsed command-line options
        inputdir: Directory containing the token document
        outputdir: Build root receiving the `scss` and `css` trees

    Returns:
        int: Process exit code, 0 on success and 1 on any failure
    """
    try:
        document: dict = document_load(inputdir / options.tokens)
        result: BuildResult = tokens_build(document, outputdir, options.timestamp)
    except TokenReferenceError as e:
        LOG(f"Token resolution failed: {e}")
        console.print(f"[bold red]Error building tokens:[/bold red] {escape(str(e))}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        LOG(f"Unable to read token document: {e}")
        console.print(f"[bold red]Error reading tokens:[/bold red] {escape(str(e))}")
        return 1

    summary_print(result)
    return 0


@chris_plugin(
    parser=parser,
    title="pl-tokenbuild",
    category="",
    min_memory_limit="100Mi",
    min_cpu_limit="1000m",
    min_gpu_limit=0,
)
def main(options: Namespace, inputdir: Path, outputdir: Path) -> None:
    """Main entry point for the ChRIS plugin.

    Args:
        options: Parsed command-line options
        inputdir: Directory containing input files
        outputdir: Directory for output files
    """
    exit_code: int = build_run(options, inputdir, outputdir)
    if exit_code:
        sys.exit(exit_code)
