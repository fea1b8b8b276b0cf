"""
Bundle orchestration for the token build.

Drives a complete build: flattens the document, indexes references,
renders both formats for every configured bundle, then replaces the build
tree with the new files, the dependency-ordered `_all.scss` concatenation
and the `_index.scss` manifest.

Every file is rendered in memory before the build tree is touched, so a
reference error leaves the previous tree in place.
"""

import json
import shutil
from pathlib import Path
from typing import Any, Final, Iterable, Mapping
from app.config.settings import (
    ALTERNATE_BUNDLE,
    CONCAT_ORDER,
    OUTPUT_MANIFEST,
    SHORT_KEY_ROOTS,
    appsettings,
)
from app.lib.emitters import css_build, scss_build, timestamp_now
from app.lib.flatten import tokens_flatten
from app.lib.log import LOG
from app.lib.parser import AliasResolver, LiteralResolver, ReferenceIndex
from app.models.dataModel import BuildResult, BundleResult, OutputBundle, TokenEntry

ALL_SCSS: Final[str] = "_all.scss"
INDEX_SCSS: Final[str] = "_index.scss"


def document_load(path: Path) -> dict[str, Any]:
    """Read a token document from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    LOG(f"Reading tokens from {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def bundle_select(tokens: Iterable[TokenEntry], bundle: OutputBundle) -> list[TokenEntry]:
    return [token for token in tokens if token.root in bundle.roots]


def scss_concatenate(scss_by_file: Mapping[str, str], generated: str) -> str:
    """Join bundle SCSS in dependency order; absent bundles contribute nothing."""
    header: str = (
        f"// {appsettings.banner} - All Tokens (Light Mode)\n"
        f"// Auto-generated on {generated}\n\n"
    )
    return header + "\n".join(scss_by_file.get(name, "") for name in CONCAT_ORDER)


def scss_index(generated: str) -> str:
    """Manifest pointing at `_all.scss`, with per-bundle imports commented out."""
    uses: list[str] = [
        f"// @use './{bundle.scss.removesuffix('.scss')}' as *;"
        for bundle in OUTPUT_MANIFEST
        if bundle.scss != ALTERNATE_BUNDLE
    ]
    alternate: str = ALTERNATE_BUNDLE.removesuffix(".scss")
    lines: list[str] = [
        f"// {appsettings.banner} - Generated SCSS Tokens",
        f"// Auto-generated on {generated}",
        "",
        "// Use this single file for all tokens",
        "@use './all' as *;",
        "",
        "// Or use individual files (not recommended due to dependency issues):",
        *uses,
        "// To switch to dark semantic tokens, replace tokens-light with:",
        f"// @use './{alternate}' as *;",
        "",
    ]
    return "\n".join(lines)


def tree_reset(build_root: Path) -> tuple[Path, Path]:
    """Discard any previous build and create empty SCSS and CSS directories."""
    LOG(f"Resetting build directory {build_root}")
    scss_dir: Path = build_root / appsettings.scss_dir
    css_dir: Path = build_root / appsettings.css_dir
    for directory in (scss_dir, css_dir):
        if directory.exists():
            shutil.rmtree(directory)
        directory.mkdir(parents=True)
    return scss_dir, css_dir


def tokens_build(
    document: Mapping[str, Any], build_root: Path, generated: str | None = None
) -> BuildResult:
    """Resolve a token document and write the complete build tree.

    Args:
        document: Parsed token document
        build_root: Directory receiving the `scss` and `css` trees
        generated: Timestamp embedded in the headers, defaults to now

    Returns:
        BuildResult describing the written files

    Raises:
        UnresolvableReferenceError: If a reference names an unknown token
        CircularReferenceError: If a token's value depends on itself
    """
    stamp: str = generated or timestamp_now()
    tokens: list[TokenEntry] = tokens_flatten(document)
    index: ReferenceIndex = ReferenceIndex.from_tokens(tokens, SHORT_KEY_ROOTS)
    LOG(f"Flattened {len(tokens)} tokens into {len(index)} reference keys")

    alias_resolver = AliasResolver(index)
    # One cache for all bundles: base tokens are resolved once per build
    literal_resolver = LiteralResolver(index)

    rendered: list[tuple[OutputBundle, int, str, str]] = []
    for bundle in OUTPUT_MANIFEST:
        selected: list[TokenEntry] = bundle_select(tokens, bundle)
        if not selected:
            continue
        LOG(f"Building {bundle.title} ({len(selected)} tokens)")
        scss_text: str = scss_build(selected, alias_resolver, bundle.title, stamp)
        css_text: str = css_build(selected, literal_resolver, bundle.title)
        rendered.append((bundle, len(selected), scss_text, css_text))

    scss_dir, css_dir = tree_reset(build_root)
    results: list[BundleResult] = []
    scss_by_file: dict[str, str] = {}
    for bundle, count, scss_text, css_text in rendered:
        scss_path: Path = scss_dir / bundle.scss
        css_path: Path = css_dir / bundle.css
        scss_path.write_text(scss_text, encoding="utf-8")
        css_path.write_text(css_text, encoding="utf-8")
        scss_by_file[bundle.scss] = scss_text
        results.append(
            BundleResult(title=bundle.title, count=count, scss=scss_path, css=css_path)
        )

    all_path: Path = scss_dir / ALL_SCSS
    all_path.write_text(scss_concatenate(scss_by_file, stamp), encoding="utf-8")
    index_path: Path = scss_dir / INDEX_SCSS
    index_path.write_text(scss_index(stamp), encoding="utf-8")
    LOG(f"Wrote {len(results)} bundles to {build_root}")

    return BuildResult(
        bundles=results, all_scss=all_path, index_scss=index_path, generated=stamp
    )
