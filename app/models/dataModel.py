"""
dataModel.py

This module defines the data models used throughout the token build.
The models leverage Pydantic for validation and type safety.

Features:
- Token entries produced by flattening a token document.
- Output bundle descriptions and build results.
- Entries and groups produced by the inverse SCSS reader.
- Theme selection configuration consumed by documentation pages.

Usage:
Import these models to validate and structure data used in the application.
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Literal, Optional
from pathlib import Path
from enum import Enum


class TokenEntry(BaseModel):
    """
    A single addressable token from the source document.

    Attributes:
        path (tuple[str, ...]): Segments from the document root to the leaf.
        value (Any): Literal value, or a string holding ``{Ref.Key}`` references.
        type (Optional[str]): The ``$type`` tag, used only to bias quoting.
        description (Optional[str]): The ``$description`` text, if any.
    """

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...] = Field(..., min_length=1)
    value: Any = None
    type: Optional[str] = None
    description: Optional[str] = None

    @property
    def root(self) -> str:
        """The root category, i.e. the first path segment."""
        return self.path[0]

    @property
    def dotted(self) -> str:
        return ".".join(self.path)


class OutputBundle(BaseModel):
    """
    A named group of output files covering one or more root categories.

    Attributes:
        title (str): Human readable title, used in file headers.
        roots (tuple[str, ...]): Root categories selected into this bundle.
        scss (str): File name of the alias-preserving output.
        css (str): File name of the flattened output.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    roots: tuple[str, ...]
    scss: str
    css: str


class BundleResult(BaseModel):
    """Files written for one bundle."""

    title: str
    count: int
    scss: Path
    css: Path


class BuildResult(BaseModel):
    """
    Result of a complete token build.

    Attributes:
        bundles (list[BundleResult]): Bundles that produced output, in manifest order.
        all_scss (Path): The dependency-ordered SCSS concatenation.
        index_scss (Path): The SCSS manifest file.
        generated (str): Timestamp embedded into the generated headers.
    """

    bundles: list[BundleResult] = Field(default_factory=list)
    all_scss: Path
    index_scss: Path
    generated: str

    @property
    def token_count(self) -> int:
        return sum(bundle.count for bundle in self.bundles)


class ParsedToken(BaseModel):
    """An entry read back from the concatenated SCSS output.

    Attributes:
        section: Section title taken from the bundle banner
        group: Group title taken from the nearest group comment
        name: Identifier without the leading ``$``
        variable: Identifier including the leading ``$``
        value: Best-effort resolved value
        raw_value: Value text exactly as declared
    """

    section: str
    group: str
    name: str
    variable: str
    value: str
    raw_value: str


class TokenGroup(BaseModel):
    """Named group of parsed tokens within a section."""

    name: str
    tokens: list[ParsedToken] = Field(default_factory=list)


class LineKind(Enum):
    """
    Enum for the classification of a line of generated SCSS.
    """

    BLANK = 1
    SECTION = 2
    BANNER = 3
    GROUP = 4
    COMMENT = 5
    DECLARATION = 6
    OTHER = 7


class ThemeConfig(BaseModel):
    """
    Theme selection used by documentation pages to pick the "current" subtree.

    The build itself never branches on these values.

    Attributes:
        colorMode: Overall appearance
        neutralMode: Grey/neutral palette
        themeMode: Primary brand color
    """

    colorMode: Literal["Light", "Dark"] = "Light"
    neutralMode: Literal["Gray", "Slate"] = "Gray"
    themeMode: Literal["Blue", "Purple", "Orange", "Sky"] = "Blue"
