"""
settings.py

This module provides configuration for the token build.

Features:
- Centralized application configuration using Pydantic settings
- The static bundle manifest, short-key roots and concatenation order
- Loading of the theme selection consumed by documentation pages

Usage:
Import appsettings for application configuration values.
"""

import json
from pathlib import Path
from typing import Final
from appdirs import user_config_dir
from pydantic_settings import BaseSettings, SettingsConfigDict
from app.lib.log import LOG
from app.models.dataModel import OutputBundle, ThemeConfig

# Set up the configuration directory and theme file using appdirs
CONFIG_DIR: Final[Path] = Path(user_config_dir("tokenbuild", ""))
THEME_FILE: Final[Path] = CONFIG_DIR / "theme.json"


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with TKB_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        tokens_file: Name of the token document inside the input directory
        scss_dir: Sub-directory of the build root for alias-preserving files
        css_dir: Sub-directory of the build root for flattened files
        banner: Prefix of every generated file header
    """

    beQuiet: bool = False
    tokens_file: str = "tokens.json"
    scss_dir: str = "scss"
    css_dir: str = "css"
    banner: str = "BUILD DESIGN SYSTEM"

    model_config = SettingsConfigDict(
        env_prefix="TKB_",
        case_sensitive=False,
        extra="ignore",
    )


OUTPUT_MANIFEST: Final[tuple[OutputBundle, ...]] = (
    OutputBundle(title="Foundations", roots=("Foundations",), scss="_foundations.scss", css="foundations.css"),
    OutputBundle(title="Light Tokens", roots=("Tokens/Light",), scss="tokens-light.scss", css="tokens-light.css"),
    OutputBundle(title="Dark Tokens", roots=("Tokens/Dark",), scss="tokens-dark.scss", css="tokens-dark.css"),
    OutputBundle(title="Theme", roots=("Theme",), scss="_theme.scss", css="theme.css"),
    OutputBundle(title="Radius", roots=("Radius",), scss="_radius.scss", css="radius.css"),
    OutputBundle(title="Spacing", roots=("Spacing",), scss="_spacing.scss", css="spacing.css"),
    OutputBundle(title="Typography", roots=("Typography",), scss="_typography.scss", css="typography.css"),
    OutputBundle(title="Elevation", roots=("Elevation",), scss="_elevation.scss", css="elevation.css"),
    OutputBundle(title="Breakpoints", roots=("Breakpoints",), scss="_breakpoints.scss", css="breakpoints.css"),
    OutputBundle(title="Animation", roots=("Animation",), scss="_animation.scss", css="animation.css"),
    OutputBundle(title="Z-Index", roots=("Z-Index",), scss="_z-index.scss", css="z-index.css"),
)

# Roots whose tokens may be referenced without the root segment
SHORT_KEY_ROOTS: Final[frozenset[str]] = frozenset(
    {
        "Foundations",
        "Theme",
        "Radius",
        "Spacing",
        "Typography",
        "Animation",
        "Breakpoints",
        "Z-Index",
        "Elevation",
    }
)

# SCSS has no hoisting: a bundle must come before any bundle aliasing into it
CONCAT_ORDER: Final[tuple[str, ...]] = (
    "_foundations.scss",
    "tokens-light.scss",
    "_theme.scss",
    "_radius.scss",
    "_spacing.scss",
    "_typography.scss",
    "_elevation.scss",
    "_breakpoints.scss",
    "_animation.scss",
    "_z-index.scss",
)

# Second color-mode variant, offered as a commented-out swap in the manifest
ALTERNATE_BUNDLE: Final[str] = "tokens-dark.scss"


def theme_load(path: Path | None = None) -> ThemeConfig:
    """
    Load the theme selection.

    Reads a JSON object from `path`, or from the user config directory when no
    path is given. A missing file yields the default theme.

    Args:
        path: Optional explicit location of the theme file

    Returns:
        ThemeConfig: The validated theme selection

    Raises:
        pydantic.ValidationError: If the file names an unknown mode
        json.JSONDecodeError: If the file is not valid JSON
    """
    theme_path: Path = path or THEME_FILE
    if not theme_path.exists():
        LOG(f"No theme file at {theme_path}, using defaults")
        return ThemeConfig()

    with open(theme_path, "r", encoding="utf-8") as f:
        data: dict = json.load(f)
    return ThemeConfig.model_validate(data)


# Create the application settings instance
appsettings: Final[App] = App()
