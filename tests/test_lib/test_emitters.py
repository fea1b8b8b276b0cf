"""Tests for the SCSS and CSS emitters."""

from app.lib.emitters import css_build, scss_build, section_of, tokens_sort
from app.lib.flatten import tokens_flatten
from app.lib.parser import AliasResolver, LiteralResolver, ReferenceIndex
from app.models.dataModel import TokenEntry


def select(tokens: list[TokenEntry], root: str) -> list[TokenEntry]:
    return [token for token in tokens if token.root == root]


def test_tokens_sort_by_kebab_then_path() -> None:
    tokens = [
        TokenEntry(path=("Spacing", "Small"), value="4"),
        TokenEntry(path=("Theme", "Small"), value="1"),
        TokenEntry(path=("Spacing", "Inset"), value="2"),
    ]
    assert [t.dotted for t in tokens_sort(tokens)] == [
        "Spacing.Inset",
        "Spacing.Small",
        "Theme.Small",
    ]


def test_section_of() -> None:
    assert section_of(TokenEntry(path=("Theme", "Primary", "Base"))) == "Primary"
    assert section_of(TokenEntry(path=("Solo",))) == "Solo"


def test_scss_foundations(tokens, index, generated) -> None:
    text = scss_build(select(tokens, "Foundations"), AliasResolver(index), "Foundations", generated)
    assert text == "\n".join(
        [
            "// BUILD DESIGN SYSTEM - Foundations (SCSS)",
            f"// Generated on {generated}",
            "",
            "// Blue",
            "$blue500: #335CFF;",
            "$blue700: #2547D0;",
            "// Font Family",
            '$fontFamilySans: "Inter Display";',
            "",
        ]
    )


def test_scss_aliases_follow_bases(tokens, index, generated) -> None:
    text = scss_build(select(tokens, "Typography"), AliasResolver(index), "Typography", generated)
    body = text.splitlines()[3:]
    assert body == [
        "// Body",
        '$bodyWeight: "Semi Bold";',
        "",
        "// Body",
        "$bodyFamily: $fontFamilySans;",
    ]


def test_scss_alias_chain_order(tokens, index, generated) -> None:
    text = scss_build(select(tokens, "Theme"), AliasResolver(index), "Theme", generated)
    lines = text.splitlines()
    assert lines.index("$primaryBase: $blue500;") < lines.index("$primaryHover: $primaryBase;")


def test_scss_base_before_alias_regardless_of_source_order(generated) -> None:
    document = {
        "Theme": {
            "Accent": {"$value": "{Theme.Base}"},
            "Base": {"$value": "#335CFF"},
        }
    }
    tokens = tokens_flatten(document)
    index = ReferenceIndex.from_tokens(tokens, {"Theme"})
    lines = scss_build(tokens, AliasResolver(index), "Theme", generated).splitlines()
    assert lines.index("$base: #335CFF;") < lines.index("$accent: $base;")


def test_css_spacing(tokens, index) -> None:
    text = css_build(select(tokens, "Spacing"), LiteralResolver(index), "Spacing")
    assert text == "\n".join(
        [
            "/* BUILD DESIGN SYSTEM - Spacing (CSS) */",
            ":root {",
            "  --inset: 4 8;",
            "  --medium: 8;",
            "  --small: 4;",
            "}",
            "",
        ]
    )


def test_css_resolves_aliases_fully(tokens, index) -> None:
    text = css_build(select(tokens, "Theme"), LiteralResolver(index), "Theme")
    assert "  --primary-base: #335CFF;" in text
    assert "  --primary-dark: #2547D0;" in text
    assert "  --primary-hover: #335CFF;" in text


def test_css_quotes_font_families(tokens, index) -> None:
    text = css_build(select(tokens, "Typography"), LiteralResolver(index), "Typography")
    assert '  --body-family: "Inter Display";' in text
    assert '  --body-weight: "Semi Bold";' in text


def test_scss_interpolation_follows_its_targets(tokens, index, generated) -> None:
    text = scss_build(select(tokens, "Spacing"), AliasResolver(index), "Spacing", generated)
    assert text.splitlines()[3:] == [
        "// Medium",
        "$medium: 8;",
        "// Small",
        "$small: 4;",
        "// Inset",
        '$inset: "#{$small} #{$medium}";',
    ]


def test_scss_alias_to_later_alias_is_held_back(generated) -> None:
    document = {
        "Theme": {
            "Accent": {"$value": "{Theme.Zeta}"},
            "Zeta": {"$value": "{Theme.Base}"},
            "Base": {"$value": "#fff"},
        }
    }
    tokens = tokens_flatten(document)
    index = ReferenceIndex.from_tokens(tokens, {"Theme"})
    lines = scss_build(tokens, AliasResolver(index), "Theme", generated).splitlines()
    assert lines.index("$zeta: $base;") < lines.index("$accent: $zeta;")


def test_scss_interpolation_using_alias_moves_after_it(generated) -> None:
    document = {
        "Theme": {
            "Border": {"$value": "1px solid {Theme.Edge}"},
            "Edge": {"$value": "{Theme.Ink}"},
            "Ink": {"$value": "#000"},
        }
    }
    tokens = tokens_flatten(document)
    index = ReferenceIndex.from_tokens(tokens, {"Theme"})
    lines = scss_build(tokens, AliasResolver(index), "Theme", generated).splitlines()
    assert lines.index("$edge: $ink;") < lines.index('$border: "1px solid #{$edge}";')
    assert lines.index("$ink: #000;") < lines.index("$edge: $ink;")
